#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

"""Vendor flavor resolution and the capability gate."""

from oslo_log import log

from ironfish.common import exception
from ironfish.redfish import collection
from ironfish.redfish import constants
from ironfish.redfish import resources
from ironfish.redfish import session
from ironfish.redfish import vendors

LOG = log.getLogger(__name__)

MANUFACTURERS = {
    'hp': constants.HP,
    'hpe': constants.HPE,
    'huawei': constants.HUAWEI,
    'inspur': constants.INSPUR,
    'lenovo': constants.LENOVO,
    'supermicro': constants.SUPERMICRO,
    'dell': constants.DELL,
    'dell inc.': constants.DELL,
}
"""Normalized manufacturer string to flavor."""

_HP_OEM_KEYS = {'Hp': constants.HP, 'Hpe': constants.HPE}


def _disambiguate_hp(system, manufacturer):
    oem = system.oem if isinstance(system.oem, dict) else {}
    found = sorted(key for key in _HP_OEM_KEYS if key in oem)
    if len(found) != 1:
        raise exception.AmbiguousVendor(
            manufacturer=manufacturer, url=system.self_endpoint,
            keys=', '.join(sorted(_HP_OEM_KEYS)),
            found=', '.join(found) or 'none')
    return _HP_OEM_KEYS[found[0]]


def flavor_from_system(system):
    """Tell the flavor of a service processor from one of its systems.

    :param system: a System record.
    :raises: AmbiguousVendor if an HP/HPE system carries neither or both of
        the Hp and Hpe Oem blocks.
    """
    manufacturer = (system.manufacturer or '').strip().lower()
    flavor = MANUFACTURERS.get(manufacturer)
    if flavor is None:
        LOG.warning('Unknown manufacturer %(manufacturer)s of system '
                    '%(system)s, assuming a standard compliant service '
                    'processor', {'manufacturer': system.manufacturer,
                                  'system': system.self_endpoint})
        return constants.VANILLA

    if flavor in (constants.HP, constants.HPE):
        return _disambiguate_hp(system, system.manufacturer)
    return flavor


def resolve_flavor(conn):
    """Resolve and memoize the flavor of ``conn``.

    Only the first system is inspected, all systems behind one service
    processor are assumed to come from the same vendor.

    :returns: the flavor.
    """
    if conn.flavor != constants.UNINITIALIZED:
        return conn.flavor

    endpoints = session.require_endpoints(conn)
    members = collection.list_members(conn, endpoints.systems, 'Systems')
    system = collection.fetch_entity(conn, members[0], resources.System)
    flavor = flavor_from_system(system)

    conn.adapter = vendors.get_adapter(flavor)
    conn.flavor = flavor
    LOG.debug('Service processor %(host)s resolved to flavor %(flavor)s',
              {'host': conn.hostname, 'flavor': flavor})
    return flavor


def require_capability(conn, capability, operation):
    """Ensure the flavor of ``conn`` supports a capability.

    :param conn: a RedfishClient.
    :param capability: one of the capability constants.
    :param operation: name of the operation, for the error message.
    :raises: UnsupportedOperation
    :returns: the vendor adapter.
    """
    resolve_flavor(conn)
    if not conn.adapter.supports(capability):
        raise exception.UnsupportedOperation(operation=operation,
                                             flavor=conn.flavor)
    return conn.adapter
