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

"""Entity records decoded from Redfish resources.

Absent properties are None, properties present with an empty value keep
that value. The two are not interchangeable: an account slot with
``UserName == ""`` is unused, an account without ``UserName`` is broken.
"""

from ironfish.common import exception


def get_odata_id(data, *path):
    """Return the ``@odata.id`` of the link found by walking ``path``.

    :param data: decoded JSON object.
    :param path: keys leading to the link object.
    :returns: the link location or None if any step is missing.
    """
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    if not isinstance(data, dict):
        return None
    return data.get('@odata.id') or None


def require_odata_id(data, url, *path):
    """Like get_odata_id, but a missing link is a protocol violation."""
    location = get_odata_id(data, *path)
    if location is None:
        raise exception.MissingField(field='.' + '.'.join(path), url=url)
    return location


class Resource(object):
    """Base class of all decoded entities."""

    _fields = {}
    """Mapping of attribute name to JSON property name."""

    def __init__(self, data, self_endpoint):
        self.raw = data
        self.self_endpoint = self_endpoint
        self.identity = data.get('Id')
        self.name = data.get('Name')
        # vendor specific, only interpreted by the vendor adapters
        self.oem = data.get('Oem')
        for attr, key in self._fields.items():
            setattr(self, attr, data.get(key))

    def __repr__(self):
        return '<%s %s at %s>' % (self.__class__.__name__, self.identity,
                                  self.self_endpoint)


class AccountService(Resource):
    _fields = {'service_enabled': 'ServiceEnabled'}

    @property
    def accounts(self):
        return get_odata_id(self.raw, 'Accounts')

    @property
    def roles(self):
        return get_odata_id(self.raw, 'Roles')


class SessionService(Resource):
    _fields = {'service_enabled': 'ServiceEnabled',
               'session_timeout': 'SessionTimeout'}


class Account(Resource):
    _fields = {
        'username': 'UserName',
        'password': 'Password',
        'role_id': 'RoleId',
        'enabled': 'Enabled',
        'locked': 'Locked',
    }


class Role(Resource):
    _fields = {
        'is_predefined': 'IsPredefined',
        'description': 'Description',
        'assigned_privileges': 'AssignedPrivileges',
        'oem_privileges': 'OemPrivileges',
    }


class Chassis(Resource):
    _fields = {
        'chassis_type': 'ChassisType',
        'manufacturer': 'Manufacturer',
        'model': 'Model',
        'serial_number': 'SerialNumber',
        'part_number': 'PartNumber',
        'asset_tag': 'AssetTag',
        'indicator_led': 'IndicatorLED',
        'status': 'Status',
    }

    @property
    def thermal(self):
        return get_odata_id(self.raw, 'Thermal')

    @property
    def power(self):
        return get_odata_id(self.raw, 'Power')


class System(Resource):
    _fields = {
        'uuid': 'UUID',
        'status': 'Status',
        'serial_number': 'SerialNumber',
        'power_state': 'PowerState',
        'model': 'Model',
        'manufacturer': 'Manufacturer',
        'bios_version': 'BiosVersion',
        'processor_summary': 'ProcessorSummary',
        'memory_summary': 'MemorySummary',
        'actions': 'Actions',
    }

    @property
    def reset_action(self):
        """The ``#ComputerSystem.Reset`` action object or None."""
        if not isinstance(self.actions, dict):
            return None
        return self.actions.get('#ComputerSystem.Reset')


class Manager(Resource):
    _fields = {
        'manager_type': 'ManagerType',
        'uuid': 'UUID',
        'status': 'Status',
        'firmware_version': 'FirmwareVersion',
        'actions': 'Actions',
    }


class Thermal(Resource):
    """Thermal readings, kept undecoded in ``raw``."""


class Power(Resource):
    """Power readings, kept undecoded in ``raw``."""


class AccountRequest(object):
    """Desired state of an account for create and modify operations.

    :param username: login name.
    :param password: password.
    :param role: role id for standard service processors, or one of the
        virtual roles (``none``, ``readonly``, ``operator``,
        ``administrator``) for HP/HPE.
    :param enabled: enable or disable the account.
    :param locked: lock or unlock the account.
    :param hpe_privileges: HP/HPE privilege bits, unioned with the bits of
        the virtual role.
    """

    def __init__(self, username=None, password=None, role=None,
                 enabled=None, locked=None, hpe_privileges=None):
        self.username = username
        self.password = password
        self.role = role
        self.enabled = enabled
        self.locked = locked
        self.hpe_privileges = hpe_privileges


class CSRRequest(object):
    """Subject of a certificate signing request."""

    def __init__(self, country=None, state=None, locality=None,
                 organization=None, organizational_unit=None,
                 common_name=None):
        self.country = country
        self.state = state
        self.locality = locality
        self.organization = organization
        self.organizational_unit = organizational_unit
        self.common_name = common_name

    def fields(self):
        return [self.country, self.state, self.locality, self.organization,
                self.organizational_unit, self.common_name]


class License(object):
    """License installed on a management processor."""

    def __init__(self, name, expiration=None, license_type=None,
                 license_key=None):
        self.name = name
        self.expiration = expiration
        self.license_type = license_type
        self.license_key = license_key
