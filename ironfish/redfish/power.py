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

"""System power control through ``#ComputerSystem.Reset``."""

from http import client as http_client

from oslo_log import log

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import collection
from ironfish.redfish import session

LOG = log.getLogger(__name__)

RESET_CODES = (http_client.OK, http_client.ACCEPTED, http_client.NO_CONTENT)

RESET_TYPE = 'ResetType'
_ALLOWABLE_VALUES = RESET_TYPE + '@Redfish.AllowableValues'
_ACTION_INFO = '@Redfish.ActionInfo'
_ACTION = '#ComputerSystem.Reset'


def _get_reset_action(system):
    action = system.reset_action
    if not isinstance(action, dict):
        raise exception.MissingField(field='.Actions.%s' % _ACTION,
                                     url=system.self_endpoint)
    if not action.get('target'):
        raise exception.MissingField(field='.Actions.%s.target' % _ACTION,
                                     url=system.self_endpoint)
    return action


def _values_from_action_info(conn, location):
    data, result = collection.get_json(conn, location)
    for parameter in data.get('Parameters') or []:
        if (isinstance(parameter, dict)
                and parameter.get('Name') == RESET_TYPE):
            return parameter.get('AllowableValues'), result.url
    return None, result.url


def get_allowed_reset_types(conn, system):
    """Return the reset types a system accepts.

    The result is computed on every call and not stored on ``system``.

    :param conn: an authenticated RedfishClient.
    :param system: a System record.
    :raises: MissingField if the system declares no reset action or no
        allowed reset types.
    :returns: tuple of (name of the reset type property, dict of lower case
        reset type to the reset type as the service spells it).
    """
    action = _get_reset_action(system)

    if action.get(_ACTION_INFO):
        values, url = _values_from_action_info(conn, action[_ACTION_INFO])
        field = '.Parameters[%s].AllowableValues' % RESET_TYPE
    else:
        values, url = action.get(_ALLOWABLE_VALUES), system.self_endpoint
        field = '.Actions.%s.%s' % (_ACTION, _ALLOWABLE_VALUES)

    if not values:
        raise exception.MissingField(field=field, url=url)

    return RESET_TYPE, {value.lower(): value for value in values}


def set_system_power_state(conn, system, state):
    """Request a power state change of a system.

    :param conn: an authenticated RedfishClient.
    :param system: a System record.
    :param state: reset type, matched case insensitively.
    :raises: InvalidParameterValue if the system does not support the
        requested reset type.
    """
    prop, allowed = get_allowed_reset_types(conn, system)
    reset_type = allowed.get((state or '').strip().lower())
    if reset_type is None:
        raise exception.InvalidParameterValue(
            err=_('Power state %(state)s is not supported by system '
                  '%(system)s, supported are: %(allowed)s') %
            {'state': state, 'system': system.self_endpoint,
             'allowed': ', '.join(sorted(allowed.values()))})

    target = _get_reset_action(system)['target']
    session.request(conn, target, method='POST', body={prop: reset_type},
                    expected=RESET_CODES)
    LOG.info('Requested %(reset)s of system %(system)s',
             {'reset': reset_type, 'system': system.self_endpoint})
