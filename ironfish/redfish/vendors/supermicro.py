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

"""Supermicro BMC adapter."""

from ironfish.common import exception
from ironfish.redfish import constants
from ironfish.redfish.vendors import base


class SupermicroAdapter(base.StandardAdapter):

    flavor = constants.SUPERMICRO
    capabilities = frozenset([constants.ACCOUNT_SERVICE,
                              constants.ACCOUNT_ROLES,
                              constants.CHASSIS])

    def get_manager_reset_target(self, manager):
        # published below Actions.Oem instead of Actions
        actions = manager.actions if isinstance(manager.actions, dict) else {}
        oem = actions.get('Oem')
        if not isinstance(oem, dict):
            oem = {}
        reset = oem.get('#Manager.Reset')
        target = reset.get('target') if isinstance(reset, dict) else None
        if not target:
            raise exception.MissingField(
                field='.Actions.Oem.#Manager.Reset.target',
                url=manager.self_endpoint)
        return target
