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


"""
Vendor flavors and optional service capabilities.

A flavor names the dialect of Redfish spoken by a service processor. The
flavor string is also used for display.
"""

UNINITIALIZED = 'uninitialized'
"Flavor not resolved yet"

VANILLA = 'vanilla'
"Standard compliant service processor"

HP = 'hp'
"HP iLO with the Hp Oem extensions"

HPE = 'hpe'
"HPE iLO with the Hpe Oem extensions"

HUAWEI = 'huawei'
"Huawei iBMC"

INSPUR = 'inspur'
"Inspur BMC"

LENOVO = 'lenovo'
"Lenovo XClarity Controller with fixed account slots"

SUPERMICRO = 'supermicro'
"Supermicro BMC"

DELL = 'dell'
"Dell iDRAC"

ALL_FLAVORS = (VANILLA, HP, HPE, HUAWEI, INSPUR, LENOVO, SUPERMICRO, DELL)
"""Every flavor a client can resolve to."""

ACCOUNT_SERVICE = 'account_service'
"Accounts can be listed and managed"

SECURITY_SERVICE = 'security_service'
"CSR generation and certificate import"

ACCOUNT_ROLES = 'account_roles'
"Role based access control, as opposed to a private privilege model"

CHASSIS = 'chassis'
"Chassis inventory"

LICENSE = 'license'
"License management"

ALL_CAPABILITIES = frozenset([ACCOUNT_SERVICE, SECURITY_SERVICE,
                              ACCOUNT_ROLES, CHASSIS, LICENSE])

HP_VIRTUAL_ROLES = ('none', 'readonly', 'operator', 'administrator')
"""Virtual roles accepted by HP/HPE service processors."""
