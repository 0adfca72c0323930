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

"""Vendor adapters, one per flavor."""

from ironfish.common import exception
from ironfish.redfish import constants
from ironfish.redfish.vendors import base
from ironfish.redfish.vendors import dell
from ironfish.redfish.vendors import hp
from ironfish.redfish.vendors import huawei
from ironfish.redfish.vendors import inspur
from ironfish.redfish.vendors import lenovo
from ironfish.redfish.vendors import supermicro

ADAPTERS = {
    constants.VANILLA: base.GenericAdapter,
    constants.HP: hp.HPAdapter,
    constants.HPE: hp.HPEAdapter,
    constants.HUAWEI: huawei.HuaweiAdapter,
    constants.INSPUR: inspur.InspurAdapter,
    constants.LENOVO: lenovo.LenovoAdapter,
    constants.SUPERMICRO: supermicro.SupermicroAdapter,
    constants.DELL: dell.DellAdapter,
}


def get_adapter(flavor):
    """Return a new adapter instance for a flavor.

    :raises: InvalidParameterValue for an unknown flavor.
    """
    try:
        return ADAPTERS[flavor]()
    except KeyError:
        raise exception.InvalidParameterValue(
            err='No vendor adapter for flavor %s' % flavor)
