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

"""Huawei iBMC adapter."""

from oslo_log import log

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import constants
from ironfish.redfish.vendors import base

LOG = log.getLogger(__name__)


class HuaweiAdapter(base.StandardAdapter):

    flavor = constants.HUAWEI
    capabilities = frozenset([constants.ACCOUNT_SERVICE,
                              constants.SECURITY_SERVICE,
                              constants.ACCOUNT_ROLES,
                              constants.CHASSIS])

    security_service_path = ('Huawei', 'SecurityService')
    generate_csr_action = '#HttpsCert.GenerateCSR'
    import_certificate_action = '#HttpsCert.ImportServerCertificate'

    def validate_csr(self, csr):
        # iBMC refuses "/" in any subject field
        if any('/' in field for field in csr.fields() if field):
            raise exception.InvalidParameterValue(
                err=_('Huawei does not accept "/" as part of any CSR field'))

    def import_certificate(self, conn, certificate):
        manager = super(HuaweiAdapter, self).import_certificate(
            conn, certificate)
        # the new certificate is only served after a restart
        LOG.info('Restarting the service processor of %(host)s to activate '
                 'the imported certificate', {'host': conn.hostname})
        conn.reset_sp(manager)
        return manager
