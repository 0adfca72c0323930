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
HP and HPE iLO adapters.

iLO has no roles. Accounts carry a private privilege map in their Oem
block instead, and a request may name a virtual role standing for a fixed
set of privileges.
"""

from http import client as http_client

from oslo_log import log

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import constants
from ironfish.redfish import resources
from ironfish.redfish import session
from ironfish.redfish.vendors import base

LOG = log.getLogger(__name__)

PRIVILEGE_LOGIN = 1 << 0
PRIVILEGE_REMOTECONSOLE = 1 << 1
PRIVILEGE_USERCONFIG = 1 << 2
PRIVILEGE_VIRTUALMEDIA = 1 << 3
PRIVILEGE_VIRTUALPOWER_AND_RESET = 1 << 4
PRIVILEGE_ILOCONFIG = 1 << 5

PRIVILEGES = {
    'login': PRIVILEGE_LOGIN,
    'remoteconsole': PRIVILEGE_REMOTECONSOLE,
    'userconfig': PRIVILEGE_USERCONFIG,
    'virtualmedia': PRIVILEGE_VIRTUALMEDIA,
    'virtualpowerandreset': PRIVILEGE_VIRTUALPOWER_AND_RESET,
    'iloconfig': PRIVILEGE_ILOCONFIG,
}
"""Privilege names to privilege bits."""

VIRTUAL_ROLES = {
    'none': 0,
    'readonly': PRIVILEGE_LOGIN,
    'operator': (PRIVILEGE_LOGIN | PRIVILEGE_REMOTECONSOLE |
                 PRIVILEGE_VIRTUALMEDIA | PRIVILEGE_VIRTUALPOWER_AND_RESET),
    'administrator': (PRIVILEGE_LOGIN | PRIVILEGE_REMOTECONSOLE |
                      PRIVILEGE_USERCONFIG | PRIVILEGE_VIRTUALMEDIA |
                      PRIVILEGE_VIRTUALPOWER_AND_RESET |
                      PRIVILEGE_ILOCONFIG),
}

_PRIVILEGE_KEYS = (
    ('LoginPriv', PRIVILEGE_LOGIN),
    ('RemoteConsolePriv', PRIVILEGE_REMOTECONSOLE),
    ('UserConfigPriv', PRIVILEGE_USERCONFIG),
    ('VirtualMediaPriv', PRIVILEGE_VIRTUALMEDIA),
    ('VirtualPowerAndResetPriv', PRIVILEGE_VIRTUALPOWER_AND_RESET),
    ('iLOConfigPriv', PRIVILEGE_ILOCONFIG),
)

LICENSE_CODES = (http_client.OK, http_client.CREATED)


def get_privileges(role=None, privileges=None):
    """Compute the privilege bits of an account request.

    :param role: name of a virtual role or None.
    :param privileges: additional privilege bits or None.
    :raises: InvalidParameterValue for an unknown virtual role.
    """
    bits = privileges or 0
    if role is not None:
        try:
            bits |= VIRTUAL_ROLES[role.lower()]
        except KeyError:
            raise exception.InvalidParameterValue(
                err=_('Unknown role %(role)s, valid roles are: %(valid)s') %
                {'role': role, 'valid': ', '.join(constants.HP_VIRTUAL_ROLES)})
    return bits


def render_privileges(bits):
    """Render privilege bits into the iLO privilege map."""
    return {key: bool(bits & bit) for key, bit in _PRIVILEGE_KEYS}


class HPAdapter(base.StandardAdapter):
    """HP iLO 4 and earlier, extensions under the ``Hp`` Oem key."""

    flavor = constants.HP
    capabilities = frozenset([constants.ACCOUNT_SERVICE,
                              constants.SECURITY_SERVICE,
                              constants.CHASSIS,
                              constants.LICENSE])

    oem_key = 'Hp'
    license_name = 'HP iLO license'

    security_service_path = (oem_key, 'Links', 'SecurityService')
    generate_csr_action = '#HpHttpsCert.GenerateCSR'
    import_certificate_action = '#HpHttpsCert.ImportCertificate'

    def make_account_payload(self, request):
        payload = {}
        if request.username is not None:
            payload['UserName'] = request.username
        if request.password is not None:
            payload['Password'] = request.password

        oem = {}
        if request.username is not None:
            oem['LoginName'] = request.username
        if request.role is not None or request.hpe_privileges is not None:
            oem['Privileges'] = render_privileges(
                get_privileges(request.role, request.hpe_privileges))
        if oem:
            payload['Oem'] = {self.oem_key: oem}
        return payload

    def add_account(self, conn, request):
        if not request.username or not request.password:
            raise exception.MissingParameterValue(
                err=_('Username and password are required to create an '
                      'account'))
        # validates the role before talking to the service processor
        payload = self.make_account_payload(request)

        endpoint = self.get_accounts_endpoint(conn)
        session.request(conn, endpoint, method='POST', body=payload,
                        expected=base.CREATE_CODES)
        LOG.info('Created account %(user)s on %(host)s',
                 {'user': request.username, 'host': conn.hostname})

    def modify_account(self, conn, username, request):
        payload = self.make_account_payload(request)
        account = self.find_account(conn, username)
        session.request(conn, account.self_endpoint, method='PATCH',
                        body=payload, expected=base.MODIFY_CODES)

    def validate_csr(self, csr):
        if not all(csr.fields()):
            raise exception.InvalidParameterValue(
                err=_('%s requires country, state, locality, organization, '
                      'organizational unit and common name to be set')
                % self.flavor.upper())

    def make_csr_payload(self, conn, csr):
        return {
            'Country': csr.country or base.DEFAULT_COUNTRY,
            'State': csr.state or '-',
            'City': csr.locality or '-',
            'OrgName': csr.organization or '-',
            'OrgUnit': csr.organizational_unit or '-',
            'CommonName': csr.common_name or conn.hostname,
        }

    def _get_oem(self, manager):
        oem = manager.oem.get(self.oem_key) if isinstance(manager.oem,
                                                          dict) else None
        if not isinstance(oem, dict):
            raise exception.MissingField(field='.Oem.%s' % self.oem_key,
                                         url=manager.self_endpoint)
        return oem

    def get_license(self, conn, manager):
        info = self._get_oem(manager).get('License') or {}
        if not isinstance(info, dict):
            raise exception.MalformedResponse(
                url=manager.self_endpoint,
                error=_('Oem.%s.License is not an object') % self.oem_key)
        key = info.get('LicenseKey')
        if not key:
            return None
        return resources.License(self.license_name,
                                 expiration=info.get('LicenseExpire'),
                                 license_type=info.get('LicenseType'),
                                 license_key=key)

    def add_license(self, conn, manager, license_key):
        if not license_key:
            raise exception.MissingParameterValue(
                err=_('No license key to install'))
        self._get_oem(manager)
        target = resources.require_odata_id(
            manager.raw, manager.self_endpoint, 'Oem', self.oem_key, 'Links',
            'LicenseService')
        session.request(conn, target, method='POST',
                        body={'LicenseKey': license_key},
                        expected=LICENSE_CODES)
        LOG.info('Installed license on manager %(manager)s of %(host)s',
                 {'manager': manager.self_endpoint, 'host': conn.hostname})


class HPEAdapter(HPAdapter):
    """HPE iLO 5 and later, extensions under the ``Hpe`` Oem key."""

    flavor = constants.HPE

    oem_key = 'Hpe'
    license_name = 'HPE iLO license'

    security_service_path = (oem_key, 'Links', 'SecurityService')
    generate_csr_action = '#HpeHttpsCert.GenerateCSR'
    import_certificate_action = '#HpeHttpsCert.ImportCertificate'
