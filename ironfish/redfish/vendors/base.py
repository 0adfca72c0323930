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
Abstract base class and standard behaviour of the vendor adapters.
"""

import abc
from http import client as http_client

from oslo_log import log

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import collection
from ironfish.redfish import constants
from ironfish.redfish import resources
from ironfish.redfish import session

LOG = log.getLogger(__name__)

CREATE_CODES = (http_client.OK, http_client.CREATED)
MODIFY_CODES = (http_client.OK, http_client.ACCEPTED, http_client.NO_CONTENT)
ACTION_CODES = (http_client.OK, http_client.CREATED, http_client.ACCEPTED,
                http_client.NO_CONTENT)
CSR_CODES = (http_client.OK, http_client.CREATED, http_client.ACCEPTED)

DEFAULT_COUNTRY = 'XX'
"""Country code sent when the CSR request names none."""


class VendorAdapter(object, metaclass=abc.ABCMeta):
    """Translation of the uniform operations into one vendor's dialect.

    Every operation takes the RedfishClient as first argument. The client
    has already checked the capabilities of the adapter.
    """

    flavor = None
    """The flavor handled by the adapter."""

    capabilities = frozenset()
    """Optional services the vendor implements."""

    def supports(self, capability):
        return capability in self.capabilities

    @abc.abstractmethod
    def add_account(self, conn, request):
        """Create an account.

        :param conn: a RedfishClient.
        :param request: an AccountRequest.
        """

    @abc.abstractmethod
    def modify_account(self, conn, username, request):
        """Change the properties of an existing account.

        :param conn: a RedfishClient.
        :param username: login name of the account.
        :param request: an AccountRequest, unset fields are left alone.
        """

    @abc.abstractmethod
    def delete_account(self, conn, username):
        """Remove an account."""

    @abc.abstractmethod
    def change_password(self, conn, username, password):
        """Set the password of an account."""

    @abc.abstractmethod
    def generate_csr(self, conn, csr):
        """Start the generation of a certificate signing request.

        :param conn: a RedfishClient.
        :param csr: a CSRRequest.
        """

    @abc.abstractmethod
    def fetch_csr(self, conn):
        """Return the PEM encoded certificate signing request.

        :raises: CSRNotAvailable if no CSR has been generated yet.
        """

    @abc.abstractmethod
    def import_certificate(self, conn, certificate):
        """Replace the HTTPS certificate of the service processor."""

    @abc.abstractmethod
    def get_license(self, conn, manager):
        """Return the License of a manager or None if it has no license."""

    @abc.abstractmethod
    def add_license(self, conn, manager, license_key):
        """Install a license key on a manager."""

    @abc.abstractmethod
    def get_manager_reset_target(self, manager):
        """Return the location of the reset action of a manager."""


class StandardAdapter(VendorAdapter):
    """Behaviour of a service processor following the Redfish standard.

    Vendor adapters derive from it and override what their dialect does
    differently.
    """

    security_service_path = None
    """Keys leading from the manager ``Oem`` block to the security service.

    None if certificate management is not implemented for the vendor.
    """

    generate_csr_action = None
    import_certificate_action = None

    def _unsupported(self, operation):
        return exception.UnsupportedOperation(operation=operation,
                                              flavor=self.flavor)

    # accounts

    def get_accounts_endpoint(self, conn):
        service = conn.get_account_service()
        if service.accounts is None:
            raise exception.MissingField(field='.Accounts.@odata.id',
                                         url=service.self_endpoint)
        return service.accounts

    def find_account(self, conn, username):
        """Look up an account by login name.

        :raises: AccountNotFound
        """
        account = conn.map_accounts_by_name().get(username)
        if account is None:
            raise exception.AccountNotFound(username=username)
        return account

    def validate_role(self, conn, role):
        if role not in conn.map_roles_by_name():
            raise exception.RoleNotFound(role=role)

    def make_account_payload(self, request):
        payload = {}
        if request.username is not None:
            payload['UserName'] = request.username
        if request.password is not None:
            payload['Password'] = request.password
        if request.role is not None:
            payload['RoleId'] = request.role
        if request.enabled is not None:
            payload['Enabled'] = request.enabled
        if request.locked is not None:
            payload['Locked'] = request.locked
        return payload

    def add_account(self, conn, request):
        if not request.username or not request.password or not request.role:
            raise exception.MissingParameterValue(
                err=_('Username, password and role are required to create '
                      'an account'))
        self.validate_role(conn, request.role)

        endpoint = self.get_accounts_endpoint(conn)
        session.request(conn, endpoint, method='POST',
                        body=self.make_account_payload(request),
                        expected=CREATE_CODES)
        LOG.info('Created account %(user)s on %(host)s',
                 {'user': request.username, 'host': conn.hostname})

    def modify_account(self, conn, username, request):
        if request.role is not None:
            self.validate_role(conn, request.role)
        account = self.find_account(conn, username)
        session.request(conn, account.self_endpoint, method='PATCH',
                        body=self.make_account_payload(request),
                        expected=MODIFY_CODES)

    def delete_account(self, conn, username):
        account = self.find_account(conn, username)
        session.request(conn, account.self_endpoint, method='DELETE',
                        expected=MODIFY_CODES)
        LOG.info('Deleted account %(user)s on %(host)s',
                 {'user': username, 'host': conn.hostname})

    def change_password(self, conn, username, password):
        account = self.find_account(conn, username)
        session.request(conn, account.self_endpoint, method='PATCH',
                        body={'Password': password}, expected=MODIFY_CODES)

    # certificates

    def validate_csr(self, csr):
        """Reject subjects the service processor is known to refuse.

        :raises: InvalidParameterValue
        """

    def make_csr_payload(self, conn, csr):
        payload = {'Country': csr.country or DEFAULT_COUNTRY,
                   'CommonName': csr.common_name or conn.hostname}
        for key, value in (('State', csr.state),
                           ('City', csr.locality),
                           ('OrgName', csr.organization),
                           ('OrgUnit', csr.organizational_unit)):
            if value:
                payload[key] = value
        return payload

    def get_https_cert(self, conn, manager):
        """Walk from a manager to its HTTPS certificate resource.

        :raises: MissingField naming the first missing link.
        :returns: tuple of (decoded certificate resource, its URL).
        """
        secsvc = resources.require_odata_id(
            manager.raw, manager.self_endpoint, 'Oem',
            *self.security_service_path)
        data, result = collection.get_json(conn, secsvc)

        httpscert = resources.require_odata_id(data, result.url, 'Links',
                                               'HttpsCert')
        data, result = collection.get_json(conn, httpscert)
        return data, result.url

    def get_https_cert_action(self, conn, manager, action):
        data, url = self.get_https_cert(conn, manager)
        actions = data.get('Actions')
        target = None
        if isinstance(actions, dict) and isinstance(actions.get(action),
                                                    dict):
            target = actions[action].get('target')
        if not target:
            raise exception.MissingField(
                field='.Actions.%s.target' % action, url=url)
        return target

    def generate_csr(self, conn, csr):
        if self.security_service_path is None:
            raise self._unsupported('CSR generation')

        self.validate_csr(csr)
        payload = self.make_csr_payload(conn, csr)

        manager = conn.get_first_manager()
        target = self.get_https_cert_action(conn, manager,
                                            self.generate_csr_action)
        session.request(conn, target, method='POST', body=payload,
                        expected=CSR_CODES)
        LOG.info('Requested CSR generation on %(host)s',
                 {'host': conn.hostname})

    def fetch_csr(self, conn):
        if self.security_service_path is None:
            raise self._unsupported('CSR retrieval')

        manager = conn.get_first_manager()
        data, url = self.get_https_cert(conn, manager)
        # A running generation omits the field, a never started one sets it
        # to null. Both look the same.
        csr = data.get('CertificateSigningRequest')
        if not csr:
            raise exception.CSRNotAvailable(url=url)
        if not isinstance(csr, str):
            raise exception.MalformedResponse(
                url=url, error=_('CertificateSigningRequest is not a '
                                 'string'))
        return csr.replace('\\n', '\n')

    def import_certificate(self, conn, certificate):
        if self.security_service_path is None:
            raise self._unsupported('certificate import')
        if not certificate:
            raise exception.MissingParameterValue(
                err=_('No certificate to import'))

        manager = conn.get_first_manager()
        target = self.get_https_cert_action(conn, manager,
                                            self.import_certificate_action)
        session.request(conn, target, method='POST',
                        body={'Certificate': certificate},
                        expected=ACTION_CODES)
        LOG.info('Imported HTTPS certificate on %(host)s',
                 {'host': conn.hostname})
        return manager

    # licenses

    def get_license(self, conn, manager):
        raise self._unsupported('license retrieval')

    def add_license(self, conn, manager, license_key):
        raise self._unsupported('license installation')

    # manager reset

    def get_manager_reset_target(self, manager):
        actions = manager.actions if isinstance(manager.actions, dict) else {}
        reset = actions.get('#Manager.Reset')
        target = reset.get('target') if isinstance(reset, dict) else None
        if not target:
            raise exception.MissingField(
                field='.Actions.#Manager.Reset.target',
                url=manager.self_endpoint)
        return target


class GenericAdapter(StandardAdapter):
    """Any service processor of an unknown vendor."""

    flavor = constants.VANILLA
    capabilities = frozenset([constants.ACCOUNT_SERVICE,
                              constants.SECURITY_SERVICE,
                              constants.ACCOUNT_ROLES,
                              constants.CHASSIS])
