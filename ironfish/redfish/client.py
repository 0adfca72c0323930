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
Uniform client for Redfish service processors of different vendors.

Typical use::

    conn = client.RedfishClient('bmc.example.com', username='admin',
                                password='secret')
    conn.login()
    try:
        conn.add_account(resources.AccountRequest(
            username='operator', password='...', role='Operator'))
    finally:
        conn.logout()
"""

from oslo_log import log

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.common import utils
from ironfish.redfish import collection
from ironfish.redfish import constants
from ironfish.redfish import discovery
from ironfish.redfish import flavors
from ironfish.redfish import power
from ironfish.redfish import resources
from ironfish.redfish import session
from ironfish.redfish import transport
from ironfish.redfish import vendors

LOG = log.getLogger(__name__)


def _is_empty_slot(account):
    return account.username == ''


class RedfishClient(object):
    """Client for one service processor.

    A client is not safe for concurrent use, use :meth:`clone` to get an
    independent client for another thread.

    :param address: host name, ``host:port`` or ``https://host:port``.
    :param username: login name.
    :param password: password.
    :param timeout: request timeout in seconds, defaults to
        ``[redfish]timeout``.
    :param verify: TLS verification, a boolean or a CA bundle path,
        defaults to ``[redfish]verify_ca``.
    :param user_agent: User-Agent header, defaults to
        ``[redfish]user_agent``.
    """

    def __init__(self, address, username=None, password=None, timeout=None,
                 verify=None, user_agent=None):
        hostname, port = utils.parse_address(address)
        self.username = username
        self.password = password
        self.transport = transport.Transport(
            hostname, port=port, username=username, password=password,
            timeout=timeout, verify=verify, user_agent=user_agent)
        self.endpoints = None
        self.session = session.Session()
        self.flavor = constants.UNINITIALIZED
        self.adapter = None

    @property
    def hostname(self):
        return self.transport.hostname

    @property
    def port(self):
        return self.transport.port

    @port.setter
    def port(self, value):
        self.transport.port = value

    def __repr__(self):
        return '<RedfishClient %s flavor %s>' % (self.transport.base_url,
                                                 self.flavor)

    # session

    def discover(self):
        """Fetch the service root, see :func:`discovery.discover`."""
        return discovery.discover(self)

    def login(self):
        """Discover the service if needed and open a session."""
        if self.endpoints is None:
            self.discover()
        session.login(self)

    def logout(self):
        session.logout(self)

    def clone(self):
        """Return a new client for the same target.

        The clone shares no state with this client. It knows the endpoints
        and the flavor, but has no session.
        """
        new = RedfishClient(self.transport.base_url, username=self.username,
                            password=self.password,
                            timeout=self.transport.timeout,
                            verify=self.transport.verify,
                            user_agent=self.transport.user_agent)
        if self.endpoints is not None:
            new.endpoints = self.endpoints.copy()
        if self.flavor != constants.UNINITIALIZED:
            new.adapter = vendors.get_adapter(self.flavor)
            new.flavor = self.flavor
        return new

    def close(self):
        self.transport.close()

    def _endpoints(self):
        return session.require_endpoints(self)

    def _require_capability(self, capability, operation):
        return flavors.require_capability(self, capability, operation)

    def resolve_flavor(self):
        return flavors.resolve_flavor(self)

    # systems

    def get_systems(self):
        return collection.list_members(self, self._endpoints().systems,
                                       'Systems')

    def get_system_data(self, endpoint):
        return collection.fetch_entity(self, endpoint, resources.System)

    def _get_all_systems(self):
        return [self.get_system_data(s) for s in self.get_systems()]

    def map_systems_by_id(self):
        return collection.map_by_key(self._get_all_systems(), 'identity')

    def map_systems_by_uuid(self):
        return collection.map_by_key(self._get_all_systems(), 'uuid')

    def map_systems_by_serial_number(self):
        return collection.map_by_key(self._get_all_systems(),
                                     'serial_number')

    def get_allowed_reset_types(self, system):
        return power.get_allowed_reset_types(self, system)

    def set_system_power_state(self, system, state):
        power.set_system_power_state(self, system, state)

    # accounts and roles

    def get_account_service(self):
        """Return the AccountService record.

        :raises: MissingEndpoint if the service root announces no account
            service.
        """
        location = self._endpoints().account_service
        if location is None:
            raise exception.MissingEndpoint(
                endpoint='AccountService',
                url=self.transport.build_url(discovery.SERVICE_ROOT))
        return collection.fetch_entity(self, location,
                                       resources.AccountService)

    def get_accounts(self):
        adapter = self._require_capability(constants.ACCOUNT_SERVICE,
                                           'account listing')
        return collection.list_members(
            self, adapter.get_accounts_endpoint(self), 'Accounts')

    def get_account_data(self, endpoint):
        return collection.fetch_entity(self, endpoint, resources.Account)

    def _get_all_accounts(self):
        return [self.get_account_data(a) for a in self.get_accounts()]

    def map_accounts_by_name(self):
        """Map login names to accounts, leaving out unused account slots."""
        return collection.map_by_key(self._get_all_accounts(), 'username',
                                     skip=_is_empty_slot)

    def map_accounts_by_id(self):
        return collection.map_by_key(self._get_all_accounts(), 'identity',
                                     skip=_is_empty_slot)

    def get_roles(self):
        self._require_capability(constants.ACCOUNT_ROLES, 'role listing')
        service = self.get_account_service()
        if service.roles is None:
            raise exception.MissingField(field='.Roles.@odata.id',
                                         url=service.self_endpoint)
        return collection.list_members(self, service.roles, 'Roles')

    def get_role_data(self, endpoint):
        return collection.fetch_entity(self, endpoint, resources.Role)

    def _get_all_roles(self):
        return [self.get_role_data(r) for r in self.get_roles()]

    def map_roles_by_name(self):
        return collection.map_by_key(self._get_all_roles(), 'name')

    def map_roles_by_id(self):
        return collection.map_by_key(self._get_all_roles(), 'identity')

    def add_account(self, request):
        """Create an account.

        :param request: an AccountRequest.
        """
        adapter = self._require_capability(constants.ACCOUNT_SERVICE,
                                           'account creation')
        adapter.add_account(self, request)

    def modify_account(self, username, request):
        adapter = self._require_capability(constants.ACCOUNT_SERVICE,
                                           'account modification')
        adapter.modify_account(self, username, request)

    def delete_account(self, username):
        adapter = self._require_capability(constants.ACCOUNT_SERVICE,
                                           'account deletion')
        adapter.delete_account(self, username)

    def change_password(self, username, password):
        """Set the password of an account.

        :raises: MissingParameterValue for an empty password,
            AccountNotFound if the account does not exist.
        """
        if not password:
            raise exception.MissingParameterValue(
                err=_('Password for %s is empty') % username)
        adapter = self._require_capability(constants.ACCOUNT_SERVICE,
                                           'password change')
        adapter.change_password(self, username, password)

    # chassis

    def get_chassis(self):
        self._require_capability(constants.CHASSIS, 'chassis listing')
        return collection.list_members(self, self._endpoints().chassis,
                                       'Chassis')

    def get_chassis_data(self, endpoint):
        return collection.fetch_entity(self, endpoint, resources.Chassis)

    def _get_all_chassis(self):
        return [self.get_chassis_data(c) for c in self.get_chassis()]

    def map_chassis_by_id(self):
        return collection.map_by_key(self._get_all_chassis(), 'identity')

    def map_chassis_by_serial_number(self):
        return collection.map_by_key(self._get_all_chassis(),
                                     'serial_number')

    def get_power_data(self, chassis):
        """Return the undecoded Power resource of a chassis."""
        if chassis.power is None:
            raise exception.MissingField(field='.Power.@odata.id',
                                         url=chassis.self_endpoint)
        return collection.fetch_entity(self, chassis.power, resources.Power)

    def get_thermal_data(self, chassis):
        """Return the undecoded Thermal resource of a chassis."""
        if chassis.thermal is None:
            raise exception.MissingField(field='.Thermal.@odata.id',
                                         url=chassis.self_endpoint)
        return collection.fetch_entity(self, chassis.thermal,
                                       resources.Thermal)

    # managers

    def get_managers(self):
        return collection.list_members(self, self._endpoints().managers,
                                       'Managers')

    def get_manager_data(self, endpoint):
        return collection.fetch_entity(self, endpoint, resources.Manager)

    def get_first_manager(self):
        return self.get_manager_data(self.get_managers()[0])

    def _get_all_managers(self):
        return [self.get_manager_data(m) for m in self.get_managers()]

    def map_managers_by_id(self):
        return collection.map_by_key(self._get_all_managers(), 'identity')

    def map_managers_by_uuid(self):
        return collection.map_by_key(self._get_all_managers(), 'uuid')

    def reset_sp(self, manager=None):
        """Restart a service processor.

        :param manager: the Manager to restart, the first one if None.
        """
        self.resolve_flavor()
        if manager is None:
            manager = self.get_first_manager()
        target = self.adapter.get_manager_reset_target(manager)
        session.request(self, target, method='POST',
                        body={'ResetType': 'ForceRestart'},
                        expected=power.RESET_CODES)
        LOG.info('Requested restart of manager %(manager)s of %(host)s',
                 {'manager': manager.self_endpoint, 'host': self.hostname})

    # certificates

    def generate_csr(self, csr):
        """Start the generation of a certificate signing request.

        :param csr: a CSRRequest.
        :raises: InvalidParameterValue if the vendor would refuse the
            subject.
        """
        adapter = self._require_capability(constants.SECURITY_SERVICE,
                                           'CSR generation')
        adapter.generate_csr(self, csr)

    def fetch_csr(self):
        """Return the generated CSR in PEM format.

        :raises: CSRNotAvailable if the generation is not finished or was
            never requested.
        """
        adapter = self._require_capability(constants.SECURITY_SERVICE,
                                           'CSR retrieval')
        return adapter.fetch_csr(self)

    def import_certificate(self, certificate):
        """Replace the HTTPS certificate with a PEM encoded one."""
        adapter = self._require_capability(constants.SECURITY_SERVICE,
                                           'certificate import')
        adapter.import_certificate(self, certificate)

    # licenses

    def get_license(self, manager=None):
        """Return the License of a manager, None if none is installed.

        :param manager: a Manager, the first one if None.
        """
        adapter = self._require_capability(constants.LICENSE,
                                           'license retrieval')
        if manager is None:
            manager = self.get_first_manager()
        return adapter.get_license(self, manager)

    def add_license(self, license_key, manager=None):
        """Install a license key.

        :param license_key: the license key.
        :param manager: a Manager, the first one if None.
        """
        adapter = self._require_capability(constants.LICENSE,
                                           'license installation')
        if manager is None:
            manager = self.get_first_manager()
        adapter.add_license(self, manager, license_key)
