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

"""Fake Redfish service processor for the unit tests."""

import collections
from http import client as http_client
from unittest import mock

from oslo_serialization import jsonutils
from requests import structures

from ironfish.redfish import client
from ironfish.redfish import discovery
from ironfish.redfish import transport
from ironfish.redfish import vendors

HOST = 'bmc.example.com'
BASE_URL = 'https://%s' % HOST
TOKEN = 'e2a0c9c6a1f5c6b1'
SESSION = '/redfish/v1/SessionService/Sessions/1'

Call = collections.namedtuple(
    'Call', ['endpoint', 'method', 'body', 'basic_auth', 'auth_token'])


def make_result(endpoint, status_code=http_client.OK, body=None,
                headers=None, content=None):
    """Build an HTTPResult as returned by Transport.request."""
    if content is None:
        content = b'' if body is None else jsonutils.dump_as_bytes(body)
    url = BASE_URL + endpoint if endpoint.startswith('/') else endpoint
    reason = http_client.responses.get(status_code, '')
    return transport.HTTPResult(
        url=url, status_code=status_code,
        status=('%d %s' % (status_code, reason)).strip(),
        headers=structures.CaseInsensitiveDict(headers or {}),
        content=content)


def error_body(*infos, **kwargs):
    """Build a Redfish error envelope."""
    error = {'code': 'Base.1.0.GeneralError'}
    error.update(kwargs)
    if infos:
        error['@Message.ExtendedInfo'] = list(infos)
    return {'error': error}


def collection(*members):
    return {'Members': [{'@odata.id': m} for m in members],
            'Members@odata.count': len(members)}


class FakeService(object):
    """Canned responses keyed by HTTP method and endpoint.

    Responses registered for the same request are returned in order, the
    last one is repeated. Every request is recorded in calls.
    """

    def __init__(self):
        self.responses = collections.defaultdict(list)
        self.calls = []

    def add(self, endpoint, body=None, method='GET', status=http_client.OK,
            headers=None, content=None):
        self.responses[(method, endpoint)].append(
            make_result(endpoint, status_code=status, body=body,
                        headers=headers, content=content))

    def request(self, endpoint, method='GET', headers=None, body=None,
                basic_auth=False, auth_token=None, allow_redirects=None):
        self.calls.append(Call(endpoint, method, body, basic_auth,
                               auth_token))
        queue = self.responses.get((method, endpoint))
        if not queue:
            raise AssertionError('Unexpected HTTP %s %s' % (method, endpoint))
        if len(queue) > 1:
            return queue.pop(0)
        return queue[0]

    def requests(self, method=None):
        """Return the (method, endpoint) pairs requested so far."""
        return [(c.method, c.endpoint) for c in self.calls
                if method is None or c.method == method]

    def bodies(self, method, endpoint):
        return [c.body for c in self.calls
                if c.method == method and c.endpoint == endpoint]


def get_endpoints(account_service=True, sessions=True):
    return discovery.ServiceEndpoints(
        chassis='/redfish/v1/Chassis',
        managers='/redfish/v1/Managers',
        session_service='/redfish/v1/SessionService',
        systems='/redfish/v1/Systems',
        account_service=('/redfish/v1/AccountService'
                         if account_service else None),
        sessions='/redfish/v1/SessionService/Sessions' if sessions else None)


def get_client(service, flavor=None, authenticated=True, endpoints=True):
    """Return a RedfishClient talking to a FakeService.

    :param service: the FakeService.
    :param flavor: the flavor to preset, resolved on demand if None.
    :param authenticated: preset a session.
    :param endpoints: preset the discovered endpoints.
    """
    conn = client.RedfishClient(HOST, username='admin', password='secret')
    conn.transport.request = mock.Mock(side_effect=service.request)
    if endpoints:
        conn.endpoints = get_endpoints()
    if authenticated:
        conn.session.set(TOKEN, BASE_URL + SESSION)
    if flavor is not None:
        conn.flavor = flavor
        conn.adapter = vendors.get_adapter(flavor)
    return conn


def add_account_service(service, accounts, roles=None):
    """Register an account service with the given accounts and roles.

    :param accounts: list of account bodies, registered below
        /redfish/v1/AccountService/Accounts/<index>.
    :param roles: list of role bodies or None.
    """
    service.add('/redfish/v1/AccountService', {
        'Id': 'AccountService',
        'ServiceEnabled': True,
        'Accounts': {'@odata.id': '/redfish/v1/AccountService/Accounts'},
        'Roles': {'@odata.id': '/redfish/v1/AccountService/Roles'},
    })
    locations = []
    for index, account in enumerate(accounts):
        location = '/redfish/v1/AccountService/Accounts/%d' % index
        locations.append(location)
        service.add(location, account)
    service.add('/redfish/v1/AccountService/Accounts',
                collection(*locations))

    if roles is not None:
        locations = []
        for role in roles:
            location = '/redfish/v1/AccountService/Roles/%s' % role['Id']
            locations.append(location)
            service.add(location, role)
        service.add('/redfish/v1/AccountService/Roles',
                    collection(*locations))


def add_manager(service, body):
    """Register a single manager at /redfish/v1/Managers/1."""
    location = '/redfish/v1/Managers/1'
    data = {'Id': '1', 'Name': 'Manager'}
    data.update(body)
    service.add('/redfish/v1/Managers', collection(location))
    service.add(location, data)
    return location


def add_system(service, manufacturer=None, oem=None, **kwargs):
    """Register a single system at /redfish/v1/Systems/1."""
    location = '/redfish/v1/Systems/1'
    data = {'Id': '1', 'Name': 'System'}
    if manufacturer is not None:
        data['Manufacturer'] = manufacturer
    if oem is not None:
        data['Oem'] = oem
    data.update(kwargs)
    service.add('/redfish/v1/Systems', collection(location))
    service.add(location, data)
    return location
