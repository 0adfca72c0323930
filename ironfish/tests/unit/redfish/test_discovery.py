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

from http import client as http_client
from unittest import mock

from ironfish.common import exception
from ironfish.redfish import discovery
from ironfish.tests import base
from ironfish.tests.unit.redfish import utils

SERVICE_ROOT = {
    '@odata.id': '/redfish/v1/',
    'Id': 'RootService',
    'AccountService': {'@odata.id': '/redfish/v1/AccountService'},
    'Chassis': {'@odata.id': '/redfish/v1/Chassis'},
    'Managers': {'@odata.id': '/redfish/v1/Managers'},
    'SessionService': {'@odata.id': '/redfish/v1/SessionService'},
    'Systems': {'@odata.id': '/redfish/v1/Systems'},
    'Links': {'Sessions': {'@odata.id':
                           '/redfish/v1/SessionService/Sessions'}},
}


class DiscoverTestCase(base.TestCase):

    def setUp(self):
        super(DiscoverTestCase, self).setUp()
        self.service = utils.FakeService()
        self.conn = utils.get_client(self.service, authenticated=False,
                                     endpoints=False)

    def test_discover(self):
        self.service.add('/redfish/v1/', SERVICE_ROOT)
        endpoints = self.conn.discover()

        self.assertIs(endpoints, self.conn.endpoints)
        self.assertEqual('/redfish/v1/Systems', endpoints.systems)
        self.assertEqual('/redfish/v1/Managers', endpoints.managers)
        self.assertEqual('/redfish/v1/Chassis', endpoints.chassis)
        self.assertEqual('/redfish/v1/SessionService',
                         endpoints.session_service)
        self.assertEqual('/redfish/v1/AccountService',
                         endpoints.account_service)
        self.assertEqual('/redfish/v1/SessionService/Sessions',
                         endpoints.sessions)
        self.assertEqual('RootService', endpoints.raw['Id'])
        self.conn.transport.request.assert_called_once_with(
            '/redfish/v1/', allow_redirects=False)

    def test_discover_optional_endpoints(self):
        root = dict(SERVICE_ROOT)
        del root['AccountService']
        del root['Links']
        self.service.add('/redfish/v1/', root)

        endpoints = self.conn.discover()
        self.assertIsNone(endpoints.account_service)
        self.assertIsNone(endpoints.sessions)

    def test_discover_missing_mandatory_endpoint(self):
        for key in ('Chassis', 'Managers', 'SessionService', 'Systems'):
            root = dict(SERVICE_ROOT)
            del root[key]
            service = utils.FakeService()
            service.add('/redfish/v1/', root)
            conn = utils.get_client(service, authenticated=False,
                                    endpoints=False)

            exc = self.assertRaises(exception.MissingEndpoint, conn.discover)
            self.assertIn(key, str(exc))
            self.assertIsNone(conn.endpoints)

    def test_discover_redirect(self):
        self.service.add('/redfish/v1/', status=http_client.MOVED_PERMANENTLY,
                         headers={'Location':
                                  'https://%s:8443/redfish/v1/' % utils.HOST})
        self.service.add('/redfish/v1/', SERVICE_ROOT)

        endpoints = self.conn.discover()
        self.assertEqual(8443, self.conn.port)
        self.assertEqual('/redfish/v1/Systems', endpoints.systems)
        self.assertEqual(2, self.conn.transport.request.call_count)
        self.assertEqual('https://%s:8443/redfish/v1/' % utils.HOST,
                         self.conn.transport.build_url('/redfish/v1/'))

    @mock.patch.object(discovery.LOG, 'warning', autospec=True)
    def test_discover_redirect_other_host(self, mock_warning):
        self.service.add('/redfish/v1/', status=http_client.FOUND,
                         headers={'Location':
                                  'https://elsewhere:8443/redfish/v1/'})
        self.service.add('/redfish/v1/', SERVICE_ROOT)

        self.conn.discover()
        self.assertEqual(8443, self.conn.port)
        self.assertEqual(utils.HOST, self.conn.hostname)
        self.assertTrue(mock_warning.called)

    def test_discover_redirect_default_port(self):
        self.conn.port = 8443
        self.service.add('/redfish/v1/', status=http_client.MOVED_PERMANENTLY,
                         headers={'Location':
                                  'https://%s/redfish/v1/' % utils.HOST})
        self.service.add('/redfish/v1/', SERVICE_ROOT)

        self.conn.discover()
        self.assertEqual(443, self.conn.port)

    def test_discover_redirect_without_location(self):
        self.service.add('/redfish/v1/', status=http_client.MOVED_PERMANENTLY)
        exc = self.assertRaises(exception.MissingHeader, self.conn.discover)
        self.assertIn('Location', str(exc))
        self.assertIsInstance(exc, exception.RedfishProtocolError)
        self.assertIsNone(self.conn.endpoints)

    def test_discover_redirect_twice(self):
        self.service.add('/redfish/v1/', status=http_client.MOVED_PERMANENTLY,
                         headers={'Location':
                                  'https://%s:8443/redfish/v1/' % utils.HOST})
        exc = self.assertRaises(exception.ServiceRootUnavailable,
                                self.conn.discover)
        self.assertEqual(http_client.MOVED_PERMANENTLY, exc.status_code)
        self.assertEqual(2, self.conn.transport.request.call_count)
        self.assertIsNone(self.conn.endpoints)

    def test_discover_error(self):
        self.service.add('/redfish/v1/', status=http_client.NOT_FOUND)
        exc = self.assertRaises(exception.ServiceRootUnavailable,
                                self.conn.discover)
        self.assertEqual(http_client.NOT_FOUND, exc.status_code)
        self.assertIn('404 Not Found', str(exc))
        self.assertIsNone(self.conn.endpoints)

    def test_discover_error_is_transport_error(self):
        self.service.add('/redfish/v1/',
                         status=http_client.SERVICE_UNAVAILABLE,
                         body=utils.error_body({'Message': 'Starting up'}))
        exc = self.assertRaises(exception.RedfishTransportError,
                                self.conn.discover)
        self.assertNotIsInstance(exc, exception.RedfishRejection)
        self.assertEqual(http_client.SERVICE_UNAVAILABLE, exc.status_code)
        self.assertIn('Starting up', str(exc))

    def test_discover_malformed(self):
        self.service.add('/redfish/v1/', content=b'<html></html>')
        self.assertRaises(exception.MalformedResponse, self.conn.discover)
        self.assertIsNone(self.conn.endpoints)
