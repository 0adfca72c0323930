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

from ironfish.common import exception
from ironfish.redfish import collection
from ironfish.redfish import resources
from ironfish.tests import base
from ironfish.tests.unit.redfish import utils


class ListMembersTestCase(base.TestCase):

    def setUp(self):
        super(ListMembersTestCase, self).setUp()
        self.service = utils.FakeService()
        self.conn = utils.get_client(self.service)

    def test_list_members(self):
        self.service.add('/redfish/v1/Managers',
                         utils.collection('/redfish/v1/Managers/1',
                                          '/redfish/v1/Managers/2'))
        self.assertEqual(['/redfish/v1/Managers/1', '/redfish/v1/Managers/2'],
                         collection.list_members(self.conn,
                                                 '/redfish/v1/Managers',
                                                 'Managers'))
        self.assertEqual(utils.TOKEN, self.service.calls[0].auth_token)

    def test_list_members_empty(self):
        self.service.add('/redfish/v1/Managers', {'Members': []})
        exc = self.assertRaises(exception.EmptyCollection,
                                collection.list_members, self.conn,
                                '/redfish/v1/Managers', 'Managers')
        self.assertIn('Managers', str(exc))

    def test_list_members_missing(self):
        self.service.add('/redfish/v1/Managers', {'Name': 'Managers'})
        self.assertRaises(exception.EmptyCollection,
                          collection.list_members, self.conn,
                          '/redfish/v1/Managers', 'Managers')

    def test_list_members_without_odata_id(self):
        self.service.add('/redfish/v1/Managers', {'Members': [{}]})
        self.assertRaises(exception.MissingField,
                          collection.list_members, self.conn,
                          '/redfish/v1/Managers', 'Managers')

    def test_list_members_not_authenticated(self):
        self.conn.session.clear()
        self.assertRaises(exception.NotAuthenticated,
                          collection.list_members, self.conn,
                          '/redfish/v1/Managers', 'Managers')
        self.assertFalse(self.conn.transport.request.called)

    def test_list_members_error(self):
        self.service.add('/redfish/v1/Managers',
                         status=http_client.INTERNAL_SERVER_ERROR)
        self.assertRaises(exception.RequestFailed,
                          collection.list_members, self.conn,
                          '/redfish/v1/Managers', 'Managers')


class FetchEntityTestCase(base.TestCase):

    def setUp(self):
        super(FetchEntityTestCase, self).setUp()
        self.service = utils.FakeService()
        self.conn = utils.get_client(self.service)

    def test_fetch_entity(self):
        self.service.add('/redfish/v1/AccountService/Accounts/3', {
            '@odata.id': '/somewhere/else',
            'Id': '3',
            'UserName': '',
            'RoleId': 'Operator',
            'Enabled': False,
            'Oem': {'Lenovo': {'Slot': 3}}})
        account = collection.fetch_entity(
            self.conn, '/redfish/v1/AccountService/Accounts/3',
            resources.Account)

        self.assertEqual('/redfish/v1/AccountService/Accounts/3',
                         account.self_endpoint)
        self.assertEqual('3', account.identity)
        self.assertEqual('', account.username)
        self.assertEqual('Operator', account.role_id)
        self.assertIs(False, account.enabled)
        self.assertIsNone(account.locked)
        self.assertIsNone(account.password)
        self.assertEqual({'Lenovo': {'Slot': 3}}, account.oem)

    def test_fetch_entity_malformed(self):
        self.service.add('/redfish/v1/Systems/1', content=b'{"Id": ')
        self.assertRaises(exception.MalformedResponse,
                          collection.fetch_entity, self.conn,
                          '/redfish/v1/Systems/1', resources.System)

    def test_fetch_entity_not_an_object(self):
        self.service.add('/redfish/v1/Systems/1', content=b'[]')
        self.assertRaises(exception.MalformedResponse,
                          collection.fetch_entity, self.conn,
                          '/redfish/v1/Systems/1', resources.System)


class MapByKeyTestCase(base.TestCase):

    def _account(self, identity, username):
        data = {'Id': identity}
        if username is not None:
            data['UserName'] = username
        return resources.Account(data, '/accounts/%s' % identity)

    def test_map_by_key(self):
        accounts = [self._account('1', 'admin'), self._account('2', 'ops')]
        result = collection.map_by_key(accounts, 'username')
        self.assertEqual({'admin', 'ops'}, set(result))
        self.assertEqual('/accounts/2', result['ops'].self_endpoint)

    def test_map_by_key_missing(self):
        accounts = [self._account('1', 'admin'), self._account('2', None)]
        exc = self.assertRaises(exception.MissingField,
                                collection.map_by_key, accounts, 'username')
        self.assertIn('/accounts/2', str(exc))

    def test_map_by_key_skip(self):
        accounts = [self._account('1', 'admin'), self._account('2', ''),
                    self._account('3', '')]
        result = collection.map_by_key(
            accounts, 'username', skip=lambda a: a.username == '')
        self.assertEqual(['admin'], list(result))

    def test_map_by_key_skip_does_not_hide_missing(self):
        accounts = [self._account('1', None)]
        self.assertRaises(exception.MissingField, collection.map_by_key,
                          accounts, 'username',
                          skip=lambda a: a.username == '')
