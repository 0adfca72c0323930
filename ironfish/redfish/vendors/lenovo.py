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
Lenovo XClarity Controller adapter.

XCC has a fixed number of pre-allocated accounts ("slots") and neither
creates nor deletes accounts. An unused slot has an empty user name. The
first slot holds the factory administrator and is never touched.
"""

from oslo_log import log

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import collection
from ironfish.redfish import constants
from ironfish.redfish import resources
from ironfish.redfish import session
from ironfish.redfish.vendors import base

LOG = log.getLogger(__name__)

RESERVED_SLOT = 0

EMPTY_SLOT = {'UserName': '', 'Enabled': False}
"""Payload turning a slot back into an unused one."""


class LenovoAdapter(base.StandardAdapter):

    flavor = constants.LENOVO
    capabilities = frozenset([constants.ACCOUNT_SERVICE,
                              constants.ACCOUNT_ROLES,
                              constants.CHASSIS])

    def get_slots(self, conn):
        """Return all account slots, ordered as the service lists them."""
        return collection.fetch_all(conn, self.get_accounts_endpoint(conn),
                                    'Accounts', resources.Account)

    def find_slot(self, conn, username):
        """Look up the slot holding an account.

        :raises: AccountNotFound
        :returns: tuple of (slot index, Account).
        """
        for index, account in enumerate(self.get_slots(conn)):
            if account.username and account.username == username:
                return index, account
        raise exception.AccountNotFound(username=username)

    def find_modifiable_slot(self, conn, username):
        index, account = self.find_slot(conn, username)
        if index == RESERVED_SLOT:
            raise exception.ReservedAccountSlot(username=username)
        return account

    def add_account(self, conn, request):
        if not request.username or not request.password:
            raise exception.MissingParameterValue(
                err=_('Username and password are required to create an '
                      'account'))
        if request.role is not None:
            self.validate_role(conn, request.role)

        free = None
        for index, account in enumerate(self.get_slots(conn)):
            if index == RESERVED_SLOT:
                continue
            if account.username == '':
                free = account
                break
        if free is None:
            raise exception.NoFreeAccountSlot(username=request.username)

        payload = self.make_account_payload(request)
        payload['Enabled'] = True
        session.request(conn, free.self_endpoint, method='PATCH',
                        body=payload, expected=base.MODIFY_CODES)
        LOG.info('Created account %(user)s in slot %(slot)s on %(host)s',
                 {'user': request.username, 'slot': free.self_endpoint,
                  'host': conn.hostname})

    def modify_account(self, conn, username, request):
        if request.username == '':
            # an empty user name marks an unused slot, see delete_account
            raise exception.MissingParameterValue(
                err=_('Account %s cannot be renamed to an empty user '
                      'name, delete it to release its slot') % username)
        if request.role is not None:
            self.validate_role(conn, request.role)
        account = self.find_modifiable_slot(conn, username)
        session.request(conn, account.self_endpoint, method='PATCH',
                        body=self.make_account_payload(request),
                        expected=base.MODIFY_CODES)

    def delete_account(self, conn, username):
        account = self.find_modifiable_slot(conn, username)
        session.request(conn, account.self_endpoint, method='PATCH',
                        body=dict(EMPTY_SLOT), expected=base.MODIFY_CODES)
        LOG.info('Released slot %(slot)s of account %(user)s on %(host)s',
                 {'slot': account.self_endpoint, 'user': username,
                  'host': conn.hostname})
