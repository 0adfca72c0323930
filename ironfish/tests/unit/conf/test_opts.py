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

from unittest import mock

from oslo_log import log

from ironfish.conf import CONF
from ironfish.conf import opts
from ironfish.tests import base
from ironfish import version


class OptsTestCase(base.TestCase):

    def test_list_opts(self):
        groups = dict(opts.list_opts())
        self.assertEqual(['redfish'], list(groups))
        self.assertEqual({'timeout', 'verify_ca', 'user_agent'},
                         {o.name for o in groups['redfish']})

    def test_defaults(self):
        self.assertEqual(60, CONF.redfish.timeout)
        self.assertEqual('True', CONF.redfish.verify_ca)
        self.assertEqual('ironfish/%s' % version.version_string,
                         CONF.redfish.user_agent)

    @mock.patch.object(log, 'set_defaults', autospec=True)
    def test_update_opt_defaults(self, mock_set_defaults):
        opts.update_opt_defaults()
        levels = mock_set_defaults.call_args[1]['default_log_levels']
        self.assertIn('requests=WARNING', levels)
        self.assertIn('urllib3.connectionpool=WARNING', levels)
