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

from oslo_config import cfg

from ironfish.common.i18n import _
from ironfish import version

opts = [
    cfg.IntOpt('timeout',
               min=1,
               default=60,
               help=_('Number of seconds to wait for a Redfish service '
                      'processor to answer a single HTTP request. There is '
                      'no automatic retry, a request that times out fails '
                      'the operation.')),
    cfg.StrOpt('verify_ca',
               default='True',
               help=_('Either a Boolean value, a path to a CA_BUNDLE file '
                      'or directory with certificates of trusted CAs. If '
                      'set to True the client verifies the service '
                      'processor certificate, if False TLS verification is '
                      'disabled. Can be overridden per client.')),
    cfg.StrOpt('user_agent',
               default=version.USER_AGENT,
               help=_('User-Agent header sent with every Redfish '
                      'request.')),
]


def register_opts(conf):
    conf.register_opts(opts, group='redfish')
