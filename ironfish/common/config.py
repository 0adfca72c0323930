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

import os

from oslo_config import cfg
from oslo_log import log

from ironfish.conf import opts
from ironfish import version


def parse_args(argv, default_config_files=None):
    """Load configuration and set up logging for an application.

    Applications embedding the client call this once at start up. Libraries
    using the client with its defaults don't need to.
    """
    conf_file_from_env = os.environ.get('IRONFISH_CONFIG_FILE')
    if conf_file_from_env and not default_config_files:
        default_config_files = [conf_file_from_env]

    log.register_options(cfg.CONF)
    opts.update_opt_defaults()
    cfg.CONF(argv[1:],
             project='ironfish',
             version=version.version_string,
             default_config_files=default_config_files)
    log.setup(cfg.CONF, 'ironfish')
