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

"""Bootstrap against the Redfish service root."""

from http import client as http_client

from oslo_log import log
from oslo_serialization import jsonutils
import rfc3986

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import errors
from ironfish.redfish import resources

LOG = log.getLogger(__name__)

SERVICE_ROOT = '/redfish/v1/'

REDIRECT_CODES = (http_client.MOVED_PERMANENTLY, http_client.FOUND,
                  http_client.SEE_OTHER, http_client.TEMPORARY_REDIRECT,
                  http_client.PERMANENT_REDIRECT)

_MANDATORY = (('chassis', 'Chassis'),
              ('managers', 'Managers'),
              ('session_service', 'SessionService'),
              ('systems', 'Systems'))

_DEFAULT_HTTPS_PORT = 443


class ServiceEndpoints(object):
    """Locations of the services announced by the service root.

    ``account_service`` and ``sessions`` are None when the service root
    does not announce them.
    """

    def __init__(self, chassis, managers, session_service, systems,
                 account_service=None, sessions=None, raw=None):
        self.chassis = chassis
        self.managers = managers
        self.session_service = session_service
        self.systems = systems
        self.account_service = account_service
        self.sessions = sessions
        self.raw = raw or {}

    @classmethod
    def from_service_root(cls, data, url):
        """Build the endpoint record from a decoded service root.

        :raises: MissingEndpoint if a mandatory service is not announced.
        """
        found = {}
        for attr, key in _MANDATORY:
            location = resources.get_odata_id(data, key)
            if location is None:
                raise exception.MissingEndpoint(endpoint=key, url=url)
            found[attr] = location

        return cls(account_service=resources.get_odata_id(
                       data, 'AccountService'),
                   sessions=resources.get_odata_id(data, 'Links', 'Sessions'),
                   raw=data, **found)

    def copy(self):
        return ServiceEndpoints(self.chassis, self.managers,
                                self.session_service, self.systems,
                                account_service=self.account_service,
                                sessions=self.sessions, raw=dict(self.raw))


def _redirect_port(conn, result):
    location = result.headers.get('Location')
    if not location:
        raise exception.MissingHeader(method='GET', url=result.url,
                                      header='Location')

    target = rfc3986.uri_reference(location)
    if target.host and target.host.lower() != conn.hostname.lower():
        LOG.warning('Service root of %(host)s redirects to a different host '
                    '%(target)s, only the port is taken over',
                    {'host': conn.hostname, 'target': target.host})
    if target.scheme and target.scheme.lower() != 'https':
        LOG.warning('Service root of %(host)s redirects to scheme '
                    '%(scheme)s, ignoring it',
                    {'host': conn.hostname, 'scheme': target.scheme})
    if target.path and target.path.rstrip('/') != SERVICE_ROOT.rstrip('/'):
        LOG.warning('Service root of %(host)s redirects to path %(path)s, '
                    'ignoring it', {'host': conn.hostname,
                                    'path': target.path})

    return int(target.port) if target.port else _DEFAULT_HTTPS_PORT


def discover(conn):
    """Fetch the service root and record the announced endpoints.

    A redirect of the service root is honoured once by moving to the port
    of the ``Location`` header. Endpoints are only stored on ``conn`` when
    discovery completes.

    :param conn: a RedfishClient.
    :raises: RedfishTransportError, including ServiceRootUnavailable for
        any status other than 200 or a single redirect. MissingHeader,
        MissingEndpoint or MalformedResponse for a non-compliant answer.
    :returns: the ServiceEndpoints.
    """
    redirected = False
    while True:
        result = conn.transport.request(SERVICE_ROOT, allow_redirects=False)
        if result.status_code not in REDIRECT_CODES:
            break
        if redirected:
            raise exception.ServiceRootUnavailable(
                url=result.url, status_code=result.status_code,
                error=_('service root redirected again after moving to port '
                        '%d') % conn.port)

        port = _redirect_port(conn, result)
        LOG.info('Service root of %(host)s moved to port %(port)d, '
                 'retrying discovery',
                 {'host': conn.hostname, 'port': port})
        conn.port = port
        redirected = True

    if result.status_code != http_client.OK:
        raise exception.ServiceRootUnavailable(
            url=result.url, status_code=result.status_code,
            error=errors.get_error_message(result))

    try:
        data = jsonutils.loads(result.content)
    except (TypeError, ValueError) as e:
        raise exception.MalformedResponse(url=result.url, error=e)
    if not isinstance(data, dict):
        raise exception.MalformedResponse(
            url=result.url, error=_('service root is not a JSON object'))

    endpoints = ServiceEndpoints.from_service_root(data, result.url)
    conn.endpoints = endpoints
    LOG.debug('Discovered Redfish endpoints of %(host)s: systems '
              '%(systems)s, managers %(managers)s, chassis %(chassis)s, '
              'account service %(accounts)s, sessions %(sessions)s',
              {'host': conn.hostname, 'systems': endpoints.systems,
               'managers': endpoints.managers, 'chassis': endpoints.chassis,
               'accounts': endpoints.account_service,
               'sessions': endpoints.sessions})
    return endpoints
