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

"""HTTPS transport for talking to a Redfish service processor."""

import collections

from oslo_log import log
from oslo_serialization import jsonutils
import requests

from ironfish.common import exception
from ironfish.common import utils
from ironfish.conf import CONF

LOG = log.getLogger(__name__)

HTTPResult = collections.namedtuple(
    'HTTPResult', ['url', 'status_code', 'status', 'headers', 'content'])
"""Outcome of a single HTTP request.

``status`` is the status line ("200 OK"), ``headers`` is a case-insensitive
mapping and ``content`` holds the raw body bytes.
"""

AUTH_TOKEN_HEADER = 'X-Auth-Token'

SUPPORTED_METHODS = ('GET', 'POST', 'PATCH', 'DELETE')


class Transport(object):
    """Issue HTTPS requests against one service processor.

    Relative endpoints (starting with ``/``) are resolved against the
    configured host and port, anything else is used as a full URL.
    """

    def __init__(self, hostname, port=None, username=None, password=None,
                 timeout=None, verify=None, user_agent=None):
        self.hostname = hostname
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout if timeout is not None else CONF.redfish.timeout
        if verify is None:
            verify = CONF.redfish.verify_ca
        self.verify = utils.parse_verify_ca(verify)
        self.user_agent = user_agent or CONF.redfish.user_agent
        self.session = requests.Session()

    @property
    def base_url(self):
        if self.port:
            return 'https://%s:%d' % (self.hostname, self.port)
        return 'https://%s' % self.hostname

    def build_url(self, endpoint):
        """Turn an endpoint path into an absolute URL."""
        if endpoint.startswith('/'):
            return '%s%s' % (self.base_url, endpoint)
        return endpoint

    def _get_headers(self, headers, auth_token):
        request_headers = {
            'OData-Version': '4.0',
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'User-Agent': self.user_agent,
            # NOTE: some service processors (HP iLO4) answer the next request
            # on a kept-alive connection with EOF.
            'Connection': 'close',
        }
        if auth_token:
            request_headers[AUTH_TOKEN_HEADER] = auth_token
        if headers:
            request_headers.update(headers)
        return request_headers

    def request(self, endpoint, method='GET', headers=None, body=None,
                basic_auth=False, auth_token=None, allow_redirects=None):
        """Send one request and return its result.

        :param endpoint: endpoint path or full URL.
        :param method: one of GET, POST, PATCH or DELETE.
        :param headers: additional headers.
        :param body: a JSON serializable object sent as request body.
        :param basic_auth: use HTTP basic authentication with the configured
            credentials.
        :param auth_token: session token to send.
        :param allow_redirects: follow redirects. Defaults to True for GET
            only.
        :raises: RedfishConnectionError on connection, TLS or timeout
            failures.
        :returns: an HTTPResult.
        """
        if method not in SUPPORTED_METHODS:
            raise exception.InvalidParameterValue(
                err='Unsupported HTTP method %s' % method)

        url = self.build_url(endpoint)
        if allow_redirects is None:
            allow_redirects = method == 'GET'

        data = None
        if body is not None:
            data = jsonutils.dump_as_bytes(body)

        auth = None
        if basic_auth:
            auth = (self.username, self.password)

        LOG.debug('Sending HTTP %(method)s to %(url)s with payload '
                  '%(payload)s, basic auth: %(basic)s',
                  {'method': method, 'url': url,
                   'payload': utils.sanitize_for_logging(body),
                   'basic': basic_auth})

        try:
            response = self.session.request(
                method, url, headers=self._get_headers(headers, auth_token),
                data=data, auth=auth, timeout=self.timeout,
                verify=self.verify, allow_redirects=allow_redirects)
        except requests.RequestException as e:
            LOG.warning('HTTP %(method)s to %(url)s failed: %(error)s',
                        {'method': method, 'url': url, 'error': e})
            raise exception.RedfishConnectionError(
                method=method, url=url, error=e) from e

        status = '%d %s' % (response.status_code, response.reason or '')
        LOG.debug('HTTP %(method)s to %(url)s returned with status '
                  '%(status)s', {'method': method, 'url': url,
                                 'status': status})

        return HTTPResult(url=url, status_code=response.status_code,
                          status=status.strip(), headers=response.headers,
                          content=response.content)

    def close(self):
        self.session.close()
