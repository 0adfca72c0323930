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

"""Redfish session login and logout."""

from http import client as http_client

from oslo_log import log
from oslo_serialization import jsonutils

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import errors
from ironfish.redfish import resources
from ironfish.redfish import transport

LOG = log.getLogger(__name__)

LOGIN_CODES = (http_client.OK, http_client.CREATED)
LOGOUT_CODES = (http_client.OK, http_client.ACCEPTED, http_client.NO_CONTENT)


class Session(object):
    """Token and location of an authenticated session.

    Both are set or both are None.
    """

    def __init__(self):
        self._token = None
        self._location = None

    def _check(self):
        if (self._token is None) != (self._location is None):
            raise exception.SessionStateError(
                token=self._token is not None,
                location=self._location is not None)

    @property
    def token(self):
        self._check()
        return self._token

    @property
    def location(self):
        self._check()
        return self._location

    @property
    def authenticated(self):
        return self.token is not None

    def set(self, token, location):
        if not token or not location:
            raise exception.SessionStateError(token=bool(token),
                                              location=bool(location))
        self._token = token
        self._location = location

    def clear(self):
        self._token = None
        self._location = None


def require_session(conn):
    """Return the session token.

    :raises: NotAuthenticated if there is no active session.
    """
    token = conn.session.token
    if token is None:
        raise exception.NotAuthenticated()
    return token


def require_endpoints(conn):
    """Return the discovered ServiceEndpoints of ``conn``.

    :raises: NotAuthenticated if discovery has not run yet.
    """
    if conn.endpoints is None:
        raise exception.NotAuthenticated(
            _('Redfish endpoints of %s are unknown, discover the service '
              'or log in first') % conn.hostname)
    return conn.endpoints


def _find_sessions(conn):
    url = require_endpoints(conn).session_service
    result = conn.transport.request(url, basic_auth=True)
    errors.check_response(result, 'GET')

    try:
        data = jsonutils.loads(result.content)
    except (TypeError, ValueError) as e:
        raise exception.MalformedResponse(url=result.url, error=e)
    if not isinstance(data, dict):
        raise exception.MalformedResponse(
            url=result.url, error=_('expected a JSON object'))

    service = resources.SessionService(data, url)
    if service.service_enabled is False:
        raise exception.SessionServiceDisabled(url=result.url)

    if not isinstance(data.get('Sessions'), dict):
        raise exception.MissingEndpoint(endpoint='Sessions', url=result.url)

    return resources.require_odata_id(data, result.url, 'Sessions')


def login(conn):
    """Create a session and store its token and location on ``conn``.

    :param conn: a RedfishClient with discovered endpoints.
    :raises: MissingParameterValue without username or password,
        SessionServiceDisabled, RequestFailed if the credentials are
        refused, MissingHeader if the service omits the token or location.
    """
    if not conn.username or not conn.password:
        raise exception.MissingParameterValue(
            err=_('Both username and password are required to log into '
                  '%s') % conn.hostname)

    endpoints = require_endpoints(conn)
    if endpoints.sessions is None:
        endpoints.sessions = _find_sessions(conn)

    body = {'UserName': conn.username, 'Password': conn.password}
    result = conn.transport.request(endpoints.sessions, method='POST',
                                    body=body)
    errors.check_response(result, 'POST', expected=LOGIN_CODES)

    token = result.headers.get(transport.AUTH_TOKEN_HEADER)
    if not token:
        raise exception.MissingHeader(method='POST', url=result.url,
                                      header=transport.AUTH_TOKEN_HEADER)
    location = result.headers.get('Location')
    if not location:
        raise exception.MissingHeader(method='POST', url=result.url,
                                      header='Location')

    conn.session.set(token, conn.transport.build_url(location))
    LOG.debug('Logged into %(host)s as %(user)s, session %(location)s',
              {'host': conn.hostname, 'user': conn.username,
               'location': conn.session.location})


def logout(conn):
    """Delete the session of ``conn``, if any.

    :raises: SessionStateError if the session location is unknown,
        RequestFailed if the service refuses to delete the session.
    """
    session = conn.session
    # raises SessionStateError if only one of token and location is set
    if session.token is None:
        return

    result = conn.transport.request(session.location, method='DELETE',
                                    auth_token=session.token)
    errors.check_response(result, 'DELETE', expected=LOGOUT_CODES)
    session.clear()
    LOG.debug('Logged out of %(host)s', {'host': conn.hostname})


def request(conn, endpoint, method='GET', body=None,
            expected=(http_client.OK,)):
    """Send a request within the session of ``conn``.

    :raises: NotAuthenticated without a session, RequestFailed if the
        status code is not one of ``expected``.
    :returns: the HTTPResult.
    """
    token = require_session(conn)
    result = conn.transport.request(endpoint, method=method, body=body,
                                    auth_token=token)
    errors.check_response(result, method, expected=expected)
    return result
