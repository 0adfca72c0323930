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

"""Ironfish specific exceptions list.

Errors fall in three families:

* :class:`RedfishTransportError` - the request never produced an HTTP
  response (connection refused, TLS failure, timeout).
* :class:`RedfishProtocolError` - the service processor answered, but the
  answer violates the Redfish standard (a mandatory endpoint, field or header
  is missing). These are reported with a ``BUG:`` prefix.
* :class:`RedfishRejection` - the request was refused, either by the service
  processor (non-2xx with an error envelope), by the capability gate, or by
  client side validation of the request payload.
"""

from http import client as http_client

from oslo_log import log as logging

from ironfish.common.i18n import _

LOG = logging.getLogger(__name__)


class IronfishException(Exception):
    """Base Ironfish Exception

    To correctly use this class, inherit from it and define
    a '_msg_fmt' property. That _msg_fmt will get printf'd
    with the keyword arguments provided to the constructor.

    If you need to access the message from an exception you should use
    str(exc)

    """

    _msg_fmt = _("An unknown exception occurred.")
    code = http_client.INTERNAL_SERVER_ERROR

    def __init__(self, message=None, **kwargs):
        self.kwargs = kwargs

        if 'code' in self.kwargs:
            self.code = int(self.kwargs['code'])

        if not message:
            try:
                message = self._msg_fmt % kwargs
            except (KeyError, TypeError, ValueError):
                # kwargs doesn't match a variable in the message
                # log the issue and the kwargs
                prs = ', '.join('%s=%s' % pair for pair in kwargs.items())
                LOG.exception('Exception in string format operation '
                              '(arguments %s)', prs)
                # at least get the core message out if something happened
                message = self._msg_fmt

        super(IronfishException, self).__init__(message)


class RedfishTransportError(IronfishException):
    _msg_fmt = _("Redfish transport error: %(error)s")
    code = http_client.SERVICE_UNAVAILABLE


class RedfishConnectionError(RedfishTransportError):
    _msg_fmt = _("HTTP %(method)s to %(url)s failed: %(error)s")


class ServiceRootUnavailable(RedfishTransportError):
    _msg_fmt = _("Service root at %(url)s is unavailable: %(error)s")

    def __init__(self, message=None, **kwargs):
        self.status_code = kwargs.get('status_code')
        super(ServiceRootUnavailable, self).__init__(message, **kwargs)


class RedfishProtocolError(IronfishException):
    _msg_fmt = _("BUG: %(error)s")


class MissingEndpoint(RedfishProtocolError):
    _msg_fmt = _("BUG: No %(endpoint)s endpoint found in data from %(url)s")


class MissingField(RedfishProtocolError):
    _msg_fmt = _("BUG: %(field)s is not present or is null in data "
                 "from %(url)s")


class MissingHeader(RedfishProtocolError):
    _msg_fmt = _("BUG: HTTP %(method)s to %(url)s returned OK but has no "
                 "%(header)s header in reply")


class EmptyCollection(RedfishProtocolError):
    _msg_fmt = _("BUG: Missing or empty Members attribute in %(collection)s "
                 "from %(url)s")


class MalformedResponse(RedfishProtocolError):
    _msg_fmt = _("BUG: Unable to decode data returned from %(url)s: "
                 "%(error)s")


class SessionStateError(RedfishProtocolError):
    _msg_fmt = _("BUG: Session token and session location must be set "
                 "together, found token set: %(token)s, location set: "
                 "%(location)s")


class AmbiguousVendor(RedfishProtocolError):
    _msg_fmt = _("BUG: Unable to tell vendor flavor for manufacturer "
                 "%(manufacturer)s from system %(url)s: expected exactly one "
                 "of the Oem keys %(keys)s, found %(found)s")


class NoErrorInformation(IronfishException):
    _msg_fmt = _("No decodable error information: %(error)s")


class RedfishRejection(IronfishException):
    _msg_fmt = _("Request rejected: %(error)s")
    code = http_client.BAD_REQUEST


class RequestFailed(RedfishRejection):
    _msg_fmt = _("HTTP %(method)s for %(url)s failed: %(error)s")

    def __init__(self, message=None, **kwargs):
        self.status_code = kwargs.get('status_code')
        super(RequestFailed, self).__init__(message, **kwargs)


class UnsupportedOperation(RedfishRejection):
    _msg_fmt = _("%(operation)s is not supported for vendor flavor "
                 "%(flavor)s")
    code = http_client.NOT_IMPLEMENTED


class InvalidParameterValue(RedfishRejection):
    _msg_fmt = "%(err)s"


class MissingParameterValue(InvalidParameterValue):
    _msg_fmt = "%(err)s"


class NotAuthenticated(RedfishRejection):
    _msg_fmt = _("No authentication token found, is the session setup "
                 "correctly?")
    code = http_client.UNAUTHORIZED


class SessionServiceDisabled(RedfishRejection):
    _msg_fmt = _("Session information from %(url)s reports session service "
                 "as disabled")
    code = http_client.SERVICE_UNAVAILABLE


class AccountNotFound(RedfishRejection):
    _msg_fmt = _("Account %(username)s not found")
    code = http_client.NOT_FOUND


class RoleNotFound(RedfishRejection):
    _msg_fmt = _("Requested role %(role)s not found")
    code = http_client.NOT_FOUND


class NoFreeAccountSlot(RedfishRejection):
    _msg_fmt = _("No unused account slot left to create account "
                 "%(username)s")
    code = http_client.CONFLICT


class ReservedAccountSlot(RedfishRejection):
    _msg_fmt = _("Account %(username)s occupies the reserved account slot "
                 "and can't be modified or removed")
    code = http_client.FORBIDDEN


class CSRNotAvailable(RedfishRejection):
    _msg_fmt = _("No CertificateSigningRequest found in data from %(url)s. "
                 "Either CSR generation hasn't been started or is still "
                 "running")
    code = http_client.NOT_FOUND
