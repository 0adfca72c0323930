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

"""Decoding of the Redfish error envelope.

A failed request usually carries a body like::

    {"error": {"code": "Base.1.4.GeneralError",
               "Message": "A general error has occurred.",
               "@Message.ExtendedInfo": [
                   {"MessageId": "Base.1.4.PropertyValueFormatError",
                    "Message": "The value ... for the property Password ..."}
               ]}}

(see DSP0266, "Error responses").
"""

from http import client as http_client

from oslo_log import log
from oslo_serialization import jsonutils

from ironfish.common import exception
from ironfish.common.i18n import _

LOG = log.getLogger(__name__)


class ExtendedInfo(object):
    """One entry of ``@Message.ExtendedInfo``."""

    def __init__(self, data):
        self.message_id = data.get('MessageId')
        self.message = data.get('Message')
        self.severity = data.get('Severity')
        self.resolution = data.get('Resolution')
        self.message_args = data.get('MessageArgs') or []
        self.related_properties = data.get('RelatedProperties') or []


class ErrorEnvelope(object):
    """The ``error`` object of a Redfish error response."""

    def __init__(self, code=None, message=None, extended_info=None):
        self.code = code
        self.message = message
        self.extended_info = extended_info or []


def decode(content):
    """Parse an error response body.

    :param content: raw body, bytes or str.
    :raises: NoErrorInformation if the body is not a Redfish error envelope.
    :returns: an ErrorEnvelope.
    """
    try:
        data = jsonutils.loads(content)
    except (TypeError, ValueError) as e:
        raise exception.NoErrorInformation(error=e)

    error = data.get('error') if isinstance(data, dict) else None
    if not isinstance(error, dict):
        raise exception.NoErrorInformation(
            error=_('no "error" object in response body'))

    extended = error.get('@Message.ExtendedInfo') or []
    if not isinstance(extended, list):
        raise exception.NoErrorInformation(
            error=_('@Message.ExtendedInfo is not a list'))

    return ErrorEnvelope(
        code=error.get('code'),
        message=error.get('Message'),
        extended_info=[ExtendedInfo(e) for e in extended
                       if isinstance(e, dict)])


def human_message(envelope):
    """Extract a readable message from an error envelope.

    Some vendors (HP/HPE) set only ``MessageId`` on failure, in that case the
    identifier is used instead of the message.

    :returns: the messages of all extended info entries joined by "; ", the
        top level message if there is no extended info, or an empty string.
    """
    messages = []
    for info in envelope.extended_info:
        if info.message:
            messages.append(info.message)
        elif info.message_id:
            messages.append(info.message_id)

    if messages:
        return '; '.join(messages)

    if envelope.extended_info:
        return ''

    return envelope.message or ''


def get_error_message(result):
    """Best effort error text for an HTTPResult.

    Falls back to the status line when the body holds no usable message.
    """
    try:
        envelope = decode(result.content)
    except exception.NoErrorInformation as e:
        LOG.debug('Response from %(url)s with status %(status)s carries no '
                  'error envelope: %(error)s',
                  {'url': result.url, 'status': result.status, 'error': e})
        return result.status

    return human_message(envelope) or result.status


def check_response(result, method, expected=(http_client.OK,)):
    """Raise RequestFailed unless the status code is one of ``expected``.

    :param result: an HTTPResult.
    :param method: the HTTP method used, for the error message.
    :param expected: accepted status codes.
    :raises: RequestFailed
    """
    if result.status_code in expected:
        return

    raise exception.RequestFailed(method=method, url=result.url,
                                  error=get_error_message(result),
                                  status_code=result.status_code)
