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

"""Utilities and helper functions."""

from collections import abc
import os

from oslo_utils import strutils
import rfc3986

from ironfish.common import exception
from ironfish.common.i18n import _

_LARGE_KEYS = frozenset(['Certificate', 'CertificateSigningRequest',
                         'LicenseKey'])


def parse_address(address):
    """Split a BMC address into host name and port.

    :param address: host name, ``host:port`` or a URL such as
        ``https://bmc.example.com:8443``. The scheme is always https.
    :returns: tuple of (hostname, port), port is None if not given.
    :raises: InvalidParameterValue on malformed address.
    """
    try:
        parsed = rfc3986.uri_reference(address)
    except (TypeError, AttributeError):
        raise exception.InvalidParameterValue(
            err=_('Invalid Redfish address %s') % address)

    if not parsed.scheme or not parsed.authority:
        address = 'https://%s' % address
        parsed = rfc3986.uri_reference(address)

    validator = rfc3986.validators.Validator().require_presence_of(
        'scheme', 'host',
    ).check_validity_of(
        'scheme', 'host', 'port',
    )
    try:
        validator.validate(parsed)
    except rfc3986.exceptions.RFC3986Exception:
        raise exception.InvalidParameterValue(
            err=_('Invalid Redfish address %s') % address)

    port = parsed.port
    return parsed.host, int(port) if port else None


def parse_verify_ca(value):
    """Interpret a verify_ca setting.

    :param value: a boolean, a string representing a boolean, or a path to
        a CA bundle file or directory.
    :returns: a boolean or the path.
    :raises: InvalidParameterValue if the value is neither.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if os.path.isdir(value) or os.path.isfile(value):
            return value
        try:
            return strutils.bool_from_string(value, strict=True)
        except ValueError:
            pass
    raise exception.InvalidParameterValue(
        err=_('Redfish CA setting %s is neither a path nor a boolean')
        % value)


def remove_large_keys(var):
    """Remove specific keys from the var, recursing into dicts and lists."""
    if isinstance(var, abc.Mapping):
        return {key: (remove_large_keys(value)
                      if key not in _LARGE_KEYS else '<...>')
                for key, value in var.items()}
    elif isinstance(var, abc.Sequence) and not isinstance(var, str):
        return var.__class__(map(remove_large_keys, var))
    else:
        return var


def sanitize_for_logging(var):
    """Mask passwords and elide bulky values before logging a payload."""
    if not var:
        return var
    elif isinstance(var, str):
        return strutils.mask_password(var)
    else:
        return remove_large_keys(strutils.mask_dict_password(var))
