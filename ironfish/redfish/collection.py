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

"""Listing of Redfish collections and fetching of their members."""

from oslo_log import log
from oslo_serialization import jsonutils

from ironfish.common import exception
from ironfish.common.i18n import _
from ironfish.redfish import session

LOG = log.getLogger(__name__)


def get_json(conn, endpoint):
    """GET an endpoint with the session token and decode the JSON object.

    :raises: NotAuthenticated, RequestFailed or MalformedResponse.
    :returns: tuple of (decoded object, HTTPResult).
    """
    result = session.request(conn, endpoint)
    try:
        data = jsonutils.loads(result.content)
    except (TypeError, ValueError) as e:
        raise exception.MalformedResponse(url=result.url, error=e)
    if not isinstance(data, dict):
        raise exception.MalformedResponse(
            url=result.url, error=_('expected a JSON object'))
    return data, result


def list_members(conn, endpoint, collection):
    """Return the member locations of a collection.

    :param conn: an authenticated RedfishClient.
    :param endpoint: location of the collection.
    :param collection: name of the collection, for error messages.
    :raises: EmptyCollection if ``Members`` is missing or empty.
    """
    data, result = get_json(conn, endpoint)
    members = data.get('Members')
    if not members:
        raise exception.EmptyCollection(collection=collection, url=result.url)

    locations = []
    for member in members:
        location = None
        if isinstance(member, dict):
            location = member.get('@odata.id')
        if not location:
            raise exception.MissingField(
                field='.Members[].@odata.id', url=result.url)
        locations.append(location)
    return locations


def fetch_entity(conn, endpoint, cls):
    """Fetch one entity and decode it into ``cls``.

    The entity's ``self_endpoint`` is the location it was fetched from,
    whatever the body claims.
    """
    data, _result = get_json(conn, endpoint)
    return cls(data, endpoint)


def fetch_all(conn, endpoint, collection, cls):
    return [fetch_entity(conn, member, cls)
            for member in list_members(conn, endpoint, collection)]


def map_by_key(records, key, skip=None):
    """Build a dict of records keyed by one of their attributes.

    :param records: iterable of entity records.
    :param key: attribute name to use as the key.
    :param skip: optional predicate, records for which it returns True are
        left out.
    :raises: MissingField if a record that is not skipped lacks the key.
    """
    mapping = {}
    for record in records:
        if skip is not None and skip(record):
            continue
        value = getattr(record, key)
        if value is None:
            raise exception.MissingField(field=key, url=record.self_endpoint)
        if value in mapping:
            LOG.warning('Duplicate %(key)s %(value)s found at %(first)s and '
                        '%(second)s, keeping the latter',
                        {'key': key, 'value': value,
                         'first': mapping[value].self_endpoint,
                         'second': record.self_endpoint})
        mapping[value] = record
    return mapping
