# Copyright 2014 MongoDB, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Represent one server in the cluster."""

from replica_routing import common
from replica_routing.errors import ConfigurationError, InvalidOperation
from replica_routing.ismaster import IsMaster, ServerType
from replica_routing.labels import LabelSet

_NANOS_PER_SECOND = 1000 * 1000 * 1000


class ServerDescription(object):
    """Immutable representation of one server.

    Create with :meth:`builder`, or from an ismaster response with
    :func:`parse_ismaster_response`.

    :Parameters:
      - `address`: A (host, port) pair
      - `reachable`: True if the last health check succeeded
      - `is_primary`: True if the server is the primary
      - `is_secondary`: True if the server is a secondary
      - `average_ping_time_nanos`: Smoothed round trip time in nanoseconds
      - `labels`: A LabelSet of the server's tags
      - `max_document_size`: Largest document the server accepts, in bytes
    """

    __slots__ = (
        '_address', '_reachable', '_is_primary', '_is_secondary',
        '_average_ping_time_nanos', '_labels', '_max_document_size')

    def __init__(
            self,
            address,
            reachable=False,
            is_primary=False,
            is_secondary=False,
            average_ping_time_nanos=0,
            labels=None,
            max_document_size=common.MAX_BSON_SIZE):
        self._address = address
        self._reachable = reachable
        self._is_primary = is_primary
        self._is_secondary = is_secondary
        self._average_ping_time_nanos = average_ping_time_nanos
        if labels is None:
            labels = LabelSet()
        self._labels = common.validate_tag_set('labels', labels)
        self._max_document_size = max_document_size

    @staticmethod
    def builder():
        return ServerDescriptionBuilder()

    @property
    def address(self):
        return self._address

    @property
    def reachable(self):
        return self._reachable

    @property
    def is_primary(self):
        return self._is_primary

    @property
    def is_secondary(self):
        return self._is_secondary

    @property
    def average_ping_time_nanos(self):
        return self._average_ping_time_nanos

    @property
    def labels(self):
        return self._labels

    @property
    def max_document_size(self):
        return self._max_document_size

    @property
    def server_type(self):
        """Summary of the server's role, as a ServerType.

        Unknown if unreachable or neither primary nor secondary.
        """
        if not self._reachable:
            return ServerType.Unknown
        elif self._is_primary:
            return ServerType.RSPrimary
        elif self._is_secondary:
            return ServerType.RSSecondary
        return ServerType.Unknown

    def _key(self):
        return (self._address, self._reachable, self._is_primary,
                self._is_secondary, self._average_ping_time_nanos,
                self._labels, self._max_document_size)

    def __eq__(self, other):
        if isinstance(other, ServerDescription):
            return self._key() == other._key()
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return '<ServerDescription "%s:%s" %s ping=%dns>' % (
            self._address[0], self._address[1],
            self.server_type.__name__, self._average_ping_time_nanos)


class ServerDescriptionBuilder(object):
    """Collect the fields of a ServerDescription, then build it once.

    Each setter returns the builder so calls can be chained. After
    :meth:`build`, setters raise InvalidOperation.
    """

    def __init__(self):
        self._frozen = False
        self._address = None
        self._reachable = False
        self._is_primary = False
        self._is_secondary = False
        self._average_ping_time_nanos = 0
        self._labels = LabelSet()
        self._max_document_size = common.MAX_BSON_SIZE

    def _check_not_frozen(self):
        if self._frozen:
            raise InvalidOperation('ServerDescriptionBuilder already built')

    def address(self, address):
        self._check_not_frozen()
        self._address = common.validate_address('address', address)
        return self

    def reachable(self, reachable):
        self._check_not_frozen()
        self._reachable = common.validate_boolean('reachable', reachable)
        return self

    def primary(self, is_primary):
        self._check_not_frozen()
        self._is_primary = common.validate_boolean('primary', is_primary)
        return self

    def secondary(self, is_secondary):
        self._check_not_frozen()
        self._is_secondary = common.validate_boolean(
            'secondary', is_secondary)
        return self

    def average_ping_time(self, nanos):
        """Set the smoothed round trip time, in nanoseconds."""
        self._check_not_frozen()
        self._average_ping_time_nanos = (
            common.validate_non_negative_integer('average_ping_time', nanos))
        return self

    def labels(self, labels):
        """Set the server's tags, a LabelSet or a mapping."""
        self._check_not_frozen()
        self._labels = common.validate_tag_set('labels', labels)
        return self

    def max_document_size(self, size):
        self._check_not_frozen()
        self._max_document_size = common.validate_positive_integer(
            'max_document_size', size)
        return self

    def build(self):
        """Freeze this builder and return a ServerDescription."""
        self._check_not_frozen()
        if self._address is None:
            raise ConfigurationError('ServerDescription requires an address')

        self._frozen = True
        return ServerDescription(
            self._address,
            self._reachable,
            self._is_primary,
            self._is_secondary,
            self._average_ping_time_nanos,
            self._labels,
            self._max_document_size)


def unreachable(address):
    """A ServerDescription for a server whose health check failed."""
    return ServerDescription(common.validate_address('address', address))


def parse_ismaster_response(address, doc, round_trip_times=None):
    """Create a reachable ServerDescription from an ismaster response.

    :Parameters:
      - `address`: A (host, port) pair
      - `doc`: The ismaster response document
      - `round_trip_times`: Optional MovingAverage of round trip seconds
    """
    ismaster = IsMaster(doc)
    if ismaster.server_type == ServerType.Unknown:
        # ok: 0. The server answered but can't serve reads.
        return unreachable(address)

    ping_time = 0
    if round_trip_times is not None:
        average = round_trip_times.get()
        if average is not None:
            ping_time = int(round(average * _NANOS_PER_SECOND))

    return (ServerDescription.builder()
            .address(address)
            .reachable(True)
            .primary(ismaster.is_primary)
            .secondary(ismaster.is_secondary)
            .average_ping_time(ping_time)
            .labels(ismaster.tags)
            .max_document_size(ismaster.max_bson_size)
            .build())
