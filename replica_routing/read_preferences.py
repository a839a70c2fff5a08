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

"""Utilities for choosing which member of a replica set to read from.

A :class:`ReadPreference` is an immutable value. Call
:meth:`~ReadPreference.choose` with the current
:class:`~replica_routing.cluster_description.ClusterDescription` once per
read; it returns the ServerDescription to send the read to, or None if no
member is eligible right now. None is not an error: the caller may wait for
the next cluster description, fail the operation, or try another
preference.

Tag sets are tried in order, most specific first. For example, to prefer a
secondary in the "ny" data center and fall back to any secondary::

  >>> pref = ReadPreference.secondary({'dc': 'ny'}, {})
"""

import logging
from collections.abc import Mapping

from replica_routing import common
from replica_routing.document import Document
from replica_routing.errors import InvalidArgument
from replica_routing.labels import LabelSet

_LOGGER = logging.getLogger(__name__)

# Weight of each new round trip time sample in a MovingAverage.
_ALPHA = 0.2
_MAX_SAMPLES = 5


class Mode:
    class Primary: pass

    class Secondary: pass

    class PrimaryPreferred: pass

    class SecondaryPreferred: pass

    class Nearest: pass


_MODE_NAMES = {
    Mode.Primary: 'primary',
    Mode.Secondary: 'secondary',
    Mode.PrimaryPreferred: 'primaryPreferred',
    Mode.SecondaryPreferred: 'secondaryPreferred',
    Mode.Nearest: 'nearest',
}

_MODES = dict((name, mode) for mode, name in _MODE_NAMES.items())


def _choose_primary(cluster):
    # Tag sets never apply to the primary.
    return cluster.primary_member()


def _choose_tagged(cluster, candidates, tag_sets):
    """Latency-window selection among the first tag set's matches.

    No tag sets means one empty tag set, which matches everything.
    """
    for tag_set in tag_sets or (LabelSet(),):
        matches = cluster.filter_by_labels(candidates, tag_set)
        if matches:
            return cluster.select_by_latency(matches)
    return None


def _choose_secondary(cluster, tag_sets):
    return _choose_tagged(cluster, cluster.secondary_members(), tag_sets)


class ReadPreference(object):
    """An immutable read preference: a mode plus a list of tag sets.

    :Parameters:
      - `mode`: One of the :class:`Mode` classes
      - `tag_sets`: Optional sequence of LabelSets or mappings of tag name
        to tag value. Tag sets never apply to the primary, so
        :class:`Mode.Primary` validates and then discards them.
    """

    __slots__ = ('_mode', '_tag_sets')

    def __init__(self, mode, tag_sets=()):
        if mode not in _MODE_NAMES:
            raise InvalidArgument("%r is not a read preference mode" % (mode,))
        self._mode = mode
        _, tag_sets = common.validate('tag_sets', tag_sets)
        if mode is Mode.Primary:
            # A server rejects tags with primary mode.
            tag_sets = ()
        self._tag_sets = tag_sets

    @property
    def mode(self):
        return self._mode

    @property
    def name(self):
        """The canonical mode name, e.g. 'secondaryPreferred'."""
        return _MODE_NAMES[self._mode]

    @property
    def tag_sets(self):
        """Tuple of LabelSets, in the order they are tried."""
        return self._tag_sets

    def choose(self, cluster):
        """Return the ServerDescription to read from, or None.

        :Parameters:
          - `cluster`: A ClusterDescription
        """
        mode = self._mode
        if mode is Mode.Primary:
            server = _choose_primary(cluster)
        elif mode is Mode.Secondary:
            server = _choose_secondary(cluster, self._tag_sets)
        elif mode is Mode.PrimaryPreferred:
            server = _choose_primary(cluster)
            if server is None:
                server = _choose_secondary(cluster, self._tag_sets)
        elif mode is Mode.SecondaryPreferred:
            server = _choose_secondary(cluster, self._tag_sets)
            if server is None:
                server = _choose_primary(cluster)
        else:
            # Nearest pools the primary with the secondaries.
            server = _choose_tagged(
                cluster, cluster.all_reachable_members(), self._tag_sets)

        if server is None:
            _LOGGER.debug("No member matches read preference %r", self)
        return server

    def to_document(self):
        """This read preference as a Document, e.g. to send to a mongos."""
        doc = Document([('mode', self.name)])
        if self._tag_sets:
            doc['tags'] = [tag_set.to_document()
                           for tag_set in self._tag_sets]
        return doc

    def __eq__(self, other):
        if isinstance(other, ReadPreference):
            return (self._mode is other._mode
                    and self._tag_sets == other._tag_sets)
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self._mode, self._tag_sets))

    def __repr__(self):
        return "%s(tag_sets=%r)" % (
            self.name,
            [dict(tag_set) for tag_set in self._tag_sets])

    @staticmethod
    def primary(*tag_sets):
        return ReadPreference(Mode.Primary, tag_sets)

    @staticmethod
    def secondary(*tag_sets):
        return ReadPreference(Mode.Secondary, tag_sets)

    @staticmethod
    def primary_preferred(*tag_sets):
        return ReadPreference(Mode.PrimaryPreferred, tag_sets)

    @staticmethod
    def secondary_preferred(*tag_sets):
        return ReadPreference(Mode.SecondaryPreferred, tag_sets)

    @staticmethod
    def nearest(*tag_sets):
        return ReadPreference(Mode.Nearest, tag_sets)

    @staticmethod
    def value_of(name, *tag_sets):
        """Get a read preference by its canonical, case-sensitive name.

        Raises InvalidArgument if `name` is not a mode name.
        """
        try:
            mode = _MODES[name]
        except (KeyError, TypeError):
            raise InvalidArgument(
                "No read preference mode named %r, must be one of %s"
                % (name, ", ".join(sorted(_MODES))))
        return ReadPreference(mode, tag_sets)


def read_preference_from_document(doc):
    """Parse a document made by :meth:`ReadPreference.to_document`."""
    if not isinstance(doc, Mapping):
        raise TypeError("read preference document must be a mapping")
    tag_sets = doc.get('tags') or []
    return ReadPreference.value_of(doc.get('mode'), *tag_sets)


class MovingAverage(object):
    """Immutable exponentially weighted average of round trip times.

    Each new sample contributes a fifth of the new average.
    """

    __slots__ = ('_samples', '_average')

    def __init__(self, samples, average=None):
        samples = list(samples)
        if average is None and samples:
            average = samples[0]
            for sample in samples[1:]:
                average = _ALPHA * sample + (1 - _ALPHA) * average

        self._samples = samples[-_MAX_SAMPLES:]
        self._average = average

    @property
    def samples(self):
        """The most recent samples, oldest first."""
        return list(self._samples)

    def clone_with(self, sample):
        """Get a copy of this instance plus a new sample."""
        if self._average is None:
            return MovingAverage([sample])
        average = _ALPHA * sample + (1 - _ALPHA) * self._average
        return MovingAverage(self._samples + [sample], average)

    def get(self):
        """The current average, or None if there are no samples."""
        return self._average
