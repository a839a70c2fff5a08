# Copyright 2014 MongoDB, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License"); you
# may not use this file except in compliance with the License.  You
# may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.  See the License for the specific language governing
# permissions and limitations under the License.

"""Represent the cluster of servers."""

import logging
import random

from replica_routing import common

_LOGGER = logging.getLogger(__name__)

# Shared by every ClusterDescription not given its own random source.
_RANDOM = random.Random()


class ClusterType:
    class ReplicaSetNoPrimary: pass

    class ReplicaSetWithPrimary: pass

    class Unknown: pass


class ClusterDescription(object):
    """Immutable snapshot of a cluster of servers.

    Initialize with a list of ServerDescriptions in discovery order, the
    acceptable latency window in milliseconds, and an optional source of
    randomness with a choice() method.
    """

    def __init__(self, members, acceptable_latency_ms, random_source=None):
        self._members = tuple(members)
        self._acceptable_latency_ms = common.validate_non_negative_integer(
            'acceptable_latency_ms', acceptable_latency_ms)

        common.validate_random_source('random_source', random_source)
        if random_source is None:
            random_source = _RANDOM
        self._random_source = random_source

    @property
    def members(self):
        """Tuple of ServerDescriptions, in discovery order."""
        return self._members

    @property
    def acceptable_latency_ms(self):
        return self._acceptable_latency_ms

    @property
    def random_source(self):
        return self._random_source

    @property
    def cluster_type(self):
        if self.primary_member() is not None:
            return ClusterType.ReplicaSetWithPrimary
        elif any(s.reachable for s in self._members):
            return ClusterType.ReplicaSetNoPrimary
        else:
            return ClusterType.Unknown

    def get_server_description(self, address):
        for s in self._members:
            if s.address == address:
                return s
        return None

    def has_server(self, address):
        return self.get_server_description(address) is not None

    def primary_member(self):
        """The reachable primary, or None."""
        primaries = [s for s in self._members if s.reachable and s.is_primary]
        if not primaries:
            return None

        if len(primaries) > 1:
            # A replica set has at most one primary. The monitor must have
            # published a snapshot mid-election; use the first.
            _LOGGER.warning(
                "Cluster description has %d reachable primaries: %s",
                len(primaries),
                ", ".join("%s:%s" % s.address for s in primaries))

        return primaries[0]

    def secondary_members(self):
        """List of reachable secondaries, in discovery order."""
        return [s for s in self._members if s.reachable and s.is_secondary]

    def all_reachable_members(self):
        """The primary and secondaries, in discovery order."""
        primary = self.primary_member()
        return [s for s in self._members
                if s is primary or (s.reachable and s.is_secondary)]

    def filter_by_labels(self, candidates, label_set):
        """Candidates whose labels include every label in label_set.

        label_set may be a LabelSet or a mapping of tag name to value. An
        empty label_set matches all candidates.
        """
        label_set = common.validate_tag_set('label_set', label_set)
        if not label_set:
            return list(candidates)
        return [s for s in candidates if s.labels.issuperset(label_set)]

    def select_by_latency(self, candidates):
        """Pick randomly among candidates within the latency window.

        The window starts at the fastest candidate's ping time. Returns None
        if there are no candidates.
        """
        if not candidates:
            return None

        fastest = min(s.average_ping_time_nanos for s in candidates)
        window = self._acceptable_latency_ms * common.NANOS_PER_MILLI
        survivors = [s for s in candidates
                     if s.average_ping_time_nanos <= fastest + window]

        return self._random_source.choice(survivors)

    def __repr__(self):
        return '<ClusterDescription %s members=%r>' % (
            self.cluster_type.__name__, list(self._members))


def create_cluster_description(settings, members):
    """Create a ClusterDescription from ClusterSettings and members."""
    return ClusterDescription(
        members,
        settings.acceptable_latency_ms,
        settings.random_source)


def update_cluster_description(cd, sd):
    """Return an updated ClusterDescription, using a ServerDescription.

    Called after a health check on the server at sd.address. Replaces the
    member at that address in place, or appends sd if it is new.
    """
    members = list(cd.members)
    for i, s in enumerate(members):
        if s.address == sd.address:
            members[i] = sd
            break
    else:
        members.append(sd)

    # Return updated copy.
    return ClusterDescription(
        members, cd.acceptable_latency_ms, cd.random_source)
