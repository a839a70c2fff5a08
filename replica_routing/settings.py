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

"""Represent the client's server selection configuration."""

from replica_routing import common


class ClusterSettings(object):
    def __init__(
        self,
        acceptableLatencyMS=None,
        random_source=None
    ):
        """Represent the client's server selection configuration.

        Take an optional latency window in milliseconds and an optional
        source of randomness with a choice() method, e.g. a seeded
        random.Random. Without one, ClusterDescriptions share a process-wide
        generator.
        """
        _, latency = common.validate(
            'acceptableLatencyMS', acceptableLatencyMS)

        if latency is None:
            latency = common.ACCEPTABLE_LATENCY_MS

        self._acceptable_latency_ms = latency
        _, self._random_source = common.validate(
            'random_source', random_source)

    @property
    def acceptable_latency_ms(self):
        """Members this many milliseconds slower than the fastest are still
        eligible for reads."""
        return self._acceptable_latency_ms

    @property
    def random_source(self):
        """The source of randomness for tie-breaks, or None for the
        default."""
        return self._random_source
