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

"""Test suite for replica_routing."""

import unittest

from replica_routing.server_description import ServerDescription

FOUR_MEG = 4 * 1024 * 1024
HOST = 'localhost'


def make_server(port, primary=False, secondary=False, ping_ms=0,
                tags=None, reachable=True):
    """A ServerDescription at HOST:port with a ping time in milliseconds."""
    return (ServerDescription.builder()
            .address((HOST, port))
            .reachable(reachable)
            .primary(primary)
            .secondary(secondary)
            .average_ping_time(ping_ms * 1000 * 1000)
            .labels(tags or {})
            .max_document_size(FOUR_MEG)
            .build())


class FixedRandom(object):
    """Random source whose choice() always picks the same index."""

    def __init__(self, index=0):
        self.index = index
        self.choices = []

    def choice(self, seq):
        self.choices.append(list(seq))
        return seq[self.index]
