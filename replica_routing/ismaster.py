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

"""Parse a response to the 'ismaster' command."""

import itertools

from replica_routing import common
from replica_routing.labels import LabelSet


class ServerType:
    class Unknown: pass
    class Mongos: pass
    class RSPrimary: pass
    class RSSecondary: pass
    class RSArbiter: pass
    class RSOther: pass
    class RSGhost: pass
    class Standalone: pass


def get_server_type(doc):
    """Determine the ServerType from an ismaster response."""
    if not doc.get('ok'):
        return ServerType.Unknown

    if doc.get('isreplicaset'):
        return ServerType.RSGhost
    elif doc.get('setName'):
        if doc.get('hidden'):
            return ServerType.RSOther
        elif doc.get('ismaster'):
            return ServerType.RSPrimary
        elif doc.get('secondary'):
            return ServerType.RSSecondary
        elif doc.get('arbiterOnly'):
            return ServerType.RSArbiter
        else:
            return ServerType.RSOther
    elif doc.get('msg') == 'isdbgrid':
        return ServerType.Mongos
    else:
        return ServerType.Standalone


class IsMaster(object):
    __slots__ = ('_doc', '_server_type')

    def __init__(self, doc):
        """Parse an ismaster response from the server."""
        self._server_type = get_server_type(doc)
        self._doc = doc

    @property
    def server_type(self):
        return self._server_type

    @property
    def is_primary(self):
        """True if reads routed to the primary may use this server."""
        return self._server_type in (
            ServerType.RSPrimary,
            ServerType.Standalone,
            ServerType.Mongos)

    @property
    def is_secondary(self):
        return self._server_type == ServerType.RSSecondary

    @property
    def all_hosts(self):
        """List of hosts, passives, and arbiters known to this server."""
        return [common.partition_node(node) for node in itertools.chain(
            self._doc.get('hosts', []),
            self._doc.get('passives', []),
            self._doc.get('arbiters', []))]

    @property
    def tags(self):
        """Replica set member tags as a LabelSet, possibly empty."""
        return LabelSet.from_document(self._doc.get('tags', {}))

    @property
    def set_name(self):
        """Replica set name or None."""
        return self._doc.get('setName')

    @property
    def max_bson_size(self):
        return self._doc.get('maxBsonObjectSize', common.MAX_BSON_SIZE)
