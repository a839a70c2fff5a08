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

"""Client-side read routing for replica sets."""

from replica_routing.cluster_description import ClusterDescription
from replica_routing.document import Document
from replica_routing.errors import InvalidArgument
from replica_routing.labels import Label, LabelSet
from replica_routing.read_preferences import Mode, ReadPreference
from replica_routing.server_description import ServerDescription
from replica_routing.settings import ClusterSettings

version_tuple = (0, 1, 0)
version = '.'.join(map(str, version_tuple))
"""Current version of replica_routing."""

__version__ = version
