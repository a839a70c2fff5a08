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

"""Replica set member tags."""

from collections import Counter, namedtuple
from collections.abc import Mapping

from replica_routing.document import Document


Label = namedtuple('Label', ['name', 'value'])
Label.__doc__ = """One name/value tag from a member's replica set config."""


def _to_label(label):
    if isinstance(label, (str, bytes)) or not _is_pair(label):
        raise TypeError(
            "label must be a (name, value) pair, not %r" % (label,))
    return Label(*label)


def _is_pair(value):
    try:
        return len(value) == 2
    except TypeError:
        return False


class LabelSet(object):
    """Immutable collection of Labels.

    Create from (name, value) pairs or a mapping of name to value. Keeps
    the order labels were given in, for rendering. Duplicates are kept
    as separate entries. Equality ignores order.
    """

    __slots__ = ('_labels', '_lookup')

    def __init__(self, labels=()):
        if isinstance(labels, Mapping):
            labels = labels.items()
        self._labels = tuple(_to_label(label) for label in labels)
        self._lookup = frozenset(self._labels)

    @classmethod
    def from_document(cls, doc):
        """Create a LabelSet from a mapping of tag name to tag value."""
        return cls(doc.items())

    def to_document(self):
        return Document(list(self._labels))

    def issuperset(self, other):
        """True if every label in `other` is in this set.

        Every LabelSet is a superset of the empty LabelSet.
        """
        return all(label in self._lookup for label in other)

    def __contains__(self, label):
        return label in self._lookup

    def __iter__(self):
        return iter(self._labels)

    def __len__(self):
        return len(self._labels)

    def __eq__(self, other):
        if isinstance(other, LabelSet):
            return Counter(self._labels) == Counter(other._labels)
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(frozenset(Counter(self._labels).items()))

    def __repr__(self):
        return 'LabelSet(%r)' % (dict(self._labels),)
