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

"""An ordered document with structural equality.

Read preferences and tag sets are rendered as :class:`Document` instances
before they are sent to a server or written to a log line.
"""

import numbers
import re
from collections.abc import Mapping

from bson.regex import Regex
from bson.son import SON

_RE_TYPE = type(re.compile(''))


def _regex_key(value):
    """(pattern, flags) for a regular expression, or None."""
    if isinstance(value, (Regex, _RE_TYPE)):
        # Compiled str patterns always carry re.UNICODE; BSON regexes don't.
        return value.pattern, value.flags & ~re.UNICODE
    return None


def values_equal(a, b):
    """Compare two document values structurally.

    Numbers compare by numeric value, regular expressions by pattern and
    flags, mappings and lists recursively.
    """
    if a is None or b is None:
        return a is b

    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b

    if isinstance(a, numbers.Number) and isinstance(b, numbers.Number):
        return a == b

    a_regex, b_regex = _regex_key(a), _regex_key(b)
    if a_regex is not None and b_regex is not None:
        return a_regex == b_regex

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return documents_equal(a, b)

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return (len(a) == len(b)
                and all(values_equal(x, y) for x, y in zip(a, b)))

    return a == b


def documents_equal(a, b):
    """Same key set, and each key's values are :func:`values_equal`."""
    if set(a.keys()) != set(b.keys()):
        return False
    return all(values_equal(a[key], b[key]) for key in a)


class Document(SON):
    """An ordered string-keyed mapping.

    Keys keep insertion order. Two documents are equal if they have the same
    keys and structurally equal values, so ``Document(n=1)`` equals
    ``Document(n=1.0)`` and regular expressions compare by pattern and
    flags.
    """

    def put(self, key, value):
        """Set `key` to `value`, returning the previous value or None."""
        old = self.get(key)
        self[key] = value
        return old

    def append(self, key, value):
        """Set `key` to `value` and return this document, for chaining."""
        self[key] = value
        return self

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return documents_equal(self, other)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return "Document(%r)" % (list(self.items()),)
