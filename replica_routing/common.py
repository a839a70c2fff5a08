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

"""Functions and classes common to multiple replica_routing modules."""

from collections.abc import Mapping

from replica_routing.errors import ConfigurationError
from replica_routing.labels import LabelSet


# Defaults until we've connected to a server and called ismaster.
MAX_BSON_SIZE = 4 * (1024 * 1024)

# Members within this many milliseconds of the fastest are equally eligible.
ACCEPTABLE_LATENCY_MS = 15

DEFAULT_PORT = 27017

# One millisecond in nanoseconds, the unit of ServerDescription ping times.
NANOS_PER_MILLI = 1000 * 1000


def partition_node(node):
    """Split a host:port string into (host, int(port)) pair."""
    host = node
    port = DEFAULT_PORT
    idx = node.rfind(':')
    if idx != -1:
        host, port = node[:idx], int(node[idx + 1:])
    if host.startswith('['):
        host = host[1:-1]
    return host, port


def raise_config_error(key, dummy):
    """Raise ConfigurationError with the given key name."""
    raise ConfigurationError("Unknown option %s" % (key,))


def validate_boolean(option, value):
    """Validates that 'value' is True or False."""
    if isinstance(value, bool):
        return value
    raise TypeError("%s must be True or False" % (option,))


def validate_integer(option, value):
    """Validates that 'value' is an integer (or its string representation).
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    elif isinstance(value, str):
        if not value.isdigit():
            raise ConfigurationError("The value of %s must be "
                                     "an integer" % (option,))
        return int(value)
    raise TypeError("Wrong type for %s, value must be an integer" % (option,))


def validate_positive_integer(option, value):
    """Validate that 'value' is a positive integer.
    """
    val = validate_integer(option, value)
    if val <= 0:
        raise ConfigurationError("The value of %s must be "
                                 "a positive integer" % (option,))
    return val


def validate_non_negative_integer(option, value):
    """Validate that 'value' is a positive integer or 0.
    """
    val = validate_integer(option, value)
    if val < 0:
        raise ConfigurationError("The value of %s must be "
                                 "a non negative integer" % (option,))
    return val


def validate_non_negative_integer_or_none(option, value):
    if value is None:
        return value
    return validate_non_negative_integer(option, value)


def validate_string(option, value):
    """Validates that 'value' is an instance of `str`.
    """
    if isinstance(value, str):
        return value
    raise TypeError("Wrong type for %s, value must be "
                    "an instance of str" % (option,))


def validate_address(option, value):
    """Validates a (host, port) pair, or parses a host:port string."""
    if isinstance(value, str):
        return partition_node(value)
    if isinstance(value, tuple) and len(value) == 2:
        host, port = value
        validate_string(option, host)
        return host, validate_positive_integer(option, port)
    raise TypeError("%s must be a (host, port) pair or a "
                    "host:port string" % (option,))


def validate_tag_set(option, value):
    """Validates one tag set: a LabelSet or a mapping of name to value."""
    if isinstance(value, LabelSet):
        return value
    if isinstance(value, Mapping):
        return LabelSet.from_document(value)
    raise TypeError("%s must be a LabelSet or a mapping, "
                    "not %r" % (option, value))


def validate_tag_sets(option, value):
    """Validates a sequence of tag sets, returning a tuple of LabelSets."""
    if isinstance(value, (Mapping, str)):
        raise TypeError("%s must be a sequence of tag sets" % (option,))
    return tuple(validate_tag_set(option, tag_set) for tag_set in value)


def validate_random_source(option, value):
    """Validates that 'value' has a choice() method, or is None."""
    if value is None or callable(getattr(value, 'choice', None)):
        return value
    raise TypeError("%s must have a choice() method like "
                    "random.Random" % (option,))


# Map from option name to validation function. The option name is
# lower-cased before lookup.
VALIDATORS = {
    'acceptablelatencyms': validate_non_negative_integer_or_none,
    'localthresholdms': validate_non_negative_integer_or_none,
    'random_source': validate_random_source,
    'tag_sets': validate_tag_sets,
}


def validate(option, value):
    """Generic validation function.
    """
    lower = option.lower()
    validator = VALIDATORS.get(lower, raise_config_error)
    value = validator(option, value)
    return lower, value
