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

"""Test the common module."""

import sys

sys.path[0:0] = [""]

from replica_routing import common
from replica_routing.errors import ConfigurationError
from replica_routing.labels import LabelSet
from test import unittest


class TestCommon(unittest.TestCase):
    def test_partition_node(self):
        self.assertEqual(('a', 27017), common.partition_node('a'))
        self.assertEqual(('a', 27018), common.partition_node('a:27018'))
        self.assertEqual(('::1', 27019), common.partition_node('[::1]:27019'))

    def test_validate_address(self):
        self.assertEqual(('a', 1), common.validate_address('addr', ('a', 1)))
        self.assertEqual(('a', 2), common.validate_address('addr', 'a:2'))
        self.assertRaises(ConfigurationError,
                          common.validate_address, 'addr', ('a', 0))
        self.assertRaises(TypeError,
                          common.validate_address, 'addr', ['a', 1])

    def test_validate_tag_sets(self):
        labels = LabelSet([('dc', 'ny')])
        self.assertEqual(
            (labels, labels, LabelSet()),
            common.validate_tag_sets('tag_sets', [{'dc': 'ny'}, labels, {}]))
        self.assertRaises(TypeError,
                          common.validate_tag_sets, 'tag_sets', {'dc': 'ny'})
        self.assertRaises(TypeError,
                          common.validate_tag_sets, 'tag_sets', [None])

    def test_validate(self):
        self.assertEqual(('acceptablelatencyms', 5),
                         common.validate('acceptableLatencyMS', 5))
        self.assertEqual(('localthresholdms', None),
                         common.validate('localThresholdMS', None))
        self.assertRaises(ConfigurationError, common.validate, 'bogus', 1)

    def test_validate_boolean(self):
        self.assertTrue(common.validate_boolean('b', True))
        self.assertRaises(TypeError, common.validate_boolean, 'b', 'true')


if __name__ == "__main__":
    unittest.main()
