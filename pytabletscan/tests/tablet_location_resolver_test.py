################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

import random
import unittest
from unittest.mock import Mock

from pytabletscan.common.backoff import RandomBackoff
from pytabletscan.common.planning_exception import TableDeletedException, TableOfflineException
from pytabletscan.common.range import Range
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.location_service import LocationService
from pytabletscan.metadata.metadata_store import TableState
from pytabletscan.metadata.node_binning import BinningResult, NodeBinning
from pytabletscan.metadata.offline_binner import OfflineMetadataBinner
from pytabletscan.read.scanner.tablet_location_resolver import TabletLocationResolver
from pytabletscan.tests.planning_fixtures import NODE_1

RANGES = [Range("a", "k")]
BINNING = NodeBinning.builder().add(NODE_1, Extent("3", None, None), RANGES[0]).build()
INCOMPLETE = BinningResult(NodeBinning.empty(), list(RANGES))
COMPLETE = BinningResult(BINNING, [])


class TabletLocationResolverTest(unittest.TestCase):

    def setUp(self):
        self.location_service = Mock(spec=LocationService)
        self.location_service.table_exists.return_value = True
        self.location_service.table_state.return_value = TableState.ONLINE
        self.offline_binner = Mock(spec=OfflineMetadataBinner)
        self.sleep = Mock()
        self.backoff = RandomBackoff(rng=random.Random(7), sleep=self.sleep)
        self.resolver = TabletLocationResolver(self.location_service, self.offline_binner, self.backoff)

    def test_resolved_on_first_attempt(self):
        self.location_service.resolve.return_value = COMPLETE
        self.assertEqual(BINNING, self.resolver.locate("3", RANGES, offline=False))
        self.location_service.invalidate.assert_called_once_with("3")
        self.sleep.assert_not_called()
        self.offline_binner.bin_offline.assert_not_called()

    def test_retries_until_resolved(self):
        self.location_service.resolve.side_effect = [INCOMPLETE, INCOMPLETE, INCOMPLETE, COMPLETE]
        with self.assertLogs('pytabletscan.read.scanner.tablet_location_resolver', level='WARNING') as logs:
            binning = self.resolver.locate("3", RANGES, offline=False)
        self.assertEqual(BINNING, binning)
        self.assertEqual(4, self.location_service.resolve.call_count)
        self.assertEqual(3, len(logs.output))
        # once up front, then once per retry
        self.assertEqual(4, self.location_service.invalidate.call_count)
        self.assertEqual(3, self.sleep.call_count)
        for call in self.sleep.call_args_list:
            self.assertGreaterEqual(call.args[0], 0.1)
            self.assertLess(call.args[0], 0.2)

    def test_table_deleted(self):
        self.location_service.resolve.return_value = INCOMPLETE
        self.location_service.table_exists.side_effect = [True, False]
        with self.assertRaises(TableDeletedException) as cm:
            self.resolver.locate("3", RANGES, offline=False)
        self.assertEqual("3", cm.exception.table_id)
        self.assertEqual(2, self.location_service.resolve.call_count)
        self.assertEqual(1, self.sleep.call_count)

    def test_table_offline(self):
        self.location_service.resolve.return_value = INCOMPLETE
        self.location_service.table_state.return_value = TableState.OFFLINE
        with self.assertRaises(TableOfflineException):
            self.resolver.locate("3", RANGES, offline=False)
        self.sleep.assert_not_called()

    def test_state_not_checked_when_resolved(self):
        self.location_service.resolve.return_value = COMPLETE
        self.location_service.table_exists.return_value = False
        self.assertEqual(BINNING, self.resolver.locate("3", RANGES, offline=False))
        self.location_service.table_state.assert_not_called()

    def test_offline_retries_while_not_ready(self):
        self.offline_binner.bin_offline.side_effect = [None, None, BINNING]
        self.assertEqual(BINNING, self.resolver.locate("3", RANGES, offline=True))
        self.assertEqual(3, self.offline_binner.bin_offline.call_count)
        self.assertEqual(2, self.sleep.call_count)
        self.location_service.resolve.assert_not_called()


class RandomBackoffTest(unittest.TestCase):

    def test_delays_are_deterministic_for_a_seed(self):
        first = RandomBackoff(rng=random.Random(42), sleep=Mock())
        second = RandomBackoff(rng=random.Random(42), sleep=Mock())
        delays = [first.pause() for _ in range(20)]
        self.assertEqual(delays, [second.pause() for _ in range(20)])
        self.assertTrue(all(100 <= d < 200 for d in delays))
        self.assertEqual(20, first.pauses)

    def test_zero_jitter(self):
        sleep = Mock()
        self.assertEqual(5, RandomBackoff(min_millis=5, jitter_millis=0, sleep=sleep).pause())
        sleep.assert_called_once_with(0.005)

    def test_negative_durations_rejected(self):
        with self.assertRaises(ValueError):
            RandomBackoff(min_millis=-1)


if __name__ == '__main__':
    unittest.main()
