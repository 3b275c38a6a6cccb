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

import unittest
from unittest.mock import Mock

from pytabletscan.common.planning_exception import TableNotExistException, TableOnlineException
from pytabletscan.common.range import Range
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.in_memory_metadata_store import InMemoryMetadataStore
from pytabletscan.metadata.location_service import CachingLocationService
from pytabletscan.metadata.metadata_store import TableState, covering_tablets
from pytabletscan.metadata.node_binning import NodeBinning
from pytabletscan.metadata.offline_binner import OfflineBinner
from pytabletscan.tests.planning_fixtures import NODE_1, NODE_2


class ExtentTest(unittest.TestCase):

    def test_data_range(self):
        self.assertEqual(Range("g", "p", start_inclusive=False), Extent("1", "g", "p").to_data_range())
        self.assertEqual(Range(None, "g"), Extent("1", None, "g").to_data_range())
        self.assertEqual(Range("p", None, start_inclusive=False), Extent("1", "p", None).to_data_range())
        self.assertFalse(Extent("1", "g", "p").contains_row("g"))
        self.assertTrue(Extent("1", "g", "p").contains_row("p"))

    def test_order_and_chain(self):
        extents = [Extent("1", "p", None), Extent("1", None, "g"), Extent("1", "g", "p")]
        ordered = sorted(extents)
        self.assertEqual([Extent("1", None, "g"), Extent("1", "g", "p"), Extent("1", "p", None)], ordered)
        self.assertTrue(ordered[1].is_previous_extent(ordered[0]))
        self.assertFalse(ordered[2].is_previous_extent(ordered[0]))

    def test_invalid_bounds(self):
        with self.assertRaises(ValueError):
            Extent("1", "p", "g")


class InMemoryMetadataStoreTest(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryMetadataStore()
        self.table_id = self.store.create_table("events", ["g", "p"], [NODE_1, NODE_2, NODE_1])

    def test_tablets(self):
        tablets = self.store.tablets(self.table_id)
        self.assertEqual([NODE_1, NODE_2, NODE_1], [t.location for t in tablets])
        self.assertEqual([None, "g", "p"], [t.extent.prev_end_row for t in tablets])

    def test_rename_keeps_id(self):
        self.store.rename_table("events", "events_v2")
        self.assertEqual(self.table_id, self.store.table_id("events_v2"))
        with self.assertRaises(TableNotExistException):
            self.store.table_id("events")

    def test_offline_keeps_last_location(self):
        self.store.set_state("events", TableState.OFFLINE)
        tablets = self.store.tablets(self.table_id)
        self.assertEqual([None, None, None], [t.location for t in tablets])
        self.assertEqual([NODE_1, NODE_2, NODE_1], [t.last_location for t in tablets])

    def test_covering_tablets_detects_holes(self):
        tablets = self.store.tablets(self.table_id)
        self.assertEqual(3, len(covering_tablets(tablets, Range())))
        self.assertEqual(1, len(covering_tablets(tablets, Range("h", "k"))))
        self.assertEqual(1, len(covering_tablets(tablets, Range.exact("g"))))

        self.store.remove_tablet("events", Extent(self.table_id, "g", "p"))
        tablets = self.store.tablets(self.table_id)
        self.assertIsNone(covering_tablets(tablets, Range("a", "z")))
        self.assertEqual(1, len(covering_tablets(tablets, Range("a", "c"))))


class CachingLocationServiceTest(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryMetadataStore()
        self.table_id = self.store.create_table("events", ["g", "p"], [NODE_1, NODE_2, NODE_1])
        self.service = CachingLocationService(self.store)

    def test_resolve_bins_by_node(self):
        result = self.service.resolve(self.table_id, [Range("a", "h"), Range("q", "r")])
        self.assertTrue(result.is_complete())
        extents = self.store.extents("events")
        expected = NodeBinning.builder() \
            .add(NODE_1, extents[0], Range("a", "h")) \
            .add(NODE_2, extents[1], Range("a", "h")) \
            .add(NODE_1, extents[2], Range("q", "r")) \
            .build()
        self.assertEqual(expected, result.binning)
        self.assertEqual([NODE_1, NODE_2], result.binning.locations())

    def test_unassigned_tablet_leaves_range_unresolved(self):
        self.store.set_location("events", self.store.extents("events")[1], None)
        result = self.service.resolve(self.table_id, [Range("a", "c"), Range("h", "k")])
        self.assertEqual([Range("h", "k")], result.unresolved)
        self.assertEqual(1, result.binning.num_ranges())

    def test_tablets_cached_until_invalidated(self):
        store = Mock(wraps=self.store)
        service = CachingLocationService(store)
        service.resolve(self.table_id, [Range()])
        service.resolve(self.table_id, [Range()])
        self.assertEqual(1, store.tablets.call_count)
        service.invalidate(self.table_id)
        service.resolve(self.table_id, [Range()])
        self.assertEqual(2, store.tablets.call_count)

    def test_dropped_table_leaves_ranges_unresolved(self):
        self.store.delete_table("events")
        result = self.service.resolve(self.table_id, [Range("a", "c")])
        self.assertEqual([Range("a", "c")], result.unresolved)
        self.assertFalse(self.service.table_exists(self.table_id))


class OfflineBinnerTest(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryMetadataStore()
        self.table_id = self.store.create_table("events", ["g", "p"], [NODE_1, NODE_2, NODE_1])
        self.binner = OfflineBinner(self.store)

    def test_online_table_cannot_be_scanned_offline(self):
        with self.assertRaises(TableOnlineException):
            self.binner.bin_offline(self.table_id, [Range()])

    def test_bins_by_last_location(self):
        self.store.set_state("events", TableState.OFFLINE)
        binning = self.binner.bin_offline(self.table_id, [Range("a", "h")])
        self.assertEqual([NODE_1, NODE_2], binning.locations())
        self.assertEqual((Range("a", "h"),), binning.extents(NODE_1)[self.store.extents("events")[0]])

    def test_not_ready_while_tablet_still_hosted(self):
        self.store.set_state("events", TableState.OFFLINE)
        self.store.set_location("events", self.store.extents("events")[2], NODE_2)
        self.assertIsNone(self.binner.bin_offline(self.table_id, [Range()]))
        # ranges not touching the hosted tablet can be binned
        self.assertIsNotNone(self.binner.bin_offline(self.table_id, [Range("a", "b")]))

    def test_not_ready_on_hole(self):
        self.store.set_state("events", TableState.OFFLINE)
        self.store.remove_tablet("events", self.store.extents("events")[1])
        self.assertIsNone(self.binner.bin_offline(self.table_id, [Range()]))

    def test_unknown_last_location(self):
        table_id = self.store.create_table("fresh", [], None, state=TableState.OFFLINE)
        binning = self.binner.bin_offline(table_id, [Range()])
        self.assertEqual([""], binning.locations())


if __name__ == '__main__':
    unittest.main()
