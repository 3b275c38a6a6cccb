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

from pytabletscan.common.options.scan_options import BatchGrouping
from pytabletscan.common.range import Range
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.host_resolver import HostResolver
from pytabletscan.metadata.node_binning import NodeBinning
from pytabletscan.read.scanner.split_builder import SplitBuilder
from pytabletscan.read.split import BatchSplit, RangeSplit, ScanSnapshot
from pytabletscan.read.table_scan_config import IteratorSetting, TableScanConfig
from pytabletscan.tests.planning_fixtures import NODE_1, NODE_2, RecordingReverseLookup, host_of

TABLET_1 = Extent("5", None, "g")
TABLET_2 = Extent("5", "g", "p")
TABLET_3 = Extent("5", "p", None)


class SplitBuilderTest(unittest.TestCase):

    def setUp(self):
        self.lookup = RecordingReverseLookup()

    def _build(self, config, binning):
        builder = SplitBuilder(
            table_name="events",
            table_id="5",
            config=config,
            snapshot=ScanSnapshot.from_config(config, ["public"]),
            host_resolver=HostResolver(self.lookup),
        )
        return builder.build(binning)

    def test_auto_adjust_clips_to_tablets(self):
        requested = Range("c", "t")
        binning = NodeBinning.builder() \
            .add(NODE_1, TABLET_1, requested) \
            .add(NODE_2, TABLET_2, requested) \
            .add(NODE_1, TABLET_3, requested) \
            .build()
        splits = self._build(TableScanConfig(), binning)

        self.assertEqual(3, len(splits))
        self.assertTrue(all(isinstance(s, RangeSplit) for s in splits))
        by_range = {s.range: s.locations for s in splits}
        self.assertEqual({
            Range("c", "g"): (host_of(NODE_1),),
            Range("g", "p", start_inclusive=False): (host_of(NODE_2),),
            Range("p", "t", start_inclusive=False): (host_of(NODE_1),),
        }, by_range)
        for split, extent in zip(sorted(splits, key=lambda s: s.range), [TABLET_1, TABLET_2, TABLET_3]):
            self.assertTrue(extent.to_data_range().covers(split.range))
        self.assertEqual(2, len(self.lookup.lookups))

    def test_batch_one_split_per_tablet(self):
        binning = NodeBinning.builder() \
            .add(NODE_1, TABLET_1, Range("a", "b")) \
            .add(NODE_1, TABLET_1, Range("d", "k")) \
            .add(NODE_2, TABLET_2, Range("d", "k")) \
            .build()
        splits = self._build(TableScanConfig(batch_scan=True), binning)

        self.assertEqual(2, len(splits))
        self.assertTrue(all(isinstance(s, BatchSplit) for s in splits))
        self.assertEqual((Range("a", "b"), Range("d", "g")), splits[0].ranges)
        self.assertEqual((host_of(NODE_1),), splits[0].locations)
        self.assertEqual((Range("g", "k", start_inclusive=False),), splits[1].ranges)
        self.assertEqual((host_of(NODE_2),), splits[1].locations)

    def test_batch_grouped_by_node(self):
        binning = NodeBinning.builder() \
            .add(NODE_1, TABLET_3, Range()) \
            .add(NODE_1, TABLET_1, Range()) \
            .add(NODE_2, TABLET_2, Range()) \
            .build()
        splits = self._build(TableScanConfig(batch_scan=True, batch_grouping=BatchGrouping.NODE), binning)

        self.assertEqual(2, len(splits))
        self.assertEqual((TABLET_1.to_data_range(), TABLET_3.to_data_range()), splits[0].ranges)
        self.assertEqual((TABLET_2.to_data_range(),), splits[1].ranges)

    def test_without_auto_adjust_locations_accumulate(self):
        first = Range("c", "k")
        second = Range("e", "z")
        binning = NodeBinning.builder() \
            .add(NODE_1, TABLET_1, first) \
            .add(NODE_2, TABLET_2, first) \
            .add(NODE_1, TABLET_1, second) \
            .add(NODE_2, TABLET_2, second) \
            .add(NODE_1, TABLET_3, second) \
            .build()
        splits = self._build(TableScanConfig(auto_adjust_ranges=False), binning)

        self.assertEqual([first, second], [s.range for s in splits])
        self.assertEqual((host_of(NODE_1), host_of(NODE_2)), splits[0].locations)
        # the same node holding two tablets of a range is listed once
        self.assertEqual((host_of(NODE_1), host_of(NODE_2)), splits[1].locations)

    def test_unknown_location_gives_no_hint(self):
        binning = NodeBinning.builder().add("", TABLET_1, Range("a", "b")).build()
        splits = self._build(TableScanConfig(offline_scan=True), binning)
        self.assertEqual((), splits[0].locations)
        self.assertEqual([], self.lookup.lookups)

    def test_snapshot_attached(self):
        iterator = IteratorSetting(20, "vers", "org.example.VersioningIterator", {"maxVersions": "1"})
        config = TableScanConfig(isolated_scan=True, use_local_iterators=True, iterators=[iterator])
        binning = NodeBinning.builder().add(NODE_1, TABLET_1, Range("a", "b")).build()
        snapshot = self._build(config, binning)[0].snapshot
        self.assertTrue(snapshot.isolated_scan)
        self.assertTrue(snapshot.use_local_iterators)
        self.assertFalse(snapshot.offline)
        self.assertEqual((iterator,), snapshot.iterators)
        self.assertEqual(("public",), snapshot.authorizations)


if __name__ == '__main__':
    unittest.main()
