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

import logging
from typing import Dict, List, Tuple

from pytabletscan.common.options.scan_options import BatchGrouping
from pytabletscan.common.range import Range
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.host_resolver import HostResolver
from pytabletscan.metadata.node_binning import NodeBinning
from pytabletscan.read.split import BatchSplit, RangeSplit, ScanSnapshot, Split
from pytabletscan.read.table_scan_config import TableScanConfig

logger = logging.getLogger(__name__)


class SplitBuilder:
    """
    Creates the splits of one table from its binned ranges.

    - batch scan: the ranges clipped to each tablet form one BatchSplit per
      tablet, or per node with BatchGrouping.NODE.
    - auto-adjusted ranges: one RangeSplit per range clipped to a tablet.
    - otherwise: one RangeSplit per requested range, located on every node
      holding part of it.
    """

    def __init__(self,
                 table_name: str,
                 table_id: str,
                 config: TableScanConfig,
                 snapshot: ScanSnapshot,
                 host_resolver: HostResolver):
        self.table_name = table_name
        self.table_id = table_id
        self.config = config
        self.snapshot = snapshot
        self.host_resolver = host_resolver

    def build(self, binning: NodeBinning) -> List[Split]:
        if self.config.batch_scan:
            splits = self._batch_splits(binning)
        elif self.config.auto_adjust_ranges:
            splits = self._clipped_splits(binning)
        else:
            splits = self._unclipped_splits(binning)
        logger.debug("Created %d splits for table %s", len(splits), self.table_name)
        return splits

    def _batch_splits(self, binning: NodeBinning) -> List[Split]:
        splits = []
        if self.config.batch_grouping == BatchGrouping.NODE:
            for node in binning.locations():
                clipped = []
                for extent in sorted(binning.extents(node).keys()):
                    clipped.extend(self._clip(extent, binning.extents(node)[extent]))
                splits.append(self._batch_split(node, clipped))
        else:
            for node, extent, ranges in binning.items():
                splits.append(self._batch_split(node, self._clip(extent, ranges)))
        return splits

    def _clipped_splits(self, binning: NodeBinning) -> List[Split]:
        splits = []
        for node, extent, ranges in binning.items():
            locations = self._locations(node)
            for clipped in self._clip(extent, ranges):
                splits.append(RangeSplit(
                    table_name=self.table_name,
                    table_id=self.table_id,
                    locations=locations,
                    snapshot=self.snapshot,
                    range=clipped,
                ))
        return splits

    def _unclipped_splits(self, binning: NodeBinning) -> List[Split]:
        owners: Dict[Range, List[Tuple[Extent, str]]] = {}
        for node, extent, ranges in binning.items():
            for range_ in ranges:
                owners.setdefault(range_, []).append((extent, node))

        splits = []
        for range_ in sorted(owners.keys()):
            locations = []
            for _, node in sorted(owners[range_], key=lambda owner: owner[0]):
                for location in self._locations(node):
                    if location not in locations:
                        locations.append(location)
            splits.append(RangeSplit(
                table_name=self.table_name,
                table_id=self.table_id,
                locations=tuple(locations),
                snapshot=self.snapshot,
                range=range_,
            ))
        return splits

    def _batch_split(self, node: str, ranges: List[Range]) -> BatchSplit:
        return BatchSplit(
            table_name=self.table_name,
            table_id=self.table_id,
            locations=self._locations(node),
            snapshot=self.snapshot,
            ranges=tuple(ranges),
        )

    @staticmethod
    def _clip(extent: Extent, ranges) -> List[Range]:
        tablet_range = extent.to_data_range()
        return [tablet_range.clip(r) for r in ranges]

    def _locations(self, node: str) -> Tuple[str, ...]:
        location = self.host_resolver.resolve(node)
        return (location,) if location else ()
