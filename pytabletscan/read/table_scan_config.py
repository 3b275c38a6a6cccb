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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pytabletscan.common.options import Options
from pytabletscan.common.options.scan_options import BatchGrouping, ScanOptions
from pytabletscan.common.planning_exception import InvalidScanConfigException
from pytabletscan.common.range import Range


@dataclass(frozen=True)
class IteratorSetting:
    """A server-side iterator applied by the scanner, carried without interpretation."""
    priority: int
    name: str
    iterator_class: str
    properties: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priority": self.priority,
            "name": self.name,
            "iteratorClass": self.iterator_class,
            "properties": dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IteratorSetting':
        return cls(int(data["priority"]), data["name"], data["iteratorClass"],
                   dict(data.get("properties") or {}))


@dataclass(frozen=True)
class Column:
    """A fetched column family, or a single column when ``qualifier`` is set."""
    family: str
    qualifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"family": self.family, "qualifier": self.qualifier}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Column':
        return cls(data["family"], data.get("qualifier"))


@dataclass
class TableScanConfig:
    """Scan settings of one input table."""
    ranges: List[Range] = field(default_factory=list)
    auto_adjust_ranges: bool = True
    batch_scan: bool = False
    offline_scan: bool = False
    isolated_scan: bool = False
    use_local_iterators: bool = False
    batch_grouping: BatchGrouping = BatchGrouping.EXTENT
    fetched_columns: List[Column] = field(default_factory=list)
    iterators: List[IteratorSetting] = field(default_factory=list)

    @classmethod
    def from_options(cls, options: Options,
                     ranges: Optional[List[Range]] = None,
                     fetched_columns: Optional[List[Column]] = None,
                     iterators: Optional[List[IteratorSetting]] = None) -> 'TableScanConfig':
        scan_options = ScanOptions(options)
        return cls(
            ranges=list(ranges or []),
            auto_adjust_ranges=scan_options.auto_adjust_ranges(),
            batch_scan=scan_options.batch_scan(),
            offline_scan=scan_options.offline_scan(),
            isolated_scan=scan_options.isolated_scan(),
            use_local_iterators=scan_options.local_iterators(),
            batch_grouping=scan_options.batch_group_by(),
            fetched_columns=list(fetched_columns or []),
            iterators=list(iterators or []),
        )

    def supports_batch_scan(self) -> bool:
        return not (self.offline_scan or self.isolated_scan or self.use_local_iterators)

    def validate(self, table_name: str) -> None:
        if self.batch_scan and not self.supports_batch_scan():
            raise InvalidScanConfigException(
                "Batch scan of table %s is not available for offline scan, isolated, or local iterators"
                % table_name)
        if self.batch_scan and not self.auto_adjust_ranges:
            raise InvalidScanConfigException(
                "AutoAdjustRanges must be enabled when batch scanning table %s" % table_name)
