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

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple

from pytabletscan.common.range import Range
from pytabletscan.read.table_scan_config import Column, IteratorSetting, TableScanConfig


@dataclass(frozen=True)
class ScanSnapshot:
    """
    Scanner settings captured when a split is planned.

    A None field was not captured; readers fall back to the job configuration
    for it.
    """
    offline: Optional[bool] = None
    isolated_scan: Optional[bool] = None
    use_local_iterators: Optional[bool] = None
    iterators: Optional[Tuple[IteratorSetting, ...]] = None
    fetched_columns: Optional[Tuple[Column, ...]] = None
    authorizations: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_config(cls, config: TableScanConfig, authorizations: Sequence[str] = ()) -> 'ScanSnapshot':
        return cls(
            offline=config.offline_scan,
            isolated_scan=config.isolated_scan,
            use_local_iterators=config.use_local_iterators,
            iterators=tuple(config.iterators),
            fetched_columns=tuple(config.fetched_columns),
            authorizations=tuple(authorizations),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offline": self.offline,
            "isolatedScan": self.isolated_scan,
            "useLocalIterators": self.use_local_iterators,
            "iterators": None if self.iterators is None else [i.to_dict() for i in self.iterators],
            "fetchedColumns": None if self.fetched_columns is None else [c.to_dict() for c in self.fetched_columns],
            "authorizations": None if self.authorizations is None else list(self.authorizations),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanSnapshot':
        iterators = data.get("iterators")
        columns = data.get("fetchedColumns")
        authorizations = data.get("authorizations")
        return cls(
            offline=data.get("offline"),
            isolated_scan=data.get("isolatedScan"),
            use_local_iterators=data.get("useLocalIterators"),
            iterators=None if iterators is None else tuple(IteratorSetting.from_dict(i) for i in iterators),
            fetched_columns=None if columns is None else tuple(Column.from_dict(c) for c in columns),
            authorizations=None if authorizations is None else tuple(authorizations),
        )


@dataclass(frozen=True)
class Split(ABC):
    """
    A unit of scan work over one table.

    ``table_id`` is resolved at planning time, so the split keeps reading the
    same table if it is renamed afterwards. ``locations`` lists the preferred
    hosts, most preferred first; it is empty when no locality is known.
    """
    table_name: str
    table_id: str
    locations: Tuple[str, ...]
    snapshot: ScanSnapshot

    KIND: ClassVar[str] = ""

    @abstractmethod
    def get_ranges(self) -> List[Range]:
        """The ranges this split reads."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND,
            "tableName": self.table_name,
            "tableId": self.table_id,
            "locations": list(self.locations),
            "ranges": [r.to_dict() for r in self.get_ranges()],
            "snapshot": self.snapshot.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Split':
        kind = data.get("kind")
        ranges = [Range.from_dict(r) for r in data.get("ranges") or []]
        common = dict(
            table_name=data["tableName"],
            table_id=data["tableId"],
            locations=tuple(data.get("locations") or ()),
            snapshot=ScanSnapshot.from_dict(data.get("snapshot") or {}),
        )
        if kind == RangeSplit.KIND:
            if len(ranges) != 1:
                raise ValueError("A range split holds exactly one range, got %d" % len(ranges))
            return RangeSplit(range=ranges[0], **common)
        if kind == BatchSplit.KIND:
            return BatchSplit(ranges=tuple(ranges), **common)
        raise ValueError("Unknown split kind: %r" % kind)


@dataclass(frozen=True)
class RangeSplit(Split):
    """Split reading a single range, possibly clipped to one tablet."""
    range: Range

    KIND: ClassVar[str] = "range"

    def get_ranges(self) -> List[Range]:
        return [self.range]

    def __str__(self):
        return "RangeSplit(table=%s, id=%s, range=%s, locations=%s)" % (
            self.table_name, self.table_id, self.range, list(self.locations))


@dataclass(frozen=True)
class BatchSplit(Split):
    """Split reading several ranges through one batched scanner."""
    ranges: Tuple[Range, ...]

    KIND: ClassVar[str] = "batch"

    def get_ranges(self) -> List[Range]:
        return list(self.ranges)

    def __str__(self):
        return "BatchSplit(table=%s, id=%s, ranges=%s, locations=%s)" % (
            self.table_name, self.table_id, [str(r) for r in self.ranges], list(self.locations))
