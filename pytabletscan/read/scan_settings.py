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

from dataclasses import dataclass
from typing import List, Sequence

from pytabletscan.common.range import Range
from pytabletscan.read.scan_config_store import ScanConfigStore
from pytabletscan.read.split import BatchSplit, Split
from pytabletscan.read.table_scan_config import Column, IteratorSetting, TableScanConfig


@dataclass(frozen=True)
class ScanSettings:
    """
    What a worker needs to open the scanner of a split.

    Settings captured in the split win; those it lacks come from the job
    configuration of the table name the split was planned for, even if the
    table has been renamed since, while the table id stays the planned one.
    """
    table_name: str
    table_id: str
    ranges: List[Range]
    batch: bool
    offline: bool
    isolated_scan: bool
    use_local_iterators: bool
    iterators: List[IteratorSetting]
    fetched_columns: List[Column]
    authorizations: List[str]

    @classmethod
    def resolve(cls, split: Split, store: ScanConfigStore,
                default_authorizations: Sequence[str] = ()) -> 'ScanSettings':
        snapshot = split.snapshot
        config = store.table_config(split.table_name) or TableScanConfig()

        def pick(captured, fallback):
            return fallback if captured is None else captured

        return cls(
            table_name=split.table_name,
            table_id=split.table_id,
            ranges=split.get_ranges(),
            batch=isinstance(split, BatchSplit),
            offline=pick(snapshot.offline, config.offline_scan),
            isolated_scan=pick(snapshot.isolated_scan, config.isolated_scan),
            use_local_iterators=pick(snapshot.use_local_iterators, config.use_local_iterators),
            iterators=sorted(pick(snapshot.iterators, config.iterators), key=lambda i: i.priority),
            fetched_columns=list(pick(snapshot.fetched_columns, config.fetched_columns)),
            authorizations=list(pick(snapshot.authorizations, default_authorizations)),
        )
