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

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pytabletscan.common.options import Options
from pytabletscan.common.range import Range
from pytabletscan.read.table_scan_config import Column, IteratorSetting, TableScanConfig


class ScanConfigStore:
    """
    Read-only view of the tables a job scans, in the order they were configured,
    and of the job-level options.
    """

    def __init__(self, table_configs: Mapping[str, TableScanConfig], options: Optional[Options] = None):
        self._table_configs = MappingProxyType(dict(table_configs))
        self._options = options if options is not None else Options.from_none()

    @classmethod
    def from_dict(cls, tables: Mapping[str, Dict[str, Any]],
                  options: Optional[Dict[str, Any]] = None) -> 'ScanConfigStore':
        """
        Builds a store from plain dictionaries.

        Each table entry may hold ``ranges``, ``columns`` and ``iterators`` in
        their dict form and an ``options`` map; table options override the
        job-level ``options``.

        Example:
            ScanConfigStore.from_dict(
                {"events": {"ranges": [{"start": "a", "end": "m"}],
                            "options": {"scan.batch": "true"}}},
                {"scan.auto-adjust-ranges": "true"})
        """
        job_options = Options(options)
        table_configs = {}
        for table_name, table in tables.items():
            table = table or {}
            table_configs[table_name] = TableScanConfig.from_options(
                job_options.merged_with(table.get("options")),
                ranges=[Range.from_dict(r) for r in table.get("ranges") or []],
                fetched_columns=[Column.from_dict(c) for c in table.get("columns") or []],
                iterators=[IteratorSetting.from_dict(i) for i in table.get("iterators") or []],
            )
        return cls(table_configs, job_options)

    @property
    def options(self) -> Options:
        return self._options

    def table_names(self) -> List[str]:
        return list(self._table_configs.keys())

    def table_configs(self) -> Mapping[str, TableScanConfig]:
        return self._table_configs

    def table_config(self, table_name: str) -> Optional[TableScanConfig]:
        return self._table_configs.get(table_name)

    def iterators(self, table_name: str) -> List[IteratorSetting]:
        config = self._table_configs.get(table_name)
        return list(config.iterators) if config is not None else []

    def fetched_columns(self, table_name: str) -> List[Column]:
        config = self._table_configs.get(table_name)
        return list(config.fetched_columns) if config is not None else []
