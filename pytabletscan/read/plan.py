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
from typing import List

import pyarrow as pa

from pytabletscan.read.split import Split


@dataclass
class Plan:
    """The splits planned for a job, in table configuration order."""
    _splits: List[Split]

    def splits(self) -> List[Split]:
        return self._splits

    def splits_for(self, table_name: str) -> List[Split]:
        return [split for split in self._splits if split.table_name == table_name]

    def to_arrow(self) -> pa.Table:
        """Summary of the plan, one row per split."""
        return pa.Table.from_pydict({
            'table_name': [s.table_name for s in self._splits],
            'table_id': [s.table_id for s in self._splits],
            'kind': [s.KIND for s in self._splits],
            'num_ranges': [len(s.get_ranges()) for s in self._splits],
            'ranges': [[str(r) for r in s.get_ranges()] for s in self._splits],
            'locations': [list(s.locations) for s in self._splits],
        }, schema=pa.schema([
            ('table_name', pa.string()),
            ('table_id', pa.string()),
            ('kind', pa.string()),
            ('num_ranges', pa.int32()),
            ('ranges', pa.list_(pa.string())),
            ('locations', pa.list_(pa.string())),
        ]))
