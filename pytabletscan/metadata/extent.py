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
from functools import total_ordering
from typing import Any, Dict, Optional

from pytabletscan.common.range import Range


@total_ordering
@dataclass(frozen=True)
class Extent:
    """
    The key boundary of one tablet: rows in (prev_end_row, end_row].

    ``None`` leaves the extent unbounded on that side. Extents of a table sort
    by end row, the last tablet (unbounded end) sorting after every other.
    """
    table_id: str
    prev_end_row: Optional[Any] = None
    end_row: Optional[Any] = None

    def __post_init__(self):
        if self.prev_end_row is not None and self.end_row is not None and \
                not self.prev_end_row < self.end_row:
            raise ValueError(
                "prev_end_row %r must sort before end_row %r" % (self.prev_end_row, self.end_row))

    def to_data_range(self) -> Range:
        return Range(self.prev_end_row, self.end_row, start_inclusive=False, end_inclusive=True)

    def contains_row(self, row: Any) -> bool:
        return self.to_data_range().contains(row)

    def is_previous_extent(self, prev: 'Extent') -> bool:
        """Whether ``prev`` ends exactly where this extent starts."""
        return (prev is not None
                and prev.table_id == self.table_id
                and prev.end_row is not None
                and prev.end_row == self.prev_end_row)

    def _sort_key(self):
        end_key = (1,) if self.end_row is None else (0, self.end_row)
        return self.table_id, end_key

    def __lt__(self, other: 'Extent') -> bool:
        if not isinstance(other, Extent):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def to_dict(self) -> Dict[str, Any]:
        return {"tableId": self.table_id, "prevEndRow": self.prev_end_row, "endRow": self.end_row}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Extent':
        return cls(data["tableId"], data.get("prevEndRow"), data.get("endRow"))

    def __str__(self):
        end = "<" if self.end_row is None else ";%s" % self.end_row
        prev = "<" if self.prev_end_row is None else ";%s" % self.prev_end_row
        return "%s%s%s" % (self.table_id, end, prev)
