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
from functools import total_ordering
from typing import Any, Dict, Iterable, List, Optional

import portion


@total_ordering
class Range:
    """
    A key interval of a sorted table, based on the portion library.

    A ``None`` start or end key means the range is unbounded on that side;
    unbounded sides are always exclusive. Ranges are immutable, compare by
    value and sort by start key, then inclusive before exclusive starts, then
    by end key ascending.
    """

    def __init__(self, start: Any = None, end: Any = None,
                 start_inclusive: bool = True, end_inclusive: bool = True):
        self._start = start
        self._end = end
        self._start_inclusive = start is not None and start_inclusive
        self._end_inclusive = end is not None and end_inclusive
        self._interval = portion.Interval.from_atomic(
            portion.CLOSED if self._start_inclusive else portion.OPEN,
            -portion.inf if start is None else start,
            portion.inf if end is None else end,
            portion.CLOSED if self._end_inclusive else portion.OPEN,
        )
        if self._interval.empty:
            raise ValueError(
                "Start key must be less than end key in range %s" % self._describe())

    @classmethod
    def exact(cls, row: Any) -> 'Range':
        return cls(row, row)

    @classmethod
    def from_interval(cls, interval: portion.Interval) -> 'Range':
        """Create a range from an atomic portion interval."""
        if not interval.atomic or interval.empty:
            raise ValueError("Only non-empty atomic intervals map to a range: %s" % interval)
        start = None if interval.lower == -portion.inf else interval.lower
        end = None if interval.upper == portion.inf else interval.upper
        return cls(start, end,
                   interval.left == portion.CLOSED,
                   interval.right == portion.CLOSED)

    @property
    def start(self) -> Any:
        return self._start

    @property
    def end(self) -> Any:
        return self._end

    @property
    def start_inclusive(self) -> bool:
        return self._start_inclusive

    @property
    def end_inclusive(self) -> bool:
        return self._end_inclusive

    @property
    def infinite_start_key(self) -> bool:
        return self._start is None

    @property
    def infinite_end_key(self) -> bool:
        return self._end is None

    @property
    def interval(self) -> portion.Interval:
        return self._interval

    def contains(self, key: Any) -> bool:
        return key in self._interval

    def overlaps(self, other: 'Range') -> bool:
        return self._interval.overlaps(other._interval)

    def covers(self, other: 'Range') -> bool:
        """Whether every key of ``other`` is also in this range."""
        return other._interval in self._interval

    def clip(self, other: 'Range', return_none_if_disjoint: bool = False) -> Optional['Range']:
        """
        Narrow ``other`` to the bounds of this range.

        Args:
            other: The range to clip
            return_none_if_disjoint: Return None instead of raising when the ranges do not overlap

        Returns:
            The intersection of both ranges, keeping the inclusivity of whichever
            bound is the tighter one at each edge.

        Raises:
            ValueError: If the ranges do not overlap and return_none_if_disjoint is False
        """
        intersect = self._interval & other._interval
        if intersect.empty:
            if return_none_if_disjoint:
                return None
            raise ValueError("Range %s does not overlap %s" % (other, self))
        return Range.from_interval(intersect)

    @staticmethod
    def merge_overlapping(ranges: Iterable['Range']) -> List['Range']:
        """
        Merge overlapping and touching ranges into a sorted, minimal covering list.

        [a, b] and (b, c] touch and merge into [a, c]; [a, b) and (b, c] leave b
        uncovered and stay apart.
        """
        union = portion.empty()
        for r in ranges:
            union = union | r._interval
        return [Range.from_interval(atomic) for atomic in union]

    def _sort_key(self):
        start_key = (0,) if self._start is None else (1, self._start, 0 if self._start_inclusive else 1)
        end_key = (1,) if self._end is None else (0, self._end, 1 if self._end_inclusive else 0)
        return start_key, end_key

    def _identity(self):
        return self._start, self._start_inclusive, self._end, self._end_inclusive

    def __eq__(self, other) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self._identity() == other._identity()

    def __lt__(self, other: 'Range') -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __reduce__(self):
        return Range, (self._start, self._end, self._start_inclusive, self._end_inclusive)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self._start,
            "end": self._end,
            "startInclusive": self._start_inclusive,
            "endInclusive": self._end_inclusive,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Range':
        return cls(data.get("start"), data.get("end"),
                   data.get("startInclusive", True), data.get("endInclusive", True))

    def _describe(self) -> str:
        left = "(-inf" if self._start is None else ("[" if self._start_inclusive else "(") + str(self._start)
        right = "+inf)" if self._end is None else str(self._end) + ("]" if self._end_inclusive else ")")
        return "%s,%s" % (left, right)

    def __repr__(self):
        return "Range(%r, %r, start_inclusive=%s, end_inclusive=%s)" % (
            self._start, self._end, self._start_inclusive, self._end_inclusive)

    def __str__(self):
        return self._describe()
