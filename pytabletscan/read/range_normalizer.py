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

from typing import List, Sequence

from pytabletscan.common.range import Range


class RangeNormalizer:
    """Turns the requested ranges of a table into the ranges to locate."""

    @staticmethod
    def normalize(ranges: Sequence[Range], auto_adjust: bool) -> List[Range]:
        """
        With ``auto_adjust`` overlapping and touching ranges are merged into a
        minimal sorted list; otherwise the ranges are kept as requested. No
        ranges at all means the whole table.
        """
        normalized = Range.merge_overlapping(ranges) if auto_adjust else list(ranges)
        if not normalized:
            normalized = [Range()]
        return normalized
