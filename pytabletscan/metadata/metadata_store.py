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
from enum import Enum
from typing import List, Optional, Sequence

import portion

from pytabletscan.common.range import Range
from pytabletscan.metadata.tablet_metadata import TabletMetadata


class TableState(str, Enum):
    """
    Administrative state of a table.
    """
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class MetadataStore(ABC):
    """Read access to the persisted table and tablet metadata."""

    @abstractmethod
    def table_id(self, table_name: str) -> str:
        """
        Resolves a table name to its current id.

        Raises:
            TableNotExistException: If no table has that name
        """

    @abstractmethod
    def table_exists(self, table_id: str) -> bool:
        pass

    @abstractmethod
    def table_state(self, table_id: str) -> TableState:
        pass

    @abstractmethod
    def tablets(self, table_id: str) -> List[TabletMetadata]:
        """All tablets of the table sorted by end row."""


def covering_tablets(tablets: Sequence[TabletMetadata], range_: Range) -> Optional[List[TabletMetadata]]:
    """
    Returns the tablets whose extents overlap ``range_``, in key order, or None
    when they leave part of the range uncovered (a hole in the tablet chain,
    usually a split or merge caught halfway).
    """
    covering = []
    covered = portion.empty()
    for tablet in tablets:
        data_range = tablet.extent.to_data_range()
        if data_range.overlaps(range_):
            covering.append(tablet)
            covered = covered | data_range.interval
        elif covering:
            break
    if not covering or range_.interval not in covered:
        return None
    return covering
