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
from abc import ABC, abstractmethod
from typing import List, Sequence

from cachetools import LRUCache

from pytabletscan.common.planning_exception import TableNotExistException
from pytabletscan.common.range import Range
from pytabletscan.metadata.metadata_store import MetadataStore, TableState, covering_tablets
from pytabletscan.metadata.node_binning import BinningResult, NodeBinning
from pytabletscan.metadata.tablet_metadata import TabletMetadata

logger = logging.getLogger(__name__)


class LocationService(ABC):
    """Locates the nodes serving the tablets of online tables."""

    @abstractmethod
    def table_id(self, table_name: str) -> str:
        pass

    @abstractmethod
    def resolve(self, table_id: str, ranges: Sequence[Range]) -> BinningResult:
        """
        Bins ``ranges`` by the node serving each overlapping tablet.

        Ranges touching a tablet without a current location, or a gap in the
        tablet chain, are returned as unresolved instead of being binned.
        """

    @abstractmethod
    def invalidate(self, table_id: str) -> None:
        pass

    @abstractmethod
    def table_exists(self, table_id: str) -> bool:
        pass

    @abstractmethod
    def table_state(self, table_id: str) -> TableState:
        pass


class CachingLocationService(LocationService):
    """
    LocationService over a MetadataStore that caches each table's tablet list
    until it is invalidated.
    """

    DEFAULT_CACHE_SIZE = 1024

    def __init__(self, store: MetadataStore, cache_size: int = DEFAULT_CACHE_SIZE):
        self.store = store
        self._tablets = LRUCache(maxsize=cache_size)

    def table_id(self, table_name: str) -> str:
        return self.store.table_id(table_name)

    def resolve(self, table_id: str, ranges: Sequence[Range]) -> BinningResult:
        tablets = self._cached_tablets(table_id)
        builder = NodeBinning.builder()
        unresolved = []
        for range_ in ranges:
            covering = covering_tablets(tablets, range_)
            if covering is None or any(t.location is None for t in covering):
                unresolved.append(range_)
                continue
            for tablet in covering:
                builder.add(tablet.location, tablet.extent, range_)
        if unresolved:
            logger.debug("%d of %d ranges of table %s could not be located",
                         len(unresolved), len(ranges), table_id)
        return BinningResult(builder.build(), unresolved)

    def invalidate(self, table_id: str) -> None:
        self._tablets.pop(table_id, None)

    def table_exists(self, table_id: str) -> bool:
        return self.store.table_exists(table_id)

    def table_state(self, table_id: str) -> TableState:
        return self.store.table_state(table_id)

    def _cached_tablets(self, table_id: str) -> List[TabletMetadata]:
        tablets = self._tablets.get(table_id)
        if tablets is None:
            try:
                tablets = self.store.tablets(table_id)
            except TableNotExistException:
                # a table dropped mid-planning leaves every range unresolved
                return []
            self._tablets[table_id] = tablets
        return tablets
