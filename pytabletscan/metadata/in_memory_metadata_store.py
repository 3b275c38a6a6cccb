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

from typing import Any, Dict, List, Optional, Sequence

from pytabletscan.common.planning_exception import TableNotExistException
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.metadata_store import MetadataStore, TableState
from pytabletscan.metadata.tablet_metadata import TabletMetadata


class _InMemoryTable:

    def __init__(self, table_id: str, state: TableState):
        self.table_id = table_id
        self.state = state
        self.tablets: Dict[Extent, TabletMetadata] = {}


class InMemoryMetadataStore(MetadataStore):
    """
    Metadata kept in process memory.

    Backs the lightweight backend used by tests and local tooling. Tables are
    created from their split points and can be reassigned, split, taken
    offline, renamed or deleted to simulate a cluster in transition.
    """

    def __init__(self):
        self._names: Dict[str, str] = {}
        self._tables: Dict[str, _InMemoryTable] = {}
        self._next_id = 1

    def create_table(self, table_name: str,
                     split_points: Sequence[Any] = (),
                     locations: Optional[Sequence[Optional[str]]] = None,
                     state: TableState = TableState.ONLINE) -> str:
        """
        Creates a table with one tablet more than ``split_points``.

        Args:
            table_name: Name of the new table
            split_points: Sorted end rows of every tablet but the last
            locations: Current location of each tablet, in key order
            state: Initial administrative state

        Returns:
            The id assigned to the table
        """
        if table_name in self._names:
            raise ValueError("Table %s already exists" % table_name)
        points = list(split_points)
        if points != sorted(set(points)):
            raise ValueError("Split points must be sorted and distinct: %r" % points)
        if locations is not None and len(locations) != len(points) + 1:
            raise ValueError("Expected %d locations, got %d" % (len(points) + 1, len(locations)))

        table_id = str(self._next_id)
        self._next_id += 1
        table = _InMemoryTable(table_id, state)
        bounds = [None] + points + [None]
        for i in range(len(points) + 1):
            extent = Extent(table_id, bounds[i], bounds[i + 1])
            location = locations[i] if locations is not None else None
            table.tablets[extent] = TabletMetadata(extent, location, location)
        self._names[table_name] = table_id
        self._tables[table_id] = table
        return table_id

    def extents(self, table_name: str) -> List[Extent]:
        return sorted(self._table(self.table_id(table_name)).tablets.keys())

    def set_location(self, table_name: str, extent: Extent, location: Optional[str]):
        """Moves a tablet to ``location``; None unassigns it and keeps its last location."""
        table = self._table(self.table_id(table_name))
        tablet = table.tablets[extent]
        last_location = tablet.location if tablet.location is not None else tablet.last_location
        table.tablets[extent] = TabletMetadata(extent, location, last_location)

    def set_state(self, table_name: str, state: TableState):
        table = self._table(self.table_id(table_name))
        table.state = state
        if state == TableState.OFFLINE:
            for extent in list(table.tablets.keys()):
                self.set_location(table_name, extent, None)

    def remove_tablet(self, table_name: str, extent: Extent):
        """Drops a tablet entry, leaving a hole as seen mid split or merge."""
        del self._table(self.table_id(table_name)).tablets[extent]

    def put_tablet(self, table_name: str, tablet: TabletMetadata):
        self._table(self.table_id(table_name)).tablets[tablet.extent] = tablet

    def rename_table(self, old_name: str, new_name: str):
        table_id = self.table_id(old_name)
        del self._names[old_name]
        self._names[new_name] = table_id

    def delete_table(self, table_name: str):
        table_id = self._names.pop(table_name)
        del self._tables[table_id]

    def table_id(self, table_name: str) -> str:
        try:
            return self._names[table_name]
        except KeyError:
            raise TableNotExistException(table_name)

    def table_exists(self, table_id: str) -> bool:
        return table_id in self._tables

    def table_state(self, table_id: str) -> TableState:
        return self._table(table_id).state

    def tablets(self, table_id: str) -> List[TabletMetadata]:
        table = self._table(table_id)
        return [table.tablets[extent] for extent in sorted(table.tablets.keys())]

    def _table(self, table_id: str) -> _InMemoryTable:
        table = self._tables.get(table_id)
        if table is None:
            raise TableNotExistException("(Id=%s)" % table_id)
        return table
