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

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

from pytabletscan.common.range import Range
from pytabletscan.metadata.extent import Extent


class NodeBinning:
    """
    Immutable mapping of node address -> extent -> ranges assigned to that
    extent on that node.

    A binning is built once per location attempt through ``NodeBinning.builder()``
    and never modified afterwards.
    """

    def __init__(self, bins: Mapping[str, Mapping[Extent, Tuple[Range, ...]]]):
        self._bins = MappingProxyType({
            location: MappingProxyType({extent: tuple(ranges) for extent, ranges in extents.items()})
            for location, extents in bins.items()
        })

    @staticmethod
    def builder() -> 'NodeBinningBuilder':
        return NodeBinningBuilder()

    @staticmethod
    def empty() -> 'NodeBinning':
        return NodeBinning({})

    def locations(self) -> List[str]:
        return sorted(self._bins.keys())

    def extents(self, location: str) -> Mapping[Extent, Tuple[Range, ...]]:
        return self._bins.get(location, MappingProxyType({}))

    def items(self) -> Iterator[Tuple[str, Extent, Tuple[Range, ...]]]:
        """Iterates (location, extent, ranges) in location then extent order."""
        for location in self.locations():
            extents = self._bins[location]
            for extent in sorted(extents.keys()):
                yield location, extent, extents[extent]

    def is_empty(self) -> bool:
        return len(self._bins) == 0

    def num_ranges(self) -> int:
        return sum(len(ranges) for _, _, ranges in self.items())

    def to_dict(self) -> Dict[str, Dict[Extent, List[Range]]]:
        return {location: {extent: list(ranges) for extent, ranges in extents.items()}
                for location, extents in self._bins.items()}

    def __eq__(self, other) -> bool:
        if not isinstance(other, NodeBinning):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "NodeBinning(%r)" % self.to_dict()


class NodeBinningBuilder:

    def __init__(self):
        self._bins: Dict[str, Dict[Extent, List[Range]]] = {}

    def add(self, location: str, extent: Extent, range_: Range) -> 'NodeBinningBuilder':
        self._bins.setdefault(location, {}).setdefault(extent, []).append(range_)
        return self

    def build(self) -> NodeBinning:
        return NodeBinning(self._bins)


@dataclass(frozen=True)
class BinningResult:
    """Outcome of one location attempt: the binned ranges and those that could not be located."""
    binning: NodeBinning
    unresolved: List[Range] = field(default_factory=list)

    def is_complete(self) -> bool:
        return not self.unresolved
