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
from typing import Optional, Sequence

from pytabletscan.common.planning_exception import TableOnlineException
from pytabletscan.common.range import Range
from pytabletscan.metadata.metadata_store import MetadataStore, TableState, covering_tablets
from pytabletscan.metadata.node_binning import NodeBinning

logger = logging.getLogger(__name__)


class OfflineMetadataBinner(ABC):

    @abstractmethod
    def bin_offline(self, table_id: str, ranges: Sequence[Range]) -> Optional[NodeBinning]:
        """
        Bins ``ranges`` of an offline table straight from its persisted metadata.

        Returns:
            The binning, or None while the metadata is not consistent yet and the
            caller should retry.
        """


class OfflineBinner(OfflineMetadataBinner):
    """
    Bins ranges of an offline table by the last node that hosted each tablet,
    which is where the tablet's files are most likely local.
    """

    def __init__(self, store: MetadataStore):
        self.store = store

    def bin_offline(self, table_id: str, ranges: Sequence[Range]) -> Optional[NodeBinning]:
        if self.store.table_state(table_id) != TableState.OFFLINE:
            raise TableOnlineException(table_id)

        tablets = self.store.tablets(table_id)
        builder = NodeBinning.builder()
        for range_ in ranges:
            covering = covering_tablets(tablets, range_)
            if covering is None:
                logger.debug("Metadata of table %s has a hole around %s", table_id, range_)
                return None
            for tablet in covering:
                if tablet.location is not None:
                    logger.debug("Tablet %s is still hosted by %s", tablet.extent, tablet.location)
                    return None
                builder.add(tablet.last_location or "", tablet.extent, range_)
        return builder.build()
