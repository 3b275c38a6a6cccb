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
from typing import Sequence

from pytabletscan.common.backoff import RandomBackoff
from pytabletscan.common.planning_exception import TableDeletedException, TableOfflineException
from pytabletscan.common.range import Range
from pytabletscan.metadata.location_service import LocationService
from pytabletscan.metadata.metadata_store import TableState
from pytabletscan.metadata.node_binning import NodeBinning
from pytabletscan.metadata.offline_binner import OfflineMetadataBinner

logger = logging.getLogger(__name__)


class TabletLocationResolver:
    """
    Bins ranges by the nodes owning them, retrying until the metadata is consistent.

    There is no attempt limit: a lookup ends when every range is located or when
    the table turns out to be deleted or offline.
    """

    def __init__(self, location_service: LocationService,
                 offline_binner: OfflineMetadataBinner,
                 backoff: RandomBackoff):
        self.location_service = location_service
        self.offline_binner = offline_binner
        self.backoff = backoff

    def locate(self, table_id: str, ranges: Sequence[Range], offline: bool) -> NodeBinning:
        if offline:
            return self.locate_offline(table_id, ranges)
        return self.locate_online(table_id, ranges)

    def locate_online(self, table_id: str, ranges: Sequence[Range]) -> NodeBinning:
        # the cache may hold complete but outdated tablets from an earlier lookup
        self.location_service.invalidate(table_id)
        while True:
            result = self.location_service.resolve(table_id, ranges)
            if result.is_complete():
                return result.binning
            if not self.location_service.table_exists(table_id):
                raise TableDeletedException(table_id)
            if self.location_service.table_state(table_id) == TableState.OFFLINE:
                raise TableOfflineException(table_id)
            logger.warning("Unable to locate bins for specified ranges of table %s. Retrying.", table_id)
            self.backoff.pause()
            self.location_service.invalidate(table_id)

    def locate_offline(self, table_id: str, ranges: Sequence[Range]) -> NodeBinning:
        binning = self.offline_binner.bin_offline(table_id, ranges)
        while binning is None:
            logger.warning("Some tablets of offline table %s are still hosted. Retrying.", table_id)
            self.backoff.pause()
            binning = self.offline_binner.bin_offline(table_id, ranges)
        return binning
