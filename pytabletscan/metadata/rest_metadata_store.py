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

import urllib.parse
from typing import List

from pytabletscan.api.api_response import GetTableResponse, ListTabletsResponse
from pytabletscan.api.client import HttpClient, NoSuchResourceException
from pytabletscan.common.planning_exception import TableNotExistException
from pytabletscan.metadata.metadata_store import MetadataStore, TableState
from pytabletscan.metadata.tablet_metadata import TabletMetadata


class ResourcePaths:
    V1 = "/v1"
    TABLES = "tables"
    TABLE_IDS = "table-ids"
    TABLETS = "tablets"

    @staticmethod
    def table_by_name(table_name: str) -> str:
        return "{}/{}/{}".format(ResourcePaths.V1, ResourcePaths.TABLES, _encode(table_name))

    @staticmethod
    def table_by_id(table_id: str) -> str:
        return "{}/{}/{}".format(ResourcePaths.V1, ResourcePaths.TABLE_IDS, _encode(table_id))

    @staticmethod
    def tablets(table_id: str) -> str:
        return "{}/{}".format(ResourcePaths.table_by_id(table_id), ResourcePaths.TABLETS)


def _encode(value: str) -> str:
    return urllib.parse.quote(value, safe="")


class RESTMetadataStore(MetadataStore):
    """MetadataStore of a live cluster, read from its metadata service."""

    def __init__(self, client: HttpClient):
        self.client = client

    def table_id(self, table_name: str) -> str:
        try:
            return self.client.get(ResourcePaths.table_by_name(table_name), GetTableResponse).id
        except NoSuchResourceException:
            raise TableNotExistException(table_name)

    def table_exists(self, table_id: str) -> bool:
        try:
            self.client.get(ResourcePaths.table_by_id(table_id), GetTableResponse)
            return True
        except NoSuchResourceException:
            return False

    def table_state(self, table_id: str) -> TableState:
        try:
            response = self.client.get(ResourcePaths.table_by_id(table_id), GetTableResponse)
        except NoSuchResourceException:
            raise TableNotExistException("(Id=%s)" % table_id)
        return TableState(response.state.upper())

    def tablets(self, table_id: str) -> List[TabletMetadata]:
        try:
            response = self.client.get(ResourcePaths.tablets(table_id), ListTabletsResponse)
        except NoSuchResourceException:
            raise TableNotExistException("(Id=%s)" % table_id)
        return sorted(response.tablets or [], key=lambda tablet: tablet.extent)
