"""
Licensed to the Apache Software Foundation (ASF) under one
or more contributor license agreements.  See the NOTICE file
distributed with this work for additional information
regarding copyright ownership.  The ASF licenses this file
to you under the Apache License, Version 2.0 (the
"License"); you may not use this file except in compliance
with the License.  You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from dataclasses import dataclass
from typing import List, Optional

from pytabletscan.common.json_util import json_field
from pytabletscan.metadata.tablet_metadata import TabletMetadata


@dataclass
class ErrorResponse:
    resource_type: Optional[str] = json_field("resourceType", default=None)
    resource_name: Optional[str] = json_field("resourceName", default=None)
    message: Optional[str] = json_field("message", default=None)
    code: Optional[int] = json_field("code", default=None)


@dataclass
class GetTableResponse:
    id: str = json_field("id", default=None)
    name: Optional[str] = json_field("name", default=None)
    state: str = json_field("state", default=None)


@dataclass
class ListTabletsResponse:
    tablets: List[TabletMetadata] = json_field("tablets", default=None)
