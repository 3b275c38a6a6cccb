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

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pytabletscan.metadata.extent import Extent


@dataclass(frozen=True)
class TabletMetadata:
    """
    Persisted metadata of one tablet.

    ``location`` is the node currently serving the tablet (None while it is
    unassigned or moving), ``last_location`` the node that hosted it last and
    still holds its files' locality.
    """
    extent: Extent
    location: Optional[str] = None
    last_location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = self.extent.to_dict()
        result["location"] = self.location
        result["lastLocation"] = self.last_location
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TabletMetadata':
        return cls(Extent.from_dict(data), data.get("location"), data.get("lastLocation"))
