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
from enum import Enum
from typing import Optional

from pytabletscan.api.client import HttpClient
from pytabletscan.common.options import Options
from pytabletscan.common.options.scan_options import ScanOptions
from pytabletscan.metadata.host_resolver import HostReverseLookup, SocketReverseLookup
from pytabletscan.metadata.in_memory_metadata_store import InMemoryMetadataStore
from pytabletscan.metadata.location_service import CachingLocationService, LocationService
from pytabletscan.metadata.metadata_store import MetadataStore
from pytabletscan.metadata.offline_binner import OfflineBinner, OfflineMetadataBinner
from pytabletscan.metadata.rest_metadata_store import RESTMetadataStore


class BackendKind(str, Enum):
    """
    Kind of cluster a job plans against.
    """
    LIVE = "live"
    IN_MEMORY = "in-memory"


@dataclass
class Backend:
    """
    The collaborators split planning talks to, chosen once per job.

    Planning only ever uses the interfaces below; ``kind`` is informational.
    """
    kind: BackendKind
    location_service: LocationService
    offline_binner: OfflineMetadataBinner
    host_lookup: HostReverseLookup = field(default_factory=SocketReverseLookup)

    @classmethod
    def from_store(cls, kind: BackendKind, store: MetadataStore,
                   host_lookup: Optional[HostReverseLookup] = None) -> 'Backend':
        return cls(
            kind=kind,
            location_service=CachingLocationService(store),
            offline_binner=OfflineBinner(store),
            host_lookup=host_lookup or SocketReverseLookup(),
        )

    @classmethod
    def in_memory(cls, store: InMemoryMetadataStore,
                  host_lookup: Optional[HostReverseLookup] = None) -> 'Backend':
        return cls.from_store(BackendKind.IN_MEMORY, store, host_lookup)

    @classmethod
    def live(cls, options: Options, host_lookup: Optional[HostReverseLookup] = None) -> 'Backend':
        scan_options = ScanOptions(options)
        uri = scan_options.metadata_uri()
        if not uri:
            raise ValueError("%s must be set for a live backend" % ScanOptions.METADATA_URI.key())
        client = HttpClient(uri, max_retries=scan_options.metadata_http_max_retries())
        return cls.from_store(BackendKind.LIVE, RESTMetadataStore(client), host_lookup)
