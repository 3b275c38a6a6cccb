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
import socket
from abc import ABC, abstractmethod

from cachetools import LRUCache

logger = logging.getLogger(__name__)


class HostReverseLookup(ABC):

    @abstractmethod
    def canonicalize(self, host: str) -> str:
        """Returns the canonical host name of an address; may block on DNS."""


class SocketReverseLookup(HostReverseLookup):

    def canonicalize(self, host: str) -> str:
        return socket.getfqdn(host)


def extract_host(address: str) -> str:
    """Host part of a ``host:port`` node address; IPv6 hosts may be bracketed."""
    if address.startswith("["):
        end = address.find("]")
        if end > 0:
            return address[1:end]
    return address.split(":", 1)[0]


class HostResolver:
    """
    Resolves node addresses to canonical host names, memoizing each host for
    the lifetime of the resolver, i.e. one planning pass.
    """

    def __init__(self, lookup: HostReverseLookup, cache_size: int = 2 ** 31 - 1):
        self.lookup = lookup
        self._hosts = LRUCache(maxsize=cache_size)

    def resolve(self, address: str) -> str:
        host = extract_host(address)
        if not host:
            return ""
        location = self._hosts.get(host)
        if location is None:
            location = self.lookup.canonicalize(host)
            logger.debug("Resolved %s to %s", host, location)
            self._hosts[host] = location
        return location
