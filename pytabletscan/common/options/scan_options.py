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
from enum import Enum
from typing import Optional

from pytabletscan.common.options import Options
from pytabletscan.common.options.config_option import ConfigOption
from pytabletscan.common.options.config_options import ConfigOptions
from pytabletscan.common.planning_exception import InvalidScanConfigException


class BatchGrouping(str, Enum):
    """
    How batched splits gather clipped ranges.
    """
    EXTENT = "extent"
    NODE = "node"


class ScanOptions:
    """Options for planning the splits of a table scan."""

    AUTO_ADJUST_RANGES: ConfigOption[bool] = (
        ConfigOptions.key("scan.auto-adjust-ranges")
        .boolean_type()
        .default_value(True)
        .with_description(
            "Merge overlapping ranges and divide them along tablet boundaries, "
            "producing one split per tablet-range pair.")
    )

    BATCH_SCAN: ConfigOption[bool] = (
        ConfigOptions.key("scan.batch")
        .boolean_type()
        .default_value(False)
        .with_description(
            "Group all ranges of a tablet into a single batched split. "
            "Requires auto-adjusted ranges and is not available for offline, "
            "isolated or local-iterator scans.")
    )

    BATCH_GROUP_BY: ConfigOption[BatchGrouping] = (
        ConfigOptions.key("scan.batch.group-by")
        .enum_type(BatchGrouping)
        .default_value(BatchGrouping.EXTENT)
        .with_description(
            "Unit a batched split covers: 'extent' emits one split per tablet, "
            "'node' one split per hosting node.")
    )

    OFFLINE_SCAN: ConfigOption[bool] = (
        ConfigOptions.key("scan.offline")
        .boolean_type()
        .default_value(False)
        .with_description("Read the persisted files of an offline table directly.")
    )

    ISOLATED_SCAN: ConfigOption[bool] = (
        ConfigOptions.key("scan.isolated")
        .boolean_type()
        .default_value(False)
        .with_description("Only return whole rows to the reader.")
    )

    LOCAL_ITERATORS: ConfigOption[bool] = (
        ConfigOptions.key("scan.local-iterators")
        .boolean_type()
        .default_value(False)
        .with_description("Run the configured iterators on the reader instead of the storage node.")
    )

    RETRY_BACKOFF_MIN: ConfigOption[int] = (
        ConfigOptions.key("scan.retry.backoff-min")
        .int_type()
        .default_value(100)
        .with_description("Minimum pause in milliseconds before locating tablets again.")
    )

    RETRY_BACKOFF_JITTER: ConfigOption[int] = (
        ConfigOptions.key("scan.retry.backoff-jitter")
        .int_type()
        .default_value(100)
        .with_description("Upper bound (exclusive) of the random milliseconds added to each pause.")
    )

    LOG_LEVEL: ConfigOption[str] = (
        ConfigOptions.key("planner.log-level")
        .string_type()
        .no_default_value()
        .with_description("Level applied to the planner loggers while planning, e.g. DEBUG.")
    )

    HOST_CACHE_SIZE: ConfigOption[int] = (
        ConfigOptions.key("planner.host-cache.size")
        .int_type()
        .default_value(2 ** 31 - 1)
        .with_description("Maximum number of canonical host names kept during one planning pass.")
    )

    METADATA_URI: ConfigOption[str] = (
        ConfigOptions.key("metadata.uri")
        .string_type()
        .no_default_value()
        .with_description("URI of the metadata service backing a live backend.")
    )

    METADATA_HTTP_MAX_RETRIES: ConfigOption[int] = (
        ConfigOptions.key("metadata.http.max-retries")
        .int_type()
        .default_value(3)
        .with_description("Retries of idempotent HTTP calls to the metadata service.")
    )

    def __init__(self, options: Options):
        self.options = options

    @staticmethod
    def from_dict(options: Optional[dict]) -> 'ScanOptions':
        return ScanOptions(Options(options))

    def auto_adjust_ranges(self, default=None) -> bool:
        return self.options.get(ScanOptions.AUTO_ADJUST_RANGES, default)

    def batch_scan(self, default=None) -> bool:
        return self.options.get(ScanOptions.BATCH_SCAN, default)

    def batch_group_by(self, default=None) -> BatchGrouping:
        return self.options.get(ScanOptions.BATCH_GROUP_BY, default)

    def offline_scan(self, default=None) -> bool:
        return self.options.get(ScanOptions.OFFLINE_SCAN, default)

    def isolated_scan(self, default=None) -> bool:
        return self.options.get(ScanOptions.ISOLATED_SCAN, default)

    def local_iterators(self, default=None) -> bool:
        return self.options.get(ScanOptions.LOCAL_ITERATORS, default)

    def retry_backoff_min(self, default=None) -> int:
        return self.options.get(ScanOptions.RETRY_BACKOFF_MIN, default)

    def retry_backoff_jitter(self, default=None) -> int:
        return self.options.get(ScanOptions.RETRY_BACKOFF_JITTER, default)

    def log_level(self, default=None) -> Optional[int]:
        """The configured level as a number, or None when unset."""
        level = self.options.get(ScanOptions.LOG_LEVEL, default)
        if level is None:
            return None
        number = logging.getLevelName(level.strip().upper())
        if not isinstance(number, int):
            raise InvalidScanConfigException(
                "Unknown %s: %r" % (ScanOptions.LOG_LEVEL.key(), level))
        return number

    def host_cache_size(self, default=None) -> int:
        size = self.options.get(ScanOptions.HOST_CACHE_SIZE, default)
        if size < 1:
            raise InvalidScanConfigException(
                "%s must be at least 1, got %d" % (ScanOptions.HOST_CACHE_SIZE.key(), size))
        return size

    def metadata_uri(self, default=None) -> Optional[str]:
        return self.options.get(ScanOptions.METADATA_URI, default)

    def metadata_http_max_retries(self, default=None) -> int:
        return self.options.get(ScanOptions.METADATA_HTTP_MAX_RETRIES, default)
