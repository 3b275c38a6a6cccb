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
import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from pytabletscan.common.backoff import RandomBackoff
from pytabletscan.common.options import Options
from pytabletscan.common.options.scan_options import ScanOptions
from pytabletscan.common.planning_exception import InvalidScanConfigException, SplitPlanningException
from pytabletscan.metadata.backend import Backend
from pytabletscan.metadata.host_resolver import HostResolver
from pytabletscan.read.plan import Plan
from pytabletscan.read.range_normalizer import RangeNormalizer
from pytabletscan.read.scan_config_store import ScanConfigStore
from pytabletscan.read.scanner.split_builder import SplitBuilder
from pytabletscan.read.scanner.tablet_location_resolver import TabletLocationResolver
from pytabletscan.read.split import ScanSnapshot, Split
from pytabletscan.read.table_scan_config import TableScanConfig

logger = logging.getLogger(__name__)

ROOT_LOGGER_NAME = "pytabletscan"


@dataclass
class JobContext:
    """Everything a job hands to the planner."""
    config_store: ScanConfigStore
    backend: Backend
    authorizations: List[str] = field(default_factory=list)

    @property
    def options(self) -> Options:
        return self.config_store.options


class SplitPlanner:
    """
    Plans the splits of every table of a job, one table after the other.

    Planning either returns the splits of all tables or raises a single
    SplitPlanningException; a partial plan is never returned.
    """

    def __init__(self, job_context: JobContext,
                 rng: Optional[random.Random] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.job_context = job_context
        self.scan_options = ScanOptions(job_context.options)
        self.rng = rng if rng is not None else random.Random()
        self.sleep = sleep

    def plan(self) -> Plan:
        store = self.job_context.config_store
        if not store.table_names():
            raise InvalidScanConfigException("No table set.")

        log_level = self.scan_options.log_level()
        host_cache_size = self.scan_options.host_cache_size()

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        previous_level = root_logger.level
        if log_level is not None:
            root_logger.setLevel(log_level)
        try:
            splits: List[Split] = []
            for table_name, config in store.table_configs().items():
                splits.extend(self._plan_table(table_name, config, host_cache_size))
            logger.info("Planned %d splits for %d tables", len(splits), len(store.table_names()))
            return Plan(splits)
        finally:
            root_logger.setLevel(previous_level)

    def _plan_table(self, table_name: str, config: TableScanConfig, host_cache_size: int) -> List[Split]:
        config.validate(table_name)
        backend = self.job_context.backend
        try:
            # resolve the name once, splits keep the id even if the table is renamed
            table_id = backend.location_service.table_id(table_name)
            ranges = RangeNormalizer.normalize(config.ranges, config.auto_adjust_ranges)
            logger.debug("Locating %d ranges of table %s (id=%s, offline=%s)",
                         len(ranges), table_name, table_id, config.offline_scan)

            resolver = TabletLocationResolver(
                backend.location_service, backend.offline_binner, self._new_backoff())
            binning = resolver.locate(table_id, ranges, config.offline_scan)

            builder = SplitBuilder(
                table_name=table_name,
                table_id=table_id,
                config=config,
                snapshot=ScanSnapshot.from_config(config, self.job_context.authorizations),
                host_resolver=HostResolver(backend.host_lookup, host_cache_size),
            )
            return builder.build(binning)
        except SplitPlanningException:
            raise
        except Exception as e:
            raise SplitPlanningException("Failed to plan splits for table %s" % table_name) from e

    def _new_backoff(self) -> RandomBackoff:
        return RandomBackoff(
            min_millis=self.scan_options.retry_backoff_min(),
            jitter_millis=self.scan_options.retry_backoff_jitter(),
            rng=self.rng,
            sleep=self.sleep,
        )


def plan_splits(job_context: JobContext,
                rng: Optional[random.Random] = None,
                sleep: Callable[[float], None] = time.sleep) -> List[Split]:
    """Plans the splits of a job; see SplitPlanner."""
    return SplitPlanner(job_context, rng=rng, sleep=sleep).plan().splits()
