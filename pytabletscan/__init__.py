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

from pytabletscan.common.options.scan_options import BatchGrouping, ScanOptions
from pytabletscan.common.planning_exception import (InvalidScanConfigException, SplitPlanningException,
                                                    TableDeletedException, TableNotExistException,
                                                    TableOfflineException, TableOnlineException)
from pytabletscan.common.range import Range
from pytabletscan.metadata.backend import Backend, BackendKind
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.in_memory_metadata_store import InMemoryMetadataStore
from pytabletscan.read.plan import Plan
from pytabletscan.read.scan_config_store import ScanConfigStore
from pytabletscan.read.split import BatchSplit, RangeSplit, Split
from pytabletscan.read.split_planner import JobContext, SplitPlanner, plan_splits
from pytabletscan.read.table_scan_config import Column, IteratorSetting, TableScanConfig

__all__ = [
    'Backend',
    'BackendKind',
    'BatchGrouping',
    'BatchSplit',
    'Column',
    'Extent',
    'InMemoryMetadataStore',
    'InvalidScanConfigException',
    'IteratorSetting',
    'JobContext',
    'Plan',
    'Range',
    'RangeSplit',
    'ScanConfigStore',
    'ScanOptions',
    'Split',
    'SplitPlanner',
    'SplitPlanningException',
    'TableDeletedException',
    'TableNotExistException',
    'TableOfflineException',
    'TableOnlineException',
    'TableScanConfig',
    'plan_splits',
]
