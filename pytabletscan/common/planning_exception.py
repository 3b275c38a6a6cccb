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


class SplitPlanningException(Exception):
    """Base split planning exception"""


class InvalidScanConfigException(SplitPlanningException, ValueError):
    """Invalid scan configuration exception"""


class TableNotExistException(SplitPlanningException):
    """Table not exist exception"""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table {table_name} does not exist")


class TableDeletedException(SplitPlanningException):
    """Table deleted while its tablets were being located"""

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(f"Table (Id={table_id}) deleted")


class TableOfflineException(SplitPlanningException):
    """Table taken offline while its tablets were being located"""

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(f"Table (Id={table_id}) is offline")


class TableOnlineException(SplitPlanningException):
    """Offline scan requested for a table that is not offline"""

    def __init__(self, table_id: str):
        self.table_id = table_id
        super().__init__(f"Table (Id={table_id}) is online, cannot scan table in offline mode")
