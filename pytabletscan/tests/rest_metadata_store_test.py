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

import json
import unittest
from unittest.mock import Mock

from pytabletscan.api.client import HttpClient, RESTException, ServiceUnavailableException
from pytabletscan.common.options import Options
from pytabletscan.common.planning_exception import TableNotExistException
from pytabletscan.common.range import Range
from pytabletscan.metadata.backend import Backend, BackendKind
from pytabletscan.metadata.extent import Extent
from pytabletscan.metadata.metadata_store import TableState
from pytabletscan.metadata.rest_metadata_store import ResourcePaths, RESTMetadataStore
from pytabletscan.tests.planning_fixtures import NODE_1, NODE_2


def _response(status_code, body=None, headers=None):
    return Mock(ok=200 <= status_code < 300, status_code=status_code,
                text=None if body is None else json.dumps(body), headers=headers or {})


class RESTMetadataStoreTest(unittest.TestCase):

    def setUp(self):
        self.client = HttpClient("metadata.example.com:8080/")
        self.client.session.request = Mock()
        self.store = RESTMetadataStore(self.client)

    def _respond(self, *responses):
        self.client.session.request.side_effect = list(responses)

    def test_resource_paths(self):
        self.assertEqual("/v1/tables/db%2Fevents", ResourcePaths.table_by_name("db/events"))
        self.assertEqual("/v1/table-ids/7/tablets", ResourcePaths.tablets("7"))

    def test_table_id(self):
        self._respond(_response(200, {"id": "7", "name": "events", "state": "online"}))
        self.assertEqual("7", self.store.table_id("events"))
        self.client.session.request.assert_called_once_with(
            method="GET", url="http://metadata.example.com:8080/v1/tables/events", timeout=180)

    def test_missing_table(self):
        not_found = {"resourceType": "TABLE", "resourceName": "events", "message": "no table", "code": 404}
        self._respond(_response(404, not_found), _response(404, not_found))
        with self.assertRaises(TableNotExistException):
            self.store.table_id("events")
        self.assertFalse(self.store.table_exists("7"))

    def test_table_state(self):
        self._respond(_response(200, {"id": "7", "name": "events", "state": "offline"}))
        self.assertEqual(TableState.OFFLINE, self.store.table_state("7"))

    def test_tablets_sorted_by_extent(self):
        self._respond(_response(200, {"tablets": [
            {"tableId": "7", "prevEndRow": "m", "endRow": None, "location": None, "lastLocation": NODE_2},
            {"tableId": "7", "prevEndRow": None, "endRow": "m", "location": NODE_1, "lastLocation": NODE_1},
        ]}))
        tablets = self.store.tablets("7")
        self.assertEqual([Extent("7", None, "m"), Extent("7", "m", None)], [t.extent for t in tablets])
        self.assertEqual(NODE_1, tablets[0].location)
        self.assertIsNone(tablets[1].location)
        self.assertEqual(NODE_2, tablets[1].last_location)

    def test_service_errors_surface_as_rest_exceptions(self):
        self._respond(_response(503, headers={"x-request-id": "req-1"}))
        with self.assertRaises(ServiceUnavailableException) as ctx:
            self.store.tablets("7")
        self.assertIn("requestId:req-1", str(ctx.exception))

    def test_transport_errors_keep_their_cause(self):
        self.client.session.request.side_effect = ConnectionError("refused")
        with self.assertRaises(RESTException) as ctx:
            self.store.table_exists("7")
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)


class BackendTest(unittest.TestCase):

    def test_live_backend_requires_uri(self):
        with self.assertRaises(ValueError):
            Backend.live(Options.from_none())

    def test_live_backend_over_rest(self):
        backend = Backend.live(Options({"metadata.uri": "http://metadata:8080", "metadata.http.max-retries": "1"}))
        self.assertEqual(BackendKind.LIVE, backend.kind)
        store = backend.location_service.store
        self.assertIsInstance(store, RESTMetadataStore)
        self.assertEqual("http://metadata:8080", store.client.uri)

        store.client.session.request = Mock(return_value=_response(200, {"tablets": [
            {"tableId": "7", "prevEndRow": None, "endRow": None, "location": NODE_1},
        ]}))
        result = backend.location_service.resolve("7", [Range("a", "b")])
        self.assertTrue(result.is_complete())
        self.assertEqual([NODE_1], result.binning.locations())


if __name__ == '__main__':
    unittest.main()
