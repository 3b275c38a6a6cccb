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

import logging
import urllib.parse
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3 import Retry

from pytabletscan.api.api_response import ErrorResponse
from pytabletscan.common.json_util import JSON

T = TypeVar('T')


class RESTException(Exception):
    def __init__(self, message: str = None, *args: Any, cause: Optional[Exception] = None):
        if message and args:
            try:
                formatted_message = message % args
            except (TypeError, ValueError):
                formatted_message = f"{message} {' '.join(str(arg) for arg in args)}"
        else:
            formatted_message = message or "REST API error occurred"

        super().__init__(formatted_message)
        self.__cause__ = cause


class BadRequestException(RESTException):
    """Exception for bad request (400)"""


class NotAuthorizedException(RESTException):
    """Exception for not authorized (401)"""


class ForbiddenException(RESTException):
    """Exception for forbidden access (403)"""


class NoSuchResourceException(RESTException):
    """Exception for resource not found (404)"""

    def __init__(self, resource_type: Optional[str], resource_name: Optional[str],
                 message: str, *args: Any):
        self.resource_type = resource_type
        self.resource_name = resource_name
        super().__init__(message, *args)


class ServiceFailureException(RESTException):
    """Exception for service failure (500)"""


class ServiceUnavailableException(RESTException):
    """Exception for service unavailable (503)"""


class DefaultErrorHandler:
    """Converts error responses to the matching RESTException."""

    def accept(self, error: ErrorResponse, request_id: str) -> None:
        if LoggingInterceptor.DEFAULT_REQUEST_ID == request_id:
            message = error.message
        else:
            message = f"{error.message} requestId:{request_id}"

        code = error.code
        if code == 400:
            raise BadRequestException("%s", message)
        elif code == 401:
            raise NotAuthorizedException("Not authorized: %s", message)
        elif code == 403:
            raise ForbiddenException("Forbidden: %s", message)
        elif code == 404:
            raise NoSuchResourceException(error.resource_type, error.resource_name, "%s", message)
        elif code == 500:
            raise ServiceFailureException("Server error: %s", message)
        elif code == 503:
            raise ServiceUnavailableException("Service unavailable: %s", message)
        raise RESTException("Unable to process: %s", message)


class ExponentialRetry:

    adapter: HTTPAdapter

    def __init__(self, max_retries: int = 5):
        self.adapter = HTTPAdapter(max_retries=self.__create_retry_strategy(max_retries))

    @staticmethod
    def __create_retry_strategy(max_retries: int) -> Retry:
        return Retry(
            total=max_retries,
            read=max_retries,
            connect=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 502, 503, 504],
            allowed_methods=["GET", "HEAD"],
            raise_on_status=False,
            raise_on_redirect=False,
        )


class LoggingInterceptor:
    REQUEST_ID_KEY = "x-request-id"
    DEFAULT_REQUEST_ID = "unknown"

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def log_request(self, method: str, url: str, headers: Dict[str, str]) -> None:
        request_id = headers.get(self.REQUEST_ID_KEY, self.DEFAULT_REQUEST_ID)
        self.logger.debug(f"Request [{request_id}]: {method} {url}")

    def log_response(self, status_code: int, headers: Dict[str, str]) -> None:
        request_id = headers.get(self.REQUEST_ID_KEY, self.DEFAULT_REQUEST_ID)
        self.logger.debug(f"Response [{request_id}]: {status_code}")


def _normalize_uri(uri: str) -> str:
    if not uri or uri.strip() == "":
        raise ValueError("uri is empty which must be defined.")

    server_uri = uri.strip()
    if server_uri.endswith("/"):
        server_uri = server_uri[:-1]
    if not server_uri.startswith("http://") and not server_uri.startswith("https://"):
        server_uri = f"http://{server_uri}"
    return server_uri


def _parse_error_response(response_body: Optional[str], status_code: int) -> ErrorResponse:
    if response_body:
        try:
            return JSON.from_json(response_body, ErrorResponse)
        except ValueError:
            return ErrorResponse(message=response_body, code=status_code)
    return ErrorResponse(message="response body is null", code=status_code)


class HttpClient:
    """JSON-over-HTTP client of the metadata service."""

    def __init__(self, uri: str, max_retries: int = 3, timeout: int = 180):
        self.uri = _normalize_uri(uri)
        self.error_handler = DefaultErrorHandler()
        self.logging_interceptor = LoggingInterceptor()
        self.timeout = timeout

        self.session = requests.Session()
        adapter = ExponentialRetry(max_retries=max_retries).adapter
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update({
            'Accept': 'application/json'
        })

    def get(self, path: str, response_type: Type[T],
            query_params: Optional[Dict[str, str]] = None) -> T:
        url = self._get_request_url(path, query_params)
        return self._execute_request("GET", url, response_type)

    def close(self) -> None:
        self.session.close()

    def _get_request_url(self, path: str, query_params: Optional[Dict[str, str]]) -> str:
        full_path = self.uri if not path or path.strip() == "" else self.uri + path
        if query_params:
            full_path = f"{full_path}?{urllib.parse.urlencode(query_params)}"
        return full_path

    def _execute_request(self, method: str, url: str, response_type: Type[T]) -> T:
        headers = dict(self.session.headers)
        try:
            self.logging_interceptor.log_request(method, url, headers)
            response = self.session.request(method=method, url=url, timeout=self.timeout)

            response_headers = dict(response.headers)
            self.logging_interceptor.log_response(response.status_code, response_headers)

            response_body_str = response.text if response.text else None
            if not response.ok:
                error = _parse_error_response(response_body_str, response.status_code)
                if error.code is None:
                    error.code = response.status_code
                request_id = response_headers.get(
                    LoggingInterceptor.REQUEST_ID_KEY,
                    LoggingInterceptor.DEFAULT_REQUEST_ID
                )
                self.error_handler.accept(error, request_id)

            if response_body_str is None:
                raise RESTException("response body is null.")
            return JSON.from_json(response_body_str, response_type)
        except RESTException as e:
            raise e
        except Exception as e:
            raise RESTException("rest exception", cause=e)
