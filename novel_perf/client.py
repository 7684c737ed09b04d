"""
Thin HTTP client for the auth and performance-test endpoints.

Every call goes through one requests.Session and raises requests exceptions
on network errors or non-2xx responses; callers decide what is fatal.
"""

import json
import logging
from typing import Any, Dict, Iterator, Optional

import requests

from novel_perf.config import Config
from novel_perf.results import (
    ClearDataResult,
    GenerateDataResult,
    LoadTestResult,
    MonitorSample,
    ServerStatus,
    StatsResult,
)
from novel_perf.session import Credentials, build_headers

logger = logging.getLogger(__name__)

PERFORMANCE_TEST_PATH = '/performance-test'
CSRF_HEADER = 'x-csrf-token'


class PerformanceTestClient:
    """
    Wraps the remote service's REST contract.

    Request functions take the Credentials explicitly rather than reading
    shared state, so the orchestrator owns the only copy.
    """

    def __init__(self, config: Config, http: Optional[requests.Session] = None):
        self.config = config
        self.http = http if http is not None else requests.Session()

    def close(self):
        self.http.close()

    def _url(self, path):
        return f"{self.config.base_url}{path}"

    def _request(self, method, path, credentials, need_csrf=False, params=None, **kwargs):
        response = self.http.request(
            method,
            self._url(path),
            headers=build_headers(credentials, self.config.test_mode, need_csrf),
            params=params,
            timeout=self.config.request_timeout,
            **kwargs
        )
        response.raise_for_status()
        return response

    def _json_object(self, response):
        """Decode a step response body, which must be a JSON object."""
        data = response.json()
        if not isinstance(data, dict):
            raise requests.exceptions.InvalidJSONError(
                f"Expected a JSON object, got {type(data).__name__}", response=response)
        return data

    def _load_params(self, concurrent_users, requests_per_user):
        return {
            'concurrentUsers': concurrent_users,
            'requestsPerUser': requests_per_user,
        }

    # Auth

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """POST /auth/login and return the decoded body (expected to carry 'token')."""
        response = self.http.request(
            'POST',
            self._url('/auth/login'),
            json={'username': username, 'password': password},
            timeout=self.config.request_timeout,
        )
        response.raise_for_status()
        return response.json() or {}

    def fetch_csrf_token(self, access_token: str) -> Optional[str]:
        """GET /auth/csrf and return the x-csrf-token header, or None if absent."""
        response = self.http.request(
            'GET',
            self._url('/auth/csrf'),
            headers={'Authorization': f'Bearer {access_token}'},
            timeout=self.config.request_timeout,
        )
        response.raise_for_status()
        # requests headers are case-insensitive
        return response.headers.get(CSRF_HEADER) or None

    # Seed data

    def clear_data(self, credentials: Credentials) -> ClearDataResult:
        response = self._request(
            'DELETE', f'{PERFORMANCE_TEST_PATH}/clear-data', credentials, need_csrf=True)
        return ClearDataResult.from_payload(self._json_object(response))

    def generate_data(self, credentials: Credentials, count: int) -> GenerateDataResult:
        response = self._request(
            'POST',
            f'{PERFORMANCE_TEST_PATH}/generate-data',
            credentials,
            need_csrf=True,
            params={'count': count},
            json={},
        )
        return GenerateDataResult.from_payload(self._json_object(response))

    def stats(self, credentials: Credentials) -> StatsResult:
        response = self._request('GET', f'{PERFORMANCE_TEST_PATH}/stats', credentials)
        return StatsResult.from_payload(self._json_object(response))

    # Load tests (the fan-out runs server side; we only pass the shape)

    def novel_query_test(self, credentials, concurrent_users, requests_per_user) -> LoadTestResult:
        response = self._request(
            'GET',
            f'{PERFORMANCE_TEST_PATH}/novel-query-test',
            credentials,
            params=self._load_params(concurrent_users, requests_per_user),
        )
        return LoadTestResult.from_payload(self._json_object(response))

    def scene_query_test(self, credentials, concurrent_users, requests_per_user) -> LoadTestResult:
        response = self._request(
            'GET',
            f'{PERFORMANCE_TEST_PATH}/scene-query-test',
            credentials,
            params=self._load_params(concurrent_users, requests_per_user),
        )
        return LoadTestResult.from_payload(self._json_object(response))

    def novel_create_test(self, credentials, concurrent_users, requests_per_user) -> LoadTestResult:
        response = self._request(
            'POST',
            f'{PERFORMANCE_TEST_PATH}/novel-create-test',
            credentials,
            need_csrf=True,
            params=self._load_params(concurrent_users, requests_per_user),
            json={},
        )
        return LoadTestResult.from_payload(self._json_object(response))

    # Server info

    def server_status(self, credentials: Credentials) -> ServerStatus:
        response = self._request('GET', f'{PERFORMANCE_TEST_PATH}/server-status', credentials)
        return ServerStatus.from_payload(self._json_object(response))

    def monitor(self, credentials: Credentials, samples: int) -> Iterator[MonitorSample]:
        """
        Stream samples from the server-sent-event monitor endpoint.

        The server emits one event per second forever, so the stream is closed
        as soon as `samples` events have been read.

        Args:
            credentials: Tokens captured during authentication
            samples: Number of events to read

        Yields:
            MonitorSample per `data:` event
        """
        if samples <= 0:
            return

        response = self._request(
            'GET', f'{PERFORMANCE_TEST_PATH}/monitor', credentials, stream=True)
        with response:
            received = 0
            for line in response.iter_lines(decode_unicode=True):
                if not line or not line.startswith('data:'):
                    continue
                payload = line[len('data:'):].strip()
                yield MonitorSample.from_payload(json.loads(payload))
                received += 1
                if received >= samples:
                    break
        logger.debug(f"Monitor stream closed after {received} samples")
