"""
Shared fixtures: an in-memory stand-in for requests.Session that records every
call and answers from a route table.
"""

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from novel_perf.client import PerformanceTestClient
from novel_perf.config import Config
from novel_perf.orchestrator import Orchestrator

BASE_URL = 'http://perf.test/api'


class FakeResponse:
    """Just enough of requests.Response for the client code."""

    def __init__(self, status_code=200, json_data=None, headers=None, lines=None, text=''):
        self.status_code = status_code
        self._json = json_data
        self.headers = CaseInsensitiveDict(headers or {})
        self._lines = lines or []
        self.text = text
        self.closed = False

    def json(self):
        if self._json is None:
            raise requests.exceptions.JSONDecodeError('Expecting value', self.text, 0)
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Client Error', response=self)

    def iter_lines(self, decode_unicode=False):
        for line in self._lines:
            yield line

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    """
    Records calls and returns canned responses keyed by (method, path).

    A route value may be a FakeResponse or an exception instance to raise.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def request(self, method, url, headers=None, params=None, json=None, timeout=None, stream=False):
        assert url.startswith(BASE_URL), url
        path = url[len(BASE_URL):]
        self.calls.append({
            'method': method,
            'path': path,
            'headers': dict(headers or {}),
            'params': params,
            'json': json,
            'timeout': timeout,
            'stream': stream,
        })
        outcome = self.routes.get((method, path))
        if outcome is None:
            raise AssertionError(f'Unexpected request {method} {path}')
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True

    @property
    def paths(self):
        return [(call['method'], call['path']) for call in self.calls]


LOAD_TEST_PAYLOAD = {
    'success': True,
    'message': 'Load test finished',
    'totalRequests': 500,
    'successfulRequests': 498,
    'totalTimeMs': 1500,
    'requestsPerSecond': '332.00',
}


def default_routes():
    return {
        ('POST', '/auth/login'): FakeResponse(json_data={'token': 'jwt-token-abcd'}),
        ('GET', '/auth/csrf'): FakeResponse(json_data={}, headers={'X-CSRF-TOKEN': 'csrf-123'}),
        ('DELETE', '/performance-test/clear-data'): FakeResponse(
            json_data={'success': True, 'message': 'All test data cleared'}),
        ('POST', '/performance-test/generate-data'): FakeResponse(json_data={
            'success': True,
            'message': 'Generated and saved 20 novels',
            'novelCount': 20,
            'sceneCount': 100,
            'characterCount': 60,
        }),
        ('GET', '/performance-test/stats'): FakeResponse(
            json_data={'novelCount': 20, 'sceneCount': 100}),
        ('GET', '/performance-test/novel-query-test'): FakeResponse(json_data=LOAD_TEST_PAYLOAD),
        ('GET', '/performance-test/scene-query-test'): FakeResponse(json_data=LOAD_TEST_PAYLOAD),
        ('POST', '/performance-test/novel-create-test'): FakeResponse(json_data=LOAD_TEST_PAYLOAD),
        ('GET', '/performance-test/server-status'): FakeResponse(json_data={
            'availableProcessors': 8,
            'maxMemoryMB': 4096,
            'totalMemoryMB': 1024,
            'usedMemoryMB': 512,
            'freeMemoryMB': 512,
            'javaVersion': '21.0.2',
            'osName': 'Linux',
            'osVersion': '6.1',
        }),
    }


@pytest.fixture
def config():
    return Config(base_url=BASE_URL)


@pytest.fixture
def fake_session():
    return FakeSession(default_routes())


@pytest.fixture
def make_orchestrator(fake_session):
    """Build an Orchestrator over the fake session for a given Config."""

    def _make(config):
        client = PerformanceTestClient(config, http=fake_session)
        return Orchestrator(config, client=client)

    return _make
