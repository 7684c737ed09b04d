"""
Configuration for the performance test run.

All values come from environment variables with sensible defaults, so the
script can be pointed at another deployment without editing code.
"""

import os
from dataclasses import dataclass
from typing import Optional


# Defaults match a local server started with the dev profile
DEFAULT_BASE_URL = 'http://localhost:8088/api'
DEFAULT_DATA_COUNT = 20  # Number of novels to generate

# Query tests hit the read path harder than the create test hits the write path
DEFAULT_QUERY_CONCURRENT_USERS = 50
DEFAULT_QUERY_REQUESTS_PER_USER = 10
DEFAULT_CREATE_CONCURRENT_USERS = 20
DEFAULT_CREATE_REQUESTS_PER_USER = 5

DEFAULT_USERNAME = 'admin'
DEFAULT_PASSWORD = 'admin123'


def _int_env(environ, name, default):
    """Read an integer environment variable, falling back to default when unset."""
    raw = environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _timeout_env(environ, name):
    raw = environ.get(name, '').strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    """Settings for a single run. Immutable once loaded."""

    base_url: str = DEFAULT_BASE_URL
    data_count: int = DEFAULT_DATA_COUNT
    query_concurrent_users: int = DEFAULT_QUERY_CONCURRENT_USERS
    query_requests_per_user: int = DEFAULT_QUERY_REQUESTS_PER_USER
    create_concurrent_users: int = DEFAULT_CREATE_CONCURRENT_USERS
    create_requests_per_user: int = DEFAULT_CREATE_REQUESTS_PER_USER
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    test_mode: bool = False  # Unauthenticated mode: no login, no auth headers
    request_timeout: Optional[float] = None  # None leaves requests' default (no timeout)
    monitor_samples: int = 0  # Read this many monitor events after the run (0 = skip)

    @classmethod
    def from_env(cls, environ=None) -> 'Config':
        """
        Build a Config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            A populated Config

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        if environ is None:
            environ = os.environ

        return cls(
            base_url=environ.get('NOVEL_PERF_BASE_URL', DEFAULT_BASE_URL).rstrip('/'),
            data_count=_int_env(environ, 'NOVEL_PERF_DATA_COUNT', DEFAULT_DATA_COUNT),
            query_concurrent_users=_int_env(
                environ, 'NOVEL_PERF_QUERY_USERS', DEFAULT_QUERY_CONCURRENT_USERS),
            query_requests_per_user=_int_env(
                environ, 'NOVEL_PERF_QUERY_REQUESTS', DEFAULT_QUERY_REQUESTS_PER_USER),
            create_concurrent_users=_int_env(
                environ, 'NOVEL_PERF_CREATE_USERS', DEFAULT_CREATE_CONCURRENT_USERS),
            create_requests_per_user=_int_env(
                environ, 'NOVEL_PERF_CREATE_REQUESTS', DEFAULT_CREATE_REQUESTS_PER_USER),
            username=environ.get('NOVEL_PERF_USERNAME', DEFAULT_USERNAME),
            password=environ.get('NOVEL_PERF_PASSWORD', DEFAULT_PASSWORD),
            # Only the exact string "true" turns on test mode
            test_mode=environ.get('TEST_MODE') == 'true',
            request_timeout=_timeout_env(environ, 'NOVEL_PERF_TIMEOUT'),
            monitor_samples=_int_env(environ, 'NOVEL_PERF_MONITOR_SAMPLES', 0),
        )
