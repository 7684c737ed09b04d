"""
Authenticated performance test run against the novel service.

Workflow:
1. Login → fetch CSRF token (skipped in test mode)
2. Clear seed data → generate seed data → database stats
3. Novel query / scene query / novel create load tests (fan-out runs server side)
4. Server status

Each step waits for the previous one. The first failing step ends the run;
there are no retries and already generated data is left in place.
"""

import logging
from typing import List, Optional

import requests

from novel_perf.client import PerformanceTestClient
from novel_perf.config import Config
from novel_perf.results import MonitorSample
from novel_perf.session import Credentials
from novel_perf.utils import (
    mask_token,
    print_error,
    print_monitor_sample,
    print_result,
    print_server_status,
)

logger = logging.getLogger(__name__)


class Orchestrator:
    """Runs the fixed sequence of performance-test calls and prints each result."""

    def __init__(self, config: Config, client: Optional[PerformanceTestClient] = None):
        self.config = config
        self.client = client if client is not None else PerformanceTestClient(config)
        self.credentials = Credentials()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.client.close()

    def authenticate(self) -> bool:
        """
        Log in and capture the access and CSRF tokens.

        Test mode skips this step entirely. A missing CSRF token only warns,
        since the server may not enforce it.

        Returns:
            True when the run may continue
        """
        if self.config.test_mode:
            logger.info("Test mode: skipping authentication")
            return True

        try:
            logger.info("Fetching auth token...")
            data = self.client.login(self.config.username, self.config.password)

            token = data.get('token') if isinstance(data, dict) else None
            if not token:
                print("✗ Authentication failed: no token in login response")
                logger.error("Login response did not contain a token")
                return False

            self.credentials.access_token = token
            logger.info(f"✓ Got JWT token {mask_token(token)}")

            csrf_token = self.client.fetch_csrf_token(token)
            if csrf_token:
                self.credentials.csrf_token = csrf_token
                logger.info("✓ Got CSRF token")
            else:
                logger.warning("! No CSRF token returned, continuing without it")

            return True
        except requests.RequestException as e:
            print_error("Error during authentication", e)
            return False

    def run(self):
        """Authenticate, then run every step in order. Prints output; returns nothing."""
        config = self.config
        print("Starting novel service performance test...")
        mode = "test mode (no auth)" if config.test_mode else "standard mode (auth required)"
        print(f"Run mode: {mode}")

        if not self.authenticate() and not config.test_mode:
            print("Authentication failed, cannot continue")
            return

        try:
            logger.info("Clearing existing test data...")
            print_result("Clear test data", self.client.clear_data(self.credentials))

            logger.info(f"Generating {config.data_count} novels...")
            print_result(
                "Generate test data",
                self.client.generate_data(self.credentials, config.data_count),
            )

            logger.info("Fetching database stats...")
            print_result("Database stats", self.client.stats(self.credentials))

            logger.info("Running novel query load test...")
            print_result(
                "Novel query load test",
                self.client.novel_query_test(
                    self.credentials,
                    config.query_concurrent_users,
                    config.query_requests_per_user,
                ),
            )

            logger.info("Running scene query load test...")
            print_result(
                "Scene query load test",
                self.client.scene_query_test(
                    self.credentials,
                    config.query_concurrent_users,
                    config.query_requests_per_user,
                ),
            )

            logger.info("Running novel create load test...")
            print_result(
                "Novel create load test",
                self.client.novel_create_test(
                    self.credentials,
                    config.create_concurrent_users,
                    config.create_requests_per_user,
                ),
            )

            logger.info("Fetching server status...")
            print_server_status(self.client.server_status(self.credentials))

            print()
            print("✓ All tests completed!")
        except requests.RequestException as e:
            print_error("Error during test run", e)
            return

        if config.monitor_samples > 0:
            self.monitor(config.monitor_samples)

    def monitor(self, samples: int) -> List[MonitorSample]:
        """
        Print `samples` ticks from the live monitor stream.

        Returns:
            The samples read, possibly fewer than requested if the stream failed
        """
        received = []
        print(f"\nWatching server monitor for {samples} samples...")
        try:
            for sample in self.client.monitor(self.credentials, samples):
                print_monitor_sample(sample)
                received.append(sample)
        # A malformed event raises json's ValueError, not a requests error
        except (requests.RequestException, ValueError) as e:
            print_error("Error reading monitor stream", e)
        return received
