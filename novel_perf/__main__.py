"""
Entry point for the novel service performance test.

Usage:
    python -m novel_perf
    TEST_MODE=true python -m novel_perf   # skip authentication

See novel_perf.config for the environment variables that tune the run.
"""

import logging
import os

from novel_perf.config import Config
from novel_perf.orchestrator import Orchestrator

logger = logging.getLogger(__name__)


def main():
    """Load configuration from the environment and run every test step once."""
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"ERROR: {e}")
        return

    logger.info(f"Target: {config.base_url}")

    with Orchestrator(config) as orchestrator:
        orchestrator.run()


if __name__ == '__main__':
    main()
