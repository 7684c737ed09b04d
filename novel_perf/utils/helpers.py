"""
Formatting helpers for printing performance test results.
"""

import json
import logging
from typing import Optional

import requests

from novel_perf.results import MonitorSample, ServerStatus

logger = logging.getLogger(__name__)

SEPARATOR = '=' * 35


def format_duration(ms: Optional[int]) -> str:
    """
    Render a duration in milliseconds for display.

    Below one second the value is shown as-is in ms; otherwise as whole seconds
    followed by the millisecond remainder (not zero-padded, so 2000 -> "2.0s").

    Args:
        ms: Duration in milliseconds, or None when the server omitted it

    Returns:
        Display string such as "999ms" or "1.500s"
    """
    if ms is None:
        return 'n/a'
    if ms < 1000:
        return f'{ms}ms'
    seconds = ms // 1000
    remaining_ms = ms % 1000
    return f'{seconds}.{remaining_ms}s'


def mask_token(token: Optional[str]) -> str:
    """Hide all but the last 4 characters of a token for logging."""
    if not token:
        return '<none>'
    if len(token) <= 4:
        return '*' * len(token)
    return f"{'*' * (len(token) - 4)}{token[-4:]}"


def print_header(title: str):
    print()
    print(SEPARATOR)
    print(title)
    print(SEPARATOR)


def print_result(title: str, result):
    """
    Print a titled block for one endpoint result.

    Load test figures are printed when the result carries a request count,
    seed counts when it carries a novel count.
    """
    print_header(title)

    if not result.success:
        print(f"✗ {result.message}")
        return

    print(f"✓ {result.message}")

    if getattr(result, 'total_requests', None):
        print(f"Total requests: {result.total_requests}")
        print(f"Successful requests: {result.successful_requests}")
        print(f"Total time: {format_duration(result.total_time_ms)}")
        print(f"Requests per second: {result.requests_per_second}/s")

    if getattr(result, 'novel_count', None):
        print(f"Novels: {result.novel_count}")
        print(f"Scenes: {result.scene_count}")
        # Stats results have no character count
        if hasattr(result, 'character_count'):
            print(f"Characters: {result.character_count}")


def print_server_status(status: ServerStatus):
    print_header('Server status')
    print(f"Processors: {status.available_processors}")
    print(f"Max memory: {status.max_memory_mb}MB")
    print(f"Used memory: {status.used_memory_mb}MB")
    print(f"Free memory: {status.free_memory_mb}MB")
    print(f"Java version: {status.java_version}")
    print(f"Operating system: {status.os_name} {status.os_version}")


def print_monitor_sample(sample: MonitorSample):
    print(
        f"[{sample.timestamp}] used {sample.used_memory_mb}MB, "
        f"free {sample.free_memory_mb}MB, processors {sample.available_processors}"
    )


def describe_response_body(response) -> str:
    """Return the response body as compact JSON when possible, else raw text."""
    try:
        return json.dumps(response.json(), ensure_ascii=False)
    except ValueError:
        return response.text


def print_error(context: str, error: Exception):
    """
    Print one error block and log it.

    HTTP errors show the status code and body; anything without a response
    (connection refused, DNS failure, timeout) shows the raw message.

    Args:
        context: What was being attempted, e.g. "Error during test run"
        error: The caught exception
    """
    response = getattr(error, 'response', None)
    print()
    print(f"✗ {context}: {error}")
    if isinstance(error, requests.RequestException) and response is not None:
        body = describe_response_body(response)
        print(f"Status code: {response.status_code}")
        print(f"Error body: {body}")
        logger.error(f"{context}: HTTP {response.status_code} {body}")
    else:
        logger.error(f"{context}: {error}")
