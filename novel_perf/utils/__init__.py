"""
Utility functions for printing performance test output.
"""

from .helpers import (
    format_duration,
    mask_token,
    print_error,
    print_monitor_sample,
    print_result,
    print_server_status,
)

__all__ = [
    'format_duration',
    'mask_token',
    'print_error',
    'print_monitor_sample',
    'print_result',
    'print_server_status',
]
