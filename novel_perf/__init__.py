"""
Drives the novel service's performance-test endpoints and prints the results.
"""

from .config import Config
from .orchestrator import Orchestrator

__all__ = [
    'Config',
    'Orchestrator',
]
