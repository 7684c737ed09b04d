"""
Typed views over the JSON payloads returned by the performance-test endpoints.

The server returns loosely shaped maps; each endpoint gets its own dataclass
here with absent keys turned into None.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ClearDataResult:
    success: bool
    message: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'ClearDataResult':
        return cls(success=bool(data.get('success')), message=data.get('message'))


@dataclass
class GenerateDataResult:
    success: bool
    message: Optional[str] = None
    novel_count: Optional[int] = None
    scene_count: Optional[int] = None
    character_count: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'GenerateDataResult':
        return cls(
            success=bool(data.get('success')),
            message=data.get('message'),
            novel_count=data.get('novelCount'),
            scene_count=data.get('sceneCount'),
            character_count=data.get('characterCount'),
        )


@dataclass
class StatsResult:
    """
    Database counts.

    The stats endpoint sends only the counts with no success flag, so a missing
    flag means success here and the counts get printed. The old JS runner
    showed this block as a failure with an undefined message. An explicit
    false is still honoured.
    """

    success: bool
    message: Optional[str] = None
    novel_count: Optional[int] = None
    scene_count: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'StatsResult':
        return cls(
            success=bool(data.get('success', True)),
            message=data.get('message', 'Database statistics retrieved'),
            novel_count=data.get('novelCount'),
            scene_count=data.get('sceneCount'),
        )


@dataclass
class LoadTestResult:
    """Aggregate figures from one server-side load test run."""

    success: bool
    message: Optional[str] = None
    total_requests: Optional[int] = None
    successful_requests: Optional[int] = None
    total_time_ms: Optional[int] = None
    # Server formats this as a string with two decimals, e.g. "123.45"
    requests_per_second: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'LoadTestResult':
        rps = data.get('requestsPerSecond')
        return cls(
            success=bool(data.get('success')),
            message=data.get('message'),
            total_requests=data.get('totalRequests'),
            successful_requests=data.get('successfulRequests'),
            total_time_ms=data.get('totalTimeMs'),
            requests_per_second=None if rps is None else str(rps),
        )


@dataclass
class ServerStatus:
    available_processors: Optional[int] = None
    max_memory_mb: Optional[int] = None
    total_memory_mb: Optional[int] = None
    used_memory_mb: Optional[int] = None
    free_memory_mb: Optional[int] = None
    java_version: Optional[str] = None
    java_vendor: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    os_arch: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'ServerStatus':
        return cls(
            available_processors=data.get('availableProcessors'),
            max_memory_mb=data.get('maxMemoryMB'),
            total_memory_mb=data.get('totalMemoryMB'),
            used_memory_mb=data.get('usedMemoryMB'),
            free_memory_mb=data.get('freeMemoryMB'),
            java_version=data.get('javaVersion'),
            java_vendor=data.get('javaVendor'),
            os_name=data.get('osName'),
            os_version=data.get('osVersion'),
            os_arch=data.get('osArch'),
        )


@dataclass
class MonitorSample:
    """One tick of the server's live monitor stream."""

    timestamp: Optional[int] = None
    used_memory_mb: Optional[int] = None
    free_memory_mb: Optional[int] = None
    available_processors: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'MonitorSample':
        return cls(
            timestamp=data.get('timestamp'),
            used_memory_mb=data.get('usedMemoryMB'),
            free_memory_mb=data.get('freeMemoryMB'),
            available_processors=data.get('availableProcessors'),
        )
