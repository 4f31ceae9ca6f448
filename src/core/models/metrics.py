#!/usr/bin/env python3
"""
Metrics data models.

Contains the key and value types the recorder stores per demo run.
"""

from typing import NamedTuple
from dataclasses import dataclass


class MetricsKey(NamedTuple):
    """Identifies one row of the comparison table."""
    java_version: str
    spring_version: str
    run_label: str


@dataclass
class MetricsRecord:
    """Startup time and memory measured for a single run."""
    startup_time_ms: float
    memory_used_bytes: float


@dataclass(frozen=True)
class Baseline:
    """First captured record; denominator for every percentage change."""
    startup_time_ms: float
    memory_used_bytes: float


@dataclass
class MetricsSnapshot:
    """Values read from the actuator endpoints in one capture."""
    java_version: str
    spring_version: str
    startup_time_ms: float
    memory_used_bytes: float
