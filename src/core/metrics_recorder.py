#!/usr/bin/env python3
"""
Metrics recorder for the upgrade demo comparison table.

Accumulates startup time and memory usage per (java version, spring
version, run label) and remembers the first capture as the baseline
every later run is compared against.
"""

import math
import logging
from typing import Dict, List, Optional, Tuple

from core.models.metrics import MetricsKey, MetricsRecord, Baseline

logger = logging.getLogger(__name__)


class MetricsRecorder:
    """
    In-memory store of demo run measurements.

    Rows are kept in first-seen order. Capturing a key that already exists
    replaces its values but keeps its original position. The baseline is
    fixed by the first capture and never changes afterwards.
    """

    def __init__(self):
        self._records: Dict[MetricsKey, MetricsRecord] = {}
        self._run_order: List[MetricsKey] = []
        self._baseline: Optional[Baseline] = None

    def capture(self, run_label: str, java_version: str, spring_version: str,
                startup_time_ms: float, memory_used_bytes: float) -> MetricsKey:
        """
        Store measurements for a run.

        Args:
            run_label: Label of the run (e.g. "standard")
            java_version: Runtime version reported by the application
            spring_version: Spring Boot version reported by the application
            startup_time_ms: Application startup time in milliseconds
            memory_used_bytes: JVM memory used, floored to whole bytes

        Returns:
            The key the measurements were stored under
        """
        key = MetricsKey(java_version, spring_version, run_label)
        record = MetricsRecord(
            startup_time_ms=float(startup_time_ms),
            memory_used_bytes=float(math.floor(memory_used_bytes))
        )

        if key in self._records:
            logger.debug(f"Overwriting metrics for {key}")
        else:
            self._run_order.append(key)
        self._records[key] = record

        if self._baseline is None:
            self._baseline = Baseline(record.startup_time_ms, record.memory_used_bytes)
            logger.debug(f"Baseline set from {key}: {self._baseline}")

        logger.info(
            f"Captured {run_label} run on Java {java_version} / Spring Boot {spring_version}: "
            f"{record.startup_time_ms:.3f} ms, {record.memory_used_bytes:.0f} bytes"
        )
        return key

    @property
    def baseline(self) -> Optional[Baseline]:
        return self._baseline

    @property
    def run_order(self) -> List[MetricsKey]:
        return list(self._run_order)

    def get(self, key: MetricsKey) -> Optional[MetricsRecord]:
        return self._records.get(key)

    def entries(self) -> List[Tuple[MetricsKey, MetricsRecord]]:
        """Rows in display order."""
        return [(key, self._records[key]) for key in self._run_order]

    def __len__(self) -> int:
        return len(self._run_order)
