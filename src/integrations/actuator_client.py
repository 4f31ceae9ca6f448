#!/usr/bin/env python3
"""
Spring Boot actuator client.

Probes the info/health endpoints of the application under test and reads
the startup time and memory metrics used in the comparison table.
"""

import math
import time
import logging
from typing import Any, Callable, Dict, Optional, Sequence

import requests

from core.exceptions import HealthCheckTimeoutError, MetricsUnavailableError
from core.models.metrics import MetricsSnapshot
from core.polling import RetryPolicy, poll_until

logger = logging.getLogger(__name__)

INFO_PATH = "/actuator/info"
HEALTH_PATH = "/actuator/health"
STARTED_TIME_METRIC = "application.started.time"
MEMORY_USED_METRIC = "jvm.memory.used"
UNKNOWN_VERSION = "unknown"


class ActuatorClient:
    """Reads actuator endpoints of a locally running Spring Boot application."""

    def __init__(self, base_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        """
        Initialize actuator client.

        Args:
            base_url: Application root, e.g. http://localhost:8080
            timeout: Per-request timeout in seconds
            session: Optional session (a fresh one is created if omitted)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get_json(self, path: str) -> Dict[str, Any]:
        response = self.session.get(self._url(path), timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def is_up(self, path: str) -> bool:
        """True if the endpoint answers with a 2xx status."""
        try:
            response = self.session.get(self._url(path), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug(f"{path} not reachable yet: {e}")
            return False
        return response.ok

    def wait_until_healthy(self, policy: RetryPolicy,
                           paths: Sequence[str] = (INFO_PATH, HEALTH_PATH),
                           sleep: Callable[[float], None] = time.sleep) -> None:
        """
        Poll each endpoint in turn until it answers successfully.

        Raises:
            HealthCheckTimeoutError: If an endpoint stays down past the deadline
        """
        for path in paths:
            poll_until(
                lambda: self.is_up(path),
                policy,
                f"{self._url(path)} to respond",
                error_class=HealthCheckTimeoutError,
                sleep=sleep,
            )
            logger.info(f"{path} is up")

    def get_info(self) -> Dict[str, Any]:
        return self._get_json(INFO_PATH)

    def get_metric_value(self, metric_name: str) -> float:
        """
        First measurement value of an actuator metric.

        Raises:
            MetricsUnavailableError: If the payload has no measurement
        """
        path = f"/actuator/metrics/{metric_name}"
        data = self._get_json(path)
        try:
            return float(data['measurements'][0]['value'])
        except (KeyError, IndexError, TypeError, ValueError):
            raise MetricsUnavailableError(path, 'measurements[0].value')

    @staticmethod
    def _lookup(payload: Dict[str, Any], dotted_path: str) -> str:
        value: Any = payload
        for part in dotted_path.split('.'):
            if not isinstance(value, dict) or part not in value:
                logger.warning(f"Actuator info has no '{dotted_path}'")
                return UNKNOWN_VERSION
            value = value[part]
        return str(value)

    def java_version(self, info: Optional[Dict[str, Any]] = None) -> str:
        return self._lookup(info if info is not None else self.get_info(), 'java.version')

    def spring_boot_version(self, info: Optional[Dict[str, Any]] = None) -> str:
        return self._lookup(info if info is not None else self.get_info(), 'spring.boot.version')

    def snapshot(self) -> MetricsSnapshot:
        """Read versions, startup time and memory used in one go."""
        info = self.get_info()
        return MetricsSnapshot(
            java_version=self.java_version(info),
            spring_version=self.spring_boot_version(info),
            startup_time_ms=self.get_metric_value(STARTED_TIME_METRIC),
            memory_used_bytes=float(math.floor(self.get_metric_value(MEMORY_USED_METRIC))),
        )
