#!/usr/bin/env python3
"""
Bounded polling helpers.

Every wait in the demo (health probes, process exit, port release) polls
at a fixed interval until a condition holds or a deadline passes.
"""

import time
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Type

import psutil
import requests

from core.exceptions import PollTimeoutError

logger = logging.getLogger(__name__)

# errors that mean the target is not ready yet
RETRYABLE_ERRORS = (requests.exceptions.RequestException, psutil.Error)


@dataclass
class RetryPolicy:
    """Fixed-interval retry with an overall deadline (seconds)."""
    interval: float
    timeout: float


def poll_until(condition: Callable[[], bool],
               policy: RetryPolicy,
               description: str,
               error_class: Type[PollTimeoutError] = PollTimeoutError,
               clock: Callable[[], float] = time.monotonic,
               sleep: Callable[[float], None] = time.sleep) -> int:
    """
    Call ``condition`` until it returns True.

    HTTP and process-table errors raised by ``condition`` count as a failed
    attempt; the last one is reported if the deadline passes. Anything else
    propagates.

    Args:
        condition: Check to run on every attempt
        policy: Interval and deadline
        description: What is being waited for, used in logs and errors
        error_class: PollTimeoutError subclass raised on timeout
        clock: Monotonic clock (injectable for tests)
        sleep: Sleep function (injectable for tests)

    Returns:
        Number of attempts it took

    Raises:
        PollTimeoutError: If the deadline passes first
    """
    deadline = clock() + policy.timeout
    attempts = 0
    last_error: Optional[str] = None

    while True:
        attempts += 1
        try:
            if condition():
                logger.debug(f"{description} satisfied after {attempts} attempt(s)")
                return attempts
            last_error = None
        except RETRYABLE_ERRORS as e:
            last_error = str(e)
            logger.debug(f"Waiting for {description} (attempt {attempts}): {e}")

        if clock() + policy.interval > deadline:
            raise error_class(description, policy.timeout, attempts, last_error)
        sleep(policy.interval)
