#!/usr/bin/env python3
"""
Process control for the application under test.

Finds running instances by process name, kills them, and waits until the
process table and the listening port are both clear.
"""

import time
import socket
import logging
from typing import Callable, List

import psutil

from core.exceptions import ProcessStopTimeoutError
from core.polling import RetryPolicy, poll_until

logger = logging.getLogger(__name__)


class ProcessController:
    """Stops application instances and waits for their resources to be freed."""

    def __init__(self, process_interval: float = 0.1, port_interval: float = 0.5,
                 grace_period: float = 1.0, timeout: float = 60.0,
                 host: str = "localhost",
                 sleep: Callable[[float], None] = time.sleep):
        self.process_policy = RetryPolicy(interval=process_interval, timeout=timeout)
        self.port_policy = RetryPolicy(interval=port_interval, timeout=timeout)
        self.grace_period = grace_period
        self.host = host
        self._sleep = sleep

    def find_processes(self, name: str) -> List[psutil.Process]:
        """Running processes whose name contains ``name``."""
        matches = []
        for proc in psutil.process_iter(['pid', 'name']):
            try:
                proc_name = proc.info['name'] or ''
                if name in proc_name:
                    matches.append(proc)
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
        return matches

    def _is_alive(self, pid: int) -> bool:
        # killed children linger as zombies until reaped
        try:
            return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False

    def port_in_use(self, port: int) -> bool:
        """Whether anything is listening on the local port."""
        try:
            connections = psutil.net_connections(kind='inet')
        except psutil.AccessDenied:
            # macOS requires root to list sockets
            return self._accepts_connections(port)

        for conn in connections:
            if conn.status == psutil.CONN_LISTEN and conn.laddr and conn.laddr.port == port:
                return True
        return False

    def _accepts_connections(self, port: int) -> bool:
        try:
            with socket.create_connection((self.host, port), timeout=1):
                return True
        except OSError:
            return False

    def stop(self, name: str, port: int) -> int:
        """
        Kill every process matching ``name`` and wait until ``port`` is free.

        Args:
            name: Process name to match (e.g. "java")
            port: Port the application listens on

        Returns:
            Number of processes killed

        Raises:
            ProcessStopTimeoutError: If a process or the port outlives the deadline
        """
        procs = self.find_processes(name)
        if procs:
            pids = [proc.pid for proc in procs]
            logger.info(f"Killing {name} process(es): {pids}")
            for proc in procs:
                try:
                    proc.kill()
                except psutil.NoSuchProcess:
                    continue

            poll_until(
                lambda: not any(self._is_alive(pid) for pid in pids),
                self.process_policy,
                f"{name} process(es) {pids} to exit",
                error_class=ProcessStopTimeoutError,
                sleep=self._sleep,
            )
            self._sleep(self.grace_period)

        poll_until(
            lambda: not self.port_in_use(port),
            self.port_policy,
            f"port {port} to be released",
            error_class=ProcessStopTimeoutError,
            sleep=self._sleep,
        )
        return len(procs)
