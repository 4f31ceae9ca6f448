#!/usr/bin/env python3
"""
Standardized exception hierarchy for the upgrade demo.

Provides specific exception types for the failure modes of the demo run
with error context that can be logged or serialized.
"""

from typing import Optional, Dict, Any, List


class UpgradeDemoError(Exception):
    """Base exception for all upgrade demo errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Configuration-related exceptions
class ConfigurationError(UpgradeDemoError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


class MissingDependencyError(UpgradeDemoError):
    """Required external tool is missing."""

    def __init__(self, dependency_name: str, install_hint: Optional[str] = None):
        message = f"{dependency_name} not found. Please install {dependency_name} first."
        if install_hint:
            message += f" ({install_hint})"

        context = {
            'dependency_name': dependency_name,
            'install_hint': install_hint
        }
        super().__init__(message, context=context)


# External command exceptions
class CommandExecutionError(UpgradeDemoError):
    """External command exited with a non-zero status."""

    def __init__(self, command: List[str], returncode: int, output: Optional[str] = None):
        message = f"Command '{' '.join(command)}' failed with exit code {returncode}"
        context = {
            'command': list(command),
            'returncode': returncode,
            'output': output
        }
        super().__init__(message, context=context)
        self.returncode = returncode


# Polling-related exceptions
class PollTimeoutError(UpgradeDemoError):
    """A polling loop exceeded its deadline."""

    def __init__(self, description: str, timeout_seconds: float, attempts: int, last_error: Optional[str] = None):
        message = f"Timed out after {timeout_seconds:g}s waiting for {description}"
        if last_error:
            message += f" (last error: {last_error})"
        context = {
            'description': description,
            'timeout_seconds': timeout_seconds,
            'attempts': attempts,
            'last_error': last_error
        }
        super().__init__(message, context=context)


class HealthCheckTimeoutError(PollTimeoutError):
    """Application never reported healthy within the deadline."""
    pass


class ProcessStopTimeoutError(PollTimeoutError):
    """Application process or its port did not go away within the deadline."""
    pass


# Actuator-related exceptions
class MetricsUnavailableError(UpgradeDemoError):
    """Actuator response did not contain the expected value."""

    def __init__(self, endpoint: str, field: str):
        message = f"No value for '{field}' in response from {endpoint}"
        context = {
            'endpoint': endpoint,
            'field': field
        }
        super().__init__(message, context=context)
