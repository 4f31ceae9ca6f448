#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
from abc import ABC, abstractmethod
from typing import List
from argparse import Namespace

from core.container import get_container
from core.exceptions import (
    UpgradeDemoError,
    MissingDependencyError,
    ConfigurationError,
    CommandExecutionError,
    PollTimeoutError,
)

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Gives commands access to the demo collaborators through the dependency
    injection container and maps failures to exit codes.
    """

    subcommands: List[str] = []

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def shell(self):
        return self._container.get('shell')

    @property
    def sdkman(self):
        return self._container.get('sdkman')

    @property
    def actuator(self):
        return self._container.get('actuator')

    @property
    def process_controller(self):
        return self._container.get('process_controller')

    def create_demo(self):
        """Create a demo driver with a fresh metrics recorder."""
        return self._container.get('demo')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def get_available_subcommands(self) -> List[str]:
        return list(self.subcommands)

    def unknown_subcommand(self, subcommand: str) -> int:
        available = ", ".join(self.get_available_subcommands())
        self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
        return 1

    def handle_error(self, error: BaseException, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130

        error_msg = f"{context}: {error}" if context else str(error)

        if isinstance(error, MissingDependencyError):
            # Expected operator error, no traceback
            print(error.message)
            self.logger.error(error_msg)
            return 1
        if isinstance(error, UpgradeDemoError):
            self.logger.error(error_msg)
            self.logger.debug(f"Error details: {error.to_dict()}")
        else:
            self.logger.error(error_msg, exc_info=True)

        if isinstance(error, CommandExecutionError):
            return error.returncode or 1
        elif isinstance(error, PollTimeoutError):
            return 124
        elif isinstance(error, (ConfigurationError, ValueError)):
            return 22
        else:
            return 1
