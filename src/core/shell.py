#!/usr/bin/env python3
"""
External command runner.

Runs the tools the demo drives (git, the build tool, java, advisor) with a
shared environment, so switching the Java runtime affects every later
command.
"""

import os
import shlex
import shutil
import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from core.exceptions import CommandExecutionError, MissingDependencyError

logger = logging.getLogger(__name__)

Command = Union[str, Sequence[str]]


def split_command(command: Command) -> List[str]:
    """Accept either a shell-style string or an argument list."""
    if isinstance(command, str):
        return shlex.split(command)
    return list(command)


class ShellRunner:
    """Runs commands in a working directory with an overridable environment."""

    def __init__(self, cwd: Optional[Union[str, Path]] = None, env: Optional[Dict[str, str]] = None):
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.env: Dict[str, str] = dict(env if env is not None else os.environ)

    def which(self, tool: str) -> Optional[str]:
        """Locate a tool on this runner's PATH."""
        return shutil.which(tool, path=self.env.get('PATH'))

    def check_dependencies(self, tools: Sequence[str]) -> None:
        """
        Make sure every tool is installed.

        Raises:
            MissingDependencyError: For the first tool not found on PATH
        """
        for tool in tools:
            if not self.which(tool):
                raise MissingDependencyError(tool)
            logger.debug(f"Found {tool} at {self.which(tool)}")

    def prepend_path(self, directory: Union[str, Path]) -> None:
        """Put a directory in front of PATH for later commands."""
        current = self.env.get('PATH', '')
        self.env['PATH'] = f"{directory}{os.pathsep}{current}" if current else str(directory)

    def run(self, command: Command, check: bool = True, capture: bool = False,
            cwd: Optional[Union[str, Path]] = None) -> subprocess.CompletedProcess:
        """
        Run a command to completion.

        Args:
            command: Command string or argument list
            check: Raise if the command exits non-zero
            capture: Capture stdout/stderr instead of passing them through
            cwd: Working directory override

        Returns:
            The completed process

        Raises:
            CommandExecutionError: If check is set and the command failed
        """
        args = split_command(command)
        logger.debug(f"Running: {' '.join(args)}")

        result = subprocess.run(
            args,
            cwd=str(cwd or self.cwd),
            env=self.env,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.STDOUT if capture else None,
            text=True,
        )

        if check and result.returncode != 0:
            raise CommandExecutionError(args, result.returncode, result.stdout)
        return result

    def spawn(self, command: Command, cwd: Optional[Union[str, Path]] = None) -> subprocess.Popen:
        """
        Start a command in the background, detached from this process.

        Output is discarded; the caller tracks the process through HTTP
        probes and the process table rather than the returned handle.
        """
        args = split_command(command)
        logger.debug(f"Spawning: {' '.join(args)}")

        return subprocess.Popen(
            args,
            cwd=str(cwd or self.cwd),
            env=self.env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
