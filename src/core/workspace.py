#!/usr/bin/env python3
"""
Scratch workspace holding the cloned sample application.
"""

import shutil
import logging
from pathlib import Path
from typing import Union

from core.shell import ShellRunner

logger = logging.getLogger(__name__)


class Workspace:
    """Directory the demo clones into, builds in and runs from."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).resolve()

    def reset(self) -> Path:
        """Remove any previous run and start from an empty directory."""
        if self.path.exists():
            logger.info(f"Removing previous workspace {self.path}")
            shutil.rmtree(self.path)
        self.path.mkdir(parents=True)
        return self.path

    def clone(self, shell: ShellRunner, repo_url: str) -> None:
        """Clone ``repo_url`` into the workspace root and run there from now on."""
        shell.run(["git", "clone", repo_url, "./"], cwd=self.path)
        shell.cwd = self.path
