#!/usr/bin/env python3
"""
SDKMAN integration for switching Java runtimes.

SDKMAN is a shell function, so installs go through ``bash -c`` with the
init script sourced. Switching versions is done by pointing JAVA_HOME and
PATH of the shared runner at the installed candidate, which is what
``sdk use`` does inside a shell.
"""

import os
import shlex
import logging
from pathlib import Path
from typing import Iterable, Optional

from core.exceptions import MissingDependencyError
from core.shell import ShellRunner

logger = logging.getLogger(__name__)


class SdkmanClient:
    """Installs and activates Java candidates through SDKMAN."""

    def __init__(self, shell: ShellRunner, sdkman_dir: Optional[str] = None):
        self.shell = shell
        self.sdkman_dir = Path(sdkman_dir or os.path.expanduser("~/.sdkman"))

    @property
    def init_script(self) -> Path:
        return self.sdkman_dir / "bin" / "sdkman-init.sh"

    def is_installed(self) -> bool:
        return self.init_script.is_file()

    def ensure_installed(self) -> None:
        if not self.is_installed():
            raise MissingDependencyError("SDKMAN", f"expected {self.init_script}")

    def sdk(self, arguments: str, answer: Optional[str] = None) -> None:
        """Run an ``sdk`` sub-command in a bash shell with SDKMAN loaded."""
        script = f"source {shlex.quote(str(self.init_script))} && "
        if answer is not None:
            script += f"echo {shlex.quote(answer)} | "
        script += f"sdk {arguments}"
        self.shell.run(["bash", "-c", script])

    def update(self) -> None:
        self.sdk("update")

    def install(self, version: str) -> None:
        """Install a Java candidate without making it the default."""
        if self.candidate_home(version).is_dir():
            logger.info(f"Java {version} already installed")
            return
        logger.info(f"Installing Java {version}")
        self.sdk(f"install java {shlex.quote(version)}", answer="n")

    def install_all(self, versions: Iterable[str]) -> None:
        self.ensure_installed()
        self.update()
        for version in versions:
            self.install(version)

    def candidate_home(self, version: str) -> Path:
        return self.sdkman_dir / "candidates" / "java" / version

    def use(self, version: str) -> Path:
        """
        Make ``version`` the Java runtime for later commands.

        Returns:
            The candidate's JAVA_HOME
        """
        java_home = self.candidate_home(version)
        if not java_home.is_dir():
            raise MissingDependencyError(f"Java {version}", f"run 'sdk install java {version}'")

        self.shell.env['JAVA_HOME'] = str(java_home)
        self.shell.prepend_path(java_home / "bin")
        logger.info(f"Using Java {version} from {java_home}")
        return java_home
