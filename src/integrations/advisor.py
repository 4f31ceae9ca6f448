#!/usr/bin/env python3
"""
Spring Application Advisor integration.

Runs the advisor CLI that rewrites the sample application's build to the
next Java / Spring Boot step of its upgrade plan.
"""

import logging

from core.shell import ShellRunner

logger = logging.getLogger(__name__)


class AdvisorClient:
    """Thin wrapper over the ``advisor`` command line tool."""

    def __init__(self, shell: ShellRunner, executable: str = "advisor"):
        self.shell = shell
        self.executable = executable

    def build_config_get(self) -> None:
        self.shell.run([self.executable, "build-config", "get"])

    def upgrade_plan_get(self) -> None:
        self.shell.run([self.executable, "upgrade-plan", "get"])

    def upgrade_plan_apply(self) -> None:
        self.shell.run([self.executable, "upgrade-plan", "apply"])

    def apply_next_upgrade(self) -> None:
        """Refresh the build config, show the plan and apply its next step."""
        logger.info("Applying next advisor upgrade step")
        self.build_config_get()
        self.upgrade_plan_get()
        self.upgrade_plan_apply()
