#!/usr/bin/env python3
"""
Run driver for the Spring upgrade demo.

Walks a fixed plan of upgrade steps. Each step optionally applies the next
advisor upgrade and switches Java, then builds and starts the sample
application, waits for it to become healthy, records its startup time and
memory use, and stops it again. The comparison table is printed after
every capture and once more at the end.
"""

import time
import logging
from typing import Callable, List, Optional

from core.config import Config, JavaConfig
from core.formatters import format_message, render_table
from core.metrics_recorder import MetricsRecorder
from core.models.metrics import MetricsKey
from core.models.plan import UpgradeStep
from core.polling import RetryPolicy

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[H\033[2J"
SPRING_BOOT_UPGRADES = ["3.0.x", "3.1.x", "3.2.x", "3.3.x", "3.4.x", "3.5.x"]


def build_default_plan(java: JavaConfig) -> List[UpgradeStep]:
    """
    The demo sequence: Java 8 baseline, advisor upgrades through Java 11,
    Java 17 and Spring Boot 3.0 to 3.5, then Java 21 and Java 24 on the
    final build.
    """
    plan = [
        UpgradeStep("Baseline on Java 8", java_version=java.java_8),
        UpgradeStep("Upgrade to Java 11", java_version=java.java_11, apply_upgrade=True),
        UpgradeStep("Upgrade to Java 17", java_version=java.java_17, apply_upgrade=True),
    ]
    for boot_version in SPRING_BOOT_UPGRADES:
        plan.append(UpgradeStep(f"Upgrade to Spring Boot {boot_version}", apply_upgrade=True))
    plan.append(UpgradeStep("Upgrade to Java 21", java_version=java.java_21))
    plan.append(UpgradeStep("Upgrade to Java 24", java_version=java.java_24))
    return plan


class UpgradeDemo:
    """
    Drives the demo end to end.

    The driver owns the MetricsRecorder; collaborators are passed in so
    tests can replace any of them.
    """

    def __init__(self, config: Config, shell, sdkman, advisor, app_runner, actuator,
                 process_controller, workspace, recorder: Optional[MetricsRecorder] = None,
                 out: Callable[[str], None] = print, sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.shell = shell
        self.sdkman = sdkman
        self.advisor = advisor
        self.app_runner = app_runner
        self.actuator = actuator
        self.process_controller = process_controller
        self.workspace = workspace
        self.recorder = recorder or MetricsRecorder()
        self._out = out
        self._sleep = sleep
        self.health_policy = RetryPolicy(
            interval=config.polling.health_interval,
            timeout=config.polling.health_timeout,
        )

    def display(self, message: str) -> None:
        self._out(format_message(message))

    def talking_point(self) -> None:
        """Pause between steps so the presenter can talk."""
        presentation = self.config.presentation
        if presentation.step_pause > 0:
            self._sleep(presentation.step_pause)
        if presentation.clear_screen:
            self._out(CLEAR_SCREEN)

    def prepare(self) -> None:
        """Check tools, install runtimes and clone a fresh copy of the app."""
        self.shell.check_dependencies(self.config.app.required_tools)
        self.sdkman.install_all(self.config.java.all_versions())
        self.workspace.reset()
        self.display("Clone the Spring Pet Clinic")
        self.workspace.clone(self.shell, self.config.app.repo_url)

    def use_java(self, version: str) -> None:
        self.display(f"Use Java {version}")
        self.sdkman.use(version)
        self._out(self.app_runner.java_version())

    def rewrite_application(self) -> None:
        self.display("Spring Application Advisor")
        self.advisor.apply_next_upgrade()

    def start_app(self, step: UpgradeStep) -> None:
        self.display(f"Start the Spring Boot application ({step.launch_mode.value})")
        self.app_runner.start(step.launch_mode)

    def validate_app(self) -> None:
        self.display("Check application health")
        self.actuator.wait_until_healthy(self.health_policy, sleep=self._sleep)

    def capture_metrics(self, run_label: str) -> MetricsKey:
        """Read the actuator metrics, record them and print the table."""
        snapshot = self.actuator.snapshot()
        key = self.recorder.capture(
            run_label,
            snapshot.java_version,
            snapshot.spring_version,
            snapshot.startup_time_ms,
            snapshot.memory_used_bytes,
        )
        self.show_table()
        return key

    def show_table(self, title: str = "Application Validation Metrics") -> None:
        self.display(title)
        self._out(render_table(self.recorder.entries(), self.recorder.baseline))
        self._out("")

    def stop_app(self) -> None:
        self.display("Stop the Spring Boot application")
        self.process_controller.stop(self.config.app.process_name, self.config.app.port)

    def run_step(self, step: UpgradeStep) -> MetricsKey:
        """Execute one upgrade step and return the key its metrics were stored under."""
        logger.info(f"Step: {step.summary()}")
        if step.apply_upgrade:
            self.rewrite_application()
            self.talking_point()
        if step.java_version:
            self.use_java(step.java_version)
            self.talking_point()

        self.start_app(step)
        self.talking_point()
        try:
            self.validate_app()
            self.talking_point()
            key = self.capture_metrics(step.run_label)
            self.talking_point()
        finally:
            self.stop_app()
        self.talking_point()
        return key

    def run(self, plan: Optional[List[UpgradeStep]] = None) -> MetricsRecorder:
        """Prepare the workspace, run every step and print the final summary."""
        steps = plan if plan is not None else build_default_plan(self.config.java)
        self.prepare()
        self.talking_point()

        for index, step in enumerate(steps, 1):
            logger.info(f"Running step {index}/{len(steps)}: {step.description}")
            self.run_step(step)

        self.show_table("Final Validation Summary")
        return self.recorder
