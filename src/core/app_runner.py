#!/usr/bin/env python3
"""
Build and launch the sample Spring Boot application.

Besides the plain ``java -jar`` launch used by the demo plan, the runner
knows the AOT, extracted-jar and CDS-archive variants so a plan can mix
them in.
"""

import shutil
import logging
import subprocess
from typing import List

from core.models.plan import LaunchMode
from core.shell import ShellRunner

logger = logging.getLogger(__name__)

EXTRACT_DIR = "application"
CDS_ARCHIVE = "application.jsa"
CDS_WARNING_MARKER = "[warning][cds]"


class ApplicationRunner:
    """Builds the jar and starts it in one of the supported launch modes."""

    def __init__(self, shell: ShellRunner, jar_name: str, build_command: str, aot_build_command: str):
        self.shell = shell
        self.jar_name = jar_name
        self.build_command = build_command
        self.aot_build_command = aot_build_command

    @property
    def packaged_jar(self) -> str:
        return f"./target/{self.jar_name}"

    @property
    def extracted_jar(self) -> str:
        return f"{EXTRACT_DIR}/{self.jar_name}"

    def build(self) -> None:
        logger.info("Packaging application")
        self.shell.run(self.build_command)

    def build_aot(self) -> None:
        logger.info("Packaging application with AOT processing")
        self.shell.run(self.aot_build_command)

    def extract(self) -> None:
        """Explode the jar into ./application with the Spring Boot jar tools."""
        self.shell.run(["java", "-Djarmode=tools", "-jar", self.packaged_jar,
                        "extract", "--destination", EXTRACT_DIR])

    def remove_extracted(self) -> None:
        shutil.rmtree(self.shell.cwd / EXTRACT_DIR, ignore_errors=True)

    def create_cds_archive(self) -> str:
        """
        Record a class data sharing archive from a training run.

        Returns:
            Training run output without CDS warnings
        """
        result = self.shell.run(
            ["java", f"-XX:ArchiveClassesAtExit={CDS_ARCHIVE}", "-Dspring.context.exit=onRefresh",
             "-jar", self.extracted_jar],
            capture=True,
        )
        lines = [line for line in (result.stdout or "").splitlines() if CDS_WARNING_MARKER not in line]
        return "\n".join(lines)

    def launch_command(self, mode: LaunchMode) -> List[str]:
        """The java command line for a launch mode."""
        if mode == LaunchMode.STANDARD:
            return ["java", "-jar", self.packaged_jar]
        if mode == LaunchMode.AOT:
            return ["java", "-Dspring.aot.enabled=true", "-jar", self.packaged_jar]
        if mode == LaunchMode.EXTRACTED:
            return ["java", "-jar", self.extracted_jar]
        if mode == LaunchMode.CDS:
            return ["java", f"-XX:SharedArchiveFile={CDS_ARCHIVE}", "-jar", self.extracted_jar]
        if mode == LaunchMode.AOT_CDS:
            return ["java", "-Dspring.aot.enabled=true", f"-XX:SharedArchiveFile={CDS_ARCHIVE}",
                    "-jar", self.extracted_jar]
        raise ValueError(f"Unsupported launch mode: {mode}")

    def prepare(self, mode: LaunchMode) -> None:
        """Produce the artifacts a launch mode needs."""
        if mode in (LaunchMode.AOT, LaunchMode.AOT_CDS):
            self.build_aot()
        else:
            self.build()

        if mode in (LaunchMode.EXTRACTED, LaunchMode.CDS, LaunchMode.AOT_CDS):
            self.remove_extracted()
            self.extract()
        if mode in (LaunchMode.CDS, LaunchMode.AOT_CDS):
            self.create_cds_archive()

    def start(self, mode: LaunchMode = LaunchMode.STANDARD) -> subprocess.Popen:
        """Build as needed and start the application in the background."""
        self.prepare(mode)
        command = self.launch_command(mode)
        logger.info(f"Starting application: {' '.join(command)}")
        return self.shell.spawn(command)

    def java_version(self) -> str:
        """Output of ``java -version`` for the active runtime."""
        result = self.shell.run(["java", "-version"], capture=True)
        return (result.stdout or "").strip()
