#!/usr/bin/env python3
"""
Demo plan data models.

Contains the launch modes and the step description the run driver executes.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass


class LaunchMode(Enum):
    """Ways the sample application jar can be started."""
    STANDARD = "standard"
    AOT = "aot"
    EXTRACTED = "extracted"
    CDS = "cds"
    AOT_CDS = "aot_cds"


@dataclass
class UpgradeStep:
    """One build-start-measure-stop cycle of the demo."""
    description: str
    java_version: Optional[str] = None  # None keeps the current runtime
    apply_upgrade: bool = False  # run the advisor before this step
    launch_mode: LaunchMode = LaunchMode.STANDARD
    run_label: str = "standard"

    def summary(self) -> str:
        """One-line description used by the plan listing."""
        parts = []
        if self.apply_upgrade:
            parts.append("advisor upgrade")
        if self.java_version:
            parts.append(f"use java {self.java_version}")
        parts.append(f"run {self.launch_mode.value} [{self.run_label}]")
        return f"{self.description}: " + " -> ".join(parts)
