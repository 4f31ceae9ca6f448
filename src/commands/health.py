#!/usr/bin/env python3
"""
Health check command for the demo environment.

Reports whether the external tools, SDKMAN and its Java candidates are in
place, and whether an application is currently answering on the port.
"""

from argparse import Namespace

from .base import BaseCommand
from integrations.actuator_client import INFO_PATH, HEALTH_PATH


class HealthCommand(BaseCommand):
    """Handle environment health monitoring and diagnostics."""

    subcommands = ['check', 'tools', 'app']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute health subcommand."""
        try:
            if subcommand == "check":
                return self.check(args)
            elif subcommand == "tools":
                return 0 if self._check_tools() else 1
            elif subcommand == "app":
                return 0 if self._check_app() else 1
            else:
                return self.unknown_subcommand(subcommand)

        except Exception as e:
            return self.handle_error(e, f"health {subcommand}")

    def check(self, args: Namespace) -> int:
        """Run comprehensive health check."""
        print("🏥 Demo Environment Health Check")
        print("=" * 50)

        overall_healthy = self._check_tools()
        overall_healthy = self._check_sdkman() and overall_healthy

        # A running app is optional before the demo starts
        self._check_app()

        print("\n" + "=" * 50)
        if overall_healthy:
            print("✅ Overall Status: HEALTHY")
            return 0
        print("❌ Overall Status: UNHEALTHY")
        return 1

    def _check_tools(self) -> bool:
        print("\n🔧 Required Tools:")
        healthy = True
        for tool in self.config.app.required_tools:
            location = self.shell.which(tool)
            if location:
                print(f"  ✅ {tool}: {location}")
            else:
                print(f"  ❌ {tool}: not found")
                healthy = False
        return healthy

    def _check_sdkman(self) -> bool:
        print("\n☕ SDKMAN:")
        sdkman = self.sdkman
        if not sdkman.is_installed():
            print(f"  ❌ SDKMAN not found at {sdkman.init_script}")
            return False
        print(f"  ✅ SDKMAN: {sdkman.sdkman_dir}")

        for version in self.config.java.all_versions():
            if sdkman.candidate_home(version).is_dir():
                print(f"  ✅ java {version}: installed")
            else:
                print(f"  ℹ️  java {version}: will be installed by the demo")
        return True

    def _check_app(self) -> bool:
        print(f"\n🌱 Application at {self.config.app.base_url}:")
        healthy = True
        for path in (INFO_PATH, HEALTH_PATH):
            if self.actuator.is_up(path):
                print(f"  ✅ {path}: OK")
            else:
                print(f"  ⚠️  {path}: not responding")
                healthy = False
        return healthy
