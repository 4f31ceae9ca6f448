#!/usr/bin/env python3
"""
Demo command: run the upgrade sequence or parts of it.
"""

from argparse import Namespace

from .base import BaseCommand
from core.demo_driver import build_default_plan


class DemoCommand(BaseCommand):
    """Run the Spring upgrade demo and its individual steps."""

    subcommands = ['run', 'plan', 'capture', 'stop']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute demo subcommand."""
        try:
            if subcommand == "run":
                return self.run(args)
            elif subcommand == "plan":
                return self.plan(args)
            elif subcommand == "capture":
                return self.capture(args)
            elif subcommand == "stop":
                return self.stop(args)
            else:
                return self.unknown_subcommand(subcommand)

        except (Exception, KeyboardInterrupt) as e:
            return self.handle_error(e, f"demo {subcommand}")

    def run(self, args: Namespace) -> int:
        """Run the full demo sequence."""
        demo = self.create_demo()
        recorder = demo.run()
        self.logger.info(f"Demo finished with {len(recorder)} recorded run(s)")
        return 0

    def plan(self, args: Namespace) -> int:
        """Print the steps the demo would execute."""
        steps = build_default_plan(self.config.java)
        print(f"Demo plan ({len(steps)} steps):")
        for index, step in enumerate(steps, 1):
            print(f"  {index:2d}. {step.summary()}")
        return 0

    def capture(self, args: Namespace) -> int:
        """Capture metrics from an application that is already running."""
        demo = self.create_demo()
        demo.validate_app()
        demo.capture_metrics(getattr(args, 'label', None) or 'standard')
        return 0

    def stop(self, args: Namespace) -> int:
        """Stop a running application instance and wait for its port."""
        app = self.config.app
        stopped = self.process_controller.stop(app.process_name, app.port)
        print(f"Stopped {stopped} {app.process_name} process(es); port {app.port} is free")
        return 0
