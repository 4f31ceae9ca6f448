#!/usr/bin/env python3
"""
CLI Router for the Spring upgrade demo.

Running without arguments plays the whole demo; sub-commands expose the
individual pieces.
"""

import argparse
import logging
import sys
from typing import Optional, List

from commands import get_command, COMMANDS
from core.container import get_container

logger = logging.getLogger(__name__)

DEFAULT_ARGS = ['demo', 'run']


class CLIRouter:
    """
    CLI router for demo commands.

    Command structure:
    - python run.py                      (same as: demo run)
    - python run.py demo plan
    - python run.py demo capture --label standard
    - python run.py demo stop
    - python run.py health check
    """

    def __init__(self, container=None):
        """Initialize CLI router."""
        self._container = container
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="Spring Boot upgrade demo: startup time and memory across Java and Spring Boot versions",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_demo_parser(subparsers)
        self._add_health_parser(subparsers)

        return parser

    def _add_demo_parser(self, subparsers):
        """Add demo command parser."""
        demo_parser = subparsers.add_parser(
            'demo',
            help='Run the upgrade demo or one of its steps'
        )

        demo_subparsers = demo_parser.add_subparsers(
            dest='subcommand',
            help='Demo operations',
            metavar='{run,plan,capture,stop}'
        )

        demo_subparsers.add_parser('run', help='Run the full upgrade sequence (default)')
        demo_subparsers.add_parser('plan', help='Show the upgrade steps without running them')

        capture_parser = demo_subparsers.add_parser('capture', help='Capture metrics from a running application')
        capture_parser.add_argument('--label', default='standard', help='Run label for the table (default: standard)')

        demo_subparsers.add_parser('stop', help='Stop the running application and wait for its port')

    def _add_health_parser(self, subparsers):
        """Add health command parser."""
        health_parser = subparsers.add_parser(
            'health',
            help='Environment health checks'
        )

        health_subparsers = health_parser.add_subparsers(
            dest='subcommand',
            help='Health operations',
            metavar='{check,tools,app}'
        )

        health_subparsers.add_parser('check', help='Check tools, SDKMAN and the application')
        health_subparsers.add_parser('tools', help='Check required tools are on PATH')
        health_subparsers.add_parser('app', help='Check the application endpoints')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  python run.py                 # play the whole demo
  python run.py demo plan       # list the steps
  python run.py health check    # verify tools before presenting
"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]
            if not args:
                args = list(DEFAULT_ARGS)

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0
        except Exception as e:
            logger.error(f"CLI routing error: {e}", exc_info=True)
            return 1

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self.parser.print_usage()
            return 1

        command = get_command(args.command, self._container)
        return command.execute(subcommand, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    container = get_container()
    try:
        container.get('config_manager').update_logging()
    except Exception as e:
        logger.error(f"Invalid configuration: {e}")
        return 22

    router = CLIRouter(container)
    return router.route_command(args)


if __name__ == '__main__':
    sys.exit(main())
