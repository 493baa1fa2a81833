#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
CLI base infrastructure.

Provides the root parser, output styling and the way commands get
hold of a connected ManagerClient.
"""

import logging
import sys
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from collections.abc import Awaitable, Callable

from argcomplete import autocomplete
from dbus_fast import BusType

from boltclient.cli.output import Output
from boltclient.client import ManagerClient
from boltclient.config import Config
from boltclient.log import Log
from boltclient.version import __version__


def _connect(config: Config) -> Awaitable[ManagerClient]:
    return ManagerClient.connect(config=config)


class BoltCLI:
    """
    Base CLI handler with semantic output.

    Usage:
        cli = BoltCLI()
        subparsers = cli.add_subparsers()
        # Register commands...
        args = cli.parse_args()
    """

    def __init__(self, client_factory: Callable[[Config], Awaitable[ManagerClient]] | None = None):
        self.out = Output()
        self.parser = self._create_parser()
        self._subparsers = None
        self._client_factory = client_factory or _connect

    def _create_parser(self) -> ArgumentParser:
        parser = ArgumentParser(
            prog="boltclient",
            description="Manage Thunderbolt device authorization",
            formatter_class=RawDescriptionHelpFormatter,
            epilog=self._epilog(),
        )

        parser.add_argument(
            "-v",
            "--version",
            action="version",
            version=f"boltclient {__version__}",
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="enable debug output",
        )
        parser.add_argument(
            "--no-color",
            action="store_true",
            help="disable colored output",
        )
        parser.add_argument(
            "--session",
            action="store_true",
            help="talk to a daemon on the session bus",
        )

        return parser

    def _epilog(self) -> str:
        return """\
Examples:
  boltclient list                     List devices
  boltclient info UID                 Show a device and its parents
  boltclient enroll UID --policy auto Authorize and remember a device
  boltclient monitor                  Follow devices being added and removed
"""

    def add_subparsers(self):
        """
        Add subparser container for commands.

        Returns the same subparsers object on subsequent calls.
        """
        if self._subparsers is None:
            self._subparsers = self.parser.add_subparsers(
                title="commands",
                dest="command",
                metavar="COMMAND",
            )
        return self._subparsers

    def parse_args(self, args: list[str] | None = None) -> Namespace:
        if args is None:
            args = sys.argv[1:]

        autocomplete(self.parser)
        parsed = self.parser.parse_args(args)

        if parsed.no_color:
            self.out = Output(force_color=False)
        else:
            Log.enable_color(self.out.color_enabled)

        if parsed.debug:
            Log.set_level(logging.DEBUG)

        return parsed

    def client_config(self, args: Namespace) -> Config:
        config = Config.from_env()
        if getattr(args, "session", False):
            config.bus_type = BusType.SESSION
        return config

    def open_client(self, args: Namespace) -> Awaitable[ManagerClient]:
        """Connect a ManagerClient for the parsed arguments."""
        return self._client_factory(self.client_config(args))

    # ─────────────────────────────────────────────────────────────────────────
    # Output helpers
    # ─────────────────────────────────────────────────────────────────────────

    def error(self, message: str) -> None:
        """Print error message and exit with code 1."""
        print(self.out.error(message), file=sys.stderr)
        sys.exit(1)
