#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Base command class for CLI commands.
"""

import asyncio
from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import ClassVar

from boltclient.cli.cli_base import BoltCLI
from boltclient.client import ManagerClient
from boltclient.device import DeviceHandle
from boltclient.errors import BoltError


class Command(ABC):
    """
    Base class for CLI commands.

    Subclasses must implement:
    - name: Command name (used as subparser name)
    - help: Short help text
    - configure_parser(): Add command-specific arguments
    - execute(): Run the command against a connected client
    """

    name: ClassVar[str]
    help: ClassVar[str]
    aliases: ClassVar[list[str]] = []

    def __init__(self, cli: BoltCLI):
        self.cli = cli

    @property
    def out(self):
        return self.cli.out

    @classmethod
    def register(cls, cli: BoltCLI, subparsers) -> "Command":
        """
        Register this command with the CLI.

        Creates the subparser and returns a command instance.
        """
        instance = cls(cli)

        parser = subparsers.add_parser(
            cls.name,
            help=cls.help,
            aliases=cls.aliases,
        )
        instance.configure_parser(parser)
        parser.set_defaults(cmd_instance=instance)

        return instance

    @abstractmethod
    def configure_parser(self, parser: ArgumentParser) -> None:
        """Add command-specific arguments to the parser."""
        ...

    def run(self, args: Namespace) -> int:
        """
        Execute the command.

        Returns:
            Exit code (0 for success)
        """
        return asyncio.run(self._run(args))

    async def _run(self, args: Namespace) -> int:
        try:
            client = await self.cli.open_client(args)
        except BoltError as e:
            return self.error(str(e))

        async with client:
            try:
                return await self.execute(client, args)
            except BoltError as e:
                return self.error(str(e))

    @abstractmethod
    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        """Run the command with a connected client."""
        ...

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def print(self, *args, **kwargs):
        """Print to stdout."""
        print(*args, **kwargs)

    def error(self, message: str) -> int:
        """Print error and return exit code 1."""
        print(self.out.error(message))
        return 1

    def success(self, message: str) -> int:
        """Print success and return exit code 0."""
        print(self.out.success(message))
        return 0

    def print_device(self, device: DeviceHandle, verbose: bool = False) -> None:
        """Print a device header and its main properties."""
        self.print(f"{self.out.device(device.name or '(unknown)')} {self.out.muted(device.vendor)}")

        details = [
            ("uid", device.uid or ""),
            ("status", self.out.status(device.status)),
        ]
        if device.parent:
            details.append(("parent", device.parent))
        if verbose:
            details += [
                ("object path", self.out.path(device.object_path)),
                ("sysfs path", device.sysfs_path or "-"),
                ("security", device.security.nick),
                ("stored", "yes" if device.stored else "no"),
                ("policy", device.policy.nick),
                ("key", device.key.nick),
            ]

        for key, value in details:
            self.print(f"   {self.out.kv(key, value)}")
