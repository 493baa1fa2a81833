#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
List and info commands: show devices known to the daemon.
"""

from argparse import ArgumentParser, Namespace
from typing import ClassVar

from boltclient.cli.commands.base import Command
from boltclient.client import ManagerClient


class ListCommand(Command):
    """List devices known to the daemon."""

    name = "list"
    help = "List devices"
    aliases: ClassVar[list[str]] = ["ls", "devices"]

    def configure_parser(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "-a",
            "--all",
            action="store_true",
            help="show all details",
        )
        parser.add_argument(
            "-q",
            "--quiet",
            action="store_true",
            help="only show device uids (for scripting)",
        )

    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        devices = await client.list_devices()

        if args.quiet:
            for device in devices:
                self.print(device.uid or "(unknown)")
            return 0

        if not devices:
            self.print(self.out.muted("No devices found"))
            return 0

        self.print(self.out.header(f"Devices ({len(devices)})"))
        self.print()

        for device in devices:
            self.print_device(device, verbose=args.all)
            self.print()

        return 0


class InfoCommand(Command):
    """Show one device and the chain of devices it is connected through."""

    name = "info"
    help = "Show details of a device"

    def configure_parser(self, parser: ArgumentParser) -> None:
        parser.add_argument("uid", metavar="UID", help="device uid")

    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        device = await client.device_by_uid(args.uid)
        self.print_device(device, verbose=True)

        ancestors = await client.device_get_ancestors(device)
        if ancestors:
            self.print()
            self.print(self.out.header("Connected through"))
            for depth, parent in enumerate(ancestors, start=1):
                name = parent.name or "(unknown)"
                self.print(f"{'  ' * depth}{self.out.device(name)} {self.out.muted(parent.uid or '')}")

        return 0
