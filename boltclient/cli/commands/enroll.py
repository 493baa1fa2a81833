#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Enroll, forget and authorize commands: change how the daemon treats a device.
"""

from argparse import ArgumentParser, Namespace

from boltclient.cli.commands.base import Command
from boltclient.client import ManagerClient
from boltclient.types import AuthFlags, Policy

POLICY_CHOICES = [p.nick for p in Policy if p is not Policy.UNKNOWN]


def _add_flag_arguments(parser: ArgumentParser) -> None:
    parser.add_argument(
        "--allow-insecure",
        action="store_true",
        help="authorize without a key even if the domain supports one",
    )
    parser.add_argument(
        "--allow-stored-key",
        action="store_true",
        help="accept a key the daemon already stored",
    )


def _flags(args: Namespace) -> AuthFlags:
    flags = AuthFlags.NONE
    if args.allow_insecure:
        flags |= AuthFlags.ALLOW_INSECURE
    if args.allow_stored_key:
        flags |= AuthFlags.ALLOW_STORED_KEY
    return flags


class EnrollCommand(Command):
    """Authorize a device and store it in the daemon's database."""

    name = "enroll"
    help = "Authorize and store a device"

    def configure_parser(self, parser: ArgumentParser) -> None:
        parser.add_argument("uid", metavar="UID", help="device uid")
        parser.add_argument(
            "--policy",
            choices=POLICY_CHOICES,
            default=Policy.DEFAULT.nick,
            help="what to do when the device is connected again (default: %(default)s)",
        )
        _add_flag_arguments(parser)

    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        policy = Policy.from_nick(args.policy)
        device = await client.enroll_device(args.uid, policy, _flags(args))
        self.print_device(device, verbose=True)
        return 0


class ForgetCommand(Command):
    """Remove a device from the daemon's database."""

    name = "forget"
    help = "Remove a stored device"

    def configure_parser(self, parser: ArgumentParser) -> None:
        parser.add_argument("uid", metavar="UID", help="device uid")

    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        await client.forget_device(args.uid)
        return self.success(f"Forgot {args.uid}")


class AuthorizeCommand(Command):
    """Authorize a connected device once, without storing it."""

    name = "authorize"
    help = "Authorize a device"

    def configure_parser(self, parser: ArgumentParser) -> None:
        parser.add_argument("uid", metavar="UID", help="device uid")
        _add_flag_arguments(parser)

    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        device = await client.device_by_uid(args.uid)
        await device.authorize(_flags(args))
        return self.success(f"Authorized {device.name or args.uid}")
