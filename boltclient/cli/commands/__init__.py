#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
CLI command implementations.

Each command module registers itself via the COMMANDS list.
"""

from boltclient.cli.commands.base import Command
from boltclient.cli.commands.devices import InfoCommand, ListCommand
from boltclient.cli.commands.enroll import AuthorizeCommand, EnrollCommand, ForgetCommand
from boltclient.cli.commands.monitor import MonitorCommand

# All available commands, order determines help output order
COMMANDS: list[type[Command]] = [
    ListCommand,
    InfoCommand,
    EnrollCommand,
    ForgetCommand,
    AuthorizeCommand,
    MonitorCommand,
]

__all__ = ["COMMANDS", "Command"]
