#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
CLI main entry point.

Run with:
    python -m boltclient.cli.main
    or via the 'boltclient' console script
"""

import sys

from boltclient.cli.cli_base import BoltCLI
from boltclient.cli.commands import COMMANDS


def main(args: list[str] | None = None, cli: BoltCLI | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])
        cli: CLI instance to use, mainly for tests

    Returns:
        Exit code
    """
    cli = cli or BoltCLI()

    subparsers = cli.add_subparsers()
    for cmd_cls in COMMANDS:
        cmd_cls.register(cli, subparsers)

    parsed = cli.parse_args(args)

    if getattr(parsed, "command", None) is None or not hasattr(parsed, "cmd_instance"):
        cli.parser.print_help()
        return 0

    try:
        return parsed.cmd_instance.run(parsed)
    except KeyboardInterrupt:
        print()  # Clean line after ^C
        return 130
    except Exception as e:
        if parsed.debug:
            raise
        cli.error(str(e))
        return 1


def cli_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
