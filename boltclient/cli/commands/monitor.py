#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Monitor command: print devices as the daemon adds, changes and removes them.
"""

import asyncio
from argparse import ArgumentParser, Namespace
from datetime import datetime
from typing import ClassVar

from boltclient.cli.commands.base import Command
from boltclient.client import ManagerClient
from boltclient.device import DeviceHandle
from boltclient.events import DEVICE_ADDED, DEVICE_CHANGED, DEVICE_REMOVED, PROBING_CHANGED
from boltclient.util import camel_to_snake


def _format_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if hasattr(value, "nick"):
        return value.nick
    return str(value)


class MonitorCommand(Command):
    """Follow device and probing events."""

    name = "monitor"
    help = "Watch devices being added, changed and removed"
    aliases: ClassVar[list[str]] = ["watch"]

    def configure_parser(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "-n",
            "--count",
            type=int,
            default=0,
            metavar="N",
            help="stop after N events (0 = infinite)",
        )

    def run(self, args: Namespace) -> int:
        try:
            return super().run(args)
        except KeyboardInterrupt:
            self.print()
            self.print(self.out.muted("Monitoring stopped"))
            return 0

    def _timestamp(self) -> str:
        return self.out.muted(datetime.now().strftime("%H:%M:%S"))

    def _label(self, device: DeviceHandle) -> str:
        return f"[{device.uid or '(unknown)'}] {self.out.device(device.name or '(unknown)')}"

    async def execute(self, client: ManagerClient, args: Namespace) -> int:
        done = asyncio.Event()
        devices: dict[str, DeviceHandle] = {}
        seen = 0

        def _counted():
            nonlocal seen
            seen += 1
            if args.count and seen >= args.count:
                done.set()

        def _changed(device: DeviceHandle, names: list[str]):
            for name in names:
                value = _format_value(getattr(device, camel_to_snake(name), None))
                self.print(f"{self._timestamp()} {self._label(device)} | "
                           f"{self.out.key(name)} -> {self.out.value(value)}")
            _counted()

        def _track(device: DeviceHandle):
            previous = devices.pop(device.object_path, None)
            if previous is not None:
                previous.release()
            devices[device.object_path] = device
            device.on(DEVICE_CHANGED, _changed)

        def _added(device: DeviceHandle):
            uid = device.uid or self.out.muted("(gone)")
            self.print(f"{self._timestamp()} DeviceAdded: {self.out.path(device.object_path)} {uid}")
            _track(device)
            _counted()

        def _removed(device: DeviceHandle):
            known = devices.pop(device.object_path, None)
            if known is None:
                self.print(self.out.warning(f"DeviceRemoved for unknown device {device.object_path}"))
            else:
                known.release()
                self.print(f"{self._timestamp()} DeviceRemoved: "
                           f"{self.out.path(device.object_path)} {known.uid or '(unknown)'}")
            _counted()

        def _probing(probing: bool):
            self.print(f"{self._timestamp()} {'Probing started' if probing else 'Probing done'}")
            _counted()

        client.on(DEVICE_ADDED, _added)
        client.on(DEVICE_REMOVED, _removed)
        client.on(PROBING_CHANGED, _probing)

        self.print(self.out.muted(f"Daemon version {client.version}, watching for changes"))

        for device in await client.list_devices():
            if device.object_path in devices:
                device.release()
            else:
                _track(device)

        await done.wait()
        return 0
