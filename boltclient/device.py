#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#

# pylint: disable=invalid-name

"""
Typed view of a single org.freedesktop.bolt1.Device object.
"""

from boltclient.events import DEVICE_CHANGED, PROPERTIES_CHANGED, EventHub
from boltclient.types import AuthFlags, KeyState, Policy, Security, Status


class DeviceHandle:
    """
    Reference to a device known to the daemon.

    Every attribute reads the live property cache of the underlying
    proxy, which the daemon keeps up to date. Two handles for the same
    uid are independent views of the same device.

    When the daemon changes properties, DEVICE_CHANGED is emitted with
    the handle and the list of changed wire names, e.g. ["Status"].
    """

    def __init__(self, proxy):
        self._proxy = proxy
        self.events = EventHub()
        proxy.events.on(PROPERTIES_CHANGED, self._properties_changed)

    def _properties_changed(self, names):
        self.events.emit(DEVICE_CHANGED, self, names)

    def on(self, event: str, handler):
        """Connect a handler(device, names) to DEVICE_CHANGED."""
        return self.events.on(event, handler)

    def off(self, event: str, handler) -> bool:
        return self.events.off(event, handler)

    def _get(self, name, default=None):
        return self._proxy.get_cached_property(name, default)

    @property
    def object_path(self) -> str:
        return self._proxy.path

    @property
    def uid(self) -> str | None:
        return self._get("Uid")

    @property
    def name(self) -> str:
        return self._get("Name", "")

    @property
    def vendor(self) -> str:
        return self._get("Vendor", "")

    @property
    def status(self) -> Status:
        return Status(self._get("Status", Status.UNKNOWN))

    @property
    def sysfs_path(self) -> str:
        return self._get("SysfsPath", "")

    @property
    def security(self) -> Security:
        return Security(self._get("Security", Security.UNKNOWN))

    @property
    def parent(self) -> str:
        """Uid of the upstream device, empty for a root device."""
        return self._get("Parent", "") or ""

    @property
    def stored(self) -> bool:
        return bool(self._get("Stored", False))

    @property
    def policy(self) -> Policy:
        return Policy(self._get("Policy", Policy.UNKNOWN))

    @property
    def key(self) -> KeyState:
        return KeyState(self._get("Key", KeyState.UNKNOWN))

    @property
    def is_authorized(self) -> bool:
        return self.status.is_authorized

    @property
    def is_connected(self) -> bool:
        return self.status.is_connected

    async def authorize(self, flags: AuthFlags = AuthFlags.NONE):
        """
        Ask the daemon to authorize the device

        :raises RemoteError: if the daemon refuses or the call fails
        """
        await self._proxy.call("Authorize", int(flags))

    async def refresh(self):
        """Re-read all properties from the daemon."""
        await self._proxy.refresh()

    def release(self):
        """Stop following property changes for this handle."""
        self._proxy.events.off(PROPERTIES_CHANGED, self._properties_changed)
        self._proxy.release()

    def __repr__(self):
        return f"<DeviceHandle {self.object_path} uid={self.uid!r}>"
