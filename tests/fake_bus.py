#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
In-memory stand-in for boltd and the bus transport.

FakeService holds devices and answers the manager and device methods.
FakeTransport hands out FakeProxy objects with the same surface as
boltclient.proxy.RemoteProxy. Failures can be injected per method.
"""

from boltclient.errors import RemoteError
from boltclient.events import PROPERTIES_CHANGED, EventHub
from boltclient.interfaces import DEVICE_INTERFACE, MANAGER_INTERFACE, MANAGER_PATH
from boltclient.proxy import Subscription
from boltclient.types import KeyState, Policy, Security, Status

UNKNOWN_OBJECT = "org.freedesktop.DBus.Error.UnknownObject"
BOLT_FAILED = "org.freedesktop.bolt.Error.Failed"


class FakeService:
    """Devices and method handlers of a pretend daemon."""

    def __init__(self, version=1):
        self.manager_props = {"Version": version, "Probing": False}
        self.devices: dict[str, dict] = {}
        self.calls: list[tuple[str, str, tuple]] = []
        self.failures: dict[str, RemoteError] = {}
        self.list_paths: list[str] | None = None
        self.enroll_paths: dict[str, str] = {}
        self._watchers: list["FakeProxy"] = []

    def add_device(self, path, uid, parent="", **props):
        self.devices[path] = {
            "Uid": uid,
            "Name": props.pop("Name", f"Device {uid}"),
            "Vendor": props.pop("Vendor", "ACME"),
            "Status": props.pop("Status", int(Status.CONNECTED)),
            "SysfsPath": props.pop("SysfsPath", f"/sys/bus/thunderbolt/devices/{uid}"),
            "Security": props.pop("Security", int(Security.USER)),
            "Parent": parent,
            "Stored": props.pop("Stored", False),
            "Policy": props.pop("Policy", int(Policy.DEFAULT)),
            "Key": props.pop("Key", int(KeyState.MISSING)),
            **props,
        }
        return path

    def remove_device(self, path):
        del self.devices[path]

    def path_for_uid(self, uid):
        for path, props in self.devices.items():
            if props["Uid"] == uid:
                return path
        return None

    def fail(self, method, name=BOLT_FAILED, message="injected failure"):
        self.failures[method] = RemoteError(name, message)

    def calls_to(self, method):
        return [args for _, m, args in self.calls if m == method]

    def properties(self, path, interface_name):
        if interface_name == MANAGER_INTERFACE and path == MANAGER_PATH:
            return dict(self.manager_props)
        if interface_name == DEVICE_INTERFACE and path in self.devices:
            return dict(self.devices[path])
        raise RemoteError(UNKNOWN_OBJECT, f"No such object path '{path}'")

    def set_property(self, path, name, value):
        """Change a property and notify watching proxies, like PropertiesChanged."""
        target = self.manager_props if path == MANAGER_PATH else self.devices[path]
        target[name] = value
        for proxy in list(self._watchers):
            if proxy.path == path:
                proxy.notify(name, value)

    def watch(self, proxy):
        self._watchers.append(proxy)

    def unwatch(self, proxy):
        if proxy in self._watchers:
            self._watchers.remove(proxy)

    def watcher_count(self, path=None):
        return sum(1 for p in self._watchers if path is None or p.path == path)

    async def handle(self, path, method, args):
        self.calls.append((path, method, args))
        if method in self.failures:
            raise self.failures[method]

        if method == "ListDevices":
            return list(self.list_paths if self.list_paths is not None else self.devices)

        if method == "DeviceByUid":
            (uid,) = args
            found = self.path_for_uid(uid)
            if found is None:
                raise RemoteError(BOLT_FAILED, f"device with id '{uid}' could not be found.")
            return found

        if method == "EnrollDevice":
            uid, policy, _flags = args
            found = self.path_for_uid(uid)
            if found is None:
                found = self.add_device(self.enroll_paths.get(uid, f"/device/{uid}"), uid)
            self.set_property(found, "Stored", True)
            self.set_property(found, "Policy", policy)
            self.set_property(found, "Status", int(Status.AUTHORIZED))
            return found

        if method == "ForgetDevice":
            (uid,) = args
            found = self.path_for_uid(uid)
            if found is None:
                raise RemoteError(BOLT_FAILED, f"device with id '{uid}' could not be found.")
            self.set_property(found, "Stored", False)
            return None

        if method == "Authorize":
            if path not in self.devices:
                raise RemoteError(UNKNOWN_OBJECT, f"No such object path '{path}'")
            self.set_property(path, "Status", int(Status.AUTHORIZED))
            return None

        raise RemoteError("org.freedesktop.DBus.Error.UnknownMethod", method)


class FakeProxy:
    """Same surface as RemoteProxy, backed by a FakeService."""

    def __init__(self, service, path, interface_name):
        self.service = service
        self.path = path
        self.interface_name = interface_name
        self.cache = {}
        self.subscribers: dict[str, list] = {}
        self.unsubscribed: list[Subscription] = []
        self.released = False
        self.events = EventHub()

    def get_cached_property(self, name, default=None):
        return self.cache.get(name, default)

    async def refresh(self):
        self.cache = self.service.properties(self.path, self.interface_name)

    @property
    def watching(self):
        return self in self.service._watchers

    def watch(self):
        if not self.watching:
            self.service.watch(self)

    def release(self):
        self.released = True
        self.service.unwatch(self)

    def notify(self, name, value):
        self.cache[name] = value
        self.events.emit(PROPERTIES_CHANGED, [name])

    async def call(self, method, *args):
        return await self.service.handle(self.path, method, args)

    def subscribe(self, signal, handler):
        self.subscribers.setdefault(signal, []).append(handler)
        return Subscription(signal, handler)

    def unsubscribe(self, token):
        # raises ValueError on a second unsubscribe of the same token
        self.subscribers[token.signal].remove(token.handler)
        self.unsubscribed.append(token)

    def fire(self, signal, *args):
        for handler in list(self.subscribers.get(signal, ())):
            handler(*args)


class FakeTransport:
    """Hands out FakeProxy objects for a FakeService."""

    def __init__(self, service, connect_error=None):
        self.service = service
        self.connect_error = connect_error
        self.proxy_errors: dict[str, Exception] = {}
        self.connected = False
        self.disconnects = 0
        self.proxies: list[FakeProxy] = []

    async def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True
        return self

    def disconnect(self):
        self.connected = False
        self.disconnects += 1

    async def get_proxy(self, path, interface_name, strict=False):
        if path in self.proxy_errors:
            raise self.proxy_errors[path]
        proxy = FakeProxy(self.service, path, interface_name)
        try:
            await proxy.refresh()
        except RemoteError:
            if strict:
                raise
        proxy.watch()
        self.proxies.append(proxy)
        return proxy

    @property
    def manager(self) -> FakeProxy:
        return next(p for p in self.proxies if p.interface_name == MANAGER_INTERFACE)
