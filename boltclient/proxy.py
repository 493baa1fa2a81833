#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Remote object proxies on top of dbus-fast.

A RemoteProxy wraps one interface of one object path. Properties are
fetched once with GetAll and then kept current from PropertiesChanged,
so reads never block. Methods are invoked by their wire name and
failures come back as RemoteError.

The PropertiesChanged handler only holds a weak reference to its
proxy. A proxy that is no longer referenced is collected and its bus
handler removed, so short-lived device handles do not pile up on the
connection.
"""

import asyncio
import weakref
from collections.abc import Callable
from typing import Any, NamedTuple

from dbus_fast import BusType
from dbus_fast.aio import MessageBus
from dbus_fast.errors import DBusError

from boltclient.errors import CallTimeoutError, ConnectError, RemoteError
from boltclient.events import PROPERTIES_CHANGED, EventHub
from boltclient.interfaces import BUS_NAME, INTROSPECTION, PROPERTIES_INTERFACE
from boltclient.log import Log
from boltclient.util import camel_to_snake, unwrap_variants

_logger = Log.get("boltclient.proxy")


class Subscription(NamedTuple):
    """Token returned by RemoteProxy.subscribe()."""

    signal: str
    handler: Callable


class RemoteProxy:
    """
    Live view of one interface on one remote object.

    Emits PROPERTIES_CHANGED on .events with the list of property names
    whenever the cache is updated from the bus.
    """

    def __init__(self, path: str, interface_name: str, interface, properties, timeout: float = 0.0):
        self._path = path
        self._interface_name = interface_name
        self._iface = interface
        self._props_iface = properties
        self._timeout = timeout
        self._cache: dict[str, Any] = {}
        self._watch = None
        self.events = EventHub()

    @property
    def path(self) -> str:
        return self._path

    @property
    def interface_name(self) -> str:
        return self._interface_name

    @property
    def watching(self) -> bool:
        return self._watch is not None and self._watch.alive

    def get_cached_property(self, name: str, default=None):
        """Current value of a property, or default if unknown."""
        return self._cache.get(name, default)

    async def _await(self, method: str, coro):
        try:
            if self._timeout > 0:
                return await asyncio.wait_for(coro, self._timeout)
            return await coro
        except DBusError as err:
            raise RemoteError(err.type, err.text) from err
        except asyncio.TimeoutError as err:
            raise CallTimeoutError(method, self._timeout) from err

    async def refresh(self):
        """Re-read every property of the interface."""
        raw = await self._await("GetAll", self._props_iface.call_get_all(self._interface_name))
        self._cache = unwrap_variants(raw)
        _logger.debug("%s: loaded %d properties", self._path, len(self._cache))

    def watch(self):
        """Keep the property cache current from PropertiesChanged."""
        if self.watching:
            return

        ref = weakref.ref(self)

        def _changed(interface_name, changed, invalidated):
            proxy = ref()
            if proxy is not None:
                proxy._on_properties_changed(interface_name, changed, invalidated)

        self._props_iface.on_properties_changed(_changed)
        self._watch = weakref.finalize(self, self._props_iface.off_properties_changed, _changed)
        self._watch.atexit = False

    def release(self):
        """Stop tracking property changes."""
        if self._watch is not None:
            self._watch()
            self._watch = None

    def _on_properties_changed(self, interface_name, changed, invalidated):
        if interface_name != self._interface_name:
            return
        self._cache.update(unwrap_variants(changed))
        for name in invalidated:
            self._cache.pop(name, None)

        names = list(changed) + [name for name in invalidated if name not in changed]
        if names:
            self.events.emit(PROPERTIES_CHANGED, names)

    async def call(self, method: str, *args):
        """
        Invoke a remote method by its wire name

        :param method: method name as on the bus, e.g. "DeviceByUid"
        :return: the single out argument, or None
        :raises RemoteError: if the call fails
        """
        func = getattr(self._iface, "call_" + camel_to_snake(method))
        _logger.debug("%s: %s%r", self._path, method, args)
        return await self._await(method, func(*args))

    def subscribe(self, signal: str, handler: Callable) -> Subscription:
        """Connect a handler to a signal, receiving its arguments."""
        getattr(self._iface, "on_" + camel_to_snake(signal))(handler)
        return Subscription(signal, handler)

    def unsubscribe(self, token: Subscription):
        getattr(self._iface, "off_" + camel_to_snake(token.signal))(token.handler)


class BusTransport:
    """
    Produces RemoteProxy objects for the bolt daemon on a message bus.
    """

    def __init__(self, bus_type: BusType = BusType.SYSTEM, bus_name: str = BUS_NAME,
                 call_timeout: float = 0.0):
        self._bus_type = bus_type
        self._bus_name = bus_name
        self._call_timeout = call_timeout
        self._bus: MessageBus | None = None

    @classmethod
    def from_config(cls, config) -> "BusTransport":
        return cls(config.bus_type, config.bus_name, config.call_timeout)

    @property
    def connected(self) -> bool:
        return self._bus is not None and self._bus.connected

    async def connect(self):
        """Connect to the bus if not connected yet."""
        if self._bus is None:
            try:
                self._bus = await MessageBus(bus_type=self._bus_type).connect()
            except Exception as err:
                raise ConnectError(f"Cannot connect to the {self._bus_type.name.lower()} bus: {err}") from err
            _logger.debug("Connected to the %s bus", self._bus_type.name.lower())
        return self

    def disconnect(self):
        if self._bus is not None:
            self._bus.disconnect()
            self._bus = None

    async def get_proxy(self, path: str, interface_name: str, strict: bool = False) -> RemoteProxy:
        """
        Build a proxy for an object and load its properties

        :param path: object path
        :param interface_name: one of the interfaces in INTROSPECTION
        :param strict: raise if the properties cannot be loaded, otherwise
                       return a proxy with an empty cache
        """
        if not self.connected:
            raise ConnectError("Transport is not connected")

        obj = self._bus.get_proxy_object(self._bus_name, path, INTROSPECTION[interface_name])
        proxy = RemoteProxy(
            path,
            interface_name,
            obj.get_interface(interface_name),
            obj.get_interface(PROPERTIES_INTERFACE),
            timeout=self._call_timeout,
        )

        try:
            await proxy.refresh()
        except RemoteError as err:
            if strict:
                raise
            _logger.debug("%s: properties unavailable: %s", path, err)

        proxy.watch()
        return proxy
