#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Async client for the bolt device manager.

ManagerClient owns the connection to org.freedesktop.bolt1.Manager,
turns its DeviceAdded/DeviceRemoved signals into "device-added" and
"device-removed" events, reports changes of the Probing property as
"probing-changed" and hands out DeviceHandle objects for the paths the
daemon returns. Every device proxy the client creates is released by
close().

Public operations check for a closed client when they are called, not
when they are awaited, so misuse fails immediately:

    client = await ManagerClient.connect()
    for device in await client.list_devices():
        parent = await client.device_get_parent(device)
"""

import asyncio
import weakref
from collections.abc import Awaitable, Callable

from boltclient.config import Config
from boltclient.device import DeviceHandle
from boltclient.errors import ClientClosedError, ConnectError, TopologyError
from boltclient.events import (DEVICE_ADDED, DEVICE_REMOVED, PROBING_CHANGED,
                               PROPERTIES_CHANGED, EventHub)
from boltclient.interfaces import DEVICE_INTERFACE, MANAGER_INTERFACE
from boltclient.log import Log
from boltclient.proxy import BusTransport
from boltclient.types import AuthFlags, Policy

_logger = Log.get("boltclient.client")

_SIGNAL_EVENTS = {
    "DeviceAdded": DEVICE_ADDED,
    "DeviceRemoved": DEVICE_REMOVED,
}


def deliver(aw: Awaitable, callback: Callable) -> asyncio.Future:
    """
    Run an awaitable and report its outcome to a callback.

    The callback is invoked exactly once, as callback(result, None) on
    success or callback(None, error) on failure or cancellation.
    Must be called with a running event loop.
    """
    future = asyncio.ensure_future(aw)

    def _done(fut):
        if fut.cancelled():
            callback(None, asyncio.CancelledError())
        elif fut.exception() is not None:
            callback(None, fut.exception())
        else:
            callback(fut.result(), None)

    future.add_done_callback(_done)
    return future


class ManagerClient:
    """Client for the bolt device manager."""

    def __init__(self, transport=None, config: Config | None = None):
        self._config = config if config is not None else Config.from_env()
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else BusTransport.from_config(self._config)
        self._manager = None
        self._subscriptions = []
        self._closed = False
        self._signal_queue: asyncio.Queue = asyncio.Queue()
        self._signal_task: asyncio.Task | None = None
        self._device_proxies = weakref.WeakSet()
        self.events = EventHub()

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    async def connect(cls, transport=None, config: Config | None = None) -> "ManagerClient":
        """
        Connect to the manager and subscribe to its signals

        :param transport: object producing proxies, a BusTransport by default
        :param config: settings, read from the environment by default
        :raises ConnectError: if the manager cannot be reached
        """
        client = cls(transport, config)
        await client._setup()
        return client

    @classmethod
    def create(cls, ready_callback: Callable, transport=None,
               config: Config | None = None) -> asyncio.Future:
        """
        Connect in the background and call ready_callback(client, error) once
        """
        return deliver(cls.connect(transport, config), ready_callback)

    async def _setup(self):
        try:
            await self._transport.connect()
            self._manager = await self._transport.get_proxy(
                self._config.manager_path, MANAGER_INTERFACE, strict=True
            )
            for signal in _SIGNAL_EVENTS:
                token = self._manager.subscribe(signal, self._signal_handler(signal))
                self._subscriptions.append(token)
            self._manager.events.on(PROPERTIES_CHANGED, self._manager_changed)
        except Exception as err:
            _logger.error("Cannot connect to %s: %s", self._config.bus_name, err)
            self.close()
            if isinstance(err, ConnectError):
                raise
            raise ConnectError(f"Cannot connect to {self._config.bus_name}: {err}") from err

        self._signal_task = asyncio.ensure_future(self._dispatch_signals())
        _logger.debug("Connected to %s (version %s)", self._config.bus_name, self.version)

    # ─────────────────────────────────────────────────────────────────────────
    # Signals
    # ─────────────────────────────────────────────────────────────────────────

    def _signal_handler(self, signal: str) -> Callable:
        def _handler(path):
            if not self._closed:
                self._signal_queue.put_nowait((signal, path))

        return _handler

    def _manager_changed(self, names):
        if "Probing" in names and not self._closed:
            probing = bool(self._manager.get_cached_property("Probing", False))
            self._signal_queue.put_nowait(("Probing", probing))

    async def _dispatch_signals(self):
        while True:
            signal, arg = await self._signal_queue.get()
            try:
                if self._closed:
                    continue
                if signal == "Probing":
                    _logger.debug("Probing: %s", arg)
                    self.events.emit(PROBING_CHANGED, arg)
                    continue

                device = await self._make_device(arg)
                _logger.debug("%s: %s", signal, arg)
                self.events.emit(_SIGNAL_EVENTS[signal], device)
                if signal == "DeviceRemoved":
                    device.release()
            except Exception as err:
                _logger.warning("Failed to handle %s for %s: %s", signal, arg, err)
            finally:
                self._signal_queue.task_done()

    def flush_events(self) -> Awaitable[None]:
        """Wait until every signal received so far has been emitted."""
        self._require_manager()
        return self._signal_queue.join()

    def on(self, event: str, handler: Callable) -> Callable:
        """
        Connect a handler to one of the client events

        DEVICE_ADDED and DEVICE_REMOVED handlers receive a DeviceHandle,
        PROBING_CHANGED handlers the new probing state.
        """
        self._require_manager()
        return self.events.on(event, handler)

    def off(self, event: str, handler: Callable) -> bool:
        self._require_manager()
        return self.events.off(event, handler)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def config(self) -> Config:
        return self._config

    @property
    def version(self) -> int | None:
        """Interface version of the daemon."""
        return self._require_manager().get_cached_property("Version")

    @property
    def probing(self) -> bool:
        """True while the daemon is enumerating devices."""
        return bool(self._require_manager().get_cached_property("Probing", False))

    # ─────────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────────

    def _require_manager(self):
        if self._closed or self._manager is None:
            raise ClientClosedError()
        return self._manager

    async def _make_device(self, path: str) -> DeviceHandle:
        proxy = await self._transport.get_proxy(path, DEVICE_INTERFACE)
        self._device_proxies.add(proxy)
        return DeviceHandle(proxy)

    def list_devices(self) -> Awaitable[list[DeviceHandle]]:
        """
        All devices known to the daemon, in the order it reports them

        :raises RemoteError: if the call fails
        """
        return self._list_devices(self._require_manager())

    async def _list_devices(self, manager) -> list[DeviceHandle]:
        paths = await manager.call("ListDevices")
        results = await asyncio.gather(*(self._make_device(path) for path in paths),
                                       return_exceptions=True)

        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            for result in results:
                if isinstance(result, DeviceHandle):
                    result.release()
            raise errors[0]

        return list(results)

    def device_by_uid(self, uid: str) -> Awaitable[DeviceHandle]:
        """
        Look up a device by its uid

        :raises RemoteError: if the daemon does not know the uid
        """
        return self._device_by_uid(self._require_manager(), uid)

    async def _device_by_uid(self, manager, uid: str) -> DeviceHandle:
        path = await manager.call("DeviceByUid", uid)
        return await self._make_device(path)

    def enroll_device(self, uid: str, policy: Policy = Policy.DEFAULT,
                      flags: AuthFlags = AuthFlags.NONE) -> Awaitable[DeviceHandle]:
        """
        Authorize a device and store it in the daemon's database

        :param uid: uid of the device
        :param policy: what to do when the device is connected again
        :param flags: authorization options
        :return: a handle for the enrolled device
        """
        return self._enroll_device(self._require_manager(), uid, policy, flags)

    async def _enroll_device(self, manager, uid, policy, flags) -> DeviceHandle:
        path = await manager.call("EnrollDevice", uid, int(policy), int(flags))
        return await self._make_device(path)

    def forget_device(self, uid: str) -> Awaitable[None]:
        """Remove a device from the daemon's database."""
        return self._require_manager().call("ForgetDevice", uid)

    def device_get_parent(self, device: DeviceHandle) -> Awaitable[DeviceHandle | None]:
        """
        Resolve the device one hop upstream

        Returns None, without contacting the daemon, when the device has
        no parent. Only one hop is resolved; see device_get_ancestors().
        """
        return self._device_get_parent(self._require_manager(), device)

    async def _device_get_parent(self, manager, device: DeviceHandle) -> DeviceHandle | None:
        parent_uid = device.parent
        if not parent_uid:
            return None
        return await self._device_by_uid(manager, parent_uid)

    def device_get_ancestors(self, device: DeviceHandle,
                             max_hops: int | None = None) -> Awaitable[list[DeviceHandle]]:
        """
        Walk the parent chain up to the root

        :param max_hops: maximum chain length, config.max_parent_hops by default
        :return: parents ordered from the immediate parent to the root
        :raises TopologyError: if the chain loops or is longer than max_hops
        """
        self._require_manager()
        if max_hops is None:
            max_hops = self._config.max_parent_hops
        return self._device_get_ancestors(device, max_hops)

    async def _device_get_ancestors(self, device: DeviceHandle, max_hops: int) -> list[DeviceHandle]:
        chain: list[DeviceHandle] = []
        seen = {device.uid}
        current = device

        while True:
            parent = await self._device_get_parent(self._require_manager(), current)
            if parent is None:
                return chain

            if len(chain) >= max_hops:
                raise TopologyError(f"Parent chain of {device.uid} is longer than {max_hops}")
            if parent.uid in seen:
                raise TopologyError(f"Parent chain of {device.uid} loops at {parent.uid}")

            seen.add(parent.uid)
            chain.append(parent)
            current = parent

    # ─────────────────────────────────────────────────────────────────────────
    # Teardown
    # ─────────────────────────────────────────────────────────────────────────

    def close(self):
        """
        Unsubscribe from all signals and drop the manager

        Safe to call more than once. Every later operation raises
        ClientClosedError.
        """
        if self._closed:
            return
        self._closed = True

        while self._subscriptions:
            token = self._subscriptions.pop()
            try:
                self._manager.unsubscribe(token)
            except Exception as err:
                _logger.warning("Failed to unsubscribe from %s: %s", token.signal, err)

        if self._signal_task is not None:
            self._signal_task.cancel()
            self._signal_task = None

        while not self._signal_queue.empty():
            self._signal_queue.get_nowait()
            self._signal_queue.task_done()

        for proxy in list(self._device_proxies):
            proxy.release()
        self._device_proxies.clear()

        if self._manager is not None:
            self._manager.release()
            self._manager = None

        if self._owns_transport:
            self._transport.disconnect()

        _logger.debug("Client closed")

    async def __aenter__(self):
        self._require_manager()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()
