#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
from collections.abc import Callable

from boltclient.log import Log

DEVICE_ADDED = "device-added"
DEVICE_REMOVED = "device-removed"
DEVICE_CHANGED = "device-changed"
PROBING_CHANGED = "probing-changed"
PROPERTIES_CHANGED = "properties-changed"

_logger = Log.get("boltclient.events")


class EventHub(object):
    """
    A simple named-event dispatcher.

    Handlers connected with on() are invoked synchronously by emit(),
    in the order they were connected. A failing handler is logged and
    does not prevent the others from running.
    """
    def __init__(self):
        self._handlers: dict[str, list[Callable]] = {}


    def on(self, event: str, handler: Callable) -> Callable:
        """
        Connect a handler to an event

        :param event: Name of the event
        :param handler: Function to invoke when the event is emitted
        :return: the handler, for use with off()
        """
        self._handlers.setdefault(event, []).append(handler)
        return handler


    def off(self, event: str, handler: Callable) -> bool:
        """
        Disconnect a handler

        :return: True if the handler was connected
        """
        handlers = self._handlers.get(event, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True


    def emit(self, event: str, *args):
        """
        Emit an event, invoking all connected handlers

        :params args: Arguments to call handlers with
        """
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(*args)
            except Exception as err:
                _logger.warning("Handler for %s failed: %s", event, err)
