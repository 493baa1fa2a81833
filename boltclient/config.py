#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Client configuration.

All settings come from the environment so that the same client can be
pointed at a test daemon on the session bus without code changes.
"""

import logging
import os
from dataclasses import dataclass

from dbus_fast import BusType

from boltclient.interfaces import BUS_NAME, MANAGER_PATH
from boltclient.log import Log

ENV_BUS = "BOLTCLIENT_BUS"
ENV_BUS_NAME = "BOLTCLIENT_BUS_NAME"
ENV_MANAGER_PATH = "BOLTCLIENT_MANAGER_PATH"
ENV_CALL_TIMEOUT = "BOLTCLIENT_CALL_TIMEOUT"
ENV_MAX_HOPS = "BOLTCLIENT_MAX_HOPS"
ENV_DEBUG = "BOLTCLIENT_DEBUG"

DEFAULT_MAX_PARENT_HOPS = 32

_BUS_TYPES = {
    "system": BusType.SYSTEM,
    "session": BusType.SESSION,
}


def debug_enabled(environ=None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get(ENV_DEBUG) is not None


@dataclass
class Config:
    """Connection and behaviour settings for ManagerClient."""

    bus_type: BusType = BusType.SYSTEM
    bus_name: str = BUS_NAME
    manager_path: str = MANAGER_PATH
    call_timeout: float = 0.0
    max_parent_hops: int = DEFAULT_MAX_PARENT_HOPS

    @classmethod
    def from_env(cls, environ=None) -> "Config":
        """
        Build a configuration from BOLTCLIENT_* environment variables.

        :param environ: mapping to read instead of os.environ
        :raises ValueError: if a variable holds an unusable value
        """
        environ = os.environ if environ is None else environ
        config = cls()

        bus = environ.get(ENV_BUS)
        if bus:
            try:
                config.bus_type = _BUS_TYPES[bus.lower()]
            except KeyError:
                raise ValueError(
                    f"{ENV_BUS} must be one of {', '.join(_BUS_TYPES)}, got {bus!r}"
                ) from None

        config.bus_name = environ.get(ENV_BUS_NAME) or config.bus_name
        config.manager_path = environ.get(ENV_MANAGER_PATH) or config.manager_path

        timeout = environ.get(ENV_CALL_TIMEOUT)
        if timeout:
            try:
                config.call_timeout = float(timeout)
            except ValueError:
                raise ValueError(f"{ENV_CALL_TIMEOUT} must be a number, got {timeout!r}") from None
            if config.call_timeout < 0:
                raise ValueError(f"{ENV_CALL_TIMEOUT} must not be negative")

        hops = environ.get(ENV_MAX_HOPS)
        if hops:
            try:
                config.max_parent_hops = int(hops)
            except ValueError:
                raise ValueError(f"{ENV_MAX_HOPS} must be an integer, got {hops!r}") from None
            if config.max_parent_hops < 1:
                raise ValueError(f"{ENV_MAX_HOPS} must be at least 1")

        if debug_enabled(environ):
            Log.set_level(logging.DEBUG)

        return config
