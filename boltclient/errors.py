#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
Exceptions raised by the bolt client.
"""


class BoltError(Exception):
    """Base class for all client errors."""


class ConnectError(BoltError):
    """
    The manager could not be reached.

    Raised when the bus connection fails, the daemon is not running
    or access is denied. The underlying exception is chained.
    """


class RemoteError(BoltError):
    """
    A remote method call failed.

    The D-Bus error name and message are kept exactly as the
    daemon or the bus reported them.
    """

    def __init__(self, name: str, message: str):
        super().__init__(f"{name}: {message}" if message else name)
        self.name = name
        self.message = message


class CallTimeoutError(RemoteError):
    """The daemon did not answer within the configured call timeout."""

    def __init__(self, method: str, timeout: float):
        super().__init__(
            "org.freedesktop.DBus.Error.Timeout",
            f"{method} did not complete within {timeout:g}s",
        )
        self.method = method
        self.timeout = timeout


class ClientClosedError(BoltError):
    """The client was used after close()."""

    def __init__(self):
        super().__init__("client closed")


class TopologyError(BoltError):
    """The parent chain of a device loops or is deeper than allowed."""
