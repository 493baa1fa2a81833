#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name
"""
Enumerations shared by the manager and device interfaces.

Values are the unsigned integers used on the bus. Anything the
daemon sends that we do not know about maps to UNKNOWN.
"""
from enum import IntEnum, IntFlag


class _NickMixin:
    """
    String names ("nicks") for bus enumerations, e.g. AUTH_ERROR <-> "auth-error"
    """

    @property
    def nick(self) -> str:
        return self.name.lower().replace('_', '-')


    @classmethod
    def from_nick(cls, nick: str):
        """
        Look up a member by nick, case-insensitively

        :raises ValueError: if no member has that nick
        """
        if nick is not None:
            key = nick.strip().upper().replace('-', '_')
            if key != 'UNKNOWN' and key in cls.__members__:
                return cls.__members__[key]

        raise ValueError("invalid %s '%s'" % (cls.__name__.lower(), nick))


    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class Status(_NickMixin, IntEnum):
    """
    Connection and trust state of a device
    """
    UNKNOWN = -1
    DISCONNECTED = 0
    CONNECTED = 1
    AUTHORIZING = 2
    AUTH_ERROR = 3
    AUTHORIZED = 4
    AUTHORIZED_SECURE = 5
    AUTHORIZED_NEWKEY = 6

    @property
    def is_authorized(self) -> bool:
        return self in (Status.AUTHORIZED,
                        Status.AUTHORIZED_SECURE,
                        Status.AUTHORIZED_NEWKEY)

    @property
    def is_connected(self) -> bool:
        return self > Status.DISCONNECTED


class Policy(_NickMixin, IntEnum):
    """
    What to do when an enrolled device is connected again
    """
    UNKNOWN = -1
    DEFAULT = 0
    MANUAL = 1
    AUTO = 2


class Security(_NickMixin, IntEnum):
    """
    Security level of the domain a device was authorized in.

    USER and SECURE are the characters the kernel writes to sysfs.
    """
    UNKNOWN = -1
    NONE = 0
    DPONLY = 1
    USER = ord('1')
    SECURE = ord('2')


class KeyState(_NickMixin, IntEnum):
    """
    Whether the daemon holds a key for a device
    """
    UNKNOWN = -1
    MISSING = 0
    HAVE = 1
    NEW = 2


class AuthFlags(IntFlag):
    """
    Options for Authorize and EnrollDevice
    """
    NONE = 0
    ALLOW_INSECURE = 1 << 0
    ALLOW_STORED_KEY = 1 << 1
