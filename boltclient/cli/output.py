#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""
CLI output styling with semantic design tokens.

Exposes only semantic methods (device, key, value, etc.), not colors.
Respects NO_COLOR env var and TTY detection.
"""

import os
import sys
from enum import Enum, auto

from boltclient.types import Status

# ─────────────────────────────────────────────────────────────────────────────
# Design Tokens (internal)
# ─────────────────────────────────────────────────────────────────────────────


class _Token(Enum):
    """Semantic design tokens, mapping UI concepts to colors."""

    DEVICE = auto()  # Device names
    KEY = auto()  # Property names, labels
    VALUE = auto()  # Property values, data
    PATH = auto()  # Object paths
    HEADER = auto()  # Section titles (bold only)

    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    MUTED = auto()  # Metadata, less important


_THEME: dict[_Token, tuple[int, int, int] | None] = {
    _Token.DEVICE: (128, 255, 234),
    _Token.KEY: (128, 255, 234),
    _Token.VALUE: (225, 53, 255),
    _Token.PATH: (128, 255, 234),
    _Token.HEADER: None,
    _Token.SUCCESS: (80, 250, 123),
    _Token.ERROR: (255, 99, 99),
    _Token.WARNING: (241, 250, 140),
    _Token.MUTED: (128, 128, 128),
}

_STATUS_TOKENS = {
    Status.DISCONNECTED: _Token.MUTED,
    Status.CONNECTED: _Token.WARNING,
    Status.AUTHORIZING: _Token.WARNING,
    Status.AUTH_ERROR: _Token.ERROR,
    Status.AUTHORIZED: _Token.SUCCESS,
    Status.AUTHORIZED_SECURE: _Token.SUCCESS,
    Status.AUTHORIZED_NEWKEY: _Token.SUCCESS,
}


CHECKMARK = "✓"
CROSS = "✗"
BULLET = "●"


class Output:
    """
    CLI output with semantic styling.

    All public methods use UI concepts (device, key, value), not colors.
    """

    def __init__(self, force_color: bool | None = None):
        self._color_enabled = self._detect_color(force_color)

    def _detect_color(self, force: bool | None) -> bool:
        """Detect if color output should be enabled."""
        if force is not None:
            return force
        # NO_COLOR standard: https://no-color.org/
        if os.environ.get("NO_COLOR"):
            return False
        if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
            return False
        return os.environ.get("TERM") != "dumb"

    @property
    def color_enabled(self) -> bool:
        return self._color_enabled

    def _rgb(self, r: int, g: int, b: int, text: str) -> str:
        if not self._color_enabled:
            return text
        return f"\x1b[38;2;{r};{g};{b}m{text}\x1b[0m"

    def _bold(self, text: str) -> str:
        if not self._color_enabled:
            return text
        return f"\x1b[1m{text}\x1b[0m"

    def _apply(self, token: _Token, text: str, bold: bool = False) -> str:
        rgb = _THEME.get(token)
        result = text
        if rgb is not None:
            result = self._rgb(*rgb, result)
        if bold:
            result = self._bold(result)
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Semantic methods: content types
    # ─────────────────────────────────────────────────────────────────────────

    def device(self, text: str) -> str:
        return self._apply(_Token.DEVICE, text, bold=True)

    def key(self, text: str) -> str:
        return self._apply(_Token.KEY, text)

    def value(self, text: str) -> str:
        return self._apply(_Token.VALUE, text)

    def path(self, text: str) -> str:
        return self._apply(_Token.PATH, text)

    def header(self, text: str) -> str:
        return self._apply(_Token.HEADER, text, bold=True)

    def status(self, status: Status) -> str:
        """Format a device status, colored by how trusted it is."""
        token = _STATUS_TOKENS.get(status, _Token.MUTED)
        return f"{self._apply(token, BULLET)} {status.nick}"

    # ─────────────────────────────────────────────────────────────────────────
    # Semantic methods: states
    # ─────────────────────────────────────────────────────────────────────────

    def success(self, message: str) -> str:
        mark = self._apply(_Token.SUCCESS, CHECKMARK)
        return f"{mark} {message}"

    def error(self, message: str) -> str:
        mark = self._apply(_Token.ERROR, CROSS)
        return f"{mark} {message}"

    def warning(self, message: str) -> str:
        mark = self._apply(_Token.WARNING, "!")
        return f"{mark} {message}"

    def muted(self, text: str) -> str:
        return self._apply(_Token.MUTED, text)

    # ─────────────────────────────────────────────────────────────────────────
    # Compound formatters
    # ─────────────────────────────────────────────────────────────────────────

    def kv(self, k: str, v: str) -> str:
        """Format a key-value pair inline."""
        return f"{self.key(k)} = {self.value(v)}"
