#
# Copyright (C) 2026 boltclient Developers — LGPL-3.0-or-later
#
"""Tests for CLI base infrastructure."""

import logging

import pytest
from dbus_fast import BusType

from boltclient.cli.cli_base import BoltCLI
from boltclient.log import Log


@pytest.fixture(autouse=True)
def restore_log_state(monkeypatch):
    for name in ("BOLTCLIENT_BUS", "BOLTCLIENT_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    level, color = Log._level, Log._use_color
    yield
    Log.set_level(level)
    Log.enable_color(color)


def _options(cli):
    return {tuple(a.option_strings) for a in cli.parser._actions if a.option_strings}


class TestParserCreation:
    """Test argument parser setup."""

    def test_has_version_flag(self):
        assert ("-v", "--version") in _options(BoltCLI())

    def test_has_debug_flag(self):
        assert ("--debug",) in _options(BoltCLI())

    def test_has_no_color_flag(self):
        assert ("--no-color",) in _options(BoltCLI())

    def test_has_session_flag(self):
        assert ("--session",) in _options(BoltCLI())

    def test_subparsers_are_shared(self):
        cli = BoltCLI()
        assert cli.add_subparsers() is cli.add_subparsers()


class TestArgParsing:
    def test_no_color_disables_output_color(self):
        cli = BoltCLI()
        cli.parse_args(["--no-color"])
        assert cli.out.color_enabled is False

    def test_debug_raises_log_level(self):
        cli = BoltCLI()
        logger = Log.get("boltclient.test.cli")
        cli.parse_args(["--debug"])
        assert logger.level == logging.DEBUG


class TestClientConfig:
    def test_system_bus_by_default(self):
        cli = BoltCLI()
        config = cli.client_config(cli.parse_args([]))
        assert config.bus_type == BusType.SYSTEM

    def test_session_flag(self):
        cli = BoltCLI()
        config = cli.client_config(cli.parse_args(["--session"]))
        assert config.bus_type == BusType.SESSION

    def test_open_client_uses_factory(self):
        seen = []
        cli = BoltCLI(client_factory=lambda config: seen.append(config) or "client")

        assert cli.open_client(cli.parse_args(["--session"])) == "client"
        assert seen[0].bus_type == BusType.SESSION


class TestError:
    def test_error_exits(self, capsys):
        cli = BoltCLI()
        with pytest.raises(SystemExit) as exc:
            cli.error("broken")

        assert exc.value.code == 1
        assert "broken" in capsys.readouterr().err
