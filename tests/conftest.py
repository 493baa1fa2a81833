# boltclient test configuration and shared fixtures
from __future__ import annotations

import pytest

from boltclient.config import Config
from fake_bus import FakeService, FakeTransport

# ─────────────────────────────────────────────────────────────────────────────
# Fake daemon fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of the environment."""
    return Config()


@pytest.fixture
def service() -> FakeService:
    """Daemon with a host controller "A" and a dock "B" plugged into it."""
    svc = FakeService(version=1)
    svc.add_device("/org/freedesktop/bolt/devices/a", "A", Name="Host", Status=4)
    svc.add_device("/org/freedesktop/bolt/devices/b", "B", parent="A", Name="Dock")
    return svc


@pytest.fixture
def empty_service() -> FakeService:
    """Daemon without devices."""
    return FakeService(version=1)


@pytest.fixture
def transport(service) -> FakeTransport:
    return FakeTransport(service)


# ─────────────────────────────────────────────────────────────────────────────
# Pytest configuration
# ─────────────────────────────────────────────────────────────────────────────


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests requiring a running boltd")
