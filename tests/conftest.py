"""Shared helpers for batteries tests."""
import pytest

from batteries.core.upower import RawDevice, DeviceSourceError


def make_device(name='BAT0', percentage=87.04, category=2, serial='S0', vendor='LGC'):
    """Create a RawDevice with realistic defaults (an internal laptop battery)."""
    return RawDevice(
        name=name,
        percentage=percentage,
        category=category,
        serial=serial,
        vendor=vendor,
    )


class FakeSource:
    """Device source returning a fixed snapshot, or failing like a broken bus."""

    def __init__(self, devices=(), error=None):
        self._devices = list(devices)
        self._error = error

    def list_devices(self):
        if self._error is not None:
            raise DeviceSourceError(self._error)
        return list(self._devices)


@pytest.fixture
def config_file(tmp_path):
    """Path to a not-yet-existing rules file inside a temp config dir."""
    return tmp_path / 'batteries' / 'configs.toml'
