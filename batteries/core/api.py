"""
Core API - facade running one device report.

The CLI only talks to this class; it wires the config store, the UPower
source, the classifier and the view builder together.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

from batteries.core import classify, config, views
from batteries.core.config import Config
from batteries.core.upower import RawDevice, UPowerSource
from batteries.core.views import Views

logger = logging.getLogger(__name__)

class DeviceSource(Protocol):
    def list_devices(self) -> list[RawDevice]: ...

class BatteriesCore:
    """
    Core API for building device reports.

    Args:
        config_path: Override document location (default: /etc/batteries/configs.toml)
        source_factory: Returns a connected device source (default: UPower on the system bus)
    """

    def __init__(
        self,
        config_path: Path | None = None,
        source_factory: Callable[[], DeviceSource] = UPowerSource.connect,
    ):
        self._config_path = config_path
        self._source_factory = source_factory

    def load_config(self) -> Config:
        """Load rules; never raises"""
        return config.load_config(self._config_path)

    def list_devices(self) -> list[RawDevice]:
        """Read all devices; raises DeviceSourceError on any transport failure"""
        return self._source_factory().list_devices()

    def report(self, include_suppressed: bool = False) -> Views:
        """
        Run the whole pipeline once: load config, read devices, classify,
        build both views.
        """
        cfg = self.load_config()
        devices = self.list_devices()
        classified = classify.classify_all(devices, cfg)
        logger.debug(
            "Classified %d device(s), %d suppressed",
            len(classified),
            sum(1 for c in classified if c.suppressed),
        )
        return views.build_views(classified, include_suppressed)

def get_core(config_path: Path | None = None) -> BatteriesCore:
    return BatteriesCore(config_path=config_path)
