"""
Load the device override document.

Recovery policy: configuration problems never fail a report. A missing
document is created with empty rule lists; an unreadable, unparsable or
malformed document yields ``Config.empty()``. Each fallback is logged.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from batteries.core import paths

logger = logging.getLogger(__name__)

DEFAULT_DOCUMENT = "device_mapping = []\ndevice_suppress = []\n"

@dataclass(frozen=True)
class MappingRule:
    """Rename a device (and its displayed type) matched by serial"""
    serial: str
    name: str
    device_type: str

@dataclass(frozen=True)
class SuppressRule:
    """Hide devices matching any populated field"""
    serial: str | None = None
    model: str | None = None
    vendor: str | None = None
    device_type: int | None = None

@dataclass(frozen=True)
class Config:
    device_mapping: tuple[MappingRule, ...] = ()
    device_suppress: tuple[SuppressRule, ...] = ()

    @classmethod
    def empty(cls) -> Config:
        return cls()

def _require_str(entry: dict[str, Any], key: str) -> str:
    value = entry[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value

def _optional_str(entry: dict[str, Any], key: str) -> str | None:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value

def _optional_code(entry: dict[str, Any], key: str) -> int | None:
    value = entry.get(key)
    if value is None:
        return None
    # bool is an int subclass, but `device_type = true` is not a category
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TypeError(f"'{key}' must be a non-negative integer")
    return value

def parse_config(data: dict[str, Any]) -> Config:
    """
    Build a Config from a decoded TOML document.

    Both ``device_mapping`` and ``device_suppress`` must be present (they may
    be empty). Raises KeyError, TypeError or ValueError on a malformed document.
    """
    mapping_data = data["device_mapping"]
    suppress_data = data["device_suppress"]
    if not isinstance(mapping_data, list) or not isinstance(suppress_data, list):
        raise TypeError("'device_mapping' and 'device_suppress' must be arrays")

    mapping: list[MappingRule] = []
    for entry in mapping_data:
        if not isinstance(entry, dict):
            raise TypeError("device_mapping entries must be tables")
        mapping.append(
            MappingRule(
                serial=_require_str(entry, "serial"),
                name=_require_str(entry, "name"),
                device_type=_require_str(entry, "device_type"),
            )
        )

    suppress: list[SuppressRule] = []
    for entry in suppress_data:
        if not isinstance(entry, dict):
            raise TypeError("device_suppress entries must be tables")
        suppress.append(
            SuppressRule(
                serial=_optional_str(entry, "serial"),
                model=_optional_str(entry, "model"),
                vendor=_optional_str(entry, "vendor"),
                device_type=_optional_code(entry, "device_type"),
            )
        )

    return Config(device_mapping=tuple(mapping), device_suppress=tuple(suppress))

def _write_default(path: Path) -> Config:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_DOCUMENT)
    except OSError as e:
        logger.warning("Could not create default config %s: %s", path, e)
    else:
        logger.info("Created default config at %s", path)
    return Config.empty()

def load_config(path: Path | None = None) -> Config:
    """
    Load the override document, creating it when absent.

    Never raises: every failure degrades to an empty Config.
    """
    path = path or paths.CONFIG_FILE

    try:
        text = path.read_text()
    except FileNotFoundError:
        return _write_default(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return Config.empty()

    try:
        cfg = parse_config(tomllib.loads(text))
    except (tomllib.TOMLDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Ignoring invalid config %s: %s", path, e)
        return Config.empty()

    logger.debug(
        "Loaded %d mapping rule(s), %d suppress rule(s) from %s",
        len(cfg.device_mapping),
        len(cfg.device_suppress),
        path,
    )
    return cfg
