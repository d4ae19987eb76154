from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from batteries.core.config import Config, MappingRule, SuppressRule
from batteries.core.upower import RawDevice

# UPower device Type codes
TYPE_LABELS: dict[int, str] = {
    1: "Line Power",
    2: "Battery",
    3: "UPS",
    4: "Monitor",
    5: "Mouse",
    6: "Keyboard",
    7: "PDA",
    8: "Phone",
}

UNKNOWN_LABEL = "Unknown"

@dataclass(frozen=True)
class ClassifiedDevice:
    device: RawDevice
    type_label: str
    display_name: str
    display_type: str
    suppressed: bool

def type_label(code: int) -> str:
    return TYPE_LABELS.get(code, UNKNOWN_LABEL)

def find_mapping(device: RawDevice, rules: Iterable[MappingRule]) -> MappingRule | None:
    """First rule whose serial equals the device serial (stored order wins)"""
    for rule in rules:
        if rule.serial == device.serial:
            return rule
    return None

def _rule_matches(rule: SuppressRule, device: RawDevice) -> bool:
    # Empty strings never match, even against an empty device field
    if rule.serial and rule.serial == device.serial:
        return True
    if rule.model and rule.model == device.name:
        return True
    if rule.vendor and rule.vendor == device.vendor:
        return True
    if rule.device_type is not None and rule.device_type == device.category:
        return True
    return False

def is_suppressed(device: RawDevice, rules: Iterable[SuppressRule]) -> bool:
    """
    A device is suppressed if any populated field of any rule equals the
    matching device field (serial, model/name, vendor, numeric type).
    """
    return any(_rule_matches(rule, device) for rule in rules)

def classify(device: RawDevice, config: Config) -> ClassifiedDevice:
    label = type_label(device.category)

    mapping = find_mapping(device, config.device_mapping)
    if mapping is not None:
        display_name, display_type = mapping.name, mapping.device_type
    else:
        display_name, display_type = device.name, label

    return ClassifiedDevice(
        device=device,
        type_label=label,
        display_name=display_name,
        display_type=display_type,
        suppressed=is_suppressed(device, config.device_suppress),
    )

def classify_all(devices: Iterable[RawDevice], config: Config) -> list[ClassifiedDevice]:
    return [classify(d, config) for d in devices]
