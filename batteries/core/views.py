"""
Views over classified devices.

- Full view: every device with raw and mapped fields plus the suppression flag
- Summary view: display name, percentage and display type, suppressed devices
  dropped unless asked for

Both preserve the order in which devices were read.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Union

from batteries.core.classify import ClassifiedDevice

@dataclass(frozen=True)
class FullRecord:
    name: str
    percentage: str
    device_type: str
    mapped_name: str
    mapped_type: str
    suppressed: bool
    serial: str
    vendor: str
    numeric_type: int

@dataclass(frozen=True)
class SummaryRecord:
    name: str
    percentage: str
    device_type: str

Record = Union[FullRecord, SummaryRecord]

@dataclass(frozen=True)
class Views:
    full: list[FullRecord]
    summary: list[SummaryRecord]

def format_percentage(value: float) -> str:
    # Not clamped: out-of-range readings are shown as reported
    return f"{value:.1f}%"

def full_view(classified: Iterable[ClassifiedDevice]) -> list[FullRecord]:
    return [
        FullRecord(
            name=c.device.name,
            percentage=format_percentage(c.device.percentage),
            device_type=c.type_label,
            mapped_name=c.display_name,
            mapped_type=c.display_type,
            suppressed=c.suppressed,
            serial=c.device.serial,
            vendor=c.device.vendor,
            numeric_type=c.device.category,
        )
        for c in classified
    ]

def summary_view(
    classified: Iterable[ClassifiedDevice],
    include_suppressed: bool = False,
) -> list[SummaryRecord]:
    return [
        SummaryRecord(
            name=c.display_name,
            percentage=format_percentage(c.device.percentage),
            device_type=c.display_type,
        )
        for c in classified
        if include_suppressed or not c.suppressed
    ]

def build_views(
    classified: Iterable[ClassifiedDevice],
    include_suppressed: bool = False,
) -> Views:
    classified = list(classified)
    return Views(
        full=full_view(classified),
        summary=summary_view(classified, include_suppressed),
    )
