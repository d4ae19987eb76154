"""
Core business logic for batteries.

This module is UI-agnostic: it only loads rules, reads devices and builds views.
"""

from batteries.core import (
    classify,
    config,
    paths,
    upower,
    views,
)

__all__ = [
    "classify",
    "config",
    "paths",
    "upower",
    "views",
]
