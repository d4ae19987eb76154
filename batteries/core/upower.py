"""
UPower device source over the D-Bus system bus.

PyGObject (Gio) is imported lazily so the rest of the package stays usable
without it; any transport failure surfaces as DeviceSourceError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from batteries.core import paths

logger = logging.getLogger(__name__)

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

class DeviceSourceError(RuntimeError):
    """The device source could not be reached or returned unusable data"""

@dataclass(frozen=True)
class RawDevice:
    name: str  # UPower "Model"
    percentage: float
    category: int  # UPower "Type"
    serial: str
    vendor: str

def _import_gio() -> tuple[Any, Any]:
    try:
        import gi
        gi.require_version("Gio", "2.0")
        from gi.repository import Gio, GLib
    except (ImportError, ValueError) as e:
        raise DeviceSourceError(
            f"PyGObject not available ({e}). Install: python-gobject"
        ) from e
    return Gio, GLib

def _expect(value: Any, kind: type, prop: str, object_path: str) -> Any:
    # D-Bus doubles may arrive as ints from some backends
    if kind is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DeviceSourceError(
            f"Property {prop} of {object_path} has unexpected type {type(value).__name__}"
        )
    return value

class UPowerSource:
    """
    Reads devices from UPower.

    Use ``UPowerSource.connect()`` to open the system bus. Every call is
    synchronous; a failing call raises DeviceSourceError.
    """

    def __init__(self, bus: Any):
        self._bus = bus

    @classmethod
    def connect(cls) -> UPowerSource:
        Gio, GLib = _import_gio()
        try:
            bus = Gio.bus_get_sync(Gio.BusType.SYSTEM, None)
        except GLib.Error as e:
            raise DeviceSourceError(f"Cannot connect to the system bus: {e.message}") from e
        logger.debug("Connected to the system bus")
        return cls(bus)

    def _call(
        self,
        object_path: str,
        interface: str,
        method: str,
        signature: str | None,
        args: tuple,
        reply_type: str,
    ) -> tuple:
        Gio, GLib = _import_gio()
        parameters = GLib.Variant(signature, args) if signature else None
        try:
            reply = self._bus.call_sync(
                paths.UPOWER_BUS_NAME,
                object_path,
                interface,
                method,
                parameters,
                GLib.VariantType.new(reply_type),
                Gio.DBusCallFlags.NONE,
                -1,
                None,
            )
        except GLib.Error as e:
            raise DeviceSourceError(
                f"{interface}.{method} failed on {object_path}: {e.message}"
            ) from e
        return reply.unpack()

    def enumerate_devices(self) -> list[str]:
        """Return the object paths of all devices known to UPower"""
        (device_paths,) = self._call(
            paths.UPOWER_OBJECT_PATH,
            paths.UPOWER_INTERFACE,
            "EnumerateDevices",
            None,
            (),
            "(ao)",
        )
        return [str(p) for p in device_paths]

    def get_property(self, object_path: str, name: str) -> Any:
        (value,) = self._call(
            object_path,
            PROPERTIES_INTERFACE,
            "Get",
            "(ss)",
            (paths.UPOWER_DEVICE_INTERFACE, name),
            "(v)",
        )
        return value

    def read_device(self, object_path: str) -> RawDevice:
        """Fetch the properties of one device"""
        device = RawDevice(
            name=_expect(self.get_property(object_path, "Model"), str, "Model", object_path),
            percentage=_expect(
                self.get_property(object_path, "Percentage"), float, "Percentage", object_path
            ),
            category=_expect(self.get_property(object_path, "Type"), int, "Type", object_path),
            serial=_expect(self.get_property(object_path, "Serial"), str, "Serial", object_path),
            vendor=_expect(self.get_property(object_path, "Vendor"), str, "Vendor", object_path),
        )
        logger.debug("Read %s: %s", object_path, device)
        return device

    def list_devices(self) -> list[RawDevice]:
        """
        Read every device, in UPower's enumeration order.

        The first failure aborts the whole listing; no partial result is returned.
        """
        return [self.read_device(p) for p in self.enumerate_devices()]
