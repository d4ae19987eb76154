from pathlib import Path

CONFIG_DIR = Path("/etc/batteries")
CONFIG_FILE = CONFIG_DIR / "configs.toml"

# UPower endpoints on the system bus
UPOWER_BUS_NAME = "org.freedesktop.UPower"
UPOWER_OBJECT_PATH = "/org/freedesktop/UPower"
UPOWER_INTERFACE = "org.freedesktop.UPower"
UPOWER_DEVICE_INTERFACE = "org.freedesktop.UPower.Device"
