from pathlib import Path

import psutil
from loguru import logger

from ..config import BatteryBridgeConfig
from .adb import AdbPowerSource
from .base import PowerSource
from .desktop import PsutilPowerSource
from .simulated import SimulatedPowerSource
from .sysfs import SysfsPowerSource

ANDROID_BUILD_PROP = Path("/system/build.prop")

power_sources: dict[str, type[PowerSource]] = {
    "sysfs": SysfsPowerSource,
    "adb": AdbPowerSource,
    "psutil": PsutilPowerSource,
    "simulated": SimulatedPowerSource,
}


def detect_source_name(config: BatteryBridgeConfig) -> str:
    """Pick a power source for the current host: Android sysfs, Linux sysfs, then psutil."""
    if ANDROID_BUILD_PROP.exists():
        return "sysfs"
    if psutil.LINUX and Path(config.sysfs_root).is_dir():
        return "sysfs"
    return "psutil"


def create_power_source(config: BatteryBridgeConfig) -> PowerSource:
    name = config.source
    if name == "auto":
        name = detect_source_name(config)
        logger.debug("Auto-detected power source '{}'", name)

    if name == "sysfs":
        return SysfsPowerSource(config.sysfs_root, supply=config.sysfs_supply)
    if name == "adb":
        return AdbPowerSource(config.adb_path, serial=config.adb_serial, timeout=config.adb_timeout_s)
    if name == "simulated":
        return SimulatedPowerSource(
            level_fraction=config.simulated.level_fraction,
            status=config.simulated.status,
            present=config.simulated.present,
        )
    return power_sources[name]()


__all__ = [
    "AdbPowerSource",
    "PowerSource",
    "PsutilPowerSource",
    "SimulatedPowerSource",
    "SysfsPowerSource",
    "create_power_source",
    "detect_source_name",
    "power_sources",
]
