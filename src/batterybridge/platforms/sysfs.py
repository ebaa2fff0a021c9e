from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..core.errors import PlatformUnavailable, UnknownPowerState
from ..core.snapshot import PlatformStatus, PowerState
from .base import PowerSource

DEFAULT_SYSFS_ROOT = Path("/sys/class/power_supply")

# Values of the kernel's POWER_SUPPLY_STATUS attribute.
SYSFS_STATUS: dict[str, PlatformStatus] = {
    "charging": PlatformStatus.CHARGING,
    "full": PlatformStatus.FULL,
    "not charging": PlatformStatus.NOT_CHARGING,
    "discharging": PlatformStatus.DISCHARGING,
    "unknown": PlatformStatus.UNKNOWN,
}


def _read_value(path: Path, name: str) -> str | None:
    file_path = path / name
    if not file_path.exists():
        return None
    return file_path.read_text(encoding="utf-8").strip()


class SysfsPowerSource(PowerSource):
    """Battery state from the Linux / Android kernel ``power_supply`` class."""

    name = "sysfs"

    def __init__(self, root: str | Path = DEFAULT_SYSFS_ROOT, supply: str | None = None) -> None:
        super().__init__()
        self.root = Path(root)
        self.supply = supply

    def read_power_state(self) -> PowerState:
        supply_path = self._find_battery()
        try:
            present = _read_value(supply_path, "present")
            status = _read_value(supply_path, "status")
            capacity = _read_value(supply_path, "capacity")
        except PermissionError as exc:
            raise UnknownPowerState(f"{supply_path}: permission denied") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise UnknownPowerState(f"{supply_path}: {exc}") from exc

        if present is not None and present != "1":
            raise UnknownPowerState(f"{supply_path.name}: battery not present")

        level: int | None = None
        if capacity is not None:
            try:
                level = int(capacity)
            except ValueError:
                logger.warning("sysfs: unparseable capacity {!r} for {}", capacity, supply_path.name)

        return PowerState(status=SYSFS_STATUS.get((status or "").lower(), PlatformStatus.UNKNOWN), level=level)

    def _find_battery(self) -> Path:
        if not self.root.is_dir():
            raise PlatformUnavailable(f"{self.root} unavailable")
        if self.supply:
            path = self.root / self.supply
            if not path.is_dir():
                raise UnknownPowerState(f"power supply '{self.supply}' not found")
            return path
        try:
            entries = sorted(path for path in self.root.iterdir() if path.is_dir())
        except OSError as exc:
            raise PlatformUnavailable(f"{self.root}: {exc}") from exc
        for path in entries:
            try:
                supply_type = _read_value(path, "type")
            except (OSError, UnicodeDecodeError):
                continue
            if supply_type == "Battery":
                return path
        raise UnknownPowerState("no battery power supply found")

    def __repr__(self) -> str:
        return f"SysfsPowerSource(root={str(self.root)!r}, supply={self.supply!r})"
