from __future__ import annotations

import subprocess

from loguru import logger

from ..core.errors import PlatformUnavailable, UnknownPowerState
from ..core.snapshot import PlatformStatus, PowerState
from .base import PowerSource

# android.os.BatteryManager.BATTERY_STATUS_* codes
ANDROID_STATUS: dict[int, PlatformStatus] = {
    1: PlatformStatus.UNKNOWN,
    2: PlatformStatus.CHARGING,
    3: PlatformStatus.DISCHARGING,
    4: PlatformStatus.NOT_CHARGING,
    5: PlatformStatus.FULL,
}

# dumpsys prints this (often with exit status 0) when the service is not registered
SERVICE_MISSING = "can't find service"


def parse_dumpsys_battery(output: str) -> dict[str, str]:
    """Parse the ``key: value`` lines of ``dumpsys battery`` into a dict with lowercased keys."""
    props: dict[str, str] = {}
    for line in output.splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        value = value.strip()
        if not value:
            continue  # section header
        props[key.strip().lower()] = value
    return props


def _parse_int(props: dict[str, str], key: str) -> int | None:
    raw = props.get(key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("adb: unparseable {} value {!r}", key, raw)
        return None


def power_state_from_dumpsys(props: dict[str, str]) -> PowerState:
    if props.get("present", "true").lower() == "false":
        raise UnknownPowerState("battery not present")

    code = _parse_int(props, "status")
    status = ANDROID_STATUS.get(code, PlatformStatus.UNKNOWN) if code is not None else PlatformStatus.UNKNOWN

    level = _parse_int(props, "level")
    scale = _parse_int(props, "scale")
    if level is not None and scale and scale != 100:
        level = level * 100 // scale
    return PowerState(status=status, level=level)


class AdbPowerSource(PowerSource):
    """Battery state of an Android device reached through ``adb shell dumpsys battery``."""

    name = "adb"

    def __init__(self, adb_path: str = "adb", serial: str | None = None, timeout: float = 10.0) -> None:
        super().__init__()
        self.adb_path = adb_path
        self.serial = serial
        self.timeout = timeout

    def _command(self) -> list[str]:
        cmd = [self.adb_path]
        if self.serial:
            cmd.extend(["-s", self.serial])
        cmd.extend(["shell", "dumpsys", "battery"])
        return cmd

    def read_power_state(self) -> PowerState:
        cmd = self._command()
        logger.debug("adb: running {}", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout, check=False)
        except FileNotFoundError as exc:
            raise PlatformUnavailable(f"adb executable '{self.adb_path}' not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise PlatformUnavailable(f"adb timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise PlatformUnavailable(f"adb failed: {exc}") from exc

        if proc.returncode != 0:
            message = (proc.stderr or proc.stdout or "").strip()
            raise PlatformUnavailable(f"adb exited with {proc.returncode}: {message}")

        output = f"{proc.stdout or ''}\n{proc.stderr or ''}"
        if SERVICE_MISSING in output.lower():
            raise PlatformUnavailable("battery service is not running on the device")

        props = parse_dumpsys_battery(proc.stdout or "")
        if "status" not in props and "level" not in props:
            raise PlatformUnavailable("dumpsys battery returned no battery properties")
        return power_state_from_dumpsys(props)

    def __repr__(self) -> str:
        return f"AdbPowerSource(adb_path={self.adb_path!r}, serial={self.serial!r})"
