from __future__ import annotations

import psutil
from loguru import logger

from ..core.errors import PlatformUnavailable, UnknownPowerState
from ..core.snapshot import PlatformStatus, PowerState
from .base import PowerSource


class PsutilPowerSource(PowerSource):
    """
    Battery state on desktop hosts via ``psutil.sensors_battery()``.

    psutil only reports whether external power is connected, so a plugged
    battery below 100% is reported as charging and a plugged battery at
    100% as full. It cannot tell "plugged in, not charging" apart.
    """

    name = "psutil"

    def read_power_state(self) -> PowerState:
        try:
            battery = psutil.sensors_battery()
        except (AttributeError, NotImplementedError) as exc:
            raise PlatformUnavailable("battery sensors are not supported on this platform") from exc
        except (OSError, RuntimeError) as exc:
            raise PlatformUnavailable(f"psutil battery query failed: {exc}") from exc

        if battery is None:
            raise UnknownPowerState("no battery detected")

        level = int(battery.percent) if battery.percent is not None else None
        if battery.power_plugged is None:
            status = PlatformStatus.UNKNOWN
        elif battery.power_plugged:
            status = PlatformStatus.FULL if level is not None and level >= 100 else PlatformStatus.CHARGING
        else:
            status = PlatformStatus.DISCHARGING
        logger.debug("psutil: percent={} plugged={}", battery.percent, battery.power_plugged)
        return PowerState(status=status, level=level)
