from __future__ import annotations

from ..core.snapshot import PlatformStatus, PowerState
from .base import PowerSource


class SimulatedPowerSource(PowerSource):
    """
    In-process power source with settable state.

    Behaves like hosts whose battery API is only valid while battery
    monitoring is switched on: with monitoring off it reports an unknown
    status and a level fraction of -1.0. The level is held as a fraction in
    [0.0, 1.0], with -1.0 meaning "unknown".
    """

    name = "simulated"
    requires_monitoring = True

    def __init__(
        self,
        level_fraction: float = -1.0,
        status: PlatformStatus = PlatformStatus.UNKNOWN,
        present: bool = True,
    ) -> None:
        super().__init__()
        self.level_fraction = level_fraction
        self.status = PlatformStatus(status)
        self.present = present
        self.reads = 0

    def set_state(self, level_fraction: float, status: PlatformStatus, present: bool = True) -> None:
        self.level_fraction = level_fraction
        self.status = PlatformStatus(status)
        self.present = present

    def read_power_state(self) -> PowerState:
        self.reads += 1
        if not self.monitoring_enabled:
            return PowerState(status=PlatformStatus.UNKNOWN, level=None, present=self.present)
        level = None if self.level_fraction < 0 else round(self.level_fraction * 100)
        return PowerState(status=self.status, level=level, present=self.present)

    def __repr__(self) -> str:
        return f"SimulatedPowerSource(level_fraction={self.level_fraction!r}, status={self.status.value!r})"
