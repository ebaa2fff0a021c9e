"""
Battery query service.

The single entry point callers use to ask the host for its battery state.
Every platform failure is normalized here: "no battery information" turns
into the unknown level / unknown snapshot, "cannot ask at all" surfaces as
`PlatformUnavailable`, and no raw platform exception crosses this boundary.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from loguru import logger

from .config import BatteryBridgeConfig
from .core.errors import BatteryError, PlatformUnavailable, UnknownPowerState
from .core.snapshot import (
    LEVEL_MAX,
    LEVEL_MIN,
    BatterySnapshot,
    PowerState,
    UnknownLevel,
    normalize_level,
    snapshot_from_state,
    unknown_snapshot,
)
from .platforms import PowerSource, create_power_source


class BatteryQueryService:
    """
    Stateless request/response access to a power source.

    Each query performs exactly one platform read. Nothing is cached between
    calls, so concurrent callers need no coordination. The underlying read
    may block briefly (a sysfs read, an adb round-trip); callers on a
    latency-sensitive loop should run it off that loop.
    """

    def __init__(self, source: PowerSource, auto_enable_monitoring: bool = True) -> None:
        self.source = source
        self.auto_enable_monitoring = auto_enable_monitoring

    @classmethod
    def from_config(cls, config: BatteryBridgeConfig) -> "BatteryQueryService":
        return cls(create_power_source(config), auto_enable_monitoring=config.auto_enable_monitoring)

    @property
    def monitoring_enabled(self) -> bool:
        return self.source.monitoring_enabled

    def enable_monitoring(self) -> None:
        self._guard(self.source.enable_monitoring)

    def disable_monitoring(self) -> None:
        self._guard(self.source.disable_monitoring)

    @contextmanager
    def monitoring(self) -> Iterator["BatteryQueryService"]:
        """Enable battery monitoring for the duration of the block, then restore the previous setting."""
        was_enabled = self.source.monitoring_enabled
        self.enable_monitoring()
        try:
            yield self
        finally:
            if not was_enabled:
                self.disable_monitoring()

    def get_level(self) -> int | UnknownLevel:
        state = self._read()
        if state is None:
            return UnknownLevel.UNKNOWN
        return normalize_level(state)

    def get_snapshot(self) -> BatterySnapshot:
        state = self._read()
        if state is None:
            return unknown_snapshot()
        return snapshot_from_state(state)

    def _read(self) -> PowerState | None:
        """Read the source once. Returns None when the platform has no battery information."""
        if self.source.requires_monitoring and not self.source.monitoring_enabled and self.auto_enable_monitoring:
            self.enable_monitoring()
            logger.success("{}: battery monitoring activated", self.source.name)
        try:
            state = self.source.read_power_state()
        except UnknownPowerState as exc:
            logger.debug("{}: power state unknown ({})", self.source.name, exc)
            return None
        except BatteryError:
            raise
        except Exception as exc:
            raise PlatformUnavailable(f"{self.source.name}: {exc}") from exc
        logger.debug("{}: read {}", self.source.name, state)
        if state.present and state.level is not None and not LEVEL_MIN <= state.level <= LEVEL_MAX:
            logger.warning("{}: discarding out-of-range battery level {}", self.source.name, state.level)
        return state

    def _guard(self, action: Callable[[], None]) -> None:
        try:
            action()
        except BatteryError:
            raise
        except Exception as exc:
            raise PlatformUnavailable(f"{self.source.name}: {exc}") from exc
