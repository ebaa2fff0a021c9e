"""
Battery data model.

A `PowerState` is what a power source reports in one read. A
`BatterySnapshot` is the normalized value handed to callers, derived from
exactly one `PowerState`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PlatformStatus(str, Enum):
    """Coarse power status as exposed by the operating system."""

    CHARGING = "charging"
    FULL = "full"
    NOT_CHARGING = "not_charging"  # plugged in, not drawing current
    DISCHARGING = "discharging"
    UNKNOWN = "unknown"


class UnknownLevel(Enum):
    """Marker for a battery level the platform could not determine."""

    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return "UnknownLevel.UNKNOWN"


LEVEL_MIN = 0
LEVEL_MAX = 100

# (is_charging, is_plugged_in)
STATUS_FLAGS: dict[PlatformStatus, tuple[bool, bool]] = {
    PlatformStatus.CHARGING: (True, True),
    PlatformStatus.FULL: (True, True),
    PlatformStatus.NOT_CHARGING: (False, True),
    PlatformStatus.DISCHARGING: (False, False),
    PlatformStatus.UNKNOWN: (False, False),
}


@dataclass(frozen=True)
class PowerState:
    """A single raw reading from a power source."""

    status: PlatformStatus
    level: int | None
    present: bool = True


@dataclass(frozen=True)
class BatterySnapshot:
    level_percent: int | UnknownLevel
    is_charging: bool
    is_plugged_in: bool

    def __post_init__(self) -> None:
        if not isinstance(self.level_percent, UnknownLevel):
            if isinstance(self.level_percent, bool) or not isinstance(self.level_percent, int):
                raise ValueError(f"level_percent must be an int or UnknownLevel, got {self.level_percent!r}")
            if not LEVEL_MIN <= self.level_percent <= LEVEL_MAX:
                raise ValueError(f"level_percent {self.level_percent} outside [{LEVEL_MIN}, {LEVEL_MAX}]")
        if self.is_charging and not self.is_plugged_in:
            raise ValueError("is_charging requires is_plugged_in")

    @property
    def level_known(self) -> bool:
        return not isinstance(self.level_percent, UnknownLevel)

    def to_dict(self) -> dict[str, Any]:
        level = self.level_percent.value if isinstance(self.level_percent, UnknownLevel) else self.level_percent
        return {
            "level_percent": level,
            "is_charging": self.is_charging,
            "is_plugged_in": self.is_plugged_in,
        }


def status_flags(status: PlatformStatus) -> tuple[bool, bool]:
    """Return ``(is_charging, is_plugged_in)`` for a platform status."""
    return STATUS_FLAGS[status]


def normalize_level(state: PowerState) -> int | UnknownLevel:
    """
    Translate a raw reading into a valid percentage or the unknown marker.

    Missing batteries, an indeterminate power status, missing levels and
    out-of-range values (negative placeholders, integer-min sentinels,
    anything above 100) all become ``UnknownLevel.UNKNOWN``.
    """
    if not state.present or state.status is PlatformStatus.UNKNOWN or state.level is None:
        return UnknownLevel.UNKNOWN
    if not LEVEL_MIN <= state.level <= LEVEL_MAX:
        return UnknownLevel.UNKNOWN
    return state.level


def snapshot_from_state(state: PowerState) -> BatterySnapshot:
    if not state.present:
        return unknown_snapshot()
    is_charging, is_plugged_in = status_flags(state.status)
    return BatterySnapshot(
        level_percent=normalize_level(state),
        is_charging=is_charging,
        is_plugged_in=is_plugged_in,
    )


def unknown_snapshot() -> BatterySnapshot:
    is_charging, is_plugged_in = status_flags(PlatformStatus.UNKNOWN)
    return BatterySnapshot(
        level_percent=UnknownLevel.UNKNOWN,
        is_charging=is_charging,
        is_plugged_in=is_plugged_in,
    )
