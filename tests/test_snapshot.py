"""Tests for the battery data model."""

import random

import pytest

from batterybridge.core.snapshot import (
    BatterySnapshot,
    PlatformStatus,
    PowerState,
    UnknownLevel,
    normalize_level,
    snapshot_from_state,
    status_flags,
    unknown_snapshot,
)


class TestStatusFlags:
    """Tests for the platform status -> (charging, plugged in) mapping."""

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (PlatformStatus.CHARGING, (True, True)),
            (PlatformStatus.FULL, (True, True)),
            (PlatformStatus.NOT_CHARGING, (False, True)),
            (PlatformStatus.DISCHARGING, (False, False)),
            (PlatformStatus.UNKNOWN, (False, False)),
        ],
    )
    def test_mapping_rows(self, status: PlatformStatus, expected: tuple[bool, bool]) -> None:
        """Each status maps to exactly one flag pair."""
        assert status_flags(status) == expected

    def test_every_status_is_mapped(self) -> None:
        for status in PlatformStatus:
            status_flags(status)

    def test_charging_implies_plugged_in(self) -> None:
        """Charging always implies plugged in, over random readings."""
        rng = random.Random(1234)
        statuses = list(PlatformStatus)
        for _ in range(500):
            state = PowerState(
                status=rng.choice(statuses),
                level=rng.choice([None, rng.randint(-2**31, 2**31 - 1), rng.randint(0, 100)]),
                present=rng.random() > 0.1,
            )
            snapshot = snapshot_from_state(state)
            if snapshot.is_charging:
                assert snapshot.is_plugged_in
            if snapshot.level_known:
                assert 0 <= snapshot.level_percent <= 100


class TestNormalizeLevel:
    """Tests for raw level normalization."""

    def test_valid_levels_pass_through(self) -> None:
        assert normalize_level(PowerState(PlatformStatus.CHARGING, 0)) == 0
        assert normalize_level(PowerState(PlatformStatus.CHARGING, 55)) == 55
        assert normalize_level(PowerState(PlatformStatus.FULL, 100)) == 100

    @pytest.mark.parametrize("raw", [-1, -2147483648, 101, 255])
    def test_sentinels_become_unknown(self, raw: int) -> None:
        """Out-of-range platform sentinels never surface as a percentage."""
        assert normalize_level(PowerState(PlatformStatus.DISCHARGING, raw)) is UnknownLevel.UNKNOWN

    def test_missing_level_is_unknown(self) -> None:
        assert normalize_level(PowerState(PlatformStatus.CHARGING, None)) is UnknownLevel.UNKNOWN

    def test_absent_battery_is_unknown(self) -> None:
        assert normalize_level(PowerState(PlatformStatus.CHARGING, 50, present=False)) is UnknownLevel.UNKNOWN


class TestBatterySnapshot:
    """Tests for BatterySnapshot."""

    def test_snapshot_from_full_state(self) -> None:
        snapshot = snapshot_from_state(PowerState(PlatformStatus.FULL, 87))
        assert snapshot == BatterySnapshot(level_percent=87, is_charging=True, is_plugged_in=True)

    def test_absent_battery_gives_unknown_snapshot(self) -> None:
        snapshot = snapshot_from_state(PowerState(PlatformStatus.CHARGING, 80, present=False))
        assert snapshot == unknown_snapshot()
        assert not snapshot.is_charging
        assert not snapshot.is_plugged_in

    @pytest.mark.parametrize("level", [-1, 101, -2147483648])
    def test_rejects_out_of_range_level(self, level: int) -> None:
        """A platform sentinel cannot be stored as if it were a percentage."""
        with pytest.raises(ValueError, match="outside"):
            BatterySnapshot(level_percent=level, is_charging=False, is_plugged_in=False)

    def test_rejects_charging_while_unplugged(self) -> None:
        with pytest.raises(ValueError, match="is_plugged_in"):
            BatterySnapshot(level_percent=50, is_charging=True, is_plugged_in=False)

    def test_rejects_non_integer_level(self) -> None:
        with pytest.raises(ValueError):
            BatterySnapshot(level_percent=True, is_charging=False, is_plugged_in=False)  # type: ignore[arg-type]

    def test_accepts_bounds_and_unknown(self) -> None:
        assert BatterySnapshot(0, False, False).level_percent == 0
        assert BatterySnapshot(100, True, True).level_percent == 100
        assert not BatterySnapshot(UnknownLevel.UNKNOWN, False, True).level_known

    def test_unknown_status_discards_level(self) -> None:
        snapshot = snapshot_from_state(PowerState(PlatformStatus.UNKNOWN, 50))
        assert snapshot.level_percent is UnknownLevel.UNKNOWN

    def test_snapshot_is_immutable(self) -> None:
        snapshot = snapshot_from_state(PowerState(PlatformStatus.DISCHARGING, 42))
        with pytest.raises(AttributeError):
            snapshot.level_percent = 50  # type: ignore[misc]

    def test_to_dict(self) -> None:
        assert unknown_snapshot().to_dict() == {
            "level_percent": "unknown",
            "is_charging": False,
            "is_plugged_in": False,
        }
        assert snapshot_from_state(PowerState(PlatformStatus.NOT_CHARGING, 60)).to_dict() == {
            "level_percent": 60,
            "is_charging": False,
            "is_plugged_in": True,
        }
