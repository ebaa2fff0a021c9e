"""Tests for the MCP battery server tools."""

import json

import pytest

from batterybridge.config import BatteryBridgeConfig
from batterybridge.mcp import battery_server


@pytest.fixture(autouse=True)
def simulated_channel():
    config = BatteryBridgeConfig(source="simulated", simulated={"level_fraction": 0.42, "status": "discharging"})
    channel = battery_server.configure(config)
    yield channel
    battery_server._channel = None


class TestBatteryServer:
    def test_get_battery_level(self) -> None:
        assert json.loads(battery_server.getBatteryLevel()) == 42

    def test_get_battery_info(self) -> None:
        assert json.loads(battery_server.getBatteryInfo()) == {
            "level": 42,
            "isCharging": False,
            "isPluggedIn": False,
        }

    def test_invoke_unknown_method(self) -> None:
        result = json.loads(battery_server.invoke_method("doSomethingElse"))
        assert result["kind"] == "not_implemented"

    def test_invoke_method(self) -> None:
        result = json.loads(battery_server.invoke_method("getBatteryLevel"))
        assert result == {"kind": "success", "result": 42}
