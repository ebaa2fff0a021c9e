from __future__ import annotations

import json
import logging

from loguru import logger
from mcp.server.fastmcp import FastMCP

from ..channel import BatteryChannel, MethodCall
from ..config import BatteryBridgeConfig
from ..service import BatteryQueryService

mcp = FastMCP("battery")

_channel: BatteryChannel | None = None


def configure(config: BatteryBridgeConfig) -> BatteryChannel:
    global _channel
    _channel = BatteryChannel(BatteryQueryService.from_config(config), name=config.channel)
    return _channel


def _get_channel() -> BatteryChannel:
    if _channel is None:
        return configure(BatteryBridgeConfig())
    return _channel


def _call(method: str) -> str:
    result = _get_channel().handle(MethodCall(method))
    if result.ok:
        return json.dumps(result.value)
    return json.dumps({"error": result.to_dict()})


@mcp.tool()
def getBatteryLevel() -> str:
    """Return the battery level as a percentage, or -1 when unknown."""
    return _call("getBatteryLevel")


@mcp.tool()
def getBatteryInfo() -> str:
    """Return the battery level, charging flag and plugged-in flag."""
    return _call("getBatteryInfo")


@mcp.tool()
def invoke_method(method: str) -> str:
    """Invoke a battery channel method by name and return the result envelope."""
    return json.dumps(_get_channel().handle(MethodCall(method)).to_dict())


def main(config: BatteryBridgeConfig | None = None) -> None:
    logger.remove()
    logging.getLogger().setLevel(logging.CRITICAL)
    configure(config or BatteryBridgeConfig())
    mcp.run()


if __name__ == "__main__":
    main()
