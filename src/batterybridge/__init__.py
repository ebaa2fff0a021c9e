"""Cross-platform device battery queries behind a method channel."""

from .core.errors import BatteryError, MethodNotImplemented, PlatformUnavailable, UnknownPowerState
from .core.snapshot import BatterySnapshot, PlatformStatus, PowerState, UnknownLevel
from .config import BatteryBridgeConfig
from .service import BatteryQueryService
from .channel import BatteryChannel, MethodCall, MethodResult

__all__ = [
    "BatteryBridgeConfig",
    "BatteryChannel",
    "BatteryError",
    "BatteryQueryService",
    "BatterySnapshot",
    "MethodCall",
    "MethodNotImplemented",
    "MethodResult",
    "PlatformStatus",
    "PlatformUnavailable",
    "PowerState",
    "UnknownLevel",
    "UnknownPowerState",
]
