"""
Method channel dispatch for the battery query service.

The embedding layer calls named methods (``getBatteryLevel``,
``getBatteryInfo``) and gets back plain values. The legacy ``-1`` sentinel
for an unknown level exists only here, at the wire boundary.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger

from .config import DEFAULT_CHANNEL
from .core.errors import BatteryError, MethodNotImplemented, PlatformUnavailable
from .core.snapshot import BatterySnapshot, UnknownLevel
from .service import BatteryQueryService

UNKNOWN_LEVEL_SENTINEL = -1

ERROR_UNAVAILABLE = "UNAVAILABLE"
ERROR_BAD_REQUEST = "BAD_REQUEST"
ERROR_BATTERY = "BATTERY_ERROR"


@dataclass(frozen=True)
class MethodCall:
    method: str
    arguments: Any = None


@dataclass(frozen=True)
class MethodResult:
    """Outcome of a method call: a success value, a structured error, or "not implemented"."""

    kind: Literal["success", "error", "not_implemented"]
    value: Any = None
    code: str | None = None
    message: str | None = None
    details: Any = None

    @classmethod
    def success(cls, value: Any) -> "MethodResult":
        return cls(kind="success", value=value)

    @classmethod
    def error(cls, code: str, message: str | None = None, details: Any = None) -> "MethodResult":
        return cls(kind="error", code=code, message=message, details=details)

    @classmethod
    def not_implemented(cls, method: str) -> "MethodResult":
        return cls(kind="not_implemented", message=f"Method '{method}' is not implemented.")

    @property
    def ok(self) -> bool:
        return self.kind == "success"

    def to_dict(self) -> dict[str, Any]:
        if self.kind == "success":
            return {"kind": self.kind, "result": self.value}
        data: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.kind == "error":
            data["code"] = self.code
            data["details"] = self.details
        return data


def level_to_wire(level: int | UnknownLevel) -> int:
    return UNKNOWN_LEVEL_SENTINEL if isinstance(level, UnknownLevel) else level


def snapshot_to_wire(snapshot: BatterySnapshot) -> dict[str, Any]:
    return {
        "level": level_to_wire(snapshot.level_percent),
        "isCharging": snapshot.is_charging,
        "isPluggedIn": snapshot.is_plugged_in,
    }


class BatteryChannel:
    """Dispatches named method calls from an embedding layer to a BatteryQueryService."""

    def __init__(self, service: BatteryQueryService, name: str = DEFAULT_CHANNEL) -> None:
        self.service = service
        self.name = name
        self._handlers: dict[str, Callable[[Any], Any]] = {
            "getBatteryLevel": self._get_battery_level,
            "getBatteryInfo": self._get_battery_info,
        }

    def methods(self) -> list[str]:
        return list(self._handlers.keys())

    def invoke(self, method: str, arguments: Any = None) -> Any:
        """
        Dispatch a method by name and return its wire value.

        Raises:
            MethodNotImplemented: If the method name is not supported
            PlatformUnavailable: If the platform's power service cannot be reached
        """
        handler = self._handlers.get(method)
        if handler is None:
            raise MethodNotImplemented(method)
        return handler(arguments)

    def handle(self, call: MethodCall) -> MethodResult:
        """Dispatch a call and wrap the outcome in a result envelope. Never raises."""
        logger.debug("{}: received call '{}'", self.name, call.method)
        try:
            return MethodResult.success(self.invoke(call.method, call.arguments))
        except MethodNotImplemented:
            logger.warning("{}: method '{}' not implemented", self.name, call.method)
            return MethodResult.not_implemented(call.method)
        except PlatformUnavailable as exc:
            logger.error("{}: '{}' failed - {}", self.name, call.method, exc)
            return MethodResult.error(ERROR_UNAVAILABLE, str(exc))
        except BatteryError as exc:
            logger.error("{}: '{}' failed - {}", self.name, call.method, exc)
            return MethodResult.error(ERROR_BATTERY, str(exc))

    def handle_json(self, payload: str | bytes) -> str | None:
        """
        Handle a JSON-encoded method call.

        The request is ``{"method": <name>, "args": <arguments>}``. The reply
        is ``[result]`` on success and ``[code, message, details]`` on error.
        An unimplemented method gets no reply (``None``).
        """
        try:
            request = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return json.dumps([ERROR_BAD_REQUEST, f"Invalid JSON: {exc}", None])
        if not isinstance(request, dict) or not isinstance(request.get("method"), str):
            return json.dumps([ERROR_BAD_REQUEST, "Expected an object with a string 'method'", None])

        result = self.handle(MethodCall(request["method"], request.get("args")))
        if result.kind == "success":
            return json.dumps([result.value])
        if result.kind == "error":
            return json.dumps([result.code, result.message, result.details])
        return None

    def _get_battery_level(self, _arguments: Any) -> int:
        return level_to_wire(self.service.get_level())

    def _get_battery_info(self, _arguments: Any) -> dict[str, Any]:
        return snapshot_to_wire(self.service.get_snapshot())
