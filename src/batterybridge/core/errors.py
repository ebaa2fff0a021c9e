class BatteryError(RuntimeError):
    pass


class UnknownPowerState(BatteryError):
    """The platform cannot report battery status (no battery, emulator, permission denied)."""


class PlatformUnavailable(BatteryError):
    """The platform's power service cannot be reached at all."""


class MethodNotImplemented(BatteryError):
    def __init__(self, method: str) -> None:
        super().__init__(f"Method '{method}' is not implemented.")
        self.method = method
