from abc import ABC, abstractmethod

from loguru import logger

from ..core.snapshot import PowerState


class PowerSource(ABC):
    """
    Capability interface over one operating system's battery API.

    Implementations read the platform's power state in a single call and
    report it as a `PowerState`. They raise `UnknownPowerState` when the
    platform has no battery information to give, and `PlatformUnavailable`
    when the platform cannot be asked at all.

    Some hosts only report valid battery state once observation has been
    switched on. Those sources set ``requires_monitoring`` and override the
    monitoring hooks; for everything else the hooks are no-ops.
    """

    name: str = "base"
    requires_monitoring: bool = False

    def __init__(self) -> None:
        self._monitoring_enabled = not self.requires_monitoring

    @property
    def monitoring_enabled(self) -> bool:
        return self._monitoring_enabled

    def enable_monitoring(self) -> None:
        if self._monitoring_enabled:
            return
        self._set_monitoring(True)
        self._monitoring_enabled = True
        logger.debug("{}: battery monitoring enabled", self.name)

    def disable_monitoring(self) -> None:
        if not self.requires_monitoring or not self._monitoring_enabled:
            return
        self._set_monitoring(False)
        self._monitoring_enabled = False
        logger.debug("{}: battery monitoring disabled", self.name)

    def _set_monitoring(self, enabled: bool) -> None:
        """Platform hook for switching battery observation on or off."""

    @abstractmethod
    def read_power_state(self) -> PowerState:
        """Read the platform's power state once."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
