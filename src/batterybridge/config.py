from pathlib import Path
from typing import Literal

from pydantic import BaseModel, confloat
import yaml

from .core.snapshot import PlatformStatus

DEFAULT_CHANNEL = "samples.flutter.dev/battery"


class SimulatedSourceConfig(BaseModel):
    level_fraction: confloat(ge=-1.0, le=1.0) = -1.0
    """Battery level as a fraction of 1.0; -1.0 means unknown."""

    status: PlatformStatus = PlatformStatus.UNKNOWN
    present: bool = True


class BatteryBridgeConfig(BaseModel):
    """
    Configuration for the battery query service and its method channel.

    Supports loading from YAML files with nested key navigation.
    """

    channel: str = DEFAULT_CHANNEL
    """Method channel identifier supplied by the embedding layer."""

    source: Literal["auto", "sysfs", "adb", "psutil", "simulated"] = "auto"
    """Power source adapter; 'auto' picks one for the current host."""

    sysfs_root: str = "/sys/class/power_supply"
    sysfs_supply: str | None = None
    adb_path: str = "adb"
    adb_serial: str | None = None
    adb_timeout_s: float = 10.0

    auto_enable_monitoring: bool = True
    """Switch battery monitoring on before a read when the source needs it, and leave it on."""

    simulated: SimulatedSourceConfig = SimulatedSourceConfig()

    @classmethod
    def from_yaml(cls, path: str | Path, key_to_config: tuple[str, ...] = ("BatteryBridge",)) -> "BatteryBridgeConfig":
        """
        Load a BatteryBridgeConfig from a YAML configuration file.

        Parameters:
            path: Path to the YAML configuration file
            key_to_config: Tuple of keys to navigate nested configuration

        Raises:
            ValueError: If the YAML content is invalid
            OSError: If the file cannot be read
            pydantic.ValidationError: If the configuration is invalid
        """
        path = Path(path)

        for encoding in ["utf-8", "utf-8-sig"]:
            try:
                data = yaml.safe_load(path.read_text(encoding=encoding))
                break
            except UnicodeDecodeError:
                if encoding == "utf-8-sig":
                    raise ValueError(f"Could not decode YAML file {path} with any supported encoding")

        config = data or {}
        for key in key_to_config:
            if not isinstance(config, dict) or key not in config:
                raise ValueError(f"Missing key '{key}' in {path}")
            config = config[key]

        return cls.model_validate(config or {})
