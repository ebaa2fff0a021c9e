import argparse
import json
import sys

from loguru import logger
from rich import print as rprint

from .channel import BatteryChannel, MethodCall
from .config import BatteryBridgeConfig
from .core.errors import PlatformUnavailable
from .core.snapshot import UnknownLevel
from .service import BatteryQueryService

SOURCES = ["auto", "sysfs", "adb", "psutil", "simulated"]


def load_config(config_path: str | None, source: str | None = None) -> BatteryBridgeConfig:
    config = BatteryBridgeConfig.from_yaml(config_path) if config_path else BatteryBridgeConfig()
    if source is not None:
        config = config.model_copy(update={"source": source})
    return config


def level(config: BatteryBridgeConfig) -> int:
    service = BatteryQueryService.from_config(config)
    try:
        value = service.get_level()
    except PlatformUnavailable as exc:
        rprint(f"[red]Battery unavailable:[/red] {exc}")
        return 1
    rprint("unknown" if isinstance(value, UnknownLevel) else f"{value}%")
    return 0


def info(config: BatteryBridgeConfig) -> int:
    service = BatteryQueryService.from_config(config)
    try:
        snapshot = service.get_snapshot()
    except PlatformUnavailable as exc:
        rprint(f"[red]Battery unavailable:[/red] {exc}")
        return 1
    print(json.dumps(snapshot.to_dict(), indent=2))
    return 0


def call(config: BatteryBridgeConfig, method: str) -> int:
    channel = BatteryChannel(BatteryQueryService.from_config(config), name=config.channel)
    result = channel.handle(MethodCall(method))
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.ok else 1


def serve(config: BatteryBridgeConfig) -> int:
    from .mcp.battery_server import main as serve_main

    serve_main(config)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file (default: built-in settings)",
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        default=None,
        help="Override the power source adapter",
    )
    parser.add_argument("--verbose", action="store_true", help="Show debug logging")


def main(argv: list[str] | None = None) -> int:
    """
    Command-line entry point for batterybridge.

    Commands:
    - 'level': print the battery percentage
    - 'info': print the battery snapshot as JSON
    - 'call': dispatch a method name through the battery channel
    - 'serve': expose the battery channel as an MCP server over stdio
    """
    parser = argparse.ArgumentParser(description="Device battery query service")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    _add_common_arguments(subparsers.add_parser("level", help="Print the battery level"))
    _add_common_arguments(subparsers.add_parser("info", help="Print the battery snapshot"))
    call_parser = subparsers.add_parser("call", help="Invoke a battery channel method")
    call_parser.add_argument("method", type=str, help="Method name, e.g. getBatteryInfo")
    _add_common_arguments(call_parser)
    _add_common_arguments(subparsers.add_parser("serve", help="Run the MCP battery server"))

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    config = load_config(args.config, args.source)
    if args.command == "level":
        return level(config)
    if args.command == "info":
        return info(config)
    if args.command == "call":
        return call(config, args.method)
    return serve(config)


if __name__ == "__main__":
    sys.exit(main())
