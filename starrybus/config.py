"""Configuration loader for the starrybus arrival board."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from rich.color import ColorParseError
import yaml

from starrybus.data.datamall_client import DATAMALL_API_BASE
from starrybus.logic.arrivals import Bus, Stop
from starrybus.rendering.formatting import make_stop_format

CONFIG_FILENAME = "starrybus.yaml"
DEFAULT_POLL_INTERVAL_SECONDS = 30
DEFAULT_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class ApiConfig:
    """DataMall API configuration."""

    api_key: str
    base_url: str = DATAMALL_API_BASE
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class DisplayConfig:
    """Board size in terminal rows and columns."""

    rows: int
    columns: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_dir: str | None = None


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    api: ApiConfig
    display: DisplayConfig
    stops: list[Stop]
    buses: dict[str, Bus]
    log: LoggingConfig = field(default_factory=LoggingConfig)


def default_config_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/starrybus.yaml`` (``~/.config`` when unset)."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / CONFIG_FILENAME


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _positive_int(data: dict[str, Any], key: str) -> int:
    value = _require_key(data, key, "top-level")
    if not _is_int(value) or value < 1:
        raise ValueError(f"'{key}' must be an integer of at least 1")
    return value


def _build_stop(item: Any) -> Stop:
    if not isinstance(item, dict):
        raise ValueError("Each bus stop should be a mapping")
    code = _require_key(item, "code", "stop")
    color = _require_key(item, "color", "stop")
    if not _is_int(code):
        raise ValueError("Each bus stop should contain a code number")
    if not isinstance(color, str):
        raise ValueError("Each bus stop should contain a color")
    try:
        stop_format = make_stop_format(color)
    except ColorParseError as exc:
        raise ValueError(f"Invalid color: {color}") from exc
    return Stop(code=code, format=stop_format)


def _build_bus(item: Any) -> Bus:
    if not isinstance(item, dict):
        raise ValueError("Each bus should be a mapping")
    name = _require_key(item, "name", "bus")
    min_lines = _require_key(item, "minLines", "bus")
    if not isinstance(name, str):
        raise ValueError("Each bus should contain a name")
    if not _is_int(min_lines) or min_lines < 0:
        raise ValueError(f"Bus '{name}' minLines must be a non-negative integer")
    return Bus(name=name, min_lines=min_lines)


def _optional_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    api_key = os.environ.get("API_KEY", "")
    config_path = Path(path) if path is not None else default_config_path()
    try:
        with open(config_path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Config file is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    stops_section = _require_key(data, "stops", "top-level")
    if not isinstance(stops_section, list):
        raise ValueError("Config should contain stops array")
    buses_section = _require_key(data, "buses", "top-level")
    if not isinstance(buses_section, list):
        raise ValueError("Config should contain buses array")

    display = DisplayConfig(rows=_positive_int(data, "rows"), columns=_positive_int(data, "columns"))

    api_section = _optional_section(data, "api")
    poll_interval = api_section.get("poll_interval_seconds", DEFAULT_POLL_INTERVAL_SECONDS)
    timeout = api_section.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if not _is_number(poll_interval) or poll_interval <= 0:
        raise ValueError("'poll_interval_seconds' in api config must be a positive number")
    if not _is_number(timeout) or timeout <= 0:
        raise ValueError("'timeout_seconds' in api config must be a positive number")
    api = ApiConfig(
        api_key=api_key,
        base_url=str(api_section.get("base_url", DATAMALL_API_BASE)),
        poll_interval_seconds=poll_interval,
        timeout_seconds=timeout,
    )

    logging_section = _optional_section(data, "logging")
    log = LoggingConfig(
        level=str(logging_section.get("level", "INFO")).upper(),
        log_dir=logging_section.get("log_dir"),
    )

    buses = [_build_bus(item) for item in buses_section]

    return AppConfig(
        api=api,
        display=display,
        stops=[_build_stop(item) for item in stops_section],
        buses={bus.name: bus for bus in buses},
        log=log,
    )


__all__ = [
    "ApiConfig",
    "AppConfig",
    "DisplayConfig",
    "LoggingConfig",
    "default_config_path",
    "load_config",
]
