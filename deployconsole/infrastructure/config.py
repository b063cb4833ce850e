"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to the API location, notification timing and telemetry
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- The namespace is fixed for the whole session; there is no switcher
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "deployconsole.json"


@dataclass(frozen=True)
class ApiConfig:
    """Orchestration API location."""
    base_url: str = "http://localhost:8080/api/orchestration"
    namespace: str = "default"
    timeout_seconds: float = 0.0  # 0 disables the timeout

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("api base_url cannot be empty")
        if not self.namespace:
            raise ValueError("api namespace cannot be empty")
        if self.timeout_seconds < 0:
            raise ValueError("api timeout_seconds cannot be negative")


@dataclass(frozen=True)
class NotificationsConfig:
    """Notification timing."""
    visible_ms: int = 3000
    exit_ms: int = 300

    @property
    def visible_seconds(self) -> float:
        return self.visible_ms / 1000

    @property
    def exit_seconds(self) -> float:
        return self.exit_ms / 1000


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class ConsoleConfig:
    """Root configuration for the deployment console."""
    api: ApiConfig = field(default_factory=ApiConfig)
    notifications: NotificationsConfig = field(default_factory=NotificationsConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "DEPLOYCONSOLE") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern DEPLOYCONSOLE_SECTION_KEY.
    For example: DEPLOYCONSOLE_API_NAMESPACE=staging
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in _SECTIONS:
            section, field_name = parts
            data.setdefault(section, {})[field_name] = value
        else:
            data["_".join(parts)] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a JSON object", path)
        return {}
    return data


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert string values from the environment to the declared type
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            if f.type == "int":
                filtered[f.name] = int(filtered[f.name])
            elif f.type == "float":
                filtered[f.name] = float(filtered[f.name])
            elif f.type == "bool":
                filtered[f.name] = filtered[f.name].lower() in ("true", "1", "yes")

    return cls(**filtered)


_SECTIONS = {
    "api": ApiConfig,
    "notifications": NotificationsConfig,
    "telemetry": TelemetryConfig,
}


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "DEPLOYCONSOLE",
) -> ConsoleConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (DEPLOYCONSOLE_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to deployconsole.json in CWD.
        env_prefix: Environment variable prefix. Defaults to DEPLOYCONSOLE.
    """
    config_path = Path(path) if path else Path(DEFAULT_CONFIG_FILE)
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    sections = {
        name: _build_sub_config(cls, data.get(name) or {})
        for name, cls in _SECTIONS.items()
    }
    return ConsoleConfig(
        **sections,
        log_level=str(data.get("log_level", "WARNING")).upper(),
    )
