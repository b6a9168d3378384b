"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all shipyard settings
- Falls back to defaults when the config file is absent or invalid
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass, immutable for the lifetime of an operation
- Nested config sections map to sub-dataclasses
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


@dataclass(frozen=True)
class SshConfig:
    """Secure shell credentials and timeouts."""
    key_path: str = ""
    connect_timeout: int = 30


@dataclass(frozen=True)
class ConnectivityConfig:
    """Reachability polling before remote operations."""
    port: int = 22
    poll_interval: float = 5.0
    max_polls: int = 14
    probe_timeout: float = 3.0


@dataclass(frozen=True)
class DeployConfig:
    """Artifact locations and operation deadline."""
    namespace: str = ""
    containers_dir: str = "/home/ubuntu/containers"
    build_path: str = "/tmp/shipyard/build"
    operation_timeout: float = 0.0


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class ShipyardConfig:
    """Root configuration for shipyard."""
    ssh: SshConfig = field(default_factory=SshConfig)
    connectivity: ConnectivityConfig = field(default_factory=ConnectivityConfig)
    deploy: DeployConfig = field(default_factory=DeployConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"
    log_format: str = "text"


def _env_override(data: dict, prefix: str = "SHIPYARD") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern SHIPYARD_SECTION_KEY, split on
    the first underscore after the prefix.
    For example: SHIPYARD_SSH_KEY_PATH=~/.ssh/id_rsa, SHIPYARD_DEPLOY_NAMESPACE=acme.
    Keys outside a section land at the top level: SHIPYARD_LOG_FORMAT=json
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) == 2 and parts[0] in _SECTIONS:
            section, field_name = parts
            data.setdefault(section, {})[field_name] = value
        else:
            data[key[len(prefix) + 1:].lower()] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure.

    Sections that are not JSON objects are dropped with a warning so their
    defaults apply.
    """
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
        logger.warning("Invalid config file %s: top level must be an object", path)
        return {}
    for section in _SECTIONS:
        if section in data and not isinstance(data[section], dict):
            logger.warning(
                "Invalid config section %r in %s, using defaults", section, path
            )
            del data[section]
    return data


_CONVERTERS = {
    "int": int,
    "float": float,
    "bool": lambda value: value.lower() in ("true", "1", "yes"),
}


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Environment values arrive as strings
    for f in dataclasses.fields(cls):
        convert = _CONVERTERS.get(f.type)
        if convert is None or not isinstance(filtered.get(f.name), str):
            continue
        try:
            filtered[f.name] = convert(filtered[f.name])
        except ValueError:
            logger.warning(
                "Invalid value %r for %s.%s, using default %r",
                filtered[f.name], cls.__name__, f.name, f.default,
            )
            del filtered[f.name]

    return cls(**filtered)


_SECTIONS = {
    "ssh": SshConfig,
    "connectivity": ConnectivityConfig,
    "deploy": DeployConfig,
    "telemetry": TelemetryConfig,
}


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "SHIPYARD",
) -> ShipyardConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (SHIPYARD_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to shipyard.json in CWD.
        env_prefix: Environment variable prefix. Defaults to SHIPYARD.
    """
    config_path = Path(path) if path else Path("shipyard.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    sections = {
        name: _build_sub_config(cls, data.get(name, {}))
        for name, cls in _SECTIONS.items()
    }
    return ShipyardConfig(
        log_level=str(data.get("log_level", "WARNING")),
        log_format=str(data.get("log_format", "text")),
        **sections,
    )
