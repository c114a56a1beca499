"""YAML configuration loader and validator."""

import math
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from wakehost.core.target import (
    DEFAULT_BROADCAST,
    DEFAULT_PORT,
    PLACEHOLDER_MAC,
    WaitPolicy,
    WakeTarget,
)

# Environment variables layered on top of the selected host entry.
ENV_MAC = "WAKEHOST_MAC"
ENV_HOST = "WAKEHOST_HOST"
ENV_BROADCAST = "WAKEHOST_BROADCAST"
ENV_PORT = "WAKEHOST_PORT"
ENV_MAX_ATTEMPTS = "WAKEHOST_MAX_ATTEMPTS"
ENV_INTERVAL = "WAKEHOST_INTERVAL"

_INT_FIELDS = ("port", "max_attempts")
_NUMBER_FIELDS = ("interval_seconds", "probe_timeout")


class ConfigError(Exception):
    """Raised for invalid or missing configuration."""


@dataclass(frozen=True)
class HostEntry:
    """A configured host: where to send the packet and how long to wait for it."""

    target: WakeTarget
    policy: WaitPolicy

    @property
    def name(self) -> str:
        return self.target.label


def default_config() -> dict[str, Any]:
    """Built-in configuration used when no config file exists.

    The MAC is the all-zero placeholder, so waking fails until it is set
    (via a config file or WAKEHOST_MAC).
    """
    return {
        "settings": {"max_attempts": 30, "interval_seconds": 10, "probe_timeout": 2},
        "hosts": [
            {
                "name": "GamingPC",
                "mac_address": PLACEHOLDER_MAC,
                "host_address": "192.168.4.101",
                "broadcast_address": "192.168.4.255",
                "port": DEFAULT_PORT,
            }
        ],
    }


def load_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Parsed configuration dictionary, or None if file is empty

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    with open(path) as f:
        result: Optional[dict[str, Any]] = yaml.safe_load(f)
        return result


def _check_numbers(prefix: str, raw: Mapping[str, Any], errors: list[str]) -> None:
    for field in _INT_FIELDS:
        if field in raw and (not isinstance(raw[field], int) or isinstance(raw[field], bool)):
            errors.append(f"{prefix}: '{field}' must be an integer")
    for field in _NUMBER_FIELDS:
        value = raw.get(field)
        if field in raw and (not isinstance(value, (int, float)) or isinstance(value, bool)):
            errors.append(f"{prefix}: '{field}' must be a number")
        elif field in raw and not math.isfinite(value):
            errors.append(f"{prefix}: '{field}' must be a finite number")
    port = raw.get("port")
    if isinstance(port, int) and not 1 <= port <= 65535:
        errors.append(f"{prefix}: 'port' must be between 1 and 65535")
    attempts = raw.get("max_attempts")
    if isinstance(attempts, int) and attempts < 1:
        errors.append(f"{prefix}: 'max_attempts' must be at least 1")
    interval = raw.get("interval_seconds")
    if isinstance(interval, (int, float)) and math.isfinite(interval) and interval < 0:
        errors.append(f"{prefix}: 'interval_seconds' must not be negative")
    probe_timeout = raw.get("probe_timeout")
    if isinstance(probe_timeout, (int, float)) and probe_timeout <= 0:
        errors.append(f"{prefix}: 'probe_timeout' must be positive")


def validate_config(config: dict[str, Any]) -> list[str]:
    """
    Validate a loaded configuration dictionary.

    MAC address format is checked later, when a host is actually woken, so a
    freshly generated config holding the placeholder still loads.

    Returns:
        List of validation error messages (empty list = valid)
    """
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config root must be a YAML mapping"]

    settings = config.get("settings", {})
    if not isinstance(settings, dict):
        errors.append("'settings' must be a mapping")
    else:
        _check_numbers("settings", settings, errors)

    hosts = config.get("hosts")
    if not hosts:
        errors.append("'hosts' key is required and must be a non-empty list")
        return errors

    if not isinstance(hosts, list):
        errors.append("'hosts' must be a list")
        return errors

    seen: set[str] = set()
    for i, host in enumerate(hosts):
        prefix = f"hosts[{i}]"
        if not isinstance(host, dict):
            errors.append(f"{prefix}: must be a mapping")
            continue
        for field in ("mac_address", "host_address"):
            if not host.get(field):
                errors.append(f"{prefix}: missing required field '{field}'")
        # Unquoted YAML 1.1 values like 10:20:30:40:50:59 load as base-60 integers.
        for field in ("mac_address", "host_address", "broadcast_address", "name"):
            if host.get(field) and not isinstance(host[field], str):
                errors.append(f"{prefix}: '{field}' must be a quoted string")
        _check_numbers(prefix, host, errors)
        name = host.get("name") or host.get("host_address")
        if not isinstance(name, str):
            continue
        if name in seen:
            errors.append(f"{prefix}: duplicate host name '{name}'")
        seen.add(name)

    return errors


def targets_from_config(config: dict[str, Any]) -> list[HostEntry]:
    """
    Construct HostEntry objects from a validated config dict.

    Per-host polling values override the global ``settings`` block.
    """
    settings = config.get("settings") or {}
    entries: list[HostEntry] = []
    for raw in config.get("hosts", []):
        target = WakeTarget(
            mac_address=str(raw["mac_address"]),
            host_address=str(raw["host_address"]),
            broadcast_address=str(raw.get("broadcast_address", DEFAULT_BROADCAST)),
            port=int(raw.get("port", DEFAULT_PORT)),
            name=str(raw.get("name", "")),
        )
        policy = WaitPolicy(
            max_attempts=int(raw.get("max_attempts", settings.get("max_attempts", 30))),
            interval_seconds=float(
                raw.get("interval_seconds", settings.get("interval_seconds", 10))
            ),
            probe_timeout=float(raw.get("probe_timeout", settings.get("probe_timeout", 2))),
        )
        entries.append(HostEntry(target=target, policy=policy))
    return entries


def apply_env_overrides(
    entry: HostEntry, env: Optional[Mapping[str, str]] = None
) -> HostEntry:
    """
    Layer WAKEHOST_* environment variables over *entry*.

    Raises:
        ConfigError: If a numeric variable does not parse or is out of range
    """
    env = os.environ if env is None else env
    target_changes: dict[str, Any] = {}
    policy_changes: dict[str, Any] = {}

    if env.get(ENV_MAC):
        target_changes["mac_address"] = env[ENV_MAC]
    if env.get(ENV_HOST):
        target_changes["host_address"] = env[ENV_HOST]
    if env.get(ENV_BROADCAST):
        target_changes["broadcast_address"] = env[ENV_BROADCAST]
    try:
        if env.get(ENV_PORT):
            target_changes["port"] = int(env[ENV_PORT])
        if env.get(ENV_MAX_ATTEMPTS):
            policy_changes["max_attempts"] = int(env[ENV_MAX_ATTEMPTS])
        if env.get(ENV_INTERVAL):
            policy_changes["interval_seconds"] = float(env[ENV_INTERVAL])
        policy = replace(entry.policy, **policy_changes)
    except ValueError as exc:
        raise ConfigError(f"Invalid environment override: {exc}") from exc

    return HostEntry(target=replace(entry.target, **target_changes), policy=policy)
