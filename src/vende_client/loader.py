"""Configuration loading from YAML files and the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import ClientConfig
from .exceptions import ConfigError, ConfigErrorCodes

ENV_PREFIX = "VENDE_API_"

_ENV_FIELDS = {
    "BASE_URL": "base_url",
    "TIMEOUT_MS": "timeout_ms",
    "MAX_RETRIES": "max_retries",
    "RETRY_BASE_DELAY_MS": "retry_base_delay_ms",
    "RETRY_MAX_DELAY_MS": "retry_max_delay_ms",
    "DEDUP_WINDOW_MS": "dedup_window_ms",
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``. Lists are replaced, not merged."""
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def _validate(data: dict[str, Any]) -> ClientConfig:
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e


def load(base_path: Path, env_path: Path | None = None) -> ClientConfig:
    """Load the client config from ``base_path``.

    The ``api_client`` section is used when present, otherwise the whole file.
    ``env_path`` is merged on top when it exists.
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    section = data.get("api_client", data)
    return _validate(section if isinstance(section, dict) else {})


def load_from_env(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Build the client config from ``VENDE_API_*`` variables."""
    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    for suffix, name in _ENV_FIELDS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value:
            data[name] = value
    return _validate(data)
