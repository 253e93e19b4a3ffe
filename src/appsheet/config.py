"""Settings for appsheet."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .collector import DEFAULT_COUNT

CONFIG_FILENAME = "appsheet.yaml"
ENV_PREFIX = "APPSHEET_"


class ConfigError(ValueError):
    """Settings are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    base_url: str
    count: int = DEFAULT_COUNT
    max_pages: int | None = None
    timeout: float | None = None


def default_config_path() -> Path:
    """Return the settings file looked up when none is given."""
    return Path.cwd() / CONFIG_FILENAME


def read_config_file(path: Path) -> dict:
    """Load a YAML settings file into a plain dict."""
    yaml = YAML(typ="safe")
    try:
        with path.open() as f:
            data = yaml.load(f)
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return data


def _env_values() -> dict:
    values = {}
    for key in ("base_url", "count", "max_pages", "timeout"):
        value = os.getenv(ENV_PREFIX + key.upper())
        if value is not None and value.strip():
            values[key] = value.strip()
    return values


def _as_int(key: str, value, minimum: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer: {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer: {value!r}")
    if isinstance(value, float) and value != number:
        raise ConfigError(f"{key} must be an integer: {value!r}")
    if number < minimum:
        raise ConfigError(f"{key} must be at least {minimum}: {number}")
    return number


def _as_float(key: str, value) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number: {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise ConfigError(f"{key} must be a positive finite number: {number}")
    return number


def load_settings(
    config_path: Path | None = None,
    base_url: str | None = None,
    count: int | None = None,
    max_pages: int | None = None,
    timeout: float | None = None,
) -> Settings:
    """Resolve settings from file, environment and explicit overrides.

    Later sources win: settings file, then APPSHEET_* environment
    variables, then keyword arguments that are not None.
    """
    values: dict = {}

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Settings file not found: {config_path}")
        values.update(read_config_file(config_path))
    elif default_config_path().exists():
        values.update(read_config_file(default_config_path()))

    values.update(_env_values())

    overrides = {"base_url": base_url, "count": count, "max_pages": max_pages, "timeout": timeout}
    values.update({k: v for k, v in overrides.items() if v is not None})

    url = values.get("base_url")
    if not isinstance(url, str) or not url.strip():
        raise ConfigError(
            f"Base URL is not configured. Set base_url in {CONFIG_FILENAME}, "
            f"{ENV_PREFIX}BASE_URL, or pass --base-url"
        )

    settings_count = DEFAULT_COUNT
    if values.get("count") is not None:
        settings_count = _as_int("count", values["count"], minimum=0)

    settings_max_pages = None
    if values.get("max_pages") is not None:
        settings_max_pages = _as_int("max_pages", values["max_pages"], minimum=1)

    settings_timeout = None
    if values.get("timeout") is not None:
        settings_timeout = _as_float("timeout", values["timeout"])

    return Settings(
        base_url=url.strip(),
        count=settings_count,
        max_pages=settings_max_pages,
        timeout=settings_timeout,
    )
