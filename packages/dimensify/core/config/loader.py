"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from dimensify.core.config.models import AppConfig
from dimensify.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

REPLICATE_TOKEN_ENV = "REPLICATE_API_TOKEN"
SEGMIND_KEY_ENV = "SEGMIND_API_KEY"

_app_config_cache: AppConfig | None = None


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Example:
        >>> detect_format("config.json")
        'json'
        >>> detect_format("config.yml")
        'yaml'

    Raises:
        ValueError: If format cannot be determined
    """
    suffix = Path(file_path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    with path.open("r", encoding="utf-8") as f:
        if fmt == "json":
            try:
                content = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e
        else:
            try:
                content = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Falls back to defaults when the file does not exist. Credentials left
    unset in the file are read from ``REPLICATE_API_TOKEN`` and
    ``SEGMIND_API_KEY``. The default-path config is cached.

    Raises:
        ValidationError: If config is invalid
    """
    global _app_config_cache

    use_default = path is None
    if use_default and _app_config_cache is not None:
        return _app_config_cache

    config_path = Path(path) if path is not None else AppConfig.default_path()
    if config_path.exists():
        config = AppConfig.model_validate(load_config(config_path))
    else:
        if not use_default:
            logger.warning("Config file %s not found, using defaults", config_path)
        config = AppConfig()

    config = _with_env_credentials(config)

    if use_default:
        _app_config_cache = config
    return config


def clear_app_config_cache() -> None:
    global _app_config_cache
    _app_config_cache = None


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from the app config's logging section."""
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def _with_env_credentials(config: AppConfig) -> AppConfig:
    """Return a copy of ``config`` with missing credentials taken from the environment."""
    updates: dict[str, Any] = {}

    if config.replicate.api_token is None:
        token = os.getenv(REPLICATE_TOKEN_ENV)
        if token:
            logger.debug("Loaded %s from environment", REPLICATE_TOKEN_ENV)
            updates["replicate"] = config.replicate.model_copy(update={"api_token": token})

    if config.segmind.api_key is None:
        key = os.getenv(SEGMIND_KEY_ENV)
        if key:
            logger.debug("Loaded %s from environment", SEGMIND_KEY_ENV)
            updates["segmind"] = config.segmind.model_copy(update={"api_key": key})

    return config.model_copy(update=updates) if updates else config
