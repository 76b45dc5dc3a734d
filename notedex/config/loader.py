"""
Configuration loader module for the notedex CLI tool.

This module provides utilities for loading and validating configuration files.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Type

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from notedex.config.models import MainConfig
from notedex.exceptions import ConfigurationError
from notedex.utils import get_logger

logger = get_logger(__name__)

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "NOTEDEX_MEILI_URL": ("meilisearch", "url"),
    "NOTEDEX_MEILI_INDEX": ("meilisearch", "index"),
    "NOTEDEX_MEILI_API_KEY": ("meilisearch", "api_key"),
}


def apply_env_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay environment variables (and a local .env file) onto raw configuration.

    Args:
        config_dict: Raw configuration as loaded from TOML. Not modified.

    Returns:
        A new dictionary with overrides applied.
    """
    load_dotenv()

    result: Dict[str, Any] = {}
    for key, value in config_dict.items():
        result[key] = dict(value) if isinstance(value, dict) else value

    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            result.setdefault(section, {})[key] = value
    return result


def load_config(config_path: str, config_model: Type[BaseModel] = MainConfig) -> BaseModel:
    """
    Load and validate configuration from a TOML file using a Pydantic model.

    Args:
        config_path: Path to the configuration file.
        config_model: Pydantic model class to use for validation.

    Returns:
        Validated configuration object.

    Raises:
        ConfigurationError: If the configuration file doesn't exist or is invalid.
    """
    config_file = Path(config_path).expanduser().resolve()
    if not config_file.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}", config_file=str(config_file)
        )

    try:
        with open(config_file, "rb") as f:
            config_dict = tomllib.load(f)
        return config_model(**apply_env_overrides(config_dict))
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        logger.error(f"Error parsing configuration file: {e}")
        raise ConfigurationError(
            f"Invalid configuration: {e}", config_file=str(config_file)
        ) from e


def load_config_or_default(config_path: Optional[str]) -> MainConfig:
    """
    Load the configuration file if it exists, otherwise build defaults.

    Environment overrides apply in both cases.
    """
    if config_path and Path(config_path).expanduser().exists():
        return load_config(config_path, MainConfig)

    logger.debug(f"Configuration file not found, using defaults: {config_path}")
    try:
        return MainConfig(**apply_env_overrides({}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
