"""
Configuration module for the notedex CLI tool.

This module provides configuration models and utilities for loading and validating configuration.
"""

from notedex.config.loader import apply_env_overrides, load_config, load_config_or_default
from notedex.config.models import (
    IngestConfig,
    LoggingConfig,
    MainConfig,
    MeilisearchConfig,
)

__all__ = [
    "IngestConfig",
    "LoggingConfig",
    "MainConfig",
    "MeilisearchConfig",
    "apply_env_overrides",
    "load_config",
    "load_config_or_default",
]
