"""
Configuration models for the notedex CLI tool.

This module defines Pydantic models for configuration validation.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class MeilisearchConfig(BaseModel):
    """Pydantic model for the search index connection."""

    url: str = Field(default="http://127.0.0.1:7700")
    index: str = Field(default="notes")
    api_key: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that the URL is an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("index")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that the index name is not empty."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank key as no key."""
        if v is None or not v.strip():
            return None
        return v


class IngestConfig(BaseModel):
    """Pydantic model for ingestion settings."""

    pattern: Optional[str] = None
    concurrency: int = Field(default=8, ge=1)
    legacy: bool = False


class LoggingConfig(BaseModel):
    """Pydantic model for logging configuration."""

    level: str = Field(default="INFO")
    structured: bool = True

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class MainConfig(BaseModel):
    """Pydantic model for the main configuration file."""

    meilisearch: MeilisearchConfig = Field(default_factory=MeilisearchConfig)
    ingest: IngestConfig = Field(default_factory=IngestConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
