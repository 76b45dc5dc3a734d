"""
Unit tests for configuration models and loading.
"""

import pytest
from pydantic import ValidationError

from notedex.config import (
    IngestConfig,
    LoggingConfig,
    MainConfig,
    MeilisearchConfig,
    apply_env_overrides,
    load_config,
    load_config_or_default,
)
from notedex.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment variables and .env files out of the tests."""
    for name in ("NOTEDEX_MEILI_URL", "NOTEDEX_MEILI_INDEX", "NOTEDEX_MEILI_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("notedex.config.loader.load_dotenv", lambda: False)


class TestMeilisearchConfig:
    """Tests for the MeilisearchConfig model."""

    def test_defaults(self):
        """Test the default connection settings."""
        config = MeilisearchConfig()
        assert config.url == "http://127.0.0.1:7700"
        assert config.index == "notes"
        assert config.api_key is None
        assert config.timeout == 30.0

    def test_trailing_slash(self):
        """Test that a trailing slash is dropped."""
        assert MeilisearchConfig(url="https://search.example/").url == "https://search.example"

    def test_invalid_url(self):
        """Test that a non-http URL is rejected."""
        with pytest.raises(ValidationError):
            MeilisearchConfig(url="search.example")

    def test_empty_index(self):
        """Test that the index name is required."""
        with pytest.raises(ValidationError):
            MeilisearchConfig(index="  ")

    def test_blank_api_key(self):
        """Test that a blank key means no key."""
        assert MeilisearchConfig(api_key="").api_key is None


class TestOtherModels:
    """Tests for the ingest and logging models."""

    def test_concurrency(self):
        """Test that concurrency must be at least one."""
        with pytest.raises(ValidationError):
            IngestConfig(concurrency=0)

    def test_log_level(self):
        """Test that log levels are normalized and validated."""
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")


class TestLoadConfig:
    """Tests for the configuration loader."""

    def test_load(self, tmp_path):
        """Test loading a complete file."""
        config_file = tmp_path / "notedex.toml"
        config_file.write_text(
            "[meilisearch]\n"
            'url = "http://search:7700"\n'
            'index = "vault"\n'
            'api_key = ""\n'
            "timeout = 5\n"
            "[ingest]\n"
            'pattern = "~/notes/**/*.md"\n'
            "concurrency = 4\n"
            "legacy = true\n"
            "[logging]\n"
            'level = "warning"\n'
            "structured = false\n"
        )

        config = load_config(str(config_file))

        assert isinstance(config, MainConfig)
        assert config.meilisearch.index == "vault"
        assert config.meilisearch.api_key is None
        assert config.meilisearch.timeout == 5
        assert config.ingest.pattern == "~/notes/**/*.md"
        assert config.ingest.legacy is True
        assert config.logging.level == "WARNING"
        assert config.logging.structured is False

    def test_missing_file(self, tmp_path):
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigurationError) as excinfo:
            load_config(str(tmp_path / "missing.toml"))
        assert excinfo.value.exit_code == 2

    def test_invalid_toml(self, tmp_path):
        """Test that a TOML syntax error is a configuration error."""
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[meilisearch\n")
        with pytest.raises(ConfigurationError) as excinfo:
            load_config(str(config_file))
        assert excinfo.value.config_file == str(config_file.resolve())

    def test_invalid_values(self, tmp_path):
        """Test that schema violations are configuration errors."""
        config_file = tmp_path / "bad.toml"
        config_file.write_text('[meilisearch]\nurl = "ftp://x"\n')
        with pytest.raises(ConfigurationError):
            load_config(str(config_file))

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test that environment variables win over the file."""
        config_file = tmp_path / "notedex.toml"
        config_file.write_text('[meilisearch]\nurl = "http://file:7700"\nindex = "file"\n')
        monkeypatch.setenv("NOTEDEX_MEILI_URL", "http://env:7700")
        monkeypatch.setenv("NOTEDEX_MEILI_API_KEY", "key")

        config = load_config(str(config_file))

        assert config.meilisearch.url == "http://env:7700"
        assert config.meilisearch.index == "file"
        assert config.meilisearch.api_key == "key"


class TestLoadConfigOrDefault:
    """Tests for load_config_or_default."""

    def test_defaults_without_file(self, tmp_path):
        """Test that a missing file gives defaults."""
        config = load_config_or_default(str(tmp_path / "missing.toml"))
        assert config == MainConfig()

    def test_none(self, monkeypatch):
        """Test that no path gives defaults with overrides."""
        monkeypatch.setenv("NOTEDEX_MEILI_INDEX", "env-index")
        assert load_config_or_default(None).meilisearch.index == "env-index"

    def test_invalid_override(self, monkeypatch):
        """Test that an invalid override is a configuration error."""
        monkeypatch.setenv("NOTEDEX_MEILI_URL", "not-a-url")
        with pytest.raises(ConfigurationError):
            load_config_or_default(None)


class TestApplyEnvOverrides:
    """Tests for apply_env_overrides."""

    def test_input_not_modified(self, monkeypatch):
        """Test that the raw configuration is copied."""
        monkeypatch.setenv("NOTEDEX_MEILI_INDEX", "env")
        raw = {"meilisearch": {"index": "file"}}
        result = apply_env_overrides(raw)
        assert result["meilisearch"]["index"] == "env"
        assert raw["meilisearch"]["index"] == "file"
