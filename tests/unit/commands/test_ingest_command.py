"""
Unit tests for the ingest command.

This module tests the ingest command handler.
"""

from unittest.mock import AsyncMock, patch

import pytest

from notedex.commands.ingest import ingest_notes_command
from notedex.config.models import IngestConfig, MainConfig
from notedex.exceptions import ConfigurationError, IngestError, SearchClientError


def _mock_client(mock_client_cls):
    client = AsyncMock()
    client.add_documents.return_value = {"taskUid": 1}
    mock_client_cls.return_value.__aenter__.return_value = client
    return client


class TestIngestNotesCommand:
    """Tests for the ingest_notes_command function."""

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_successful_ingest(self, mock_client_cls, tmp_path, id_generator):
        """Test ingesting a directory of valid notes."""
        (tmp_path / "a.md").write_text("title: A\n---\nbody a")
        (tmp_path / "b.md").write_text("title: B\ntags: x\n---\nbody b")
        client = _mock_client(mock_client_cls)

        await ingest_notes_command(
            str(tmp_path / "missing.toml"),
            str(tmp_path / "*.md"),
            generator=id_generator,
        )

        assert client.add_documents.await_count == 2
        titles = sorted(call.args[0][0].title for call in client.add_documents.await_args_list)
        assert titles == ["A", "B"]

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_failed_file_reported(self, mock_client_cls, notes_dir):
        """Test that good files are submitted and the bad one fails the run."""
        client = _mock_client(mock_client_cls)

        with pytest.raises(IngestError) as excinfo:
            await ingest_notes_command(None, str(notes_dir / "**" / "*.md"))

        assert client.add_documents.await_count == 2
        assert excinfo.value.message == "1 of 3 notes failed"

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_failed_submission_reported(self, mock_client_cls, tmp_path):
        """Test that a rejected submission fails the run."""
        (tmp_path / "a.md").write_text("title: A\n---\n")
        client = _mock_client(mock_client_cls)
        client.add_documents.side_effect = SearchClientError("Request failed", status=503)

        with pytest.raises(IngestError):
            await ingest_notes_command(None, str(tmp_path / "*.md"))

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_dry_run(self, mock_client_cls, tmp_path):
        """Test that a dry run parses without submitting."""
        (tmp_path / "a.md").write_text("title: A\n---\n")

        await ingest_notes_command(None, str(tmp_path / "*.md"), dry_run=True)

        mock_client_cls.assert_not_called()

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_legacy(self, mock_client_cls, tmp_path):
        """Test that legacy notes are converted before submission."""
        (tmp_path / "old.md").write_text("author: Alice\ndate: 2021-01-02\ntitle: Old\n---\nbody")
        client = _mock_client(mock_client_cls)

        await ingest_notes_command(None, str(tmp_path / "*.md"), legacy=True)

        sent = client.add_documents.await_args.args[0][0]
        assert sent.authors == ["Alice"]
        assert sent.writes == 1

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.load_config_or_default")
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_pattern_from_config(self, mock_client_cls, mock_load_config, tmp_path):
        """Test that the pattern falls back to the configuration."""
        (tmp_path / "a.md").write_text("title: A\n---\n")
        mock_load_config.return_value = MainConfig(
            ingest=IngestConfig(pattern=str(tmp_path / "*.md"))
        )
        client = _mock_client(mock_client_cls)

        await ingest_notes_command("notedex.toml")

        mock_load_config.assert_called_once_with("notedex.toml")
        assert client.add_documents.await_count == 1

    @pytest.mark.asyncio
    async def test_no_pattern(self, tmp_path):
        """Test that a missing pattern is a configuration error."""
        with pytest.raises(ConfigurationError):
            await ingest_notes_command(str(tmp_path / "missing.toml"))

    @pytest.mark.asyncio
    @patch("notedex.commands.ingest.MeiliClient")
    async def test_no_matches(self, mock_client_cls, tmp_path):
        """Test that an empty match is not an error."""
        await ingest_notes_command(None, str(tmp_path / "*.md"))
        mock_client_cls.assert_not_called()
