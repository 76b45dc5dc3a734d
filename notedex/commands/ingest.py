"""
Ingest notes command handler.

This module provides the command handler for the ingest command: discover
note files, parse them, and submit them to the search index.
"""

from typing import Optional

from notedex.config import load_config_or_default
from notedex.document import IdGenerator
from notedex.exceptions import ConfigurationError, IngestError
from notedex.ingestion import glob_files, load_documents, submit_documents
from notedex.search import MeiliClient
from notedex.utils import get_logger

logger = get_logger(__name__)


async def ingest_notes_command(
    config_path: Optional[str],
    pattern: Optional[str] = None,
    legacy: Optional[bool] = None,
    dry_run: bool = False,
    generator: Optional[IdGenerator] = None,
) -> None:
    """
    Ingest note files matching a glob pattern into the search index.

    Every file is attempted; failing files are logged and skipped.

    Args:
        config_path: Path to the notedex configuration file. Defaults apply
            when the file does not exist.
        pattern: Glob pattern of notes to ingest. If not provided, it will be
            read from the configuration file.
        legacy: Treat files as legacy single-author notes. If not provided,
            it will be read from the configuration file.
        dry_run: If True, parse and list the notes without submitting them.
        generator: Identity token source for notes without an ``id``.

    Raises:
        ConfigurationError: If the configuration is invalid or no pattern is given.
        IngestError: If any file failed to load or submit.
    """
    config = load_config_or_default(config_path)

    pattern = pattern or config.ingest.pattern
    if not pattern:
        raise ConfigurationError(
            "No glob pattern given and none found in configuration",
            config_file=config_path,
        )
    if legacy is None:
        legacy = config.ingest.legacy

    paths = glob_files(pattern)
    if not paths:
        logger.warning(f"No files match {pattern}")
        return

    logger.info(f"Loading {len(paths)} notes{' (legacy format)' if legacy else ''}")
    result = await load_documents(
        paths,
        legacy=legacy,
        generator=generator,
        concurrency=config.ingest.concurrency,
    )
    failures = list(result.failures)

    if dry_run:
        logger.info("Dry run: listing notes that would be submitted (but not submitting):")
        for path, document in result.documents.items():
            logger.info(f"  - {path} (id: {document.id}, title: {document.title})")
    elif result.documents:
        logger.info(
            f"Submitting {len(result.documents)} notes to "
            f"{config.meilisearch.url}/indexes/{config.meilisearch.index}"
        )
        async with MeiliClient(config.meilisearch) as client:
            failures.extend(
                await submit_documents(
                    client, result.documents, concurrency=config.ingest.concurrency
                )
            )

    succeeded = result.total - len(failures)
    logger.info(f"Ingested {succeeded}/{result.total} notes")

    if failures:
        raise IngestError(f"{len(failures)} of {result.total} notes failed")
