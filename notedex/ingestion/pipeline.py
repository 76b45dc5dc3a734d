"""
Batch ingestion of note files.

Files are read concurrently and parsed independently. A file that cannot be
read, parsed or submitted is logged with its path and recorded as a failure;
the rest of the batch carries on.
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import aiofiles

from notedex.document import (
    Document,
    IdGenerator,
    convert_legacy,
    parse_legacy_text,
    parse_text,
)
from notedex.exceptions import (
    DateParseError,
    IngestError,
    NotedexError,
    ParseError,
    TagFormatError,
)
from notedex.utils import get_logger, log_with_context

logger = get_logger(__name__)

# Errors that are fatal for one file and harmless for the batch
FILE_ERRORS = (IngestError, ParseError, DateParseError, TagFormatError)


@dataclass
class IngestFailure:
    """A file that did not make it through ingestion."""

    path: Path
    stage: str
    error: str


@dataclass
class IngestResult:
    """Outcome of loading a batch of note files."""

    documents: Dict[Path, Document] = field(default_factory=dict)
    failures: List[IngestFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.documents) + len(self.failures)


def _record_failure(path: Path, stage: str, error: NotedexError) -> IngestFailure:
    log_with_context(
        logger,
        "error",
        f"Failed to {stage} {path}: {error.message}",
        {"path": str(path), "stage": stage, "error_type": type(error).__name__},
    )
    return IngestFailure(path=path, stage=stage, error=error.message)


def parse_source(
    path: Path,
    text: str,
    *,
    legacy: bool = False,
    generator: Optional[IdGenerator] = None,
) -> Document:
    """
    Parse note text read from ``path``, in either the current or legacy format.

    The file name is recorded on the Document.
    """
    if legacy:
        return convert_legacy(parse_legacy_text(text, filename=path.name), generator)
    return parse_text(text, filename=path.name, generator=generator)


async def read_document(
    path: Path,
    *,
    legacy: bool = False,
    generator: Optional[IdGenerator] = None,
) -> Document:
    """
    Read and parse a single note file.

    Raises:
        IngestError: If the file cannot be read as UTF-8 text.
        ParseError: If the note has no usable metadata block.
        DateParseError: If the note's date is unparsable.
        TagFormatError: If the note's tags have the wrong shape.
    """
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            text = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IngestError(f"Failed to read note: {e}", file_path=str(path)) from e

    return parse_source(path, text, legacy=legacy, generator=generator)


async def load_documents(
    paths: Iterable[Path],
    *,
    legacy: bool = False,
    generator: Optional[IdGenerator] = None,
    concurrency: int = 8,
) -> IngestResult:
    """
    Read and parse note files concurrently.

    Args:
        paths: Files to ingest.
        legacy: Parse files as legacy single-author notes and convert them.
        generator: Identity token source for notes without an ``id``.
        concurrency: Maximum number of files read at once.

    Returns:
        Parsed documents keyed by path, in input order, plus per-file failures.
    """
    semaphore = asyncio.Semaphore(concurrency)
    paths = list(paths)

    async def load(path: Path):
        async with semaphore:
            try:
                return await read_document(path, legacy=legacy, generator=generator)
            except FILE_ERRORS as e:
                return _record_failure(path, "load", e)

    outcomes = await asyncio.gather(*(load(path) for path in paths))

    result = IngestResult()
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, IngestFailure):
            result.failures.append(outcome)
        else:
            logger.debug(f"Loaded {path} as {outcome.id}")
            result.documents[path] = outcome
    return result


async def submit_documents(
    client,
    documents: Dict[Path, Document],
    *,
    concurrency: int = 8,
) -> List[IngestFailure]:
    """
    Submit documents to the search index one file at a time.

    A failed submission leaves that document unsent; ingesting the file again
    retries it.

    Args:
        client: An open ``MeiliClient``.
        documents: Documents keyed by source path.
        concurrency: Maximum number of requests in flight.

    Returns:
        The failed submissions.
    """
    semaphore = asyncio.Semaphore(concurrency)

    async def submit(path: Path, document: Document) -> Optional[IngestFailure]:
        async with semaphore:
            try:
                task = await client.add_documents([document])
            except NotedexError as e:
                return _record_failure(path, "submit", e)
            log_with_context(
                logger,
                "info",
                f"Submitted {path}",
                {"path": str(path), "id": document.id, "task": task.get("taskUid")},
            )
            return None

    outcomes = await asyncio.gather(
        *(submit(path, document) for path, document in documents.items())
    )
    return [failure for failure in outcomes if failure is not None]
