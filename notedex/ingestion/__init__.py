"""
Ingestion of note files: discovery, concurrent loading, submission.
"""

from notedex.ingestion.discovery import glob_files
from notedex.ingestion.pipeline import (
    IngestFailure,
    IngestResult,
    load_documents,
    parse_source,
    read_document,
    submit_documents,
)

__all__ = [
    "IngestFailure",
    "IngestResult",
    "glob_files",
    "load_documents",
    "parse_source",
    "read_document",
    "submit_documents",
]
