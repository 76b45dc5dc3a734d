"""
Document model for notedex.

This package turns frontmatter notes into canonical Document records and
renders them for the search index, for disk, or for a human reader.
"""

from notedex.document.frontmatter import split_frontmatter
from notedex.document.identity import (
    IdGenerator,
    SequenceIdGenerator,
    TimeRandomIdGenerator,
    assign_identity,
)
from notedex.document.legacy import LegacyDocument, convert_legacy, parse_legacy_text
from notedex.document.models import Document, SerializationMode
from notedex.document.normalizers import (
    format_date,
    normalize_authors,
    normalize_date,
    normalize_tags,
)
from notedex.document.parser import load_metadata, parse_text
from notedex.document.serializer import (
    encode_payload,
    project,
    project_disk,
    project_human,
    project_storage,
    render,
    to_payload,
)

__all__ = [
    "Document",
    "IdGenerator",
    "LegacyDocument",
    "SequenceIdGenerator",
    "SerializationMode",
    "TimeRandomIdGenerator",
    "assign_identity",
    "convert_legacy",
    "encode_payload",
    "format_date",
    "load_metadata",
    "normalize_authors",
    "normalize_date",
    "normalize_tags",
    "parse_legacy_text",
    "parse_text",
    "project",
    "project_disk",
    "project_human",
    "project_storage",
    "render",
    "to_payload",
]
