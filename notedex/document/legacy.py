"""
Conversion from the legacy single-author note format.

Older notes carried one ``author`` string, a flat tag list, a free-text date
and no identity fields. Converting one always starts a new lineage.
"""

import datetime as dt
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from notedex.document.identity import IdGenerator, default_generator
from notedex.document.models import Document
from notedex.document.normalizers import normalize_date
from notedex.document.parser import load_metadata
from notedex.exceptions import ParseError


class LegacyDocument(BaseModel):
    """A note in the legacy single-author format."""

    model_config = ConfigDict(extra="ignore")

    author: str = ""
    date: Union[str, int, float, dt.datetime, dt.date] = ""
    title: str = ""
    subtitle: str = ""
    tags: List[str] = Field(default_factory=list)
    body: str = ""
    filename: str = ""

    @field_validator("author", "date", "title", "subtitle", "filename", mode="before")
    @classmethod
    def _empty_text(cls, value):
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _empty_tags(cls, value):
        return [] if value is None else value


def convert_legacy(
    legacy: LegacyDocument, generator: Optional[IdGenerator] = None
) -> Document:
    """
    Convert a legacy note into a current Document.

    The single author becomes a one-element author list, the date goes through
    the shared date normalizer, ``writes`` is set to 1 and a fresh identity is
    generated regardless of the input.

    Raises:
        DateParseError: If the legacy date matches no accepted encoding.
    """
    token = (generator or default_generator).generate()
    fields = {
        "id": token,
        "parentid": token,
        "authors": [legacy.author] if legacy.author else [],
        "body": legacy.body,
        "writes": 1,
        "tags": list(legacy.tags),
        "title": legacy.title,
        "subtitle": legacy.subtitle,
        "filename": legacy.filename,
    }
    # An undated legacy note gets the conversion time
    if legacy.date != "":
        fields["date"] = normalize_date(legacy.date)
    return Document.model_validate(fields)


def parse_legacy_text(text: str, *, filename: str = "") -> LegacyDocument:
    """
    Parse a legacy note file.

    Raises:
        ParseError: If the metadata block is missing or malformed.
    """
    metadata, body = load_metadata(text)
    metadata["body"] = body
    if filename:
        metadata["filename"] = filename
    try:
        return LegacyDocument.model_validate(metadata)
    except ValidationError as e:
        raise ParseError(f"Invalid legacy metadata: {e}") from e
