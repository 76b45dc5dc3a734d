"""
Canonical document model.

This module defines the Document record every note is normalized into, and
the closed set of serialization modes it can be rendered in.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from notedex.document.identity import IdGenerator, assign_identity
from notedex.document.normalizers import (
    normalize_authors,
    normalize_date,
    normalize_string_list,
    normalize_tags,
)


class SerializationMode(str, Enum):
    """Destination a Document is rendered for."""

    # Search index payload: every field, canonical date, body included
    STORAGE = "storage"
    # Note file metadata: no filename, no body, formatted date
    DISK = "disk"
    # Preview: the body alone
    HUMAN = "human"


def _now() -> int:
    return int(time.time())


class Document(BaseModel):
    """
    A normalized note.

    Instances are immutable. Identity is filled in during validation: a
    document without an ``id`` gets a fresh token in both ``id`` and
    ``parentid``. Pass an ``IdGenerator`` through the validation context to
    control the tokens::

        Document.model_validate(data, context={"id_generator": generator})
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    parentid: str = ""
    authors: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("authors", "author")
    )
    body: str = ""
    # Epoch seconds, UTC
    date: int = Field(default_factory=_now)
    title: str
    subtitle: str = ""
    background_img: str = ""
    links: List[str] = Field(default_factory=list)
    slug: str = ""
    tags: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("tags", "tag")
    )
    weight: int = 0
    writes: int = Field(default=0, ge=0)
    views: int = 0
    filename: str = ""
    # Chosen by the caller through with_mode, never read from metadata
    _serialization_mode: SerializationMode = PrivateAttr(default=SerializationMode.STORAGE)

    @model_validator(mode="before")
    @classmethod
    def _fill_identity(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, Mapping):
            generator = (info.context or {}).get("id_generator")
            return assign_identity(data, generator)
        return data

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> int:
        return normalize_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> List[str]:
        return normalize_tags(value)

    @field_validator("authors", mode="before")
    @classmethod
    def _normalize_authors(cls, value: Any) -> List[str]:
        return normalize_authors(value)

    @field_validator("links", mode="before")
    @classmethod
    def _normalize_links(cls, value: Any) -> List[str]:
        return normalize_string_list(value, "links")

    @field_validator("title", mode="before")
    @classmethod
    def _scalar_title(cls, value: Any) -> Any:
        # `title: 2021` loads as an int
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("subtitle", "background_img", "slug", "filename", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        # An empty YAML value (`subtitle:`) loads as None
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @classmethod
    def create(cls, generator: Optional[IdGenerator] = None, **fields: Any) -> "Document":
        """Build a Document from keyword fields, drawing identity from ``generator``."""
        return cls.model_validate(fields, context={"id_generator": generator})

    @classmethod
    def from_search_hit(cls, hit: Mapping[str, Any]) -> "Document":
        """
        Rebuild a Document from a Storage-shaped search hit.

        Optional fields the index omitted fall back to their defaults; keys the
        index adds (``_formatted``, ranking info) are ignored.
        """
        return cls.model_validate(dict(hit))

    @property
    def serialization_mode(self) -> SerializationMode:
        return self._serialization_mode

    def with_mode(self, mode: "SerializationMode | str") -> "Document":
        """Return a copy rendered in ``mode``."""
        document = self.model_copy()
        document._serialization_mode = SerializationMode(mode)
        return document

    def project(self) -> "Dict[str, Any] | str":
        """Project this document for its own serialization mode."""
        from notedex.document.serializer import project

        return project(self, self.serialization_mode)

    def __str__(self) -> str:
        from notedex.document.serializer import render

        return render(self, self.serialization_mode)
