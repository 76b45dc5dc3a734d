"""
Note parsing: raw text to Document.
"""

from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import ValidationError

from notedex.document.frontmatter import NOTE_HANDLER, split_frontmatter
from notedex.document.identity import IdGenerator
from notedex.document.models import Document
from notedex.exceptions import ParseError


def load_metadata(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a note and load its metadata block as YAML.

    Returns:
        A ``(metadata, body)`` tuple.

    Raises:
        ParseError: If the block is missing, is not valid YAML or is not a mapping.
    """
    metadata_text, body = split_frontmatter(text)

    try:
        metadata = NOTE_HANDLER.load(metadata_text)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid metadata block: {e}") from e

    if not isinstance(metadata, dict):
        raise ParseError(
            f"Metadata block must be a mapping, got {type(metadata).__name__}"
        )
    return metadata, body


def parse_text(
    text: str,
    *,
    filename: str = "",
    generator: Optional[IdGenerator] = None,
) -> Document:
    """
    Parse a frontmatter note into a Document.

    The body is taken verbatim from the text after the metadata block; a
    ``body`` key inside the block (present in Storage renderings) is ignored.

    Args:
        text: Raw note text.
        filename: Source file name. When empty, the metadata's ``filename``
            is kept.
        generator: Identity token source for notes without an ``id``.

    Returns:
        The parsed Document.

    Raises:
        ParseError: If the metadata block is missing, is not valid YAML, is not
            a mapping, or does not satisfy the Document schema.
        DateParseError: If the date matches no accepted encoding.
        TagFormatError: If the tags are neither a string nor a list of strings.
    """
    metadata, body = load_metadata(text)
    metadata["body"] = body
    if filename:
        metadata["filename"] = filename

    try:
        return Document.model_validate(metadata, context={"id_generator": generator})
    except ValidationError as e:
        raise ParseError(f"Invalid metadata: {e}") from e
