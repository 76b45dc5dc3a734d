"""
Frontmatter splitting and formatting.

A note starts with a metadata block, optionally opened by a ``---`` line and
always closed by one, followed by free-form body text::

    ---
    title: Hello
    tags: foo
    ---
    Body text

``NOTE_HANDLER`` is the python-frontmatter handler for this layout. Unlike
``frontmatter.loads`` it keeps the body byte for byte, so a Storage rendering
parses back to the same body.
"""

import re
from typing import Any, Dict, Tuple

import frontmatter
from frontmatter.default_handlers import YAMLHandler

from notedex.exceptions import ParseError

DELIMITER = "---"


class NoteYAMLHandler(YAMLHandler):
    """YAML frontmatter whose opening delimiter is optional."""

    FM_BOUNDARY = re.compile(r"^---[ \t]*(?:\r?\n|\Z)", re.MULTILINE)
    START_DELIMITER = DELIMITER
    END_DELIMITER = DELIMITER

    def detect(self, text: str) -> bool:
        return self.FM_BOUNDARY.search(text) is not None

    def split(self, text: str) -> Tuple[str, str]:
        opening = self.FM_BOUNDARY.match(text)
        start = opening.end() if opening else 0
        closing = self.FM_BOUNDARY.search(text, start)
        if closing is None:
            raise ValueError("No closing delimiter")
        return text[start:closing.start()], text[closing.end():]

    def format(self, post: frontmatter.Post, **kwargs: Any) -> str:
        # Delimiter, block, delimiter, then the content untouched
        metadata = self.export(post.metadata, **kwargs)
        return (
            f"{self.START_DELIMITER}\n{metadata}\n{self.END_DELIMITER}\n{post.content}"
        )


NOTE_HANDLER = NoteYAMLHandler()


def split_frontmatter(text: str) -> Tuple[str, str]:
    """
    Split note text into its metadata block and body.

    Args:
        text: Raw note text.

    Returns:
        A ``(metadata_text, body_text)`` tuple. The body is everything after
        the closing delimiter line, untouched.

    Raises:
        ParseError: If the text has no closing delimiter or the block is blank.
    """
    try:
        metadata_text, body = NOTE_HANDLER.split(text)
    except ValueError as e:
        raise ParseError("No metadata found") from e
    if not metadata_text.strip():
        raise ParseError("No metadata found")
    return metadata_text, body


def dump_frontmatter(metadata: Dict[str, Any], content: str = "") -> str:
    """
    Format a metadata block followed by ``content``.

    Keys are written in the mapping's order.
    """
    post = frontmatter.Post(content, handler=NOTE_HANDLER, **metadata)
    return frontmatter.dumps(post, handler=NOTE_HANDLER, sort_keys=False)
