"""
Render note command handler.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO

from notedex.document import SerializationMode, parse_text
from notedex.exceptions import IngestError
from notedex.utils import get_logger

logger = get_logger(__name__)


def render_note_command(
    path: str,
    mode: str = SerializationMode.STORAGE.value,
    out: Optional[TextIO] = None,
) -> str:
    """
    Parse one note file and print it in the requested serialization mode.

    Args:
        path: Note file to render.
        mode: ``storage``, ``disk`` or ``human``.
        out: Stream to print to. Defaults to stdout.

    Returns:
        The rendered text.

    Raises:
        IngestError: If the file cannot be read.
        ParseError, DateParseError, TagFormatError: If the note is malformed.
    """
    out = out or sys.stdout
    note_path = Path(path).expanduser()
    try:
        text = note_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestError(f"Failed to read note: {e}", file_path=str(note_path)) from e

    document = parse_text(text, filename=note_path.name).with_mode(mode)
    logger.debug(f"Rendering {note_path} ({document.id}) in {document.serialization_mode.value} mode")

    rendered = str(document)
    out.write(rendered)
    return rendered
