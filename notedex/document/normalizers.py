"""
Field normalizers for note metadata.

Frontmatter is written by hand, so the same field shows up in several shapes:
dates as YAML timestamps, ISO strings, prose or epoch seconds, tags and
authors as a single string or a list. Each normalizer folds those shapes into
the one representation the Document stores.
"""

import math
import re
from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional

from notedex.exceptions import DateParseError, ParseError, TagFormatError

# Human and disk representation of a date. Also accepted on input.
DATE_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"

# Tried in order after ISO 8601 parsing fails.
DATE_INPUT_FORMATS = (
    DATE_DISPLAY_FORMAT,
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def _to_epoch(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


_EPOCH_TEXT_RE = re.compile(r"-?\d+")


def _parse_date_text(text: str) -> Optional[int]:
    if _EPOCH_TEXT_RE.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            # Beyond the interpreter's integer string length limit
            return None

    try:
        return _to_epoch(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in DATE_INPUT_FORMATS:
        try:
            return _to_epoch(datetime.strptime(text, fmt))
        except ValueError:
            continue

    try:
        return _to_epoch(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def _coerce_epoch(value: Any) -> Optional[int]:
    # bool is an int subclass; a bare `date: true` is not a date
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, datetime):
        return _to_epoch(value)
    if isinstance(value, date):
        return _to_epoch(datetime.combine(value, time.min))
    if isinstance(value, str) and value.strip():
        return _parse_date_text(value.strip())
    return None


def _representable(epoch: int) -> bool:
    try:
        datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def normalize_date(value: Any) -> int:
    """
    Normalize a date field to epoch seconds (UTC).

    Accepts epoch seconds, ``datetime``/``date`` objects (what YAML produces
    for unquoted timestamps) and the textual encodings listed in
    ``DATE_INPUT_FORMATS`` plus ISO 8601 and RFC 2822. Naive values are taken
    as UTC. NaN, infinities and epochs outside the calendar range (years
    1 to 9999) are rejected.

    Args:
        value: Raw metadata value.

    Returns:
        Epoch seconds.

    Raises:
        DateParseError: If no accepted encoding matches.
    """
    epoch = _coerce_epoch(value)
    if epoch is None:
        raise DateParseError("Unrecognized date", value=value)
    if not _representable(epoch):
        raise DateParseError("Date out of range", value=value)
    return epoch


def format_date(epoch: int) -> str:
    """Render epoch seconds in the display format, in UTC."""
    return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime(DATE_DISPLAY_FORMAT)


def _string_or_list(value: Any) -> Optional[List[str]]:
    """Return the canonical list for a string-or-list value, None if the shape is wrong."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    return None


def normalize_tags(value: Any) -> List[str]:
    """
    Normalize a tag field to a list of strings.

    Raises:
        TagFormatError: If the value is neither a string nor a list of strings.
    """
    tags = _string_or_list(value)
    if tags is None:
        raise TagFormatError("Tags must be a string or a list of strings", value=value)
    return tags


def normalize_string_list(value: Any, field: str = "value") -> List[str]:
    """
    Normalize a plain string-or-list field such as ``authors`` or ``links``.

    Raises:
        ParseError: If the value is neither a string nor a list of strings.
    """
    items = _string_or_list(value)
    if items is None:
        raise ParseError(f"{field} must be a string or a list of strings, got {value!r}")
    return items


def normalize_authors(value: Any) -> List[str]:
    """Normalize ``author``/``authors`` to a list; a single name becomes a one-element list."""
    return normalize_string_list(value, "authors")
