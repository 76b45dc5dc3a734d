"""
Document identity.

Every document carries an ``id`` and a ``parentid`` lineage pointer. Fresh
documents are the root of their own lineage, so both fields hold the same
token. Tokens come from an injectable ``IdGenerator``; production code uses
``TimeRandomIdGenerator``, tests pass a ``SequenceIdGenerator``.
"""

import secrets
import threading
import time
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

# Crockford base32, no I, L, O, U
ENCODING = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
TIMESTAMP_BITS = 48
RANDOM_BITS = 80
TOKEN_LENGTH = 26


@runtime_checkable
class IdGenerator(Protocol):
    """Produces unique string tokens."""

    def generate(self) -> str:
        ...


def _encode(value: int, length: int) -> str:
    chars = []
    for _ in range(length):
        value, index = divmod(value, 32)
        chars.append(ENCODING[index])
    return "".join(reversed(chars))


class TimeRandomIdGenerator:
    """
    Time-ordered identifiers with a random suffix.

    A token is a 48-bit millisecond timestamp followed by 80 random bits,
    encoded as 26 Crockford base32 characters. Tokens sort by creation time
    at millisecond granularity. Uniqueness across threads and processes rests
    on the random component only; no counter is shared.
    """

    def generate(self) -> str:
        timestamp = time.time_ns() // 1_000_000
        value = (timestamp << RANDOM_BITS) | secrets.randbits(RANDOM_BITS)
        return _encode(value, TOKEN_LENGTH)


class SequenceIdGenerator:
    """Deterministic generator yielding ``<prefix>-0001``, ``<prefix>-0002``, ..."""

    def __init__(self, prefix: str = "doc", start: int = 1):
        self.prefix = prefix
        self._next = start
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            value = self._next
            self._next += 1
        return f"{self.prefix}-{value:04d}"


default_generator: IdGenerator = TimeRandomIdGenerator()


def _as_token(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def assign_identity(
    metadata: Mapping[str, Any], generator: Optional[IdGenerator] = None
) -> Dict[str, Any]:
    """
    Fill in ``id`` and ``parentid`` on parsed metadata.

    A missing or empty ``id`` gets a fresh token, written to both fields. An
    existing ``id`` is kept; a missing ``parentid`` then defaults to it.

    Args:
        metadata: Parsed metadata mapping. Not modified.
        generator: Token source. Defaults to the module's time+random generator.

    Returns:
        A new mapping with both identity fields non-empty.
    """
    result = dict(metadata)
    doc_id = _as_token(result.get("id"))
    if not doc_id.strip():
        doc_id = (generator or default_generator).generate()
        result["id"] = doc_id
        result["parentid"] = doc_id
        return result

    result["id"] = doc_id
    if not _as_token(result.get("parentid")).strip():
        result["parentid"] = doc_id
    else:
        result["parentid"] = _as_token(result["parentid"])
    return result
