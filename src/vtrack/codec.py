"""Binary-safe text encoding for persisted content.

JSON records only hold valid Unicode text, so file content is stored as
standard base64 (``A-Z a-z 0-9 + /`` with ``=`` padding). Decoding is
lenient by default: it stops at the first character outside the alphabet
and returns the bytes decoded up to that point. Passing ``strict=True``
turns anything other than well-formed trailing padding into an
``InvalidEncodingError``.
"""

import base64
import logging

from .errors import InvalidEncodingError

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
PADDING = "="

_ALPHABET_SET = frozenset(ALPHABET)


def encode(content: bytes) -> str:
    """Encode arbitrary bytes as padded base64 text."""
    return base64.b64encode(content).decode("ascii")


def decode(text: str, strict: bool = False) -> bytes:
    """Decode base64 text produced by encode.

    Args:
        text: Encoded content.
        strict: Raise instead of truncating at an invalid character.

    Returns:
        The decoded bytes. In lenient mode, only the bytes fully described by
        the characters before the first non-alphabet character.
    """
    end = _alphabet_prefix_length(text)

    if end < len(text) and not _is_padding_tail(text, end):
        if strict:
            raise InvalidEncodingError(end, text[end])
        logger.warning(
            "Stopped decoding at invalid character",
            extra={"position": end, "length": len(text)},
        )

    usable = text[:end]
    if len(usable) % 4 == 1:
        # A lone trailing sextet cannot complete a byte.
        if strict:
            raise InvalidEncodingError(end - 1, usable[-1])
        usable = usable[:-1]

    padding = PADDING * (-len(usable) % 4)
    return base64.b64decode(usable + padding)


def _alphabet_prefix_length(text: str) -> int:
    """Return the length of the leading run of alphabet characters."""
    for index, char in enumerate(text):
        if char not in _ALPHABET_SET:
            return index
    return len(text)


def _is_padding_tail(text: str, start: int) -> bool:
    """Check whether text[start:] is the padding that closes a base64 block."""
    tail = text[start:]
    return (
        0 < len(tail) <= 2
        and all(char == PADDING for char in tail)
        and len(text) % 4 == 0
    )
