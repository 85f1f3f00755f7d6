"""Conversion between LSP offset encodings and UTF-8 byte columns."""

from __future__ import annotations

from typing import Optional, Sequence

from ..errors import InvalidEncodingError, PositionOutOfRangeError
from ..logging import get_logger
from ..lsp.messages import Position

LOGGER = get_logger(__name__)

DEFAULT_OFFSET_ENCODING = "utf-16"
OFFSET_ENCODINGS = ("utf-8", "utf-16", "utf-32")

# Undecodable input bytes survive a decode/encode round trip as lone surrogates.
_ERRORS = "surrogateescape"


def encode_line(line: str) -> bytes:
    return line.encode("utf-8", _ERRORS)


def decode_line(data: bytes) -> str:
    return data.decode("utf-8", _ERRORS)


def _code_units(char: str, encoding: str) -> int:
    if encoding == "utf-16" and ord(char) > 0xFFFF:
        return 2
    return 1


def try_byte_index(line: str, index: Optional[int], encoding: Optional[str] = None) -> Optional[int]:
    """Return the UTF-8 byte offset of ``index`` code units into ``line``.

    ``None`` signals that the conversion is impossible: either ``encoding`` is
    not a known offset encoding or ``index`` lies beyond the end of the line.
    An index that falls inside a surrogate pair is rounded up to the end of
    that character. With ``index=None`` the byte length of the line is
    returned.
    """
    if encoding is None:
        encoding = DEFAULT_OFFSET_ENCODING
    if encoding not in OFFSET_ENCODINGS:
        return None
    if index is None:
        return len(encode_line(line))
    if encoding == "utf-8":
        return index
    if index < 0:
        return None

    units = 0
    offset = 0
    for char in line:
        if units >= index:
            return offset
        units += _code_units(char, encoding)
        offset += len(encode_line(char))
    if units >= index:
        return offset
    return None


def byte_index(line: str, index: Optional[int], encoding: Optional[str] = None) -> int:
    """Raising counterpart of :func:`try_byte_index`."""
    if encoding is None:
        encoding = DEFAULT_OFFSET_ENCODING
    if encoding not in OFFSET_ENCODINGS:
        raise InvalidEncodingError(encoding)
    result = try_byte_index(line, index, encoding)
    if result is None:
        raise PositionOutOfRangeError(index if index is not None else -1, encoding)
    return result


def resolve_column(lines: Sequence[str], position: Position, encoding: Optional[str] = None) -> int:
    """Return the zero-based byte column addressed by ``position``.

    Unconvertible positions clamp to the byte length of the line.
    """
    column = position.character
    if column == 0:
        return 0
    line = lines[position.line] if position.line < len(lines) else ""
    result = try_byte_index(line, column, encoding)
    if result is not None:
        return result
    fallback = min(len(encode_line(line)), column)
    LOGGER.debug(
        "Cannot convert %s character %s on line %s; clamping to byte %s",
        encoding or DEFAULT_OFFSET_ENCODING,
        column,
        position.line,
        fallback,
    )
    return fallback


__all__ = [
    "DEFAULT_OFFSET_ENCODING",
    "OFFSET_ENCODINGS",
    "byte_index",
    "decode_line",
    "encode_line",
    "resolve_column",
    "try_byte_index",
]
