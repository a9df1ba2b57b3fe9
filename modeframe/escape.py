"""Escaping of UTF-8 text for JSON string literals."""

from __future__ import annotations

from enum import Enum
from typing import Union

UTF8_ACCEPT = 0
UTF8_REJECT = 1

_UINT32_MASK = 0xFFFFFFFF

# Byte classes (first 256 entries) followed by the state transition table.
_UTF8D = (
    (0,) * 128
    + (1,) * 16 + (9,) * 16
    + (7,) * 32
    + (8, 8) + (2,) * 30
    + (0xA,) + (0x3,) * 12 + (0x4, 0x3, 0x3)
    + (0xB, 0x6, 0x6, 0x6, 0x5) + (0x8,) * 11
    + (0x0, 0x1, 0x2, 0x3, 0x5, 0x8, 0x7, 0x1, 0x1, 0x1, 0x4, 0x6, 0x1, 0x1, 0x1, 0x1)
    + (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
       1, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1, 1, 1, 1, 1, 1)
    + (1, 2, 1, 1, 1, 1, 1, 2, 1, 2, 1, 1, 1, 1, 1, 1,
       1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1)
    + (1, 2, 1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1,
       1, 1, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1)
    + (1, 3, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
       1, 3, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1)
)
assert len(_UTF8D) == 400

_SHORT_ESCAPES = {
    0x08: b"\\b",
    0x09: b"\\t",
    0x0A: b"\\n",
    0x0C: b"\\f",
    0x0D: b"\\r",
    0x22: b'\\"',
    0x5C: b"\\\\",
}

_REPLACEMENT_ASCII = b"\\ufffd"
_REPLACEMENT_UTF8 = b"\xef\xbf\xbd"


class ErrorHandler(Enum):
    """How to react to invalid UTF-8 input."""

    STRICT = "strict"
    REPLACE = "replace"
    IGNORE = "ignore"


class JsonTypeError(TypeError):
    """Raised when a value cannot be serialized, e.g. invalid UTF-8."""

    def __init__(self, error_id: int, message: str) -> None:
        super().__init__(message)
        self.id = error_id


def utf8_decode(state: int, codepoint: int, byte: int) -> tuple[int, int]:
    """Feed one byte to the UTF-8 decoder; return the new state and codepoint.

    State 0 means a complete code point was decoded, 1 that the byte was
    rejected; any other state means more bytes are expected.
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte out of range: {byte}")
    byte_type = _UTF8D[byte]
    if state != UTF8_ACCEPT:
        codepoint = ((byte & 0x3F) | (codepoint << 6)) & _UINT32_MASK
    else:
        codepoint = (0xFF >> byte_type) & byte
    state = _UTF8D[256 + state * 16 + byte_type]
    return state, codepoint


def hex_byte(byte: int) -> str:
    """Two upper-case hex digits for a byte."""
    return f"{byte & 0xFF:02X}"


def _escape_codepoint(codepoint: int) -> bytes:
    if codepoint <= 0xFFFF:
        return b"\\u%04x" % codepoint
    high = (0xD7C0 + (codepoint >> 10)) & 0xFFFF
    low = (0xDC00 + (codepoint & 0x3FF)) & 0xFFFF
    return b"\\u%04x\\u%04x" % (high, low)


def escape_string(
    data: Union[str, bytes],
    ensure_ascii: bool = False,
    error_handler: ErrorHandler = ErrorHandler.STRICT,
) -> str:
    """Escape UTF-8 text for use inside a JSON string literal.

    Control characters, quotes and backslashes are escaped; with
    ``ensure_ascii`` every non-ASCII code point becomes a ``\\uXXXX`` escape.
    Invalid UTF-8 raises JsonTypeError, or is replaced or dropped according
    to ``error_handler``.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    out = bytearray()
    state = UTF8_ACCEPT
    codepoint = 0
    last_accept = 0
    undumped = 0

    i = 0
    while i < len(raw):
        byte = raw[i]
        state, codepoint = utf8_decode(state, codepoint, byte)

        if state == UTF8_ACCEPT:
            short = _SHORT_ESCAPES.get(codepoint)
            if short is not None:
                out += short
            elif codepoint <= 0x1F or (ensure_ascii and codepoint >= 0x7F):
                out += _escape_codepoint(codepoint)
            else:
                out.append(byte)
            last_accept = len(out)
            undumped = 0

        elif state == UTF8_REJECT:
            if error_handler is ErrorHandler.STRICT:
                raise JsonTypeError(
                    316, f"invalid UTF-8 byte at index {i}: 0x{hex_byte(byte)}"
                )
            # The byte may be valid on its own, just not after the sequence
            # that preceded it, so read it again.
            if undumped > 0:
                i -= 1
            del out[last_accept:]
            if error_handler is ErrorHandler.REPLACE:
                out += _REPLACEMENT_ASCII if ensure_ascii else _REPLACEMENT_UTF8
                last_accept = len(out)
            undumped = 0
            state = UTF8_ACCEPT

        else:
            if not ensure_ascii:
                out.append(byte)
            undumped += 1

        i += 1

    if state != UTF8_ACCEPT:
        if error_handler is ErrorHandler.STRICT:
            raise JsonTypeError(
                316, f"incomplete UTF-8 string; last byte: 0x{hex_byte(raw[-1])}"
            )
        del out[last_accept:]
        if error_handler is ErrorHandler.REPLACE:
            out += _REPLACEMENT_ASCII if ensure_ascii else _REPLACEMENT_UTF8

    return out.decode("utf-8")