"""Output targets that receive serialized characters."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Protocol, Union

_Chars = Union[str, bytes]


class _Output(Protocol):
    def write_character(self, char: _Chars) -> None: ...

    def write_characters(self, data: _Chars) -> None: ...


class BufferOutput:
    """Appends characters to a mutable sequence such as a list or bytearray."""

    def __init__(self, buffer: Any) -> None:
        self._buffer = buffer

    def write_character(self, char: _Chars) -> None:
        """Append exactly one character."""
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {len(char)}")
        self._buffer.extend(char)

    def write_characters(self, data: _Chars) -> None:
        """Append every character of ``data``."""
        self._buffer.extend(data)


class StreamOutput:
    """Writes characters to a file-like object."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream

    def write_character(self, char: _Chars) -> None:
        """Write exactly one character."""
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {len(char)}")
        self._stream.write(char)

    def write_characters(self, data: _Chars) -> None:
        """Write every character of ``data``."""
        self._stream.write(data)


def output_adapter(target: Any) -> _Output:
    """Wrap a stream or mutable buffer as an output; outputs pass through."""
    if hasattr(target, "write_character") and hasattr(target, "write_characters"):
        return target
    if hasattr(target, "write"):
        return StreamOutput(target)
    if isinstance(target, (MutableSequence, bytearray)):
        return BufferOutput(target)
    raise TypeError(f"cannot write output to {type(target).__name__}")