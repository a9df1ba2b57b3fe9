"""Serialization of Python values to JSON text."""

from __future__ import annotations

import io
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from modeframe.escape import ErrorHandler, escape_string
from modeframe.output import output_adapter

_INITIAL_INDENT = 512


@dataclass(frozen=True)
class Binary:
    """A byte string with an optional subtype, written as an object."""

    data: bytes
    subtype: Optional[int] = None


class Serializer:
    """Writes JSON text for Python values to an output.

    Objects are mappings with string keys, arrays are lists or tuples, and
    strings may be ``str`` or UTF-8 ``bytes``. Members keep the mapping's order.
    """

    def __init__(
        self,
        output: Any,
        indent_char: str = " ",
        error_handler: ErrorHandler = ErrorHandler.STRICT,
    ) -> None:
        if len(indent_char) != 1:
            raise ValueError("indent_char must be a single character")
        self._out = output_adapter(output)
        self.indent_char = indent_char
        self.error_handler = error_handler
        self._indent_string = indent_char * _INITIAL_INDENT

    def _indent(self, width: int) -> str:
        while len(self._indent_string) < width:
            # Growth beyond the initial width pads with spaces.
            self._indent_string += " " * len(self._indent_string)
        return self._indent_string[:width]

    def _string(self, text: Any, ensure_ascii: bool) -> None:
        self._out.write_character('"')
        self._out.write_characters(escape_string(text, ensure_ascii, self.error_handler))
        self._out.write_character('"')

    def dump(
        self,
        value: Any,
        pretty_print: bool = False,
        ensure_ascii: bool = False,
        indent_step: int = 0,
        current_indent: int = 0,
    ) -> None:
        """Write ``value`` as JSON, pretty-printed with ``indent_step`` if asked."""
        out = self._out

        if value is None:
            out.write_characters("null")
        elif isinstance(value, bool):
            out.write_characters("true" if value else "false")
        elif isinstance(value, int):
            out.write_characters(str(value))
        elif isinstance(value, float):
            out.write_characters(repr(value) if math.isfinite(value) else "null")
        elif isinstance(value, (str, bytes, bytearray)):
            self._string(value, ensure_ascii)
        elif isinstance(value, Binary):
            self._dump_binary(value, pretty_print, indent_step, current_indent)
        elif isinstance(value, Mapping):
            self._dump_object(value, pretty_print, ensure_ascii, indent_step, current_indent)
        elif isinstance(value, (list, tuple)):
            self._dump_array(value, pretty_print, ensure_ascii, indent_step, current_indent)
        else:
            raise TypeError(f"cannot serialize {type(value).__name__}")

    def _dump_object(self, obj, pretty, ensure_ascii, step, current) -> None:
        out = self._out
        if not obj:
            out.write_characters("{}")
            return
        if pretty:
            new_indent = current + step
            pad = self._indent(new_indent)
            out.write_characters("{\n")
            for index, (key, item) in enumerate(obj.items()):
                if index:
                    out.write_characters(",\n")
                out.write_characters(pad)
                self._string(key, ensure_ascii)
                out.write_characters(": ")
                self.dump(item, True, ensure_ascii, step, new_indent)
            out.write_character("\n")
            out.write_characters(self._indent(current))
            out.write_character("}")
        else:
            out.write_character("{")
            for index, (key, item) in enumerate(obj.items()):
                if index:
                    out.write_character(",")
                self._string(key, ensure_ascii)
                out.write_character(":")
                self.dump(item, False, ensure_ascii, step, current)
            out.write_character("}")

    def _dump_array(self, items, pretty, ensure_ascii, step, current) -> None:
        out = self._out
        if not items:
            out.write_characters("[]")
            return
        if pretty:
            new_indent = current + step
            pad = self._indent(new_indent)
            out.write_characters("[\n")
            for index, item in enumerate(items):
                if index:
                    out.write_characters(",\n")
                out.write_characters(pad)
                self.dump(item, True, ensure_ascii, step, new_indent)
            out.write_character("\n")
            out.write_characters(self._indent(current))
            out.write_character("]")
        else:
            out.write_character("[")
            for index, item in enumerate(items):
                if index:
                    out.write_character(",")
                self.dump(item, False, ensure_ascii, step, current)
            out.write_character("]")

    def _dump_binary(self, binary: Binary, pretty, step, current) -> None:
        out = self._out
        subtype = "null" if binary.subtype is None else str(binary.subtype)
        if pretty:
            pad = self._indent(current + step)
            out.write_characters("{\n")
            out.write_characters(pad)
            out.write_characters('"bytes": [')
            out.write_characters(", ".join(str(b) for b in binary.data))
            out.write_characters("],\n")
            out.write_characters(pad)
            out.write_characters('"subtype": ')
            out.write_characters(subtype)
            out.write_character("\n")
            out.write_characters(self._indent(current))
            out.write_character("}")
        else:
            out.write_characters('{"bytes":[')
            out.write_characters(",".join(str(b) for b in binary.data))
            out.write_characters('],"subtype":')
            out.write_characters(subtype)
            out.write_character("}")


def dumps(
    value: Any,
    indent: int = -1,
    indent_char: str = " ",
    ensure_ascii: bool = False,
    error_handler: ErrorHandler = ErrorHandler.STRICT,
) -> str:
    """Serialize ``value``; a non-negative ``indent`` pretty-prints it."""
    stream = io.StringIO()
    serializer = Serializer(stream, indent_char, error_handler)
    if indent >= 0:
        serializer.dump(value, True, ensure_ascii, indent)
    else:
        serializer.dump(value, False, ensure_ascii, 0)
    return stream.getvalue()