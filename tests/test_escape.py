import json

import pytest

from modeframe.escape import (
    ErrorHandler,
    JsonTypeError,
    escape_string,
    hex_byte,
    utf8_decode,
)


def _feed(data: bytes) -> tuple[int, int]:
    state, codepoint = 0, 0
    for byte in data:
        state, codepoint = utf8_decode(state, codepoint, byte)
    return state, codepoint


def test_decode_ascii_byte_accepts_immediately():
    assert utf8_decode(0, 0, ord("A")) == (0, ord("A"))


@pytest.mark.parametrize("text", ["é", "€", "\U0001f600", "z"])
def test_decode_multibyte_sequence(text):
    assert _feed(text.encode("utf-8")) == (0, ord(text))


def test_decode_incomplete_sequence_is_pending():
    assert _feed("€".encode("utf-8")[:2]) == (2, 0x82)


def test_decode_rejects_invalid_lead_byte():
    state, _ = utf8_decode(0, 0, 0xFF)
    assert state == 1


def test_decode_rejects_out_of_range_byte():
    with pytest.raises(ValueError):
        utf8_decode(0, 0, 256)


def test_hex_byte_upper_case():
    assert hex_byte(255) == "FF"
    assert hex_byte(0) == "00"


@pytest.mark.parametrize(
    "char,escaped",
    [("\b", "\\b"), ("\t", "\\t"), ("\n", "\\n"), ("\f", "\\f"),
     ("\r", "\\r"), ('"', '\\"'), ("\\", "\\\\")],
)
def test_short_escapes(char, escaped):
    assert escape_string(char) == escaped


def test_control_character_uses_unicode_escape():
    assert escape_string("\x01") == "\\u0001"


@pytest.mark.parametrize("text", ["plain", "tab\there", "quote\"and\\", "日本語", "\U0001f600 x", "\x00\x1f"])
@pytest.mark.parametrize("ensure_ascii", [False, True])
def test_round_trip_through_json(text, ensure_ascii):
    escaped = escape_string(text, ensure_ascii)
    assert json.loads('"' + escaped + '"') == text


def test_ensure_ascii_output_is_ascii():
    assert escape_string("ümlaut \U0001f600", ensure_ascii=True).isascii()


def test_non_ascii_kept_without_ensure_ascii():
    assert escape_string("日本") == "日本"


def test_bytes_and_str_inputs_agree():
    text = "a€\n"
    assert escape_string(text.encode("utf-8")) == escape_string(text)


def test_strict_rejects_invalid_byte():
    with pytest.raises(JsonTypeError, match="invalid UTF-8 byte at index 1") as info:
        escape_string(b"a\xffb")
    assert info.value.id == 316


def test_strict_rejects_incomplete_string():
    with pytest.raises(JsonTypeError, match="incomplete UTF-8 string"):
        escape_string(b"a\xe2\x82")


def test_ignore_drops_invalid_byte():
    assert escape_string(b"a\xffb", error_handler=ErrorHandler.IGNORE) == "ab"


def test_replace_inserts_replacement_character():
    assert escape_string(b"a\xffb", error_handler=ErrorHandler.REPLACE) == "a\ufffdb"


def test_replace_with_ensure_ascii_uses_escape():
    result = escape_string(b"a\xffb", True, ErrorHandler.REPLACE)
    assert result == "a\\ufffdb"


def test_replace_rereads_byte_after_broken_sequence():
    result = escape_string(b"\xe2\x82a", error_handler=ErrorHandler.REPLACE)
    assert result == "\ufffda"


def test_ignore_incomplete_tail_is_dropped():
    assert escape_string(b"a\xe2\x82", error_handler=ErrorHandler.IGNORE) == "a"


def test_replace_incomplete_tail():
    assert escape_string(b"a\xe2\x82", error_handler=ErrorHandler.REPLACE) == "a\ufffd"
    assert escape_string(b"a\xe2\x82", True, ErrorHandler.REPLACE) == "a\\ufffd"