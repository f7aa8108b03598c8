# tests/test_truncate.py
from __future__ import annotations

import logging

import pytest

from mutf8.codec.truncate import truncate_to_legal_utf8
from mutf8.codec.validate import is_legal_utf8


def test_partial_three_byte_is_dropped():
    buf = bytearray(b"abcdef\xe2\x82\x00")
    end = truncate_to_legal_utf8(buf)
    assert end == 6
    assert buf[: end + 1] == b"abcdef\x00"
    assert is_legal_utf8(buf, end)


def test_high_surrogate_and_partial_low_half_are_dropped():
    buf = bytearray(b"abc\xed\xa0\xbd\xed\x00")
    end = truncate_to_legal_utf8(buf)
    assert end == 3
    assert buf[:4] == b"abc\x00"


def test_partial_two_byte_is_dropped():
    buf = bytearray(b"abcde\xc3\x00")
    assert truncate_to_legal_utf8(buf) == 5
    assert buf[5] == 0


def test_ascii_end_is_left_alone():
    buf = bytearray(b"abcdef\x00")
    assert truncate_to_legal_utf8(buf) == 6
    assert buf == bytearray(b"abcdef\x00")


def test_complete_final_character_is_still_dropped():
    buf = bytearray(b"abc\xe2\x82\xac\x00")
    assert truncate_to_legal_utf8(buf) == 3
    assert buf[3] == 0


def test_three_byte_ed_lead_is_not_mistaken_for_low_half():
    # U+D7FF encodes as ED 9F BF: an ED lead not preceded by a high surrogate.
    buf = bytearray(b"abcd\xed\x9f\x00")
    assert truncate_to_legal_utf8(buf) == 4


def test_partial_six_byte_sequence_after_first_half():
    buf = bytearray(b"xyz\xed\xa0\xbd\xed\xb8\x00")
    assert truncate_to_legal_utf8(buf) == 3
    assert is_legal_utf8(buf, 3)


def test_explicit_length_inside_larger_buffer():
    buf = bytearray(b"abcdef\xc3\x00\xff\xff")
    assert truncate_to_legal_utf8(buf, 8) == 6
    assert buf[8:] == b"\xff\xff"


def test_too_short_buffer_raises():
    with pytest.raises(ValueError, match="invalid length"):
        truncate_to_legal_utf8(bytearray(b"ab\xc3\x00"))


def test_missing_terminator_raises():
    with pytest.raises(ValueError, match="NUL-terminated"):
        truncate_to_legal_utf8(bytearray(b"abcdefg"))


def test_truncation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="mutf8.codec.truncate")
    truncate_to_legal_utf8(bytearray(b"abcde\xc3\x00"))
    assert "truncated Modified UTF-8 buffer from 6 to 5 bytes" in caplog.text
