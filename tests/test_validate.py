# tests/test_validate.py
from __future__ import annotations

import pytest

from mutf8.codec.validate import is_legal_utf8

_GRINNING_FACE = b"\xed\xa0\xbd\xed\xb8\x80"


def test_empty_is_legal():
    assert is_legal_utf8(b"")


def test_ascii_is_legal():
    assert is_legal_utf8(b"Hello, world! 123")


def test_long_ascii_takes_block_path():
    assert is_legal_utf8(b"abcd" * 64)


@pytest.mark.parametrize(
    "data",
    [
        b"\xc3\xa9",
        b"caf\xc3\xa9",
        b"\xe2\x82\xac",
        b"\xc0\x80",
        _GRINNING_FACE,
        b"abcdefgh" + _GRINNING_FACE + b"ijkl",
        b"\xed\xa0\xbd",  # lone high surrogate
        b"\xed\xb8\x80",  # lone low surrogate
    ],
)
def test_legal_multibyte(data: bytes) -> None:
    assert is_legal_utf8(data)
    assert is_legal_utf8(data, version_leq_47=True)


@pytest.mark.parametrize(
    "data",
    [
        b"ab\x00cd",
        b"abcd\x00",
        b"abcdefgh\x00",
        b"\x00",
    ],
)
def test_embedded_nul_is_illegal(data: bytes) -> None:
    assert not is_legal_utf8(data)
    assert not is_legal_utf8(data, version_leq_47=True)


def test_corrupted_three_byte_second_byte():
    assert not is_legal_utf8(b"\xe2\x41\xac")


def test_corrupted_three_byte_third_byte():
    assert not is_legal_utf8(b"\xe2\x82\x41")


def test_isolated_continuation_byte():
    assert not is_legal_utf8(b"a\x80b")


@pytest.mark.parametrize("lead", [0x80, 0x9F, 0xA0, 0xBF])
def test_continuation_lead_is_illegal(lead: int) -> None:
    assert not is_legal_utf8(bytes([lead, 0x80, 0x80]))


def test_four_byte_sequence_is_illegal():
    data = "\U0001f600".encode("utf-8")
    assert not is_legal_utf8(data)
    assert not is_legal_utf8(data, version_leq_47=True)


def test_truncated_two_byte_is_illegal():
    assert not is_legal_utf8(b"ab\xc3")


def test_truncated_three_byte_is_illegal():
    assert not is_legal_utf8(b"\xe2\x82")


def test_truncated_supplementary_is_illegal():
    assert not is_legal_utf8(_GRINNING_FACE[:5])


def test_overlong_two_byte_ascii_strict_only():
    assert not is_legal_utf8(b"\xc1\x81")
    assert is_legal_utf8(b"\xc1\x81", version_leq_47=True)


def test_overlong_two_byte_nul_is_always_legal():
    assert is_legal_utf8(b"\xc0\x80")


def test_overlong_three_byte_strict_only():
    assert not is_legal_utf8(b"\xe0\x81\x81")
    assert not is_legal_utf8(b"\xe0\x9f\xbf")
    assert is_legal_utf8(b"\xe0\x81\x81", version_leq_47=True)
    assert is_legal_utf8(b"\xe0\xa0\x80")


def test_non_ascii_after_ascii_blocks():
    assert not is_legal_utf8(b"abcdefgh\x80")
    assert is_legal_utf8(b"abcdefgh\xc3\xa9")


def test_length_limits_the_scan():
    assert is_legal_utf8(b"abc\xff", 3)
    assert not is_legal_utf8(b"abc\xff", 4)


def test_length_past_end_raises():
    with pytest.raises(ValueError, match="exceeds buffer size"):
        is_legal_utf8(b"abc", 4)


def test_negative_length_raises():
    with pytest.raises(ValueError, match="non-negative"):
        is_legal_utf8(b"abc", -1)


def test_accepts_bytearray_and_memoryview():
    assert is_legal_utf8(bytearray(b"caf\xc3\xa9"))
    assert is_legal_utf8(memoryview(b"caf\xc3\xa9"))


@pytest.mark.parametrize(
    "data",
    [
        b"\xed\xa0\x80\xed\xb0\x80",  # U+10000
        b"\xed\xaf\xbf\xed\xbf\xbf",  # U+10FFFF
        b"x\xed\xa0\xbd\xed\xb8\x80y",
    ],
)
def test_accepts_every_surrogate_pair(data: bytes) -> None:
    assert is_legal_utf8(data)
    assert is_legal_utf8(data, version_leq_47=True)
