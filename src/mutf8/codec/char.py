"""Single-character Modified UTF-8 codec.

Decoding assumes its input already passed
:func:`mutf8.codec.validate.is_legal_utf8`.  A malformed sequence is not an
error here: the raw lead byte is returned as the value and exactly one byte
is consumed, so a caller looping over a buffer always makes progress.
"""

from __future__ import annotations

from collections.abc import Sequence

from mutf8.enums import CodeUnitWidth

_MAX_CODE_UNIT = 0xFFFF
_MAX_CODE_POINT = 0x10FFFF
_SUPPLEMENTARY_BASE = 0x10000
_HIGH_SURROGATE_BASE = 0xD800
_LOW_SURROGATE_BASE = 0xDC00
_SURROGATE_MAX = 0xDFFF


def decode_one(
    data: bytes | bytearray | memoryview,
    offset: int = 0,
    width: CodeUnitWidth = CodeUnitWidth.WIDE,
) -> tuple[int, int]:
    """Decode one code unit starting at *offset*.

    :param data: Modified UTF-8 bytes.
    :param offset: Index of the lead byte.
    :param width: Width of the code unit the value is stored in; a
        ``NARROW`` result keeps only the low 8 bits.
    :returns: ``(value, bytes_consumed)`` with *bytes_consumed* in 1..3.
    """
    ch = data[offset]
    nibble = ch >> 4
    if nibble < 0x8:
        return ch, 1

    end = len(data)
    if nibble in (0xC, 0xD):
        # 110xxxxx 10xxxxxx
        if offset + 1 < end:
            ch2 = data[offset + 1]
            if ch2 & 0xC0 == 0x80:
                value = ((ch & 0x1F) << 6) + (ch2 & 0x3F)
                return value & width.mask, 2
    elif nibble == 0xE:
        # 1110xxxx 10xxxxxx 10xxxxxx
        if offset + 2 < end:
            ch2 = data[offset + 1]
            ch3 = data[offset + 2]
            if ch2 & 0xC0 == 0x80 and ch3 & 0xC0 == 0x80:
                value = ((ch & 0x0F) << 12) + ((ch2 & 0x3F) << 6) + (ch3 & 0x3F)
                return value & width.mask, 3

    # 0x8-0xB and 0xF leads, or broken continuation bytes.
    return ch, 1


def is_supplementary_character(
    data: bytes | bytearray | memoryview, offset: int = 0
) -> bool:
    """Return True if the six bytes at *offset* encode a surrogate pair.

    The pattern is ``11101101 1010xxxx 10xxxxxx 11101101 1011xxxx 10xxxxxx``.
    """
    if offset + 6 > len(data):
        return False
    return (
        data[offset] == 0xED
        and data[offset + 1] & 0xF0 == 0xA0
        and data[offset + 2] & 0xC0 == 0x80
        and data[offset + 3] == 0xED
        and data[offset + 4] & 0xF0 == 0xB0
        and data[offset + 5] & 0xC0 == 0x80
    )


def get_supplementary_character(
    data: bytes | bytearray | memoryview, offset: int = 0
) -> int:
    """Combine the six-byte surrogate pair at *offset* into one code point.

    The caller must have checked :func:`is_supplementary_character` first.
    """
    return (
        _SUPPLEMENTARY_BASE
        + ((data[offset + 1] & 0x0F) << 16)
        + ((data[offset + 2] & 0x3F) << 10)
        + ((data[offset + 4] & 0x0F) << 6)
        + (data[offset + 5] & 0x3F)
    )


def decode_character(
    data: bytes | bytearray | memoryview, offset: int = 0
) -> tuple[int, int]:
    """Decode one full character, recombining six-byte supplementary pairs.

    :param data: Modified UTF-8 bytes.
    :param offset: Index of the lead byte.
    :returns: ``(codepoint, bytes_consumed)`` with *bytes_consumed* in
        1..3 or 6.
    """
    if is_supplementary_character(data, offset):
        return get_supplementary_character(data, offset), 6
    return decode_one(data, offset)


def _write(buf: bytearray | memoryview, pos: int, unit: int) -> int:
    """Write the encoding of *unit* at *pos* and return the position after it."""
    if 0 < unit <= 0x7F:
        buf[pos] = unit
        return pos + 1

    if unit <= 0x7FF:
        # 0 lands here too and becomes the overlong C0 80.
        buf[pos] = 0xC0 | (unit >> 6)
        buf[pos + 1] = 0x80 | (unit & 0x3F)
        return pos + 2

    buf[pos] = 0xE0 | (unit >> 12)
    buf[pos + 1] = 0x80 | ((unit >> 6) & 0x3F)
    buf[pos + 2] = 0x80 | (unit & 0x3F)
    return pos + 3


def encode_one(unit: int) -> bytes:
    """Encode a single 16-bit code unit.

    :param unit: A value in ``0..0xFFFF``.  Surrogate halves are encoded
        like any other unit.
    :returns: 1, 2 or 3 bytes; ``0`` encodes as ``b"\\xc0\\x80"``.
    :raises ValueError: If *unit* does not fit in 16 bits.
    """
    if not 0 <= unit <= _MAX_CODE_UNIT:
        msg = f"code unit out of range: {unit:#x}"
        raise ValueError(msg)
    buf = bytearray(3)
    end = _write(buf, 0, unit)
    return bytes(buf[:end])


def split_surrogates(codepoint: int) -> tuple[int, int]:
    """Split a supplementary code point into its (high, low) surrogate halves."""
    offset = codepoint - _SUPPLEMENTARY_BASE
    return (
        _HIGH_SURROGATE_BASE + (offset >> 10),
        _LOW_SURROGATE_BASE + (offset & 0x3FF),
    )


def encode_character(codepoint: int) -> bytes:
    """Encode a full code point, using the six-byte form above ``U+FFFF``.

    :raises ValueError: If *codepoint* is outside ``0..0x10FFFF``.
    """
    if not 0 <= codepoint <= _MAX_CODE_POINT:
        msg = f"code point out of range: {codepoint:#x}"
        raise ValueError(msg)
    if codepoint <= _MAX_CODE_UNIT:
        return encode_one(codepoint)
    high, low = split_surrogates(codepoint)
    return encode_one(high) + encode_one(low)


def to_code_units(text: str) -> list[int]:
    """Return the 16-bit code units of *text*, splitting supplementary characters."""
    units: list[int] = []
    for char in text:
        codepoint = ord(char)
        if codepoint > _MAX_CODE_UNIT:
            units.extend(split_surrogates(codepoint))
        else:
            units.append(codepoint)
    return units


def from_code_units(units: Sequence[int]) -> str:
    """Build a ``str`` from 16-bit code units, joining valid surrogate pairs.

    Unpaired surrogate halves are kept as lone surrogate characters.
    """
    chars: list[str] = []
    i = 0
    count = len(units)
    while i < count:
        unit = units[i]
        if (
            _HIGH_SURROGATE_BASE <= unit < _LOW_SURROGATE_BASE
            and i + 1 < count
            and _LOW_SURROGATE_BASE <= units[i + 1] <= _SURROGATE_MAX
        ):
            low = units[i + 1]
            chars.append(
                chr(
                    _SUPPLEMENTARY_BASE
                    + ((unit - _HIGH_SURROGATE_BASE) << 10)
                    + (low - _LOW_SURROGATE_BASE)
                )
            )
            i += 2
            continue
        chars.append(chr(unit))
        i += 1
    return "".join(chars)
