"""Whole-string length measurement and conversion.

Conversions follow a two-call contract: measure with :func:`utf8_length` or
:func:`unicode_length`, allocate exactly that much (plus one byte for the
terminator on the encoding side), then convert into the caller's buffer.

Every function is generic over :class:`~mutf8.enums.CodeUnitWidth`.  The
encoded size of one unit (:func:`utf8_size`) and the masking of decoded
values are the only places where the two widths differ.
"""

from __future__ import annotations

import array
import logging
from collections.abc import MutableSequence, Sequence

from mutf8 import _utils
from mutf8._utils import LATIN1_MAX_LEAD, _resolve_capacity, _resolve_length
from mutf8.codec import UnicodeLength
from mutf8.codec.char import _write, decode_one
from mutf8.enums import CodeUnitWidth

logger = logging.getLogger(__name__)


def unicode_length(
    data: bytes | bytearray | memoryview, length: int | None = None
) -> UnicodeLength:
    """Count the code units a legal Modified UTF-8 buffer decodes to.

    Bytes of the form ``10xxxxxx`` continue a multi-byte sequence; every
    other byte starts a code unit.  A six-byte supplementary character
    therefore counts as two units, one per surrogate half.

    Latin-1 classification looks only at the byte before each continuation
    byte: a lead byte above ``0xC3`` can only start a value above ``0xFF``.

    :param data: Modified UTF-8 bytes, assumed legal.
    :param length: Number of bytes to scan.  When omitted the buffer is
        treated as NUL-terminated and scanning stops at the first ``0x00``
        or at the end of *data*.
    :returns: A :class:`~mutf8.codec.UnicodeLength`.
    """
    is_latin1 = True
    has_multibyte = False
    prev = 0

    if length is None:
        count = 0
        for c in data:
            if c == 0:
                break
            if c & 0xC0 == 0x80:
                has_multibyte = True
                if prev > LATIN1_MAX_LEAD:
                    is_latin1 = False
            else:
                count += 1
            prev = c
        return UnicodeLength(count, is_latin1, has_multibyte)

    length = _resolve_length(data, length)
    count = length
    for i in range(length):
        c = data[i]
        if c & 0xC0 == 0x80:
            has_multibyte = True
            if prev > LATIN1_MAX_LEAD:
                is_latin1 = False
            count -= 1
        prev = c
    return UnicodeLength(count, is_latin1, has_multibyte)


def utf8_size(unit: int, width: CodeUnitWidth = CodeUnitWidth.WIDE) -> int:
    """Return the number of bytes *unit* encodes to.

    ``0`` is never ASCII here: it takes the two-byte ``C0 80`` form.  For
    the narrow width every non-ASCII unit is at most ``0xFF`` and so takes
    exactly two bytes.
    """
    unit &= width.mask
    if 0x01 <= unit <= 0x7F:
        return 1
    if width == CodeUnitWidth.NARROW or unit <= 0x7FF:
        return 2
    return 3


def utf8_length(
    units: Sequence[int], width: CodeUnitWidth = CodeUnitWidth.WIDE
) -> int:
    """Return the exact encoded size of *units*, terminator excluded."""
    return sum(utf8_size(unit, width) for unit in units)


def utf8_length_as_int(
    units: Sequence[int], width: CodeUnitWidth = CodeUnitWidth.WIDE
) -> int:
    """Like :func:`utf8_length`, but bounded by a signed 32-bit length.

    Accumulation stops at the last complete encoding that keeps the total at
    or below ``INT_MAX - 1``, so one more byte can always be added for the
    terminator.
    """
    limit = _utils.INT_MAX - 1
    result = 0
    for unit in units:
        size = utf8_size(unit, width)
        if result + size > limit:
            break
        result += size
    return result


def as_utf8_into(
    units: Sequence[int],
    buf: bytearray | memoryview,
    capacity: int | None = None,
    width: CodeUnitWidth = CodeUnitWidth.WIDE,
) -> int:
    """Encode *units* into *buf*, truncating at a character boundary.

    The last byte of the capacity is reserved for the NUL terminator, which
    is always written where encoding stopped.  Truncation is not reported;
    compare the result with :func:`utf8_length` to detect it.

    :param units: Code units to encode.
    :param buf: Writable destination.
    :param capacity: Usable size of *buf*.  Defaults to ``len(buf)``.
    :param width: Width of the units in *units*.
    :returns: Number of bytes written before the terminator.
    :raises ValueError: If *capacity* is not in ``1..len(buf)``.
    """
    remaining = _resolve_capacity(buf, capacity)
    mask = width.mask
    pos = 0
    for index, unit in enumerate(units):
        unit &= mask
        size = utf8_size(unit, width)
        if size >= remaining:
            logger.debug(
                "truncated Modified UTF-8 output after %d of %d code units",
                index,
                len(units),
            )
            break
        remaining -= size
        pos = _write(buf, pos, unit)
    buf[pos] = 0
    return pos


def as_utf8(
    units: Sequence[int], width: CodeUnitWidth = CodeUnitWidth.WIDE
) -> bytes:
    """Encode *units* into a buffer allocated to the exact predicted size.

    :returns: The encoded bytes, terminator excluded.
    """
    utf8_len = utf8_length(units, width)
    buf = bytearray(utf8_len + 1)
    written = as_utf8_into(units, buf, width=width)
    assert written == utf8_len, "length prediction must be correct"
    return bytes(buf[:utf8_len])


def convert_to_utf8(
    units: Sequence[int],
    buf: bytearray | memoryview,
    width: CodeUnitWidth = CodeUnitWidth.WIDE,
) -> int:
    """Encode all of *units* into *buf* without bounds checking.

    *buf* must hold at least ``utf8_length(units, width) + 1`` bytes.

    :returns: Number of bytes written before the terminator.
    """
    mask = width.mask
    pos = 0
    for unit in units:
        pos = _write(buf, pos, unit & mask)
    buf[pos] = 0
    return pos


def convert_to_unicode(
    data: bytes | bytearray | memoryview,
    dest: MutableSequence[int],
    count: int,
    width: CodeUnitWidth = CodeUnitWidth.WIDE,
) -> int:
    """Decode exactly *count* code units of *data* into *dest*.

    *count* normally comes from :func:`unicode_length`.

    :returns: Number of bytes consumed.
    """
    index = 0
    pos = 0

    # ASCII run: bytes map straight to units.
    while index < count:
        ch = data[pos]
        if ch > 0x7F:
            break
        dest[index] = ch
        pos += 1
        index += 1

    while index < count:
        value, consumed = decode_one(data, pos, width)
        dest[index] = value
        pos += consumed
        index += 1
    return pos


def as_unicode(
    data: bytes | bytearray | memoryview,
    length: int | None = None,
    width: CodeUnitWidth | None = None,
) -> tuple[bytearray | array.array, CodeUnitWidth]:
    """Decode *data* into freshly allocated code-unit storage.

    :param data: Legal Modified UTF-8 bytes.
    :param length: Number of bytes to decode; see :func:`unicode_length`.
    :param width: Storage width.  When omitted, ``NARROW`` is chosen if the
        buffer is Latin-1 representable and ``WIDE`` otherwise.
    :returns: ``(units, width)`` where *units* is a ``bytearray`` for the
        narrow width and an ``array('H')`` for the wide one.
    """
    measured = unicode_length(data, length)
    if width is None:
        width = CodeUnitWidth.NARROW if measured.is_latin1 else CodeUnitWidth.WIDE
    units: bytearray | array.array
    if width == CodeUnitWidth.NARROW:
        units = bytearray(measured.length)
    else:
        units = array.array("H", bytes(2 * measured.length))
    convert_to_unicode(data, units, measured.length, width)
    return units, width


def is_latin1_unit(unit: int) -> bool:
    """Return True if *unit* fits in the narrow width."""
    return unit <= 0xFF


def is_latin1(units: Sequence[int]) -> bool:
    """Return True if every unit of *units* fits in the narrow width."""
    return all(unit <= 0xFF for unit in units)


def equal(
    first: bytes | bytearray | memoryview, second: bytes | bytearray | memoryview
) -> bool:
    """Compare two encoded buffers byte for byte."""
    return bytes(first) == bytes(second)
