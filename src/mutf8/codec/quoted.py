"""Quoted-ascii: a 7-bit-clean rendering of code units and Modified UTF-8.

Printable ASCII (``0x20``-``0x7E``) is written as is; every other code unit
becomes ``\\uXXXX`` with four lowercase hex digits.  Supplementary
characters are rendered as their two surrogate escapes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from mutf8._utils import (
    ESCAPE_WIDTH,
    PRINTABLE_MAX,
    PRINTABLE_MIN,
    _resolve_capacity,
    _resolve_length,
)
from mutf8.codec.bulk import utf8_size
from mutf8.codec.char import _write, decode_one
from mutf8.enums import CodeUnitWidth

logger = logging.getLogger(__name__)

_BACKSLASH = 0x5C
_HEX_DIGITS: frozenset[int] = frozenset(b"0123456789abcdefABCDEF")
_SHORT_ESCAPES: dict[int, int] = {
    ord("t"): 0x09,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("f"): 0x0C,
}


def _masked(units: Sequence[int], width: CodeUnitWidth) -> Iterator[int]:
    mask = width.mask
    for unit in units:
        yield unit & mask


def _decoded(data: bytes | bytearray | memoryview, length: int) -> Iterator[int]:
    view = memoryview(data)[:length]
    pos = 0
    while pos < length:
        value, consumed = decode_one(view, pos)
        yield value
        pos += consumed


def _measure(values: Iterable[int]) -> int:
    result = 0
    for value in values:
        if PRINTABLE_MIN <= value <= PRINTABLE_MAX:
            result += 1
        else:
            result += ESCAPE_WIDTH
    return result


def _quote_into(
    values: Iterable[int], buf: bytearray | memoryview, capacity: int
) -> int:
    pos = 0
    for value in values:
        size = 1 if PRINTABLE_MIN <= value <= PRINTABLE_MAX else ESCAPE_WIDTH
        if pos + size >= capacity:
            logger.debug("truncated quoted-ascii output at %d bytes", pos)
            break
        if size == 1:
            buf[pos] = value
        else:
            buf[pos : pos + ESCAPE_WIDTH] = b"\\u%04x" % value
        pos += size
    buf[pos] = 0
    return pos


def quoted_ascii_length(
    units: Sequence[int], width: CodeUnitWidth = CodeUnitWidth.WIDE
) -> int:
    """Return the quoted-ascii size of *units*, terminator excluded."""
    return _measure(_masked(units, width))


def utf8_quoted_ascii_length(
    data: bytes | bytearray | memoryview, length: int | None = None
) -> int:
    """Return the quoted-ascii size of a Modified UTF-8 buffer.

    :param data: Legal Modified UTF-8 bytes.
    :param length: Number of bytes to render.  Defaults to ``len(data)``.
    """
    return _measure(_decoded(data, _resolve_length(data, length)))


def as_quoted_ascii_into(
    units: Sequence[int],
    buf: bytearray | memoryview,
    capacity: int | None = None,
    width: CodeUnitWidth = CodeUnitWidth.WIDE,
) -> int:
    """Render *units* as quoted-ascii into *buf*.

    Output stops before any character that would not fit ahead of the
    terminator; the terminator is always written.

    :returns: Number of bytes written before the terminator.
    :raises ValueError: If *capacity* is not in ``1..len(buf)``.
    """
    return _quote_into(_masked(units, width), buf, _resolve_capacity(buf, capacity))


def utf8_as_quoted_ascii_into(
    data: bytes | bytearray | memoryview,
    buf: bytearray | memoryview,
    capacity: int | None = None,
    length: int | None = None,
) -> int:
    """Render a Modified UTF-8 buffer as quoted-ascii into *buf*.

    Truncates like :func:`as_quoted_ascii_into`.

    :returns: Number of bytes written before the terminator.
    """
    capacity = _resolve_capacity(buf, capacity)
    return _quote_into(_decoded(data, _resolve_length(data, length)), buf, capacity)


def as_quoted_ascii(
    units: Sequence[int], width: CodeUnitWidth = CodeUnitWidth.WIDE
) -> str:
    """Return the complete quoted-ascii rendering of *units*."""
    size = quoted_ascii_length(units, width)
    buf = bytearray(size + 1)
    written = as_quoted_ascii_into(units, buf, width=width)
    return buf[:written].decode("ascii")


def utf8_as_quoted_ascii(
    data: bytes | bytearray | memoryview, length: int | None = None
) -> str:
    """Return the complete quoted-ascii rendering of a Modified UTF-8 buffer."""
    size = utf8_quoted_ascii_length(data, length)
    buf = bytearray(size + 1)
    written = utf8_as_quoted_ascii_into(data, buf, length=length)
    return buf[:written].decode("ascii")


def _unquote(raw: bytes, buffer: bytearray | None) -> int:
    """Measure (``buffer is None``) or write the unescaped form of *raw*."""
    length = 0
    i = 0
    end = len(raw)
    while i < end:
        c = raw[i]
        if c != _BACKSLASH:
            if buffer is not None:
                buffer[length] = c
            length += 1
            i += 1
            continue

        kind = raw[i + 1] if i + 1 < end else 0
        if kind == ord("u"):
            digits = raw[i + 2 : i + 6]
            if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
                msg = f"malformed \\u escape at offset {i}: {raw[i : i + 6]!r}"
                raise ValueError(msg)
            value = int(digits, 16)
            if buffer is None:
                length += utf8_size(value)
            else:
                length = _write(buffer, length, value)
            i += ESCAPE_WIDTH
        elif kind in _SHORT_ESCAPES:
            if buffer is not None:
                buffer[length] = _SHORT_ESCAPES[kind]
            length += 1
            i += 2
        else:
            msg = f"unrecognized escape at offset {i}: {raw[i : i + 2]!r}"
            raise ValueError(msg)
    return length


def from_quoted_ascii(text: str | bytes | bytearray) -> bytes:
    """Turn a quoted-ascii string back into Modified UTF-8.

    Accepts ``\\t``, ``\\n``, ``\\r`` and ``\\f`` as well as ``\\uXXXX``
    (either hex case).  Input is assumed to come from
    :func:`as_quoted_ascii`; anything else is a caller error.

    :param text: Quoted-ascii text, optionally NUL-terminated.
    :returns: Modified UTF-8 bytes without a terminator.  Input without
        escapes is returned unchanged.
    :raises ValueError: On an unrecognized or incomplete escape sequence.
    """
    raw = text.encode("ascii") if isinstance(text, str) else bytes(text)
    nul = raw.find(b"\x00")
    if nul != -1:
        raw = raw[:nul]
    if b"\\" not in raw:
        return raw

    buffer = bytearray(_unquote(raw, None))
    _unquote(raw, buffer)
    return bytes(buffer)
