"""Internal shared constants and argument checks for mutf8."""

from __future__ import annotations

#: Largest value of a signed 32-bit length.
INT_MAX: int = 2**31 - 1

#: Inclusive bounds of the characters written literally in quoted-ascii form.
PRINTABLE_MIN: int = 32
PRINTABLE_MAX: int = 126

#: Width of one ``\uXXXX`` escape.
ESCAPE_WIDTH: int = 6

#: Highest lead byte whose two-byte sequence still decodes to <= 0xFF.
LATIN1_MAX_LEAD: int = 0xC3


def _resolve_length(data: bytes | bytearray | memoryview, length: int | None) -> int:
    """Return *length*, defaulting to ``len(data)``; raise ValueError if out of range."""
    if length is None:
        return len(data)
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        msg = "length must be a non-negative integer"
        raise ValueError(msg)
    if length > len(data):
        msg = f"length {length} exceeds buffer size {len(data)}"
        raise ValueError(msg)
    return length


def _resolve_capacity(buf: bytearray | memoryview, capacity: int | None) -> int:
    """Return *capacity*, defaulting to ``len(buf)``; raise ValueError if unusable.

    A capacity of zero leaves no room for the terminator.
    """
    if capacity is None:
        capacity = len(buf)
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        msg = "zero length output buffer"
        raise ValueError(msg)
    if capacity > len(buf):
        msg = f"capacity {capacity} exceeds buffer size {len(buf)}"
        raise ValueError(msg)
    return capacity
