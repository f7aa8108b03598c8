"""Legality check for untrusted Modified UTF-8 buffers.

This is the only gate between raw input and the lenient decoders in
:mod:`mutf8.codec.char`; it reads bytes directly and never substitutes a
value for a malformed sequence.
"""

from __future__ import annotations

from mutf8._utils import _resolve_length
from mutf8.codec.char import is_supplementary_character


def _ascii_prefix_length(buffer: bytes | bytearray | memoryview, length: int) -> int:
    """Return how many leading bytes are known to be non-NUL ASCII.

    Works in 4-byte blocks.  For an unsigned byte ``v``, ``v | (v - 1)``
    has its high bit clear for ``0 < v < 128`` and set for ``v == 0`` or
    ``v >= 128``, so one comparison covers a whole block.
    """
    i = 0
    for _ in range(length >> 2):
        b0 = buffer[i]
        b1 = buffer[i + 1]
        b2 = buffer[i + 2]
        b3 = buffer[i + 3]
        res = (
            b0 | (b0 - 1) | b1 | (b1 - 1) | b2 | (b2 - 1) | b3 | (b3 - 1)
        ) & 0xFF
        if res >= 128:
            break
        i += 4
    return i


def is_legal_utf8(
    buffer: bytes | bytearray | memoryview,
    length: int | None = None,
    version_leq_47: bool = False,
) -> bool:
    """Return True if *buffer* is a legal Modified UTF-8 sequence.

    A raw ``0x00`` anywhere in the counted bytes is illegal: strings end at
    *length*, not at an embedded terminator.

    :param buffer: The bytes to check.
    :param length: Number of bytes to check.  Defaults to ``len(buffer)``.
    :param version_leq_47: Accept overlong two- and three-byte encodings, as
        older class-file versions did.
    :returns: ``True`` if every byte was consumed without a violation.
    :raises ValueError: If *length* is negative or exceeds the buffer.
    """
    length = _resolve_length(buffer, length)
    i = _ascii_prefix_length(buffer, length)

    while i < length:
        b = buffer[i]
        if b == 0:
            return False
        if b < 0x80:
            i += 1
            continue

        if i + 5 < length and is_supplementary_character(buffer, i):
            # Every six-byte pair decodes into 0x10000..0x10FFFF.
            i += 6
            continue

        nibble = b >> 4
        if nibble in (0xC, 0xD):
            # 110xxxxx 10xxxxxx
            if i + 1 >= length or buffer[i + 1] & 0xC0 != 0x80:
                return False
            value = ((b & 0x1F) << 6) + (buffer[i + 1] & 0x3F)
            if not (version_leq_47 or value == 0 or value >= 0x80):
                return False
            i += 2
        elif nibble == 0xE:
            # 1110xxxx 10xxxxxx 10xxxxxx
            if (
                i + 2 >= length
                or buffer[i + 1] & 0xC0 != 0x80
                or buffer[i + 2] & 0xC0 != 0x80
            ):
                return False
            value = (
                ((b & 0x0F) << 12)
                + ((buffer[i + 1] & 0x3F) << 6)
                + (buffer[i + 2] & 0x3F)
            )
            if not (version_leq_47 or value >= 0x800):
                return False
            i += 3
        else:
            # Continuation bytes (0x8-0xB) cannot start a sequence, and
            # four-byte leads (0xF) do not exist in Modified UTF-8.
            return False

    return True
