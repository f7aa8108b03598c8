"""Repair of Modified UTF-8 buffers cut off in the middle of a character."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Shortest buffer worth repairing: room for a six-byte sequence's prefix
# plus the terminator.
_MIN_LENGTH = 6


def _is_starting_byte(b: int) -> bool:
    """Return True if *b* can start a 2, 3 or 6 byte sequence."""
    return 0xC0 <= b <= 0xEF


def _follows_high_surrogate(buffer: bytearray | memoryview, index: int) -> bool:
    """Return True if the three bytes before *index* encode a high surrogate.

    High surrogates encode as ``ED A0..AF 80..BF``.
    """
    return (
        index >= 3
        and buffer[index - 3] == 0xED
        and 0xA0 <= buffer[index - 2] <= 0xAF
        and 0x80 <= buffer[index - 1] <= 0xBF
    )


def truncate_to_legal_utf8(
    buffer: bytearray | memoryview, length: int | None = None
) -> int:
    """Terminate *buffer* early so that it does not end in a partial character.

    The buffer is assumed to have been legal before it was cut.  Rather than
    working out exactly which trailing bytes are incomplete, the last
    character is always dropped: the scan walks back to the nearest byte
    that can start a multi-byte sequence and writes the terminator there.
    ``0xED`` is ambiguous, since it leads both halves of a six-byte
    supplementary character; when it follows a complete high surrogate the
    boundary moves back to the start of the pair.

    A buffer that was already legal may still lose its final character.
    Callers that must avoid that should check
    :func:`~mutf8.codec.validate.is_legal_utf8` first.

    :param buffer: Mutable, NUL-terminated bytes, modified in place.
    :param length: Size of the buffer including the terminator.  Defaults
        to ``len(buffer)``.
    :returns: Index of the terminating NUL, i.e. the repaired string length.
    :raises ValueError: If the buffer is shorter than six bytes or is not
        NUL-terminated at ``length - 1``.
    """
    if length is None:
        length = len(buffer)
    if length < _MIN_LENGTH or length > len(buffer):
        msg = f"invalid length {length} for truncation repair"
        raise ValueError(msg)
    if buffer[length - 1] != 0:
        msg = "buffer should be NUL-terminated"
        raise ValueError(msg)

    if buffer[length - 2] < 0x80:
        return length - 1

    for index in range(length - 2, 0, -1):
        if not _is_starting_byte(buffer[index]):
            continue
        if buffer[index] == 0xED and _follows_high_surrogate(buffer, index):
            # Fourth byte of a six-byte sequence.
            index -= 3
        buffer[index] = 0
        logger.debug(
            "truncated Modified UTF-8 buffer from %d to %d bytes", length - 1, index
        )
        return index

    return length - 1
