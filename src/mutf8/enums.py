"""Enumerations for mutf8."""

import enum


class CodeUnitWidth(enum.IntEnum):
    """Storage width, in bits, of one code unit of a decoded string.

    ``WIDE`` holds any UTF-16 code unit, lone surrogates included.
    ``NARROW`` is the one-byte storage used for strings whose every
    character is Latin-1 representable.
    """

    NARROW = 8
    WIDE = 16

    @property
    def mask(self) -> int:
        """Bit mask that truncates a value to this width."""
        return (1 << self.value) - 1
