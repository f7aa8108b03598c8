"""Modified UTF-8 codec components and shared result types."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class UnicodeLength:
    """Result of measuring a Modified UTF-8 buffer.

    Frozen dataclass holding the number of code units the buffer decodes
    to, whether every one of them is Latin-1 representable, and whether any
    multi-byte sequence was seen at all.
    """

    length: int
    is_latin1: bool
    has_multibyte: bool

    def to_dict(self) -> dict[str, int | bool]:
        """Convert this result to a plain dict.

        :returns: A dict with ``'length'``, ``'is_latin1'``, and
            ``'has_multibyte'`` keys.
        """
        return {
            "length": self.length,
            "is_latin1": self.is_latin1,
            "has_multibyte": self.has_multibyte,
        }
