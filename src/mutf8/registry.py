"""Modified UTF-8 as a Python text encoding.

Importing :mod:`mutf8` registers a search function so that
``"text".encode("mutf-8")`` and ``data.decode("mutf-8")`` work like any
other codec.  Strings are encoded through their UTF-16 code units, so
characters above ``U+FFFF`` take the six-byte surrogate-pair form and lone
surrogates round-trip unchanged.
"""

from __future__ import annotations

import codecs

from mutf8.codec.bulk import as_utf8
from mutf8.codec.char import decode_character, to_code_units
from mutf8.codec.validate import is_legal_utf8

NAME = "mutf-8"

# Names as they reach the search function after codecs normalization.
_ALIASES: frozenset[str] = frozenset(
    {"mutf_8", "mutf8", "modified_utf_8", "modified_utf8"}
)


def encode(text: str, errors: str = "strict") -> tuple[bytes, int]:
    """Encode *text*; every ``str`` is representable, so *errors* is unused."""
    return as_utf8(to_code_units(text)), len(text)


def decode(
    data: bytes | bytearray | memoryview, errors: str = "strict"
) -> tuple[str, int]:
    """Decode a complete Modified UTF-8 buffer.

    With ``errors="strict"`` the buffer must pass
    :func:`~mutf8.codec.validate.is_legal_utf8`.  Any other *errors* value
    decodes leniently: a malformed byte decodes to its own value.

    :returns: ``(text, bytes_consumed)``.
    :raises UnicodeDecodeError: If strict decoding meets illegal input.
    """
    view = memoryview(data).cast("B")
    end = len(view)
    if errors == "strict" and not is_legal_utf8(view):
        raise UnicodeDecodeError(
            NAME, bytes(view), 0, end, "illegal Modified UTF-8 sequence"
        )
    chars: list[str] = []
    pos = 0
    while pos < end:
        codepoint, consumed = decode_character(view, pos)
        chars.append(chr(codepoint))
        pos += consumed
    return "".join(chars), end


def _may_be_low_half(data: memoryview, start: int, end: int) -> bool:
    """Return True if the bytes available from *start* could begin ``ED Bx 10xxxxxx``."""
    if start >= end:
        return True
    if data[start] != 0xED:
        return False
    if start + 1 < end and data[start + 1] & 0xF0 != 0xB0:
        return False
    return not (start + 2 < end and data[start + 2] & 0xC0 != 0x80)


def _complete_length(data: memoryview) -> int:
    """Return the length of the longest prefix that ends on a character boundary.

    A complete high-surrogate half is held back while its low half may still
    be on the way.
    """
    end = len(data)
    i = 0
    while i < end:
        b = data[i]
        nibble = b >> 4
        if nibble in (0xC, 0xD):
            need = 2
        elif nibble == 0xE:
            need = 3
            if (
                b == 0xED
                and i + 1 < end
                and data[i + 1] & 0xF0 == 0xA0
                and _may_be_low_half(data, i + 3, end)
            ):
                need = 6
        else:
            need = 1
        if i + need > end:
            return i
        i += need
    return end


def _buffer_decode(
    data: bytes | bytearray | memoryview, errors: str, final: bool
) -> tuple[str, int]:
    view = memoryview(data).cast("B")
    if final:
        return decode(view, errors)
    return decode(view[: _complete_length(view)], errors)


class Codec(codecs.Codec):
    """Stateless Modified UTF-8 codec."""

    def encode(self, input: str, errors: str = "strict") -> tuple[bytes, int]:
        return encode(input, errors)

    def decode(
        self, input: bytes, errors: str = "strict"
    ) -> tuple[str, int]:
        return decode(input, errors)


class IncrementalEncoder(codecs.IncrementalEncoder):
    def encode(self, input: str, final: bool = False) -> bytes:
        return encode(input, self.errors)[0]


class IncrementalDecoder(codecs.BufferedIncrementalDecoder):
    """Decoder that keeps an unfinished trailing character for the next call."""

    def _buffer_decode(  # type: ignore[override]
        self, input: bytes, errors: str, final: bool
    ) -> tuple[str, int]:
        return _buffer_decode(input, errors, final)


class StreamWriter(Codec, codecs.StreamWriter):
    pass


class StreamReader(Codec, codecs.StreamReader):
    def decode(
        self, input: bytes, errors: str = "strict"
    ) -> tuple[str, int]:
        # read() passes the held-back bytes on their own once the stream
        # is exhausted; that call must flush them.
        final = len(input) == len(self.bytebuffer)
        return _buffer_decode(input, errors, final)


def getregentry() -> codecs.CodecInfo:
    """Return the :class:`codecs.CodecInfo` for Modified UTF-8."""
    return codecs.CodecInfo(
        name=NAME,
        encode=encode,
        decode=decode,
        incrementalencoder=IncrementalEncoder,
        incrementaldecoder=IncrementalDecoder,
        streamwriter=StreamWriter,
        streamreader=StreamReader,
    )


def search_function(encoding: str) -> codecs.CodecInfo | None:
    """Codec search function passed to :func:`codecs.register`."""
    normalized = encoding.lower().replace("-", "_").replace(" ", "_")
    if normalized in _ALIASES:
        return getregentry()
    return None


codecs.register(search_function)
