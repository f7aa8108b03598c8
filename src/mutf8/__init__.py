"""Modified UTF-8 codec: the string encoding of class files and JNI."""

from __future__ import annotations

from mutf8 import registry
from mutf8.codec import UnicodeLength
from mutf8.codec.bulk import (
    as_unicode,
    as_utf8,
    as_utf8_into,
    convert_to_unicode,
    convert_to_utf8,
    equal,
    is_latin1,
    is_latin1_unit,
    unicode_length,
    utf8_length,
    utf8_length_as_int,
    utf8_size,
)
from mutf8.codec.char import (
    decode_character,
    decode_one,
    encode_character,
    encode_one,
    from_code_units,
    get_supplementary_character,
    is_supplementary_character,
    split_surrogates,
    to_code_units,
)
from mutf8.codec.quoted import (
    as_quoted_ascii,
    as_quoted_ascii_into,
    from_quoted_ascii,
    quoted_ascii_length,
    utf8_as_quoted_ascii,
    utf8_as_quoted_ascii_into,
    utf8_quoted_ascii_length,
)
from mutf8.codec.truncate import truncate_to_legal_utf8
from mutf8.codec.validate import is_legal_utf8
from mutf8.enums import CodeUnitWidth

__version__ = "1.0.0"
__all__ = [
    "CodeUnitWidth",
    "UnicodeLength",
    "as_quoted_ascii",
    "as_quoted_ascii_into",
    "as_unicode",
    "as_utf8",
    "as_utf8_into",
    "convert_to_unicode",
    "convert_to_utf8",
    "decode",
    "decode_character",
    "decode_one",
    "encode",
    "encode_character",
    "encode_one",
    "equal",
    "from_code_units",
    "from_quoted_ascii",
    "get_supplementary_character",
    "is_latin1",
    "is_latin1_unit",
    "is_legal_utf8",
    "is_supplementary_character",
    "quoted_ascii_length",
    "split_surrogates",
    "to_code_units",
    "truncate_to_legal_utf8",
    "unicode_length",
    "utf8_as_quoted_ascii",
    "utf8_as_quoted_ascii_into",
    "utf8_length",
    "utf8_length_as_int",
    "utf8_quoted_ascii_length",
    "utf8_size",
]


def encode(text: str) -> bytes:
    """Encode *text* as Modified UTF-8.

    Characters above ``U+FFFF`` become six-byte surrogate pairs and NUL
    becomes ``C0 80``, so the result never contains a zero byte.
    """
    return registry.encode(text)[0]


def decode(byte_str: bytes | bytearray | memoryview, errors: str = "strict") -> str:
    """Decode Modified UTF-8 bytes into a ``str``.

    :param byte_str: The encoded bytes.
    :param errors: ``"strict"`` (the default) rejects anything
        :func:`is_legal_utf8` rejects; any other value decodes leniently.
    :raises UnicodeDecodeError: If strict decoding meets illegal input.
    """
    return registry.decode(byte_str, errors)[0]
