# tests/test_codec_types.py
from __future__ import annotations

import pytest

from mutf8.codec import UnicodeLength


def test_unicode_length_fields():
    r = UnicodeLength(length=4, is_latin1=True, has_multibyte=True)
    assert r.length == 4
    assert r.is_latin1 is True
    assert r.has_multibyte is True


def test_unicode_length_to_dict():
    r = UnicodeLength(length=3, is_latin1=False, has_multibyte=True)
    assert r.to_dict() == {"length": 3, "is_latin1": False, "has_multibyte": True}


def test_unicode_length_is_frozen():
    import dataclasses

    r = UnicodeLength(length=1, is_latin1=True, has_multibyte=False)
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.length = 2
