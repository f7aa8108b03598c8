# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

import pytest

# Strings covering every encoded length: 1, 2 (including NUL), 3, and the
# six-byte supplementary form, plus a lone surrogate.
SAMPLE_TEXTS: list[str] = [
    "",
    "Hello world",
    "café crème brûlée",
    "nul\x00inside",
    "ÿ edge of latin-1",
    "Ā just past latin-1",
    "price: 20€",
    "你好世界",
    "grin \U0001f600 and \U0010ffff",
    "lone \ud800 surrogate",
    "tab\tnewline\ncontrol\x01",
]


@pytest.fixture(params=SAMPLE_TEXTS, ids=[ascii(t) for t in SAMPLE_TEXTS])
def sample_text(request: pytest.FixtureRequest) -> str:
    """Each sample string in turn."""
    return request.param
