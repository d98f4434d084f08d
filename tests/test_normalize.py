from __future__ import annotations

import unicodedata

import pytest

from karaoke_search.text.normalize import (
    Script,
    create_slug,
    normalize,
    normalize_all,
    safe_normalize,
    script_of,
    slug_variants,
)


def test_normalize_folds_compatibility_forms():
    assert normalize("ﬃ") == normalize("ffi") == "ffi"


def test_normalize_matches_composed_and_decomposed_input():
    composed = "Café 사랑"
    decomposed = unicodedata.normalize("NFD", composed)
    assert composed != decomposed
    assert normalize(composed) == normalize(decomposed)


def test_normalize_lowercases_and_trims():
    assert normalize("  BlueMING ") == "blueming"


def test_normalize_all_and_safe_normalize():
    assert normalize_all(["A", "ﬁ"]) == ["a", "fi"]
    assert safe_normalize(None) == ""
    assert safe_normalize("") == ""
    assert safe_normalize("Ｍｅｌｔ") == "melt"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("사랑", Script.KOREAN),
        ("ㅅㄹ", Script.KOREAN),
        ("千本桜", Script.JAPANESE),
        ("メルト", Script.JAPANESE),
        ("ひかり", Script.JAPANESE),
        ("Blueming", Script.OTHER),
        ("", Script.OTHER),
        (None, Script.OTHER),
        ("사랑 千本桜", Script.KOREAN),
    ],
)
def test_script_of(text, expected):
    assert script_of(text) is expected


def test_script_of_survives_normalization():
    assert script_of(normalize("사랑")) is Script.KOREAN


def test_create_slug():
    assert create_slug("Hello, World!  Foo_bar") == "hello-world-foo-bar"
    assert create_slug("--Melt--") == "melt"


def test_slug_variants():
    assert slug_variants("Melt Song") == ["melt song", "melt-song", "meltsong"]
    assert slug_variants(" Melt ") == ["melt"]
    assert slug_variants("   ") == []
