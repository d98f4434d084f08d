from __future__ import annotations

import pytest

from karaoke_search.sources.base import dedupe
from karaoke_search.sources.types import (
    KARAOKE_MACHINES,
    EnrichedLyricsResult,
    KaraokeResult,
    KaraokeSource,
    LyricsResult,
    SearchResults,
    is_valid_karaoke_id,
)


def test_karaoke_result_requires_title():
    with pytest.raises(ValueError):
        KaraokeResult(id="12345", title="  ", source=KaraokeSource.TJ)


def test_lyrics_result_requires_absolute_url():
    with pytest.raises(ValueError):
        LyricsResult(title="Melt", url="/melt", source="Vocaro")
    with pytest.raises(ValueError):
        LyricsResult(title="Melt", url="ftp://vocaro.wikidot.com/melt", source="Vocaro")


@pytest.mark.parametrize(
    "id, machine, ok",
    [
        ("96123", "TJ", True),
        ("961234", "TJ", True),
        ("9612", "TJ", False),
        ("96a23", "KY", False),
        ("1234567", "Joysound", True),
        ("1234", "EBO", True),
        ("12345", "Nope", False),
        ("", "TJ", False),
    ],
)
def test_is_valid_karaoke_id(id, machine, ok):
    assert is_valid_karaoke_id(id, machine) is ok


def test_machines_registry():
    assert KARAOKE_MACHINES["TJ"].name == "TJ Karaoke"
    assert KARAOKE_MACHINES["KY"].website == "https://www.kysing.kr"


def test_to_dict_drops_empty_fields():
    k = KaraokeResult(id="96123", title="사랑의 바보", source=KaraokeSource.TJ, tags=("MR",))
    assert k.to_dict() == {"id": "96123", "title": "사랑의 바보", "source": "TJ", "tags": ["MR"]}

    e = EnrichedLyricsResult(
        title="천본앵",
        url="http://vocaro.wikidot.com/senbonzakura",
        source="Vocaro",
        alternate_script_title="千本桜",
        cross_referenced_karaoke=(k,),
    )
    d = SearchResults(karaoke=[k], lyrics=[e]).to_dict()
    assert d["lyrics"][0]["alternate_script_title"] == "千本桜"
    assert d["lyrics"][0]["cross_referenced_karaoke"][0]["id"] == "96123"


def test_dedupe_keeps_first():
    assert dedupe([("a", 1), ("b", 2), ("a", 3)], key=lambda t: t[0]) == [("a", 1), ("b", 2)]
