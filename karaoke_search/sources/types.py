from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any
from urllib.parse import urlparse


class KaraokeSource(str, enum.Enum):
    TJ = "TJ"
    KY = "KY"


class CandidateStage(str, enum.Enum):
    DIRECT = "direct"
    FALLBACK = "fallback"
    GUESSED = "guessed"


@dataclass(frozen=True, slots=True)
class KaraokeMachine:
    id: str
    name: str
    color: str
    website: str | None = None


KARAOKE_MACHINES: dict[str, KaraokeMachine] = {
    "TJ": KaraokeMachine("TJ", "TJ Karaoke", "#00AFEC", "https://www.tjmedia.co.kr"),
    "KY": KaraokeMachine("KY", "KY Karaoke", "#8877dd", "https://www.kysing.kr"),
    "Joysound": KaraokeMachine("Joysound", "Joysound", "#d70e18", "https://www.joysound.com"),
    "EBO": KaraokeMachine("EBO", "EBO Karaoke", "#6b7280"),
}

# inclusive digit-count bounds of each machine's catalog numbers
_ID_DIGITS = {"TJ": (5, 6), "KY": (5, 6), "Joysound": (6, 8), "EBO": (4, 6)}


def is_valid_karaoke_id(id: str, machine: str) -> bool:
    bounds = _ID_DIGITS.get(machine)
    if bounds is None or not id or not id.strip():
        return False
    lo, hi = bounds
    return id.isascii() and id.isdigit() and lo <= len(id) <= hi


def is_absolute_url(url: str | None) -> bool:
    if not url:
        return False
    p = urlparse(url)
    return p.scheme in ("http", "https") and bool(p.netloc)


@dataclass(frozen=True, slots=True)
class KaraokeResult:
    id: str
    title: str
    source: KaraokeSource
    artist: str | None = None
    tags: tuple[str, ...] = ()
    lyricist: str | None = None
    composer: str | None = None
    youtube: str | None = None
    release_date: str | None = None
    # opening lines, where the listing shows them
    excerpt: str | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError(f"Karaoke result {self.source}:{self.id} has an empty title")

    @property
    def key(self) -> tuple[str, str]:
        return (self.source.value, self.id)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["source"] = self.source.value
        d["tags"] = list(self.tags)
        return {k: v for k, v in d.items() if v not in (None, [])}


@dataclass(frozen=True, slots=True)
class LyricsResult:
    title: str
    url: str
    source: str
    artist: str | None = None

    def __post_init__(self) -> None:
        if not is_absolute_url(self.url):
            raise ValueError(f"Lyrics result URL is not absolute: {self.url!r}")

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True, slots=True)
class EnrichedLyricsResult(LyricsResult):
    alternate_script_title: str | None = None
    cross_referenced_karaoke: tuple[KaraokeResult, ...] = ()
    excerpt: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"title": self.title, "url": self.url, "source": self.source}
        if self.artist:
            d["artist"] = self.artist
        if self.alternate_script_title:
            d["alternate_script_title"] = self.alternate_script_title
        if self.excerpt:
            d["excerpt"] = self.excerpt
        d["cross_referenced_karaoke"] = [k.to_dict() for k in self.cross_referenced_karaoke]
        return d


@dataclass(frozen=True, slots=True)
class AutocompleteResult:
    suggestion: str
    source: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A not-yet-validated page, tagged with the pipeline stage that found it."""

    url: str
    title: str
    stage: CandidateStage
    artist: str | None = None
    snippet: str | None = None


@dataclass(frozen=True, slots=True)
class SearchResults:
    karaoke: list[KaraokeResult] = field(default_factory=list)
    lyrics: list[LyricsResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "karaoke": [r.to_dict() for r in self.karaoke],
            "lyrics": [r.to_dict() for r in self.lyrics],
        }


@dataclass(frozen=True, slots=True)
class AutocompleteResults:
    suggestions: list[AutocompleteResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"suggestions": [s.to_dict() for s in self.suggestions]}
