from __future__ import annotations

import enum
import unicodedata
from typing import Iterable

import regex

# Hangul syllables and jamo (conjoining and compatibility)
_KOREAN_RE = regex.compile(r"\p{Script=Hangul}")
# Hiragana, Katakana and Han ideographs
_JAPANESE_RE = regex.compile(r"[\p{Script=Hiragana}\p{Script=Katakana}\p{Script=Han}]")

_SLUG_STRIP_RE = regex.compile(r"[^\w\s-]")
_SLUG_JOIN_RE = regex.compile(r"[\s_-]+")


class Script(str, enum.Enum):
    KOREAN = "korean"
    JAPANESE = "japanese"
    OTHER = "other"


def normalize(text: str) -> str:
    """Compatibility-decompose, lowercase and trim, for matching only."""
    return unicodedata.normalize("NFKD", text).lower().strip()


def normalize_all(texts: Iterable[str]) -> list[str]:
    return [normalize(t) for t in texts]


def safe_normalize(text: str | None) -> str:
    if not text:
        return ""
    return normalize(text)


def contains_korean(text: str) -> bool:
    return bool(_KOREAN_RE.search(text))


def contains_japanese(text: str) -> bool:
    return bool(_JAPANESE_RE.search(text))


def script_of(text: str | None) -> Script:
    """
    Korean wins over Japanese when both occur: a query with any Hangul is
    treated as a Korean query.
    """
    if not text:
        return Script.OTHER
    if contains_korean(text):
        return Script.KOREAN
    if contains_japanese(text):
        return Script.JAPANESE
    return Script.OTHER


def create_slug(text: str) -> str:
    s = unicodedata.normalize("NFKD", text.lower())
    s = _SLUG_STRIP_RE.sub("", s)
    s = _SLUG_JOIN_RE.sub("-", s)
    return s.strip("-")


def slug_variants(query: str) -> list[str]:
    """Raw, hyphen-joined and concatenated lowercase forms, without repeats."""
    base = query.strip().lower()
    words = base.split()
    out: list[str] = []
    for v in (base, "-".join(words), "".join(words)):
        if v and v not in out:
            out.append(v)
    return out
