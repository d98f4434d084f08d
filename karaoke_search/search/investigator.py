from __future__ import annotations

import re
from dataclasses import dataclass

from karaoke_search.errors import ValidationRejected
from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import Document, parse_html
from karaoke_search.net.fetch import Fetcher

MIN_LYRICS_CHARS = 50
LYRICS_TOKENS = ("lyrics", "가사", "歌詞")

_MAIN_SELECTORS = ("main", "#main-content", "#page-content", "article", ".content", "#content")
_LYRICS_SELECTORS = (".lyrics", "#lyrics", ".song-lyrics", '[class*="lyric"]', "blockquote")
_NOISE = "script, style, nav, header, footer, noscript"
_WS_RE = re.compile(r"[ \t\r\f\v]+")
_NL_RE = re.compile(r"\n\s*\n+")


@dataclass(frozen=True, slots=True)
class Investigation:
    url: str
    title: str
    content: str
    is_valid: bool
    lyrics: str | None = None
    artist: str | None = None
    song_title: str | None = None

    def validated(self) -> "Investigation":
        if not self.is_valid:
            raise ValidationRejected(self.url)
        return self


def _clean(text: str) -> str:
    lines = (_WS_RE.sub(" ", ln).strip() for ln in text.splitlines())
    return _NL_RE.sub("\n\n", "\n".join(lines)).strip()


def split_title(title: str) -> tuple[str | None, str | None]:
    """'Song - Artist' -> (song, artist); anything else -> (None, None)."""
    if " - " not in title:
        return None, None
    song, artist = (p.strip() for p in title.split(" - ", 1))
    if not song or not artist:
        return None, None
    return song, artist


def looks_like_lyrics_page(title: str, content: str, lyrics: str | None) -> bool:
    """Permissive gate: long lyrics text or a lyrics word anywhere."""
    if lyrics and len(lyrics) > MIN_LYRICS_CHARS:
        return True
    haystack = f"{title}\n{content}".lower()
    return any(token in haystack for token in LYRICS_TOKENS)


class PageInvestigator:
    def __init__(self, logger: Logger, fetcher: Fetcher):
        self.logger = logger
        self.fetcher = fetcher

    def load(self, url: str) -> Document:
        return parse_html(self.fetcher.fetch_text(url))

    def investigate(self, url: str) -> Investigation:
        """Fetch and inspect; FetchError/ParseError propagate to the caller."""
        return self.inspect(url, self.load(url))

    def inspect(self, url: str, doc: Document) -> Investigation:
        h1 = doc.first("h1")
        title = doc.title or (h1.text if h1 is not None else "")

        lyrics = None
        for sel in _LYRICS_SELECTORS:
            el = doc.first(sel)
            if el is not None and el.text:
                lyrics = _clean(el.block_text)
                break

        content = ""
        for sel in _MAIN_SELECTORS:
            el = doc.first(sel)
            if el is not None and el.text:
                content = _clean(el.block_text)
                break
        if not content:
            body = (doc.first("body") or doc).detached()
            body.decompose(_NOISE)
            content = _clean(body.block_text)

        song_title, artist = split_title(title)
        inv = Investigation(
            url=url,
            title=title,
            content=content,
            is_valid=looks_like_lyrics_page(title, content, lyrics),
            lyrics=lyrics,
            artist=artist,
            song_title=song_title,
        )
        self.logger.log("Investigated %s: valid=%s title=%r", url, inv.is_valid, title)
        return inv
