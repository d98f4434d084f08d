from __future__ import annotations

from typing import Sequence
from urllib.parse import quote, urljoin, urlparse

from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import Document, parse_html
from karaoke_search.net.fetch import Fetcher
from karaoke_search.search.investigator import PageInvestigator
from karaoke_search.search.pipeline import ResolutionPipeline
from karaoke_search.search.web_search import WebSearch

from .base import KaraokeProvider, LyricsProvider
from .types import Candidate, CandidateStage, LyricsResult, is_absolute_url

DOMAIN = "vocaro.wikidot.com"
BASE_URL = f"http://{DOMAIN}"
SOURCE = "Vocaro"

MAX_DIRECT_ITEMS = 5
MAX_LINK_SCAN = 10

_NAV_WORDS = ("전체", "목록")


def is_song_page(url: str) -> bool:
    path = urlparse(url).path
    return not (path.startswith("/artist:") or path.startswith("/album:"))


def extract_vocaro_search(doc: Document) -> list[Candidate]:
    out: list[Candidate] = []
    for item in doc.select(".search-results .w-item, .list-pages-item")[:MAX_DIRECT_ITEMS]:
        link = item.first(".title a, h1 a, a")
        title = (link.text if link is not None else "") or item.text_of(".w-title")
        href = link.attr("href") if link is not None else None
        url = urljoin(BASE_URL, href or "")
        if title and href and is_absolute_url(url):
            out.append(Candidate(url=url, title=title, stage=CandidateStage.DIRECT))
    if out:
        return out

    # search results markup missing; scan site links instead
    for link in doc.select('a[href^="/"], a[href*="vocaro"]')[:MAX_LINK_SCAN]:
        href, text = link.attr("href") or "", link.text
        if len(text) <= 3 or "/forum/" in href or "/system:" in href:
            continue
        if any(w in text for w in _NAV_WORDS):
            continue
        url = urljoin(BASE_URL, href)
        if is_absolute_url(url):
            out.append(Candidate(url=url, title=text, stage=CandidateStage.DIRECT))
    return out


class VocaroProvider(LyricsProvider):
    """
    Vocaro Wiki's own search is weak, so lookups go through the resolution
    pipeline; Korean queries get cross-referenced with the karaoke catalogs.
    """

    name = "Vocaro Wiki"

    def __init__(
        self,
        logger: Logger,
        fetcher: Fetcher,
        *,
        karaoke_providers: Sequence[KaraokeProvider] = (),
        web_search: WebSearch | None = None,
        investigator: PageInvestigator | None = None,
    ):
        super().__init__(logger)
        self.fetcher = fetcher
        self.pipeline = ResolutionPipeline(
            logger,
            source=SOURCE,
            domain=DOMAIN,
            direct_search=self.direct_search,
            guess_url=lambda slug: f"{BASE_URL}/{quote(slug)}",
            web_search=web_search or WebSearch(logger, fetcher),
            investigator=investigator or PageInvestigator(logger, fetcher),
            karaoke_providers=karaoke_providers,
            exclude=lambda url: not is_song_page(url),
        )

    def direct_search(self, query: str) -> list[Candidate]:
        url = f"{BASE_URL}/search:site/q/{quote(query, safe='')}"
        return extract_vocaro_search(parse_html(self.fetcher.fetch_text(url)))

    def search(self, query: str) -> list[LyricsResult]:
        self.logger.log("Searching Vocaro Wiki for: %s", query)
        try:
            return self.pipeline.resolve(query)
        except Exception as e:
            self.logger.log("Error searching Vocaro Wiki: %s", e)
            self.logger.error("Failed to search Vocaro Wiki")
            return []
