from __future__ import annotations

from urllib.parse import quote, urljoin

from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import Document, parse_html
from karaoke_search.net.fetch import Fetcher

from .base import LyricsProvider, dedupe
from .types import LyricsResult, is_absolute_url

BASE_URL = "https://www.musixmatch.com"
SOURCE = "MusixMatch"
MAX_RESULTS = 5


def extract_musixmatch_results(doc: Document) -> list[LyricsResult]:
    out: list[LyricsResult] = []
    for card in doc.select(".track-list__item, .media-card, .track-card"):
        title = card.text_of(".track-name, .title, h2")
        href = card.attr_of('a[href*="/lyrics/"]', "href")
        if not title or not href:
            continue
        url = urljoin(BASE_URL, href)
        if is_absolute_url(url):
            out.append(LyricsResult(title=title, url=url, source=SOURCE, artist=card.text_of(".artist-name, .artist, h3") or None))

    if not out:
        # card markup changed; any lyrics link will do
        for link in doc.select('a[href*="/lyrics/"]'):
            text, href = link.text, link.attr("href")
            url = urljoin(BASE_URL, href or "")
            if text and is_absolute_url(url):
                out.append(LyricsResult(title=text, url=url, source=SOURCE))

    return dedupe(out, key=lambda r: r.url)[:MAX_RESULTS]


class MusixMatchProvider(LyricsProvider):
    name = "MusixMatch"

    def __init__(self, logger: Logger, fetcher: Fetcher):
        super().__init__(logger)
        self.fetcher = fetcher

    def search(self, query: str) -> list[LyricsResult]:
        if not query.strip():
            return []
        self.logger.log("Searching MusixMatch for: %s", query)
        try:
            url = f"{BASE_URL}/search/{quote(query, safe='')}/tracks"
            results = extract_musixmatch_results(parse_html(self.fetcher.fetch_text(url)))
            self.logger.log("Found %s results from MusixMatch", len(results))
            return results
        except Exception as e:
            self.logger.log("Error searching MusixMatch: %s", e)
            self.logger.error("Failed to search MusixMatch")
            return []
