from __future__ import annotations

from typing import Callable, Hashable, Iterable, TypeVar

from karaoke_search.crawl.listing import TextFetcher, crawl_listing
from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import Document

from .types import AutocompleteResult, KaraokeResult, KaraokeSource, LyricsResult

T = TypeVar("T")


def dedupe(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """First occurrence wins, order kept."""
    seen: set[Hashable] = set()
    out: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out


class KaraokeProvider:
    name: str

    def __init__(self, logger: Logger):
        self.logger = logger

    def search(self, query: str) -> list[KaraokeResult]:
        raise NotImplementedError


class LyricsProvider:
    name: str

    def __init__(self, logger: Logger):
        self.logger = logger

    def search(self, query: str) -> list[LyricsResult]:
        raise NotImplementedError


class AutocompleteProvider:
    name: str

    def __init__(self, logger: Logger):
        self.logger = logger

    def get_suggestions(self, query: str) -> list[AutocompleteResult]:
        raise NotImplementedError


class ListingKaraokeProvider(KaraokeProvider):
    """
    Karaoke catalog whose "search" page is really a relevance-ranked listing
    of the whole catalog: crawl it page by page and cap client-side.
    """

    source: KaraokeSource

    def __init__(self, logger: Logger, fetcher: TextFetcher, *, max_results: int = 50, max_pages: int | None = 10):
        super().__init__(logger)
        self.fetcher = fetcher
        self.max_results = max_results
        self.max_pages = max_pages

    def page_url(self, query: str, page: int) -> str:
        raise NotImplementedError

    def extract(self, doc: Document) -> list[KaraokeResult]:
        raise NotImplementedError

    def accept(self, result: KaraokeResult) -> bool:
        return True

    def search(self, query: str) -> list[KaraokeResult]:
        results: list[KaraokeResult] = []
        if not query.strip():
            return results
        self.logger.log("Searching %s for: %s", self.name, query)
        seen: set[str] = set()
        try:
            for rec in crawl_listing(
                self.fetcher,
                lambda page: self.page_url(query, page),
                self.extract,
                max_pages=self.max_pages,
            ):
                if rec.id in seen or not self.accept(rec):
                    continue
                seen.add(rec.id)
                results.append(rec)
                if len(results) >= self.max_results:
                    break
            self.logger.log("Found %s results from %s", len(results), self.name)
        except Exception as e:
            # keep what was collected before the failing page
            self.logger.log("Error searching %s: %s", self.name, e)
            self.logger.error("Failed to search %s (kept %s results)", self.name, len(results))
        return results
