from __future__ import annotations

import re
from typing import Any

from karaoke_search.errors import ParseError
from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import parse_json
from karaoke_search.net.fetch import Fetcher

from .base import AutocompleteProvider, dedupe
from .types import AutocompleteResult

YOUTUBE_SUGGEST_URL = "https://suggestqueries.google.com/complete/search"
VOCADB_URL = "https://vocadb.net"
UTAITEDB_URL = "https://utaitedb.net"

_JSONP_RE = re.compile(r"\[.*\]", re.DOTALL)


def parse_suggest_payload(text: str) -> list[str]:
    """
    Google suggest answers `["q", ["s1", "s2", ...], ...]`, sometimes
    wrapped in a JSONP callback.
    """
    try:
        data = parse_json(text)
    except ParseError:
        m = _JSONP_RE.search(text)
        if not m:
            raise ParseError("Invalid suggest response format")
        data = parse_json(m.group(0))
    if isinstance(data, list) and len(data) > 1 and isinstance(data[1], list):
        return [s for s in data[1] if isinstance(s, str)]
    raise ParseError("Invalid suggest response format")


def _to_results(items: list[Any], source: str) -> list[AutocompleteResult]:
    out = [AutocompleteResult(suggestion=s.strip(), source=source) for s in items if isinstance(s, str) and s.strip()]
    return dedupe(out, key=lambda r: r.suggestion)


class YouTubeAutocompleteProvider(AutocompleteProvider):
    name = "YouTube Autocomplete"

    def __init__(self, logger: Logger, fetcher: Fetcher):
        super().__init__(logger)
        self.fetcher = fetcher

    def get_suggestions(self, query: str) -> list[AutocompleteResult]:
        if not query.strip():
            return []
        self.logger.log("Getting YouTube autocomplete suggestions for: %s", query)
        try:
            text = self.fetcher.fetch_text(
                YOUTUBE_SUGGEST_URL,
                params={"client": "firefox", "ds": "yt", "q": query},
            )
            results = _to_results(parse_suggest_payload(text), "YouTube")
            self.logger.log("Found %s suggestions from YouTube", len(results))
            return results
        except Exception as e:
            self.logger.log("Error getting YouTube autocomplete suggestions: %s", e)
            self.logger.error("Failed to get YouTube autocomplete suggestions")
            return []


class EntryNamesAutocompleteProvider(AutocompleteProvider):
    """VocaDB-family databases: `/api/entries/names` returns a JSON list of names."""

    def __init__(self, logger: Logger, fetcher: Fetcher, *, base_url: str, source: str):
        super().__init__(logger)
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")
        self.source = source
        self.name = f"{source} Autocomplete"

    def get_suggestions(self, query: str) -> list[AutocompleteResult]:
        if not query.strip():
            return []
        self.logger.log("Getting %s suggestions for: %s", self.source, query)
        try:
            data = self.fetcher.fetch_json(f"{self.base_url}/api/entries/names", params={"query": query})
            if not isinstance(data, list):
                raise ParseError(f"Invalid response from {self.source}")
            results = _to_results(data, self.source)
            self.logger.log("Found %s suggestions from %s", len(results), self.source)
            return results
        except Exception as e:
            self.logger.log("Error getting %s suggestions: %s", self.source, e)
            self.logger.error("Failed to get %s suggestions", self.source)
            return []


def vocadb_provider(logger: Logger, fetcher: Fetcher) -> EntryNamesAutocompleteProvider:
    return EntryNamesAutocompleteProvider(logger, fetcher, base_url=VOCADB_URL, source="VocaDB")


def utaitedb_provider(logger: Logger, fetcher: Fetcher) -> EntryNamesAutocompleteProvider:
    return EntryNamesAutocompleteProvider(logger, fetcher, base_url=UTAITEDB_URL, source="UtaiteDB")
