from __future__ import annotations

from typing import Any

from karaoke_search.crawl.listing import crawl_offset
from karaoke_search.errors import ParseError
from karaoke_search.logging_setup import Logger
from karaoke_search.net.fetch import Fetcher

from .autocomplete import VOCADB_URL
from .base import LyricsProvider
from .types import LyricsResult

SOURCE = "VocaDB"
MAX_RESULTS = 10
MAX_PAGES = 5

_FIXED_PARAMS = {
    "getTotalCount": "true",
    "lang": "Default",
    "nameMatchMode": "Auto",
}


class VocaDBSongProvider(LyricsProvider):
    """
    Song entries from VocaDB's `/api/entries/` listing. Artist names missing
    from a listing item are filled from the song's details endpoint, one
    request per song and only when needed.
    """

    name = "VocaDB"

    def __init__(
        self,
        logger: Logger,
        fetcher: Fetcher,
        *,
        base_url: str = VOCADB_URL,
        max_results: int = MAX_RESULTS,
        max_pages: int | None = MAX_PAGES,
    ):
        super().__init__(logger)
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")
        self.max_results = max_results
        self.max_pages = max_pages

    def entries_page(self, query: str, start: int) -> tuple[list[dict[str, Any]], int]:
        data = self.fetcher.fetch_json(
            f"{self.base_url}/api/entries/",
            params={"query": query, **_FIXED_PARAMS, "start": start},
        )
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ParseError("Invalid response from VocaDB entries")
        return data["items"], int(data.get("totalCount") or 0)

    def song_details(self, song_id: int) -> dict[str, Any]:
        data = self.fetcher.fetch_json(f"{self.base_url}/api/songs/{song_id}/details")
        if not isinstance(data, dict):
            raise ParseError(f"Invalid details for VocaDB song {song_id}")
        return data

    def _artist(self, item: dict[str, Any]) -> str | None:
        if item.get("artistString"):
            return item["artistString"]
        try:
            return self.song_details(item["id"]).get("artistString") or None
        except Exception as e:
            self.logger.log("No details for VocaDB song %s: %s", item["id"], e)
            return None

    def search(self, query: str) -> list[LyricsResult]:
        results: list[LyricsResult] = []
        if not query.strip():
            return results
        self.logger.log("Searching VocaDB for: %s", query)
        seen: set[int] = set()
        try:
            for item in crawl_offset(lambda start: self.entries_page(query, start), max_pages=self.max_pages):
                if item.get("entryType", "Song") != "Song":
                    continue
                song_id, title = item.get("id"), (item.get("name") or "").strip()
                if not isinstance(song_id, int) or not title or song_id in seen:
                    continue
                seen.add(song_id)
                results.append(
                    LyricsResult(
                        title=title,
                        url=f"{self.base_url}/S/{song_id}",
                        source=SOURCE,
                        artist=self._artist(item),
                    )
                )
                if len(results) >= self.max_results:
                    break
            self.logger.log("Found %s results from VocaDB", len(results))
        except Exception as e:
            self.logger.log("Error searching VocaDB: %s", e)
            self.logger.error("Failed to search VocaDB (kept %s results)", len(results))
        return results
