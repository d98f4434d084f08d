from __future__ import annotations

import json
from urllib.parse import parse_qs, urlparse

from karaoke_search.sources.vocadb import VocaDBSongProvider
from tests.mocks.fake_fetcher import FakeFetcher
from tests.mocks.fixtures import read_fixture


def _vocadb(pages: dict[int, str], details: dict[int, str] | None = None) -> FakeFetcher:
    details = details or {}

    def route(url: str) -> str:
        path = urlparse(url).path
        if path.startswith("/api/songs/"):
            song_id = int(path.split("/")[3])
            return details[song_id]
        start = int(parse_qs(urlparse(url).query)["start"][0])
        return pages.get(start, json.dumps({"items": [], "totalCount": 0}))

    return FakeFetcher(default=route)


def _starts(fetcher: FakeFetcher) -> list[int]:
    return [int(parse_qs(urlparse(u).query)["start"][0]) for u in fetcher.requests if "/api/entries/" in u]


class TestVocaDBSongs:
    def test_walks_offsets_until_total_count(self, logger):
        fetcher = _vocadb(
            {0: read_fixture("vocadb_entries_p1.json"), 2: read_fixture("vocadb_entries_p2.json")},
            {1501: read_fixture("vocadb_song_details.json")},
        )

        results = VocaDBSongProvider(logger, fetcher).search("melt")

        assert [(r.title, r.artist) for r in results] == [
            ("それがあなたの幸せとしても", "Heavenz feat. 初音ミク"),
            ("メルト", "ryo feat. 初音ミク"),
        ]
        assert results[1].url == "https://vocadb.net/S/1501"
        assert all(r.source == "VocaDB" for r in results)
        # offset 3 reaches totalCount: no third page
        assert _starts(fetcher) == [0, 2]

    def test_details_only_fetched_when_listing_lacks_artist(self, logger):
        fetcher = _vocadb(
            {0: read_fixture("vocadb_entries_p1.json"), 2: read_fixture("vocadb_entries_p2.json")},
            {1501: read_fixture("vocadb_song_details.json")},
        )

        VocaDBSongProvider(logger, fetcher).search("melt")

        assert fetcher.requested("/api/songs/") == 1
        assert fetcher.requested("/api/songs/1501/details") == 1

    def test_cap_stops_the_crawl(self, logger):
        fetcher = _vocadb({0: read_fixture("vocadb_entries_p1.json"), 2: read_fixture("vocadb_entries_p2.json")})

        results = VocaDBSongProvider(logger, fetcher, max_results=1).search("melt")

        assert [r.title for r in results] == ["それがあなたの幸せとしても"]
        assert _starts(fetcher) == [0]

    def test_missing_details_keep_the_song(self, logger):
        fetcher = _vocadb({0: read_fixture("vocadb_entries_p1.json"), 2: read_fixture("vocadb_entries_p2.json")})

        results = VocaDBSongProvider(logger, fetcher).search("melt")

        assert results[1].title == "メルト"
        assert results[1].artist is None

    def test_bad_second_page_keeps_first(self, logger):
        fetcher = _vocadb({0: read_fixture("vocadb_entries_p1.json"), 2: '{"error": "rate limited"}'})

        results = VocaDBSongProvider(logger, fetcher).search("melt")

        assert [r.title for r in results] == ["それがあなたの幸せとしても"]

    def test_blank_query(self, logger):
        fetcher = FakeFetcher()
        assert VocaDBSongProvider(logger, fetcher).search(" ") == []
        assert fetcher.requests == []
