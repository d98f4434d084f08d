from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest

from karaoke_search.crawl.listing import crawl_listing, crawl_offset
from karaoke_search.errors import InvalidRecordError
from tests.mocks.fake_fetcher import FakeFetcher


def _page_url(page: int) -> str:
    return f"https://listing.test/search?page={page}"


def _page_of(url: str) -> int:
    return int(parse_qs(urlparse(url).query)["page"][0])


def _html(ids: list[str]) -> str:
    rows = "".join(f"<li class='rec'>{i}</li>" for i in ids)
    return f"<html><body><ul>{rows}</ul></body></html>"


def _extract(doc) -> list[int]:
    out = []
    for row in doc.select("li.rec"):
        if not row.text.isdigit():
            raise InvalidRecordError(row.text)
        out.append(int(row.text))
    return out


def _source(pages: dict[int, list[str]]) -> FakeFetcher:
    return FakeFetcher(default=lambda url: _html(pages.get(_page_of(url), [])))


def test_stops_at_first_empty_page():
    fetcher = _source({1: ["1", "2"], 2: ["3"], 4: ["99"]})

    records = list(crawl_listing(fetcher, _page_url, _extract))

    assert records == [1, 2, 3]
    assert [_page_of(u) for u in fetcher.requests] == [1, 2, 3]


def test_invalid_record_aborts_but_keeps_yielded_records():
    fetcher = _source({1: ["1", "2"], 2: ["3", "x7"], 3: ["4"]})

    got: list[int] = []
    with pytest.raises(InvalidRecordError) as ei:
        for rec in crawl_listing(fetcher, _page_url, _extract):
            got.append(rec)

    assert got == [1, 2]
    assert ei.value.raw == "x7"
    assert fetcher.requested("page=3") == 0


def test_is_lazy():
    fetcher = _source({1: ["1", "2"], 2: ["3"]})

    it = crawl_listing(fetcher, _page_url, _extract)
    assert fetcher.requests == []
    assert next(it) == 1
    assert next(it) == 2
    assert len(fetcher.requests) == 1
    assert next(it) == 3
    assert len(fetcher.requests) == 2


def test_max_pages_bounds_the_crawl():
    fetcher = FakeFetcher(default=lambda url: _html([str(_page_of(url))]))

    records = list(crawl_listing(fetcher, _page_url, _extract, max_pages=3))

    assert records == [1, 2, 3]
    assert len(fetcher.requests) == 3


def test_start_page():
    fetcher = _source({2: ["5"]})
    assert list(crawl_listing(fetcher, _page_url, _extract, start_page=2)) == [5]


class TestOffsetCrawl:
    def test_stops_at_total_count(self):
        calls: list[int] = []

        def page(start: int) -> tuple[list[int], int]:
            calls.append(start)
            return list(range(start, min(start + 2, 5))), 5

        assert list(crawl_offset(page)) == [0, 1, 2, 3, 4]
        assert calls == [0, 2, 4]

    def test_stops_at_empty_page(self):
        calls: list[int] = []

        def page(start: int) -> tuple[list[int], int]:
            calls.append(start)
            return ([1, 2] if start == 0 else []), 100

        assert list(crawl_offset(page)) == [1, 2]
        assert calls == [0, 2]

    def test_max_pages(self):
        assert list(crawl_offset(lambda start: ([start], 100), max_pages=3)) == [0, 1, 2]
