from __future__ import annotations

import logging
from typing import Callable, Iterator, Protocol, TypeVar

from karaoke_search.net.document import Document, parse_html

logger = logging.getLogger(__name__)

R = TypeVar("R")


class TextFetcher(Protocol):
    def fetch_text(self, url: str, **kwargs) -> str: ...


def crawl_listing(
    fetcher: TextFetcher,
    page_url: Callable[[int], str],
    extract: Callable[[Document], list[R]],
    *,
    start_page: int = 1,
    max_pages: int | None = None,
) -> Iterator[R]:
    """
    Walk a page-numbered listing lazily: fetch page N, yield its records,
    stop at the first page that yields none. The next page is only fetched
    once the consumer has taken every record of the current one.

    `extract` raises InvalidRecordError for a malformed row; that ends the
    crawl, records already yielded stay with the consumer.
    """
    page = start_page
    while max_pages is None or page - start_page < max_pages:
        url = page_url(page)
        logger.debug("Fetching listing page %s: %s", page, url)
        records = extract(parse_html(fetcher.fetch_text(url)))
        if not records:
            return
        yield from records
        page += 1
    logger.debug("Listing crawl stopped at page limit (%s pages)", max_pages)


def crawl_offset(
    fetch_page: Callable[[int], tuple[list[R], int]],
    *,
    max_pages: int | None = None,
) -> Iterator[R]:
    """
    Walk an API listing addressed by item offset. `fetch_page(start)` returns
    the page's items and the listing's total count; the crawl ends once the
    offset reaches the total or a page comes back empty.
    """
    start = 0
    pages = 0
    while max_pages is None or pages < max_pages:
        items, total = fetch_page(start)
        pages += 1
        logger.debug("Offset page at %s: %s items of %s", start, len(items), total)
        if not items:
            return
        yield from items
        start += len(items)
        if start >= total:
            return
    logger.debug("Offset crawl stopped at page limit (%s pages)", max_pages)
