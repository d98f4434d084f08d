from __future__ import annotations

from urllib.parse import urlencode

from karaoke_search.errors import InvalidRecordError
from karaoke_search.net.document import Document, Element

from .base import ListingKaraokeProvider
from .types import KaraokeResult, KaraokeSource

SEARCH_URL = "https://www.tjmedia.com/song/accompaniment_search"
PAGE_ROWS = 15

# strType=1 searches by title; strSortType=indexTitle sorts by title
_FIXED_PARAMS = {
    "pageRowCnt": PAGE_ROWS,
    "nationType": "",
    "strType": 1,
    "strSotrGubun": "ASC",
    "strSortType": "indexTitle",
}


def _id_cell(row: Element) -> str:
    for sel in ("li.pos-type .num2", ".mo-title ~ span"):
        el = row.first(sel)
        if el is not None:
            return el.text
    return ""


def extract_tj_rows(doc: Document) -> list[KaraokeResult]:
    out: list[KaraokeResult] = []
    for row in doc.select(".chart-list-area > li > ul:not(.top)"):
        raw_id = _id_cell(row)
        if not (raw_id.isascii() and raw_id.isdigit()):
            raise InvalidRecordError(raw_id, "TJ row without numeric song number")
        title = row.text_of(".title3 p > span")
        if not title:
            raise InvalidRecordError(raw_id, "TJ row without title")
        out.append(
            KaraokeResult(
                id=raw_id,
                title=title,
                source=KaraokeSource.TJ,
                artist=row.text_of(".title4 p > span") or None,
                tags=tuple(t for t in (li.text for li in row.select(".title3 ul > li")) if t),
                lyricist=row.text_of(".title5 p > span") or None,
                composer=row.text_of(".title6 p > span") or None,
                youtube=row.attr_of(".youtube > a", "href"),
            )
        )
    return out


class TJKaraokeProvider(ListingKaraokeProvider):
    name = "TJ Karaoke"
    source = KaraokeSource.TJ

    def page_url(self, query: str, page: int) -> str:
        params = {"pageNo": page, **_FIXED_PARAMS, "searchTxt": query}
        return f"{SEARCH_URL}?{urlencode(params)}"

    def extract(self, doc: Document) -> list[KaraokeResult]:
        return extract_tj_rows(doc)
