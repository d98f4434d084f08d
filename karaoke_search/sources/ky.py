from __future__ import annotations

from urllib.parse import urlencode

from karaoke_search.errors import InvalidRecordError
from karaoke_search.net.document import Document

from .base import ListingKaraokeProvider
from .types import KaraokeResult, KaraokeSource

SEARCH_URL = "https://kysing.kr/search/"
TITLE_CATEGORY = 2

_HEADER_ID = "곡번호"
# rows that link to the site itself rather than a song
_BOILERPLATE = ("KYSing", "고객", "센터", "키싱")


def extract_ky_rows(doc: Document) -> list[KaraokeResult]:
    out: list[KaraokeResult] = []
    for row in doc.select(".search_chart_list"):
        raw_id = row.text_of("li.search_chart_num")
        if raw_id == _HEADER_ID:
            continue
        if not (raw_id.isascii() and raw_id.isdigit()):
            raise InvalidRecordError(raw_id, "KY row without numeric song number")
        title = row.text_of("li.search_chart_tit span.tit:not(.mo-art)")
        if not title:
            raise InvalidRecordError(raw_id, "KY row without title")
        out.append(
            KaraokeResult(
                id=raw_id,
                title=title,
                source=KaraokeSource.KY,
                artist=row.text_of("li.search_chart_sng") or None,
                composer=row.text_of("li.search_chart_cmp") or None,
                lyricist=row.text_of("li.search_chart_wrt") or None,
                release_date=row.text_of("li.search_chart_rel") or None,
                excerpt=row.text_of("li.search_chart_tit .LyricsCont") or None,
                youtube=row.attr_of("li.search_chart_ytb > a", "href"),
            )
        )
    return out


class KYKaraokeProvider(ListingKaraokeProvider):
    name = "KY Karaoke"
    source = KaraokeSource.KY

    def page_url(self, query: str, page: int) -> str:
        params = {"category": TITLE_CATEGORY, "keyword": query, "s_page": page}
        return f"{SEARCH_URL}?{urlencode(params)}"

    def extract(self, doc: Document) -> list[KaraokeResult]:
        return extract_ky_rows(doc)

    def accept(self, result: KaraokeResult) -> bool:
        title = result.title
        if any(word in title for word in _BOILERPLATE):
            return False
        return not title.isdigit() and len(result.id) >= 4
