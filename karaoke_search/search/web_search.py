from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urljoin, urlparse

from karaoke_search.config import DEFAULT_WEB_SEARCH_URL
from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import Document, parse_html
from karaoke_search.net.fetch import Fetcher
from karaoke_search.sources.types import is_absolute_url


@dataclass(frozen=True, slots=True)
class WebSearchHit:
    title: str
    url: str
    snippet: str = ""


def _unwrap(href: str) -> str:
    """DuckDuckGo links go through /l/?uddg=<target>."""
    url = urljoin("https://duckduckgo.com/", href)
    p = urlparse(url)
    if p.netloc.endswith("duckduckgo.com") and p.path.startswith("/l/"):
        target = parse_qs(p.query).get("uddg")
        if target:
            return target[0]
    return url


def extract_hits(doc: Document) -> list[WebSearchHit]:
    hits: list[WebSearchHit] = []
    for block in doc.select(".result"):
        link = block.first("a.result__a")
        if link is None or not link.attr("href"):
            continue
        url = _unwrap(link.attr("href") or "")
        if not is_absolute_url(url):
            continue
        hits.append(WebSearchHit(title=link.text, url=url, snippet=block.text_of(".result__snippet")))
    return hits


class WebSearch:
    """Site-restricted query against a general web search engine."""

    def __init__(self, logger: Logger, fetcher: Fetcher, *, endpoint: str = DEFAULT_WEB_SEARCH_URL):
        self.logger = logger
        self.fetcher = fetcher
        self.endpoint = endpoint

    def search_domain(self, query: str, domain: str, max_results: int = 5) -> list[WebSearchHit]:
        q = f"{query} site:{domain}"
        self.logger.log("Web search: %s", q)
        try:
            html = self.fetcher.fetch_text(self.endpoint, method="POST", data={"q": q})
            hits = [h for h in extract_hits(parse_html(html)) if domain in h.url]
        except Exception as e:
            self.logger.log("Web search failed for %s: %s", q, e)
            return []
        seen: set[str] = set()
        out: list[WebSearchHit] = []
        for h in hits:
            if h.url in seen:
                continue
            seen.add(h.url)
            out.append(h)
            if len(out) >= max_results:
                break
        self.logger.log("Web search found %s results on %s", len(out), domain)
        return out
