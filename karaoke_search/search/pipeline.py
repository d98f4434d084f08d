from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, Sequence

from karaoke_search.errors import ValidationRejected
from karaoke_search.logging_setup import Logger
from karaoke_search.net.document import Document
from karaoke_search.sources.base import KaraokeProvider, dedupe
from karaoke_search.sources.types import (
    Candidate,
    CandidateStage,
    EnrichedLyricsResult,
    KaraokeResult,
    LyricsResult,
)
from karaoke_search.text.normalize import Script, contains_japanese, script_of, slug_variants

from .investigator import Investigation, PageInvestigator
from .web_search import WebSearch

# Stage bounds. Fixed so one resolution does a bounded amount of I/O.
FALLBACK_THRESHOLD = 3
GUESS_THRESHOLD = 2
MAX_GUESSES = 3
MAX_FALLBACK_RESULTS = 5
MAX_INVESTIGATED = 5
EXCERPT_CHARS = 200

TITLE_SELECTORS = ("h1", "h2", "h3", ".page-title", "#page-title", ".title", ".song-title")
MIN_TITLE_CHARS = 2
MAX_TITLE_CHARS = 50

_NOT_TITLE_RES = (
    re.compile(r"^(작성자|작성일|수정|편집|삭제|목록|검색|메뉴)"),
    re.compile(r"^(http|www\.)"),
    re.compile(r"^\d+$"),
    re.compile(r"^(다음|이전|홈|뒤로)"),
    re.compile(r"(로그인|회원가입|비밀번호)"),
)


def looks_like_title(text: str) -> bool:
    """Reject navigation and page chrome; keep anything of title length."""
    if any(p.search(text) for p in _NOT_TITLE_RES):
        return False
    return MIN_TITLE_CHARS <= len(text) <= MAX_TITLE_CHARS


def extract_alternate_title(doc: Document, original_query: str) -> str | None:
    """First Japanese-script heading, else first short Japanese text node."""
    for sel in TITLE_SELECTORS:
        for el in doc.select(sel):
            text = el.text
            if text != original_query and contains_japanese(text) and looks_like_title(text):
                return text

    for el in doc.select("p, div, span"):
        text = el.text
        if text != original_query and contains_japanese(text) and looks_like_title(text):
            return text
    return None


def _excerpt(lyrics: str | None) -> str | None:
    if not lyrics:
        return None
    if len(lyrics) <= EXCERPT_CHARS:
        return lyrics
    return lyrics[:EXCERPT_CHARS] + "..."


def _merge(working: list[Candidate], extra: list[Candidate]) -> list[Candidate]:
    return dedupe([*working, *extra], key=lambda c: c.url)


class ResolutionPipeline:
    """
    Staged lookup for sources whose own search is unreliable:

      1. direct search on the source
      2. site-restricted web search, if (1) found fewer than 3
      3. URL guessing from the query, if still fewer than 2
      4. concurrent investigation of the first 5 candidates
      5. for Korean queries with direct hits: find a Japanese title on each
         page and look it up in the karaoke catalogs

    Stages never raise; a failing stage contributes nothing.
    """

    def __init__(
        self,
        logger: Logger,
        *,
        source: str,
        domain: str,
        direct_search: Callable[[str], list[Candidate]],
        guess_url: Callable[[str], str],
        web_search: WebSearch,
        investigator: PageInvestigator,
        karaoke_providers: Sequence[KaraokeProvider] = (),
        exclude: Callable[[str], bool] | None = None,
    ):
        self.logger = logger
        self.source = source
        self.domain = domain
        self.direct_search = direct_search
        self.guess_url = guess_url
        self.web_search = web_search
        self.investigator = investigator
        self.karaoke_providers = list(karaoke_providers)
        self.exclude = exclude or (lambda url: False)

    def resolve(self, query: str) -> list[LyricsResult]:
        query = query.strip()
        if not query:
            return []
        pages: dict[str, Document] = {}

        direct = self._direct(query)
        working = list(direct)

        if len(working) < FALLBACK_THRESHOLD:
            self.logger.log("Direct search returned %s results, trying web search", len(working))
            working = _merge(working, self._fallback(query))

        if len(working) < GUESS_THRESHOLD:
            self.logger.log("Still few results (%s), trying direct URLs", len(working))
            working = _merge(working, self._guess(query, pages))

        results = self._investigate(working[:MAX_INVESTIGATED], pages)

        if direct and script_of(query) is Script.KOREAN:
            self.logger.log("Korean query with direct hits, looking for Japanese titles")
            results = self._enrich(results, query, pages)

        results = dedupe(results, key=lambda r: r.url)
        self.logger.log("Resolved %s results from %s", len(results), self.source)
        return results

    # Stage 1
    def _direct(self, query: str) -> list[Candidate]:
        try:
            found = self.direct_search(query)
        except Exception as e:
            self.logger.log("Direct search on %s failed: %s", self.source, e)
            return []
        found = dedupe((c for c in found if not self.exclude(c.url)), key=lambda c: c.url)
        self.logger.log("Found %s results from direct %s search", len(found), self.source)
        return found

    # Stage 2
    def _fallback(self, query: str) -> list[Candidate]:
        try:
            hits = self.web_search.search_domain(query, self.domain, MAX_FALLBACK_RESULTS)
        except Exception as e:
            self.logger.log("Web search fallback failed: %s", e)
            return []
        return [
            Candidate(url=h.url, title=h.title, stage=CandidateStage.FALLBACK, snippet=h.snippet or None)
            for h in hits
            if not self.exclude(h.url)
        ]

    # Stage 3
    def _guess(self, query: str, pages: dict[str, Document]) -> list[Candidate]:
        for slug in slug_variants(query)[:MAX_GUESSES]:
            url = self.guess_url(slug)
            self.logger.log("Trying direct URL: %s", url)
            try:
                doc = self.investigator.load(url)
                inv = self.investigator.inspect(url, doc).validated()
            except Exception as e:
                self.logger.log("Direct URL failed: %s - %s", url, e)
                continue
            pages[url] = doc
            self.logger.log("Direct URL success: %s", url)
            return [
                Candidate(
                    url=url,
                    title=inv.song_title or inv.title or query,
                    stage=CandidateStage.GUESSED,
                    artist=inv.artist,
                )
            ]
        return []

    # Stage 4
    def _investigate(self, candidates: list[Candidate], pages: dict[str, Document]) -> list[LyricsResult]:
        if not candidates:
            return []
        self.logger.log("Investigating %s results...", len(candidates))
        with ThreadPoolExecutor(max_workers=len(candidates)) as pool:
            outcomes = list(pool.map(lambda c: self._investigate_one(c, pages.get(c.url)), candidates))

        results: list[LyricsResult] = []
        for candidate, (result, doc) in zip(candidates, outcomes):
            if doc is not None:
                pages[candidate.url] = doc
            if result is not None:
                results.append(result)
        self.logger.log("Investigation complete: %s valid results", len(results))
        return results

    def _investigate_one(self, c: Candidate, doc: Document | None) -> tuple[LyricsResult | None, Document | None]:
        try:
            if doc is None:
                doc = self.investigator.load(c.url)
            inv = self.investigator.inspect(c.url, doc).validated()
        except ValidationRejected:
            self.logger.log("Dropping %s: not a song page", c.url)
            return None, None
        except Exception as e:
            # unreachable pages keep their pre-investigation record
            self.logger.log("Failed to investigate %s: %s", c.url, e)
            return LyricsResult(title=c.title or c.url, url=c.url, source=self.source, artist=c.artist), None
        return self._from_investigation(c, inv), doc

    def _from_investigation(self, c: Candidate, inv: Investigation) -> EnrichedLyricsResult:
        return EnrichedLyricsResult(
            title=inv.song_title or inv.title or c.title or c.url,
            url=c.url,
            source=self.source,
            artist=inv.artist or c.artist,
            excerpt=_excerpt(inv.lyrics),
        )

    # Stage 5
    def _enrich(self, results: list[LyricsResult], query: str, pages: dict[str, Document]) -> list[LyricsResult]:
        out: list[LyricsResult] = []
        for r in results:
            try:
                doc = pages.get(r.url) or self.investigator.load(r.url)
                alt = extract_alternate_title(doc, query)
            except Exception as e:
                self.logger.log("Failed to enhance result %s: %s", r.url, e)
                out.append(r)
                continue
            if not alt:
                out.append(r)
                continue

            self.logger.log("Extracted Japanese title: %s from %s", alt, r.url)
            matches = self._cross_reference(alt)
            title = r.title
            if matches:
                title = f"{r.title} (JP: {alt}) [{len(matches)} karaoke matches]"
            if isinstance(r, EnrichedLyricsResult):
                out.append(replace(r, title=title, alternate_script_title=alt, cross_referenced_karaoke=tuple(matches)))
            else:
                out.append(
                    EnrichedLyricsResult(
                        title=title,
                        url=r.url,
                        source=r.source,
                        artist=r.artist,
                        alternate_script_title=alt,
                        cross_referenced_karaoke=tuple(matches),
                    )
                )
        return out

    def _cross_reference(self, title: str) -> list[KaraokeResult]:
        if not self.karaoke_providers:
            return []
        with ThreadPoolExecutor(max_workers=len(self.karaoke_providers)) as pool:
            futures = [pool.submit(p.search, title) for p in self.karaoke_providers]
        combined: list[KaraokeResult] = []
        for provider, fut in zip(self.karaoke_providers, futures):
            try:
                found = fut.result()
            except Exception as e:
                self.logger.log("%s search failed: %s", provider.name, e)
                found = []
            self.logger.log("%s: %s matches for %s", provider.name, len(found), title)
            combined.extend(found)
        return combined
