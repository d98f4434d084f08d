from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, TypeVar

from karaoke_search.logging_setup import Logger
from karaoke_search.sources.base import AutocompleteProvider, KaraokeProvider, LyricsProvider
from karaoke_search.sources.types import AutocompleteResults, SearchResults

T = TypeVar("T")


class SearchEngine:
    """
    Fans a query out to every registered provider at once and concatenates
    their contributions in registration order. Never raises.
    """

    def __init__(self, logger: Logger):
        self.logger = logger
        self.karaoke_providers: list[KaraokeProvider] = []
        self.lyrics_providers: list[LyricsProvider] = []
        self.autocomplete_providers: list[AutocompleteProvider] = []

    def add_karaoke_provider(self, provider: KaraokeProvider) -> None:
        self.karaoke_providers.append(provider)

    def add_lyrics_provider(self, provider: LyricsProvider) -> None:
        self.lyrics_providers.append(provider)

    def add_autocomplete_provider(self, provider: AutocompleteProvider) -> None:
        self.autocomplete_providers.append(provider)

    def providers(self) -> dict[str, list[str]]:
        return {
            "karaoke": [p.name for p in self.karaoke_providers],
            "lyrics": [p.name for p in self.lyrics_providers],
            "autocomplete": [p.name for p in self.autocomplete_providers],
        }

    def search(self, query: str, *, max_results: int | None = None) -> SearchResults:
        if not query or not query.strip():
            return SearchResults()
        calls: list[tuple[str, Callable[[str], list]]] = [
            *((p.name, p.search) for p in self.karaoke_providers),
            *((p.name, p.search) for p in self.lyrics_providers),
        ]
        contributions = self._fan_out(calls, query, max_results)
        split = len(self.karaoke_providers)
        return SearchResults(
            karaoke=[r for part in contributions[:split] for r in part],
            lyrics=[r for part in contributions[split:] for r in part],
        )

    def get_autocomplete_suggestions(self, query: str) -> AutocompleteResults:
        if not query or not query.strip():
            return AutocompleteResults()
        calls = [(p.name, p.get_suggestions) for p in self.autocomplete_providers]
        contributions = self._fan_out(calls, query, None)
        return AutocompleteResults(suggestions=[r for part in contributions for r in part])

    def _fan_out(
        self,
        calls: list[tuple[str, Callable[[str], list[T]]]],
        query: str,
        max_results: int | None,
    ) -> list[list[T]]:
        if not calls:
            return []
        with ThreadPoolExecutor(max_workers=len(calls)) as pool:
            futures: list[Future] = [pool.submit(fn, query) for _, fn in calls]
        # the pool has joined: every provider is done
        out: list[list[T]] = []
        for (name, _), fut in zip(calls, futures):
            try:
                part = list(fut.result())
            except Exception as e:
                self.logger.log("Error in %s: %s", name, e)
                self.logger.error("Provider %s failed", name)
                part = []
            if max_results is not None:
                part = part[:max_results]
            out.append(part)
        return out
