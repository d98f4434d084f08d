from __future__ import annotations

from karaoke_search.config import AppConfig
from karaoke_search.logging_setup import Logger
from karaoke_search.net.fetch import Fetcher
from karaoke_search.search.engine import SearchEngine
from karaoke_search.search.web_search import WebSearch

from .autocomplete import YouTubeAutocompleteProvider, utaitedb_provider, vocadb_provider
from .base import KaraokeProvider
from .ky import KYKaraokeProvider
from .musixmatch import MusixMatchProvider
from .tj import TJKaraokeProvider
from .vocadb import VocaDBSongProvider
from .vocaro import VocaroProvider

_KARAOKE_ALIASES = {
    "tj": "tj",
    "tjmedia": "tj",
    "ky": "ky",
    "kysing": "ky",
}
_LYRICS_ALIASES = {
    "musixmatch": "musixmatch",
    "mxm": "musixmatch",
    "vocaro": "vocaro",
    "vocaro-wiki": "vocaro",
    "vocadb": "vocadb",
}
_AUTOCOMPLETE_ALIASES = {
    "youtube": "youtube",
    "yt": "youtube",
    "vocadb": "vocadb",
    "utaitedb": "utaitedb",
}


def _build_karaoke(name: str, cfg: AppConfig, logger: Logger, fetcher: Fetcher) -> KaraokeProvider:
    cls = TJKaraokeProvider if name == "tj" else KYKaraokeProvider
    return cls(logger, fetcher, max_results=cfg.max_results, max_pages=cfg.max_pages)


def _canonical(names: tuple[str, ...], aliases: dict[str, str], kind: str, logger: Logger) -> list[str]:
    """Config names resolved to canonical ones, unknowns and repeats dropped."""
    out: list[str] = []
    for s in names:
        name = aliases.get(s.strip().lower())
        if name is None:
            logger.log("Unknown %s provider '%s' in config, skipping", kind, s)
        elif name in out:
            logger.log("Duplicate %s provider '%s' in config, skipping", kind, s)
        else:
            out.append(name)
    return out


def build_search_engine(cfg: AppConfig, logger: Logger, fetcher: Fetcher | None = None) -> SearchEngine:
    fetcher = fetcher or Fetcher.from_config(cfg)
    engine = SearchEngine(logger)

    for name in _canonical(cfg.karaoke_providers, _KARAOKE_ALIASES, "karaoke", logger):
        engine.add_karaoke_provider(_build_karaoke(name, cfg, logger, fetcher))

    for name in _canonical(cfg.lyrics_providers, _LYRICS_ALIASES, "lyrics", logger):
        if name == "musixmatch":
            engine.add_lyrics_provider(MusixMatchProvider(logger, fetcher))
        elif name == "vocadb":
            engine.add_lyrics_provider(VocaDBSongProvider(logger, fetcher))
        else:
            # cross-references always use both catalogs, whatever is registered
            engine.add_lyrics_provider(
                VocaroProvider(
                    logger,
                    fetcher,
                    karaoke_providers=[_build_karaoke("tj", cfg, logger, fetcher), _build_karaoke("ky", cfg, logger, fetcher)],
                    web_search=WebSearch(logger, fetcher, endpoint=cfg.web_search_url),
                )
            )

    for name in _canonical(cfg.autocomplete_providers, _AUTOCOMPLETE_ALIASES, "autocomplete", logger):
        if name == "youtube":
            engine.add_autocomplete_provider(YouTubeAutocompleteProvider(logger, fetcher))
        elif name == "vocadb":
            engine.add_autocomplete_provider(vocadb_provider(logger, fetcher))
        else:
            engine.add_autocomplete_provider(utaitedb_provider(logger, fetcher))

    return engine
