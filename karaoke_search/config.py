from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7"
DEFAULT_WEB_SEARCH_URL = "https://html.duckduckgo.com/html/"


def _names(value: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in value.split(",") if s.strip())


@dataclass(frozen=True)
class AppConfig:
    # HTTP
    timeout_s: float
    user_agent: str
    accept_language: str

    # Providers, in registration order
    karaoke_providers: tuple[str, ...]
    lyrics_providers: tuple[str, ...]
    autocomplete_providers: tuple[str, ...]

    # Listing limits
    max_results: int
    max_pages: int

    # External search fallback
    web_search_url: str


def load_config() -> AppConfig:
    return AppConfig(
        timeout_s=float(os.getenv("KARAOKE_SEARCH_TIMEOUT", "10.0")),
        user_agent=os.getenv("KARAOKE_SEARCH_USER_AGENT") or DEFAULT_USER_AGENT,
        accept_language=os.getenv("KARAOKE_SEARCH_ACCEPT_LANGUAGE") or DEFAULT_ACCEPT_LANGUAGE,
        karaoke_providers=_names(os.getenv("KARAOKE_SEARCH_KARAOKE", "tj,ky")),
        lyrics_providers=_names(os.getenv("KARAOKE_SEARCH_LYRICS", "musixmatch,vocaro")),
        autocomplete_providers=_names(os.getenv("KARAOKE_SEARCH_AUTOCOMPLETE", "youtube")),
        max_results=int(os.getenv("KARAOKE_SEARCH_MAX_RESULTS", "50")),
        max_pages=int(os.getenv("KARAOKE_SEARCH_MAX_PAGES", "10")),
        web_search_url=os.getenv("KARAOKE_SEARCH_WEB_SEARCH_URL") or DEFAULT_WEB_SEARCH_URL,
    )
