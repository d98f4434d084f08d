from __future__ import annotations

import pytest

from karaoke_search.config import DEFAULT_ACCEPT_LANGUAGE, DEFAULT_WEB_SEARCH_URL, load_config
from karaoke_search.sources.service import build_search_engine
from karaoke_search.sources.vocaro import VocaroProvider
from tests.mocks.fake_fetcher import FakeFetcher

_ENV = (
    "KARAOKE_SEARCH_TIMEOUT",
    "KARAOKE_SEARCH_USER_AGENT",
    "KARAOKE_SEARCH_ACCEPT_LANGUAGE",
    "KARAOKE_SEARCH_KARAOKE",
    "KARAOKE_SEARCH_LYRICS",
    "KARAOKE_SEARCH_AUTOCOMPLETE",
    "KARAOKE_SEARCH_MAX_RESULTS",
    "KARAOKE_SEARCH_MAX_PAGES",
    "KARAOKE_SEARCH_WEB_SEARCH_URL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = load_config()
    assert cfg.timeout_s == 10.0
    assert cfg.accept_language == DEFAULT_ACCEPT_LANGUAGE
    assert cfg.karaoke_providers == ("tj", "ky")
    assert cfg.lyrics_providers == ("musixmatch", "vocaro")
    assert cfg.autocomplete_providers == ("youtube",)
    assert cfg.max_results == 50
    assert cfg.max_pages == 10
    assert cfg.web_search_url == DEFAULT_WEB_SEARCH_URL


def test_env_overrides(clean_env):
    clean_env.setenv("KARAOKE_SEARCH_TIMEOUT", "2.5")
    clean_env.setenv("KARAOKE_SEARCH_KARAOKE", " ky , ")
    clean_env.setenv("KARAOKE_SEARCH_AUTOCOMPLETE", "vocadb,utaitedb")
    clean_env.setenv("KARAOKE_SEARCH_MAX_RESULTS", "7")

    cfg = load_config()

    assert cfg.timeout_s == 2.5
    assert cfg.karaoke_providers == ("ky",)
    assert cfg.autocomplete_providers == ("vocadb", "utaitedb")
    assert cfg.max_results == 7


def test_build_search_engine_registers_in_config_order(clean_env, logger):
    clean_env.setenv("KARAOKE_SEARCH_KARAOKE", "kysing,bogus,tj")
    clean_env.setenv("KARAOKE_SEARCH_LYRICS", "vocaro,mxm")
    clean_env.setenv("KARAOKE_SEARCH_AUTOCOMPLETE", "youtube,vocadb,nope")

    engine = build_search_engine(load_config(), logger, FakeFetcher())

    assert engine.providers() == {
        "karaoke": ["KY Karaoke", "TJ Karaoke"],
        "lyrics": ["Vocaro Wiki", "MusixMatch"],
        "autocomplete": ["YouTube Autocomplete", "VocaDB Autocomplete"],
    }
    vocaro = engine.lyrics_providers[0]
    assert isinstance(vocaro, VocaroProvider)
    assert [p.name for p in vocaro.pipeline.karaoke_providers] == ["TJ Karaoke", "KY Karaoke"]


def test_listing_limits_reach_providers(clean_env, logger):
    clean_env.setenv("KARAOKE_SEARCH_MAX_RESULTS", "7")
    clean_env.setenv("KARAOKE_SEARCH_MAX_PAGES", "3")

    engine = build_search_engine(load_config(), logger, FakeFetcher())

    assert [(p.max_results, p.max_pages) for p in engine.karaoke_providers] == [(7, 3), (7, 3)]


def test_aliases_of_one_provider_register_it_once(clean_env, logger):
    clean_env.setenv("KARAOKE_SEARCH_KARAOKE", "tj,tjmedia,TJ")
    clean_env.setenv("KARAOKE_SEARCH_LYRICS", "mxm,musixmatch,vocadb")
    clean_env.setenv("KARAOKE_SEARCH_AUTOCOMPLETE", "youtube,yt")

    engine = build_search_engine(load_config(), logger, FakeFetcher())

    assert engine.providers() == {
        "karaoke": ["TJ Karaoke"],
        "lyrics": ["MusixMatch", "VocaDB"],
        "autocomplete": ["YouTube Autocomplete"],
    }
