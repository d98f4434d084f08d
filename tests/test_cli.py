from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from karaoke_search import cli
from karaoke_search.search.engine import SearchEngine
from karaoke_search.sources.base import AutocompleteProvider, KaraokeProvider
from karaoke_search.sources.types import AutocompleteResult, KaraokeResult, KaraokeSource

runner = CliRunner()


class OneSong(KaraokeProvider):
    name = "TJ Karaoke"

    def search(self, query):
        return [
            KaraokeResult(id="96123", title="사랑의 바보", source=KaraokeSource.TJ, artist="더 넛츠"),
            KaraokeResult(id="48213", title="사랑했나봐", source=KaraokeSource.TJ),
        ]


class Suggest(AutocompleteProvider):
    name = "YouTube Autocomplete"

    def get_suggestions(self, query):
        return [AutocompleteResult(suggestion=f"{query} ryo", source="YouTube")]


@pytest.fixture
def engine(monkeypatch, logger):
    e = SearchEngine(logger)
    e.add_karaoke_provider(OneSong(logger))
    e.add_autocomplete_provider(Suggest(logger))

    def build(cfg, log, fetcher=None):
        return e

    monkeypatch.setattr(cli, "build_search_engine", build)
    return e


def test_search_prints_report(engine):
    result = runner.invoke(cli.app, ["search", "사랑"])

    assert result.exit_code == 0, result.output
    assert 'Searching for: "사랑"' in result.output
    assert "96123 - 사랑의 바보 by 더 넛츠" in result.output


def test_search_json_with_limit(engine):
    result = runner.invoke(cli.app, ["search", "사랑", "--json", "--limit", "1"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data == {
        "karaoke": [{"id": "96123", "title": "사랑의 바보", "source": "TJ", "artist": "더 넛츠"}],
        "lyrics": [],
    }


def test_search_joins_words(engine):
    result = runner.invoke(cli.app, ["search", "blue", "ming"])
    assert 'Searching for: "blue ming"' in result.output


def test_suggest(engine):
    result = runner.invoke(cli.app, ["suggest", "melt", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"suggestions": [{"suggestion": "melt ryo", "source": "YouTube"}]}


def test_providers(engine):
    result = runner.invoke(cli.app, ["providers"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["karaoke: TJ Karaoke", "lyrics: -", "autocomplete: YouTube Autocomplete"]
