from __future__ import annotations

import json
import sys

import colorama
import typer

from karaoke_search.config import load_config
from karaoke_search.logging_setup import Logger, setup_logging
from karaoke_search.render.console import ConsoleFormatter, plain_theme
from karaoke_search.sources.service import build_search_engine


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _formatter() -> ConsoleFormatter:
    if sys.stdout.isatty():
        colorama.just_fix_windows_console()
        return ConsoleFormatter()
    return ConsoleFormatter(plain_theme())


@app.command()
def search(
    query: list[str] = typer.Argument(..., help="Song title (words are joined)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed search progress"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum results per provider"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Search karaoke catalogs and lyrics sites for a song.
    """
    setup_logging(debug or verbose)
    text = " ".join(query).strip()
    cfg = load_config()
    engine = build_search_engine(cfg, Logger(verbose=verbose))
    results = engine.search(text, max_results=limit)

    if json_output:
        typer.echo(json.dumps(results.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(_formatter().format_results(text, results))


@app.command()
def suggest(
    query: list[str] = typer.Argument(..., help="Partial query"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Autocomplete suggestions for a partial query."""
    setup_logging(verbose)
    text = " ".join(query).strip()
    engine = build_search_engine(load_config(), Logger(verbose=verbose))
    results = engine.get_autocomplete_suggestions(text)

    if json_output:
        typer.echo(json.dumps(results.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(_formatter().format_suggestions(text, results))


@app.command()
def providers():
    """List the configured providers."""
    engine = build_search_engine(load_config(), Logger())
    for kind, names in engine.providers().items():
        typer.echo(f"{kind}: {', '.join(names) or '-'}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
