from __future__ import annotations

from dataclasses import dataclass

from colorama import Fore, Style

from karaoke_search.sources.types import (
    AutocompleteResults,
    EnrichedLyricsResult,
    KaraokeResult,
    LyricsResult,
    SearchResults,
)

KARAOKE_PREVIEW = 5
CROSS_REF_PREVIEW = 3


@dataclass(frozen=True, slots=True)
class Theme:
    heading: str = Style.BRIGHT + Fore.CYAN
    section: str = Style.BRIGHT + Fore.YELLOW
    label: str = Style.BRIGHT
    dim: str = Style.DIM
    link: str = Fore.BLUE
    tip: str = Fore.YELLOW
    alt: str = Fore.GREEN
    tj: str = Fore.CYAN
    ky: str = Fore.MAGENTA
    reset: str = Style.RESET_ALL


_KARAOKE_SECTIONS = (("TJ", "TJ Karaoke"), ("KY", "KY Karaoke"))
_LYRICS_SECTIONS = (("MusixMatch", "MusixMatch"), ("Vocaro", "Vocaro Wiki"))
# opt-in sources: listed only when they returned something
_EXTRA_LYRICS_SECTIONS = (("VocaDB", "VocaDB"),)


def _group(results, key) -> dict[str, list]:
    out: dict[str, list] = {}
    for r in results:
        out.setdefault(key(r), []).append(r)
    return out


class ConsoleFormatter:
    def __init__(self, theme: Theme | None = None):
        self.theme = theme or Theme()

    def _by(self, artist: str | None) -> str:
        return f" {self.theme.dim}by {artist}{self.theme.reset}" if artist else ""

    def _karaoke_line(self, r: KaraokeResult, indent: str = "  ", with_source: bool = False) -> str:
        colour = getattr(self.theme, r.source.value.lower(), "")
        prefix = f"{colour}{r.source.value}{self.theme.reset} " if with_source else ""
        return f"{indent}{prefix}{colour}{r.id}{self.theme.reset} - {r.title}{self._by(r.artist)}"

    def format_results(self, query: str, results: SearchResults) -> str:
        t = self.theme
        out = [f"{t.heading}Searching for: \"{query}\"{t.reset}", ""]

        out.append(f"{t.section}Karaoke Song IDs:{t.reset}")
        by_source = _group(results.karaoke, lambda r: r.source.value)
        for key, label in _KARAOKE_SECTIONS:
            rows = by_source.get(key, [])
            if rows:
                out.append(f"{t.label}{label}:{t.reset}")
                out.extend(self._karaoke_line(r) for r in rows[:KARAOKE_PREVIEW])
            else:
                out.append(f"{t.dim}  No results from {label}{t.reset}")
        out.append("")

        out.append(f"{t.section}Lyrics Sources:{t.reset}")
        by_source = _group(results.lyrics, lambda r: r.source)
        for key, label in _LYRICS_SECTIONS:
            rows = by_source.get(key, [])
            if rows:
                out.append(f"{t.label}{label}:{t.reset}")
                for r in rows:
                    out.extend(self._lyrics_lines(r))
            else:
                out.append(f"{t.dim}  No results from {label}{t.reset}")
        for key, label in _EXTRA_LYRICS_SECTIONS:
            if by_source.get(key):
                out.append(f"{t.label}{label}:{t.reset}")
                for r in by_source[key]:
                    out.extend(self._lyrics_lines(r))
        out.append("")

        if not results.karaoke and not results.lyrics:
            out.append(f"{t.tip}Tip: Try different search terms or English/Korean/Japanese variations of the song title.{t.reset}")
        return "\n".join(out)

    def _lyrics_lines(self, r: LyricsResult) -> list[str]:
        t = self.theme
        lines = [f"  {r.title}{self._by(r.artist)}"]
        if isinstance(r, EnrichedLyricsResult):
            if r.alternate_script_title:
                lines.append(f"  {t.alt}Japanese:{t.reset} {r.alternate_script_title}")
            if r.excerpt:
                lines.append(f"  {t.dim}{r.excerpt}{t.reset}")
            if r.cross_referenced_karaoke:
                lines.append(f"  {t.tip}Karaoke IDs found:{t.reset}")
                by_source = _group(r.cross_referenced_karaoke, lambda k: k.source.value)
                for key, _label in _KARAOKE_SECTIONS:
                    for k in by_source.get(key, [])[:CROSS_REF_PREVIEW]:
                        lines.append(self._karaoke_line(k, indent="    ", with_source=True))
        lines.append(f"  {t.link}{r.url}{t.reset}")
        return lines

    def format_suggestions(self, query: str, results: AutocompleteResults) -> str:
        t = self.theme
        out = [f"{t.heading}Suggestions for: \"{query}\"{t.reset}"]
        if not results.suggestions:
            out.append(f"{t.dim}  No suggestions{t.reset}")
        for s in results.suggestions:
            out.append(f"  {s.suggestion} {t.dim}({s.source}){t.reset}")
        return "\n".join(out)


def plain_theme() -> Theme:
    """No escape codes, for piping and tests."""
    return Theme(**{name: "" for name in Theme.__dataclass_fields__})
