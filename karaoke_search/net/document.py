from __future__ import annotations

import copy
import json
from typing import Any, Iterator

from bs4 import BeautifulSoup, Tag

from karaoke_search.errors import ParseError


class Element:
    """
    Thin query wrapper over a parsed node. A selector that matches nothing
    gives an empty list, None or "" rather than an error.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def select(self, selector: str) -> list["Element"]:
        return [Element(t) for t in self._tag.select(selector)]

    def first(self, selector: str) -> "Element | None":
        t = self._tag.select_one(selector)
        return Element(t) if t is not None else None

    def text_of(self, selector: str) -> str:
        """Concatenated, trimmed text of every match."""
        return "".join(t.get_text() for t in self._tag.select(selector)).strip()

    def attr_of(self, selector: str, name: str) -> str | None:
        el = self.first(selector)
        return el.attr(name) if el is not None else None

    @property
    def text(self) -> str:
        return self._tag.get_text().strip()

    @property
    def block_text(self) -> str:
        """Text with line breaks between elements, for prose and lyrics."""
        return self._tag.get_text("\n").strip()

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_class(self, name: str) -> bool:
        return name in (self._tag.get("class") or [])

    @property
    def name(self) -> str:
        return self._tag.name

    def children(self) -> Iterator["Element"]:
        for c in self._tag.children:
            if isinstance(c, Tag):
                yield Element(c)

    def detached(self) -> "Element":
        """Independent copy of this subtree; edits to it leave the document intact."""
        return Element(copy.copy(self._tag))

    def decompose(self, selector: str) -> None:
        """Remove every match from the tree (for cleaning body text)."""
        for t in self._tag.select(selector):
            t.decompose()


class Document(Element):
    __slots__ = ()

    @property
    def title(self) -> str:
        # first match only: inline SVG icons carry their own <title>
        el = self.first("title")
        return el.text if el is not None else ""


def parse_html(raw: str | bytes) -> Document:
    if raw is None or not isinstance(raw, (str, bytes)):
        raise ParseError(f"Cannot parse document of type {type(raw).__name__}")
    try:
        soup = BeautifulSoup(raw, "html.parser")
    except Exception as e:
        raise ParseError(f"Unparsable document: {e}") from e
    return Document(soup)


def parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
