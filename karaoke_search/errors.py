from __future__ import annotations


class SearchError(RuntimeError):
    pass


class FetchError(SearchError):
    def __init__(self, url: str, cause: object, status_code: int | None = None):
        super().__init__(f"Fetch failed for {url}: {cause}")
        self.url = url
        self.cause = cause
        self.status_code = status_code


class ParseError(SearchError):
    pass


class InvalidRecordError(SearchError):
    """A listing row failed a structural check (usually a markup change)."""

    def __init__(self, raw: str, reason: str = "invalid record"):
        super().__init__(f"{reason}: {raw!r}")
        self.raw = raw


class ValidationRejected(SearchError):
    def __init__(self, url: str):
        super().__init__(f"Page does not look like a song page: {url}")
        self.url = url
