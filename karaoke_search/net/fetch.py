from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from karaoke_search.config import DEFAULT_ACCEPT_LANGUAGE, DEFAULT_USER_AGENT
from karaoke_search.errors import FetchError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0


def browser_headers(user_agent: str = DEFAULT_USER_AGENT, accept_language: str = DEFAULT_ACCEPT_LANGUAGE) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
        "Accept-Language": accept_language,
        "Accept-Encoding": "gzip, deflate",
    }


class Fetcher:
    """
    Single outbound HTTP path. Every request carries the browser header set
    (caller headers override per key) and a timeout. No retries here.
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ):
        self.timeout_s = timeout_s
        self.headers = dict(headers) if headers is not None else browser_headers()
        # module-level requests by default: no connection pool shared across threads
        self.session = session

    def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> requests.Response:
        merged = {**self.headers, **(headers or {})}
        try:
            send = self.session.request if self.session is not None else requests.request
            return send(
                method,
                url,
                params=params,
                data=data,
                headers=merged,
                timeout=timeout_s if timeout_s is not None else self.timeout_s,
            )
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise FetchError(url, e) from e

    def fetch_text(self, url: str, **kwargs: Any) -> str:
        r = self.fetch(url, **kwargs)
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            raise FetchError(url, e, status_code=r.status_code) from e
        # Korean sites often omit charset; requests then assumes latin-1
        if not r.encoding or r.encoding.lower() == "iso-8859-1":
            r.encoding = r.apparent_encoding
        return r.text

    def fetch_json(self, url: str, **kwargs: Any) -> Any:
        r = self.fetch(url, **kwargs)
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            raise FetchError(url, e, status_code=r.status_code) from e
        try:
            return r.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}: {e}") from e

    @classmethod
    def from_config(cls, cfg) -> "Fetcher":
        return cls(
            timeout_s=cfg.timeout_s,
            headers=browser_headers(cfg.user_agent, cfg.accept_language),
        )
