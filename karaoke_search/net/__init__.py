from .document import Document, Element, parse_html, parse_json
from .fetch import Fetcher, browser_headers

__all__ = ["Document", "Element", "Fetcher", "browser_headers", "parse_html", "parse_json"]
