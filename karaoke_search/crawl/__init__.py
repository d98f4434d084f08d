from .listing import crawl_listing, crawl_offset

__all__ = ["crawl_listing", "crawl_offset"]
