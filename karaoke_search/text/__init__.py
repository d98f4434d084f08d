from .normalize import (
    Script,
    contains_japanese,
    contains_korean,
    create_slug,
    normalize,
    normalize_all,
    safe_normalize,
    script_of,
    slug_variants,
)

__all__ = [
    "Script",
    "contains_japanese",
    "contains_korean",
    "create_slug",
    "normalize",
    "normalize_all",
    "safe_normalize",
    "script_of",
    "slug_variants",
]
