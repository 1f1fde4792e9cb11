# newsroom/slug.py
# Title -> URL slug, plus collision resolution against existing news items.
from __future__ import annotations
import re
from typing import Callable, Optional

from newsroom.config import SLUG_FALLBACK

# Icelandic letters -> unaccented Latin (one-to-one or one-to-many)
_TRANSLIT = {
    "á": "a",
    "é": "e",
    "í": "i",
    "ó": "o",
    "ú": "u",
    "ý": "y",
    "ö": "o",
    "þ": "th",
    "ð": "d",
    "æ": "ae",
}
_TRANSLIT_TABLE = str.maketrans(_TRANSLIT)

_UNSAFE = re.compile(r"[^a-z0-9\s-]")
_SPACES = re.compile(r"\s+")
_DASHES = re.compile(r"-+")

SlugExists = Callable[[str, Optional[int]], bool]


def slugify(text: str) -> str:
    """
    Normalize arbitrary text into a lowercase, hyphen-separated token.
    Never fails; may return "" when nothing survives.
    """
    t = (text or "").lower().strip()
    t = t.translate(_TRANSLIT_TABLE)
    t = _UNSAFE.sub("", t)
    t = _SPACES.sub("-", t)
    t = _DASHES.sub("-", t)
    return t.strip("-")


def resolve_slug(title: str, slug_exists: SlugExists, exclude_id: Optional[int] = None) -> str:
    """
    Return the first free slug for `title`: base, base-2, base-3, ...
    `exclude_id` lets an item keep its own slug when its title is updated.
    """
    base = slugify(title) or SLUG_FALLBACK
    candidate = base
    n = 2
    while slug_exists(candidate, exclude_id):
        candidate = f"{base}-{n}"
        n += 1
    return candidate
