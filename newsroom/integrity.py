# newsroom/integrity.py
# Cross-entity checks between news items and their authors.
from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

from newsroom.errors import ReferentialConflict

AUTHOR_NOT_FOUND = "Author not found"
AUTHOR_HAS_NEWS = "Author has news items and cannot be deleted"


class AuthorLookup(Protocol):
    def find_author(self, author_id: int) -> Optional[Dict[str, Any]]: ...
    def count_news(self, author_id: int) -> int: ...


def require_author_exists(store: AuthorLookup, author_id: int) -> None:
    if store.find_author(author_id) is None:
        raise ReferentialConflict(AUTHOR_NOT_FOUND)


def require_no_dependents(store: AuthorLookup, author_id: int) -> None:
    if store.count_news(author_id) > 0:
        raise ReferentialConflict(AUTHOR_HAS_NEWS)
