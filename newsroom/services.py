"""
Author and news operations.

Each service wraps an injected Store and runs a request through
validate -> sanitize -> integrity checks -> slug resolution -> write,
strictly in that order.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from newsroom.config import MAX_EMAIL, MAX_EXCERPT, MAX_NAME, MAX_TITLE, SLUG_WRITE_RETRIES
from newsroom.db import Row, Store
from newsroom.errors import InternalError, NotFound, SlugConflict, ValidationFailure
from newsroom.integrity import require_author_exists, require_no_dependents
from newsroom.paging import build_page
from newsroom.sanitize import sanitize
from newsroom.slug import resolve_slug
from newsroom.validation import parse_paging, validate

logger = logging.getLogger(__name__)

AUTHOR_TEXT_FIELDS = ("name", "email")
NEWS_TEXT_FIELDS = ("title", "excerpt", "content")

# Escaping (& -> &amp;) can lengthen text, so bounds are checked again on the stored form
STORED_MAX_LENGTH = {"name": MAX_NAME, "email": MAX_EMAIL, "title": MAX_TITLE, "excerpt": MAX_EXCERPT}


def _sanitized(fields: Dict[str, Any], text_fields: Iterable[str]) -> Dict[str, Any]:
    out = dict(fields)
    errors: Dict[str, List[str]] = {}
    for name in text_fields:
        if name not in out:
            continue
        out[name] = sanitize(out[name])
        limit = STORED_MAX_LENGTH.get(name)
        if not out[name].strip():
            errors[name] = ["Field is empty after removing markup"]
        elif limit is not None and len(out[name]) > limit:
            errors[name] = [f"Field exceeds {limit} characters once escaped"]
    if errors:
        raise ValidationFailure(field_errors=errors)
    return out


class AuthorService:
    def __init__(self, store: Store) -> None:
        self.store = store

    def list(self, limit: Optional[str] = None, offset: Optional[str] = None) -> Dict[str, Any]:
        q = parse_paging(limit, offset)
        rows, total = self.store.list_authors(q.limit, q.offset, order_desc=True)
        return build_page(rows, q.limit, q.offset, total)

    def get(self, author_id: int) -> Row:
        author = self.store.find_author(author_id)
        if author is None:
            raise NotFound("Author not found")
        return author

    def create(self, payload: Any) -> Row:
        body = validate("author.create", payload)
        fields = _sanitized(body.model_dump(), AUTHOR_TEXT_FIELDS)
        author = self.store.create_author(fields["name"], fields["email"])
        logger.info("author created id=%s", author["id"])
        return author

    def update(self, author_id: int, payload: Any) -> Row:
        body = validate("author.update", payload)
        self.get(author_id)
        fields = _sanitized(body.model_dump(include=body.model_fields_set), AUTHOR_TEXT_FIELDS)
        updated = self.store.update_author(author_id, fields)
        if updated is None:
            raise NotFound("Author not found")
        logger.info("author updated id=%s fields=%s", author_id, sorted(fields))
        return updated

    def delete(self, author_id: int) -> None:
        self.get(author_id)
        require_no_dependents(self.store, author_id)
        if not self.store.delete_author(author_id):
            raise NotFound("Author not found")
        logger.info("author deleted id=%s", author_id)


class NewsService:
    def __init__(self, store: Store, max_slug_retries: int = SLUG_WRITE_RETRIES) -> None:
        self.store = store
        self.max_slug_retries = max_slug_retries

    def resolve_slug(self, title: str, exclude_id: Optional[int] = None) -> str:
        return resolve_slug(title, self.store.slug_exists, exclude_id)

    def list(self, limit: Optional[str] = None, offset: Optional[str] = None) -> Dict[str, Any]:
        q = parse_paging(limit, offset)
        rows, total = self.store.list_news(q.limit, q.offset)
        return build_page(rows, q.limit, q.offset, total)

    def get(self, slug: str) -> Row:
        item = self.store.find_news_by_slug(slug)
        if item is None:
            raise NotFound("News not found")
        return item

    def create(self, payload: Any) -> Row:
        body = validate("news.create", payload)
        fields = _sanitized(body.model_dump(), NEWS_TEXT_FIELDS)
        require_author_exists(self.store, body.authorId)

        # slug comes from the trimmed title as submitted, markup included

        def write(slug: str) -> Row:
            return self.store.create_news({**fields, "slug": slug})

        created = self._write_with_slug(body.title, None, write)
        logger.info("news created id=%s slug=%s", created["id"], created["slug"])
        return created

    def update(self, slug: str, payload: Any) -> Row:
        body = validate("news.update", payload)
        existing = self.get(slug)
        present = body.model_fields_set
        fields = _sanitized(body.model_dump(include=present), NEWS_TEXT_FIELDS)
        if "authorId" in present:
            require_author_exists(self.store, body.authorId)

        if "title" not in present:
            updated = self.store.update_news(existing["id"], fields)
        else:
            # as on create, the slug follows the submitted title
            def write(new_slug: str) -> Optional[Row]:
                return self.store.update_news(existing["id"], {**fields, "slug": new_slug})

            updated = self._write_with_slug(body.title, existing["id"], write)
        if updated is None:
            raise NotFound("News not found")
        logger.info("news updated id=%s slug=%s", updated["id"], updated["slug"])
        return updated

    def delete(self, slug: str) -> None:
        existing = self.get(slug)
        if not self.store.delete_news(existing["id"]):
            raise NotFound("News not found")
        logger.info("news deleted id=%s slug=%s", existing["id"], slug)

    def _write_with_slug(self, title: str, exclude_id: Optional[int],
                         write: Callable[[str], Optional[Row]]) -> Optional[Row]:
        """
        Resolve a slug and write. A concurrent writer can claim the same
        candidate between check and insert; the UNIQUE constraint catches
        that and we recompute, at most max_slug_retries extra times.
        """
        attempts = self.max_slug_retries + 1
        for attempt in range(1, attempts + 1):
            slug = self.resolve_slug(title, exclude_id)
            try:
                return write(slug)
            except SlugConflict:
                logger.warning("slug %r taken at write time (attempt %d/%d)", slug, attempt, attempts)
        raise InternalError(f"could not claim a unique slug for {title!r} after {attempts} attempts")
