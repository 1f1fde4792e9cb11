# newsroom/db.py
from __future__ import annotations
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple

from newsroom.config import DB_PATH, SQLITE_MAX_INT
from newsroom.errors import ReferentialConflict, SlugConflict
from newsroom.integrity import AUTHOR_HAS_NEWS, AUTHOR_NOT_FOUND

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

NEWS_COLUMNS = {"slug", "title", "excerpt", "content", "published", "authorId"}
AUTHOR_COLUMNS = {"name", "email"}


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _storable(n: int) -> bool:
    """Ids beyond SQLite's INTEGER range cannot match any row."""
    return 0 <= n <= SQLITE_MAX_INT


def _author_row(r: sqlite3.Row) -> Row:
    return {"id": r["id"], "name": r["name"], "email": r["email"]}


def _news_row(r: sqlite3.Row) -> Row:
    return {
        "id": r["id"],
        "slug": r["slug"],
        "title": r["title"],
        "excerpt": r["excerpt"],
        "content": r["content"],
        "published": bool(r["published"]),
        "authorId": r["authorId"],
        "createdAt": r["createdAt"],
        "author": {"id": r["a_id"], "name": r["a_name"], "email": r["a_email"]},
    }


_NEWS_SELECT = """
    SELECT n.id, n.slug, n.title, n.excerpt, n.content, n.published,
           n.authorId, n.createdAt,
           a.id AS a_id, a.name AS a_name, a.email AS a_email
    FROM news n JOIN authors a ON a.id = n.authorId
"""


class Store:
    """
    sqlite3-backed persistence for authors and news items.

    One short-lived connection per call; pass a Store into the services
    instead of importing a module-level handle.
    """

    def __init__(self, db_path: str = DB_PATH) -> None:
        self.db_path = db_path

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        # check_same_thread=False so FastAPI's threadpool can use the handle.
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        with self.connect() as conn:
            conn.executescript("""
            CREATE TABLE IF NOT EXISTS authors (
                id    INTEGER PRIMARY KEY AUTOINCREMENT,
                name  TEXT NOT NULL,
                email TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS news (
                id        INTEGER PRIMARY KEY AUTOINCREMENT,
                slug      TEXT NOT NULL UNIQUE,
                title     TEXT NOT NULL,
                excerpt   TEXT NOT NULL,
                content   TEXT NOT NULL,
                published INTEGER NOT NULL DEFAULT 0,
                authorId  INTEGER NOT NULL
                          REFERENCES authors(id) ON DELETE RESTRICT,
                createdAt TEXT NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_news_author ON news(authorId);
            CREATE INDEX IF NOT EXISTS idx_news_created ON news(createdAt);
            """)

    def reset(self) -> None:
        """Delete every row (news first, then authors)."""
        with self.connect() as conn:
            conn.execute("DELETE FROM news")
            conn.execute("DELETE FROM authors")

    # --- authors -----------------------------------------------------------
    def find_author(self, author_id: int) -> Optional[Row]:
        if not _storable(author_id):
            return None
        with self.connect() as conn:
            r = conn.execute(
                "SELECT id, name, email FROM authors WHERE id = ?", (author_id,)
            ).fetchone()
        return _author_row(r) if r else None

    def list_authors(self, limit: int, offset: int, order_desc: bool = True) -> Tuple[List[Row], int]:
        offset = min(offset, SQLITE_MAX_INT)
        order = "DESC" if order_desc else "ASC"
        with self.connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM authors").fetchone()[0]
            rows = conn.execute(
                f"SELECT id, name, email FROM authors ORDER BY id {order} LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [_author_row(r) for r in rows], total

    def create_author(self, name: str, email: str) -> Row:
        with self.connect() as conn:
            cur = conn.execute(
                "INSERT INTO authors (name, email) VALUES (?, ?)", (name, email)
            )
            new_id = cur.lastrowid
        return {"id": new_id, "name": name, "email": email}

    def update_author(self, author_id: int, fields: Dict[str, Any]) -> Optional[Row]:
        if not _storable(author_id):
            return None
        cols = [c for c in fields if c in AUTHOR_COLUMNS]
        if cols:
            with self.connect() as conn:
                conn.execute(
                    f"UPDATE authors SET {', '.join(f'{c} = ?' for c in cols)} WHERE id = ?",
                    [fields[c] for c in cols] + [author_id],
                )
        return self.find_author(author_id)

    def delete_author(self, author_id: int) -> bool:
        if not _storable(author_id):
            return False
        try:
            with self.connect() as conn:
                cur = conn.execute("DELETE FROM authors WHERE id = ?", (author_id,))
                return cur.rowcount > 0
        except sqlite3.IntegrityError as e:
            # FK RESTRICT backstop: a news item was attached after the guard ran
            raise ReferentialConflict(AUTHOR_HAS_NEWS) from e

    def count_news(self, author_id: int) -> int:
        if not _storable(author_id):
            return 0
        with self.connect() as conn:
            return conn.execute(
                "SELECT COUNT(*) FROM news WHERE authorId = ?", (author_id,)
            ).fetchone()[0]

    # --- news --------------------------------------------------------------
    def find_news_by_slug(self, slug: str, exclude_id: Optional[int] = None) -> Optional[Row]:
        sql = _NEWS_SELECT + " WHERE n.slug = ?"
        params: List[Any] = [slug]
        if exclude_id is not None:
            sql += " AND n.id != ?"
            params.append(exclude_id)
        with self.connect() as conn:
            r = conn.execute(sql, params).fetchone()
        return _news_row(r) if r else None

    def find_news(self, news_id: int) -> Optional[Row]:
        if not _storable(news_id):
            return None
        with self.connect() as conn:
            r = conn.execute(_NEWS_SELECT + " WHERE n.id = ?", (news_id,)).fetchone()
        return _news_row(r) if r else None

    def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        sql = "SELECT 1 FROM news WHERE slug = ?"
        params: List[Any] = [slug]
        if exclude_id is not None:
            sql += " AND id != ?"
            params.append(exclude_id)
        with self.connect() as conn:
            return conn.execute(sql + " LIMIT 1", params).fetchone() is not None

    def list_news(self, limit: int, offset: int) -> Tuple[List[Row], int]:
        """Newest first; id breaks ties between rows created in the same instant."""
        offset = min(offset, SQLITE_MAX_INT)
        with self.connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM news").fetchone()[0]
            rows = conn.execute(
                _NEWS_SELECT + " ORDER BY n.createdAt DESC, n.id DESC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [_news_row(r) for r in rows], total

    def create_news(self, fields: Dict[str, Any]) -> Row:
        try:
            with self.connect() as conn:
                cur = conn.execute(
                    """
                    INSERT INTO news (slug, title, excerpt, content, published, authorId, createdAt)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        fields["slug"],
                        fields["title"],
                        fields["excerpt"],
                        fields["content"],
                        int(bool(fields["published"])),
                        fields["authorId"],
                        _utc_now_iso(),
                    ),
                )
                new_id = cur.lastrowid
        except sqlite3.IntegrityError as e:
            conflict = self._conflict_for(e, fields.get("slug"))
            if conflict is None:
                raise
            raise conflict from e
        return self.find_news(new_id)

    def update_news(self, news_id: int, fields: Dict[str, Any]) -> Optional[Row]:
        cols = [c for c in fields if c in NEWS_COLUMNS]
        if cols:
            values = [int(bool(fields[c])) if c == "published" else fields[c] for c in cols]
            try:
                with self.connect() as conn:
                    conn.execute(
                        f"UPDATE news SET {', '.join(f'{c} = ?' for c in cols)} WHERE id = ?",
                        values + [news_id],
                    )
            except sqlite3.IntegrityError as e:
                conflict = self._conflict_for(e, fields.get("slug"))
                if conflict is None:
                    raise
                raise conflict from e
        return self.find_news(news_id)

    def delete_news(self, news_id: int) -> bool:
        with self.connect() as conn:
            cur = conn.execute("DELETE FROM news WHERE id = ?", (news_id,))
            return cur.rowcount > 0

    @staticmethod
    def _conflict_for(e: sqlite3.IntegrityError, slug: Optional[str]) -> Optional[Exception]:
        msg = str(e).lower()
        if "unique" in msg and "slug" in msg:
            logger.warning("slug UNIQUE constraint hit for %r", slug)
            return SlugConflict(slug or "")
        if "foreign key" in msg:
            return ReferentialConflict(AUTHOR_NOT_FOUND)
        return None
