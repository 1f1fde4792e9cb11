from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from newsroom.db import Store
from newsroom.main import create_app


class FakeStore:
    """In-memory stand-in for the lookups the resolver and guard need."""

    def __init__(self) -> None:
        self.authors: Dict[int, Dict[str, Any]] = {}
        self.news: List[Dict[str, Any]] = []
        self.lookups: List[str] = []

    def add_author(self, author_id: int, name: str = "author") -> None:
        self.authors[author_id] = {"id": author_id, "name": name, "email": f"a{author_id}@example.com"}

    def add_news(self, news_id: int, slug: str, author_id: int = 1) -> None:
        self.news.append({"id": news_id, "slug": slug, "authorId": author_id})

    def find_author(self, author_id: int) -> Optional[Dict[str, Any]]:
        return self.authors.get(author_id)

    def count_news(self, author_id: int) -> int:
        return sum(1 for n in self.news if n["authorId"] == author_id)

    def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        self.lookups.append(slug)
        return any(n["slug"] == slug and n["id"] != exclude_id for n in self.news)


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def store(tmp_path) -> Store:
    s = Store(str(tmp_path / "newsroom-test.db"))
    s.ensure_schema()
    return s


@pytest.fixture
def client(store: Store) -> TestClient:
    return TestClient(create_app(store))


@pytest.fixture
def author(client: TestClient) -> Dict[str, Any]:
    r = client.post("/authors", json={"name": "Jón Jónsson", "email": "jon@example.is"})
    assert r.status_code == 201
    return r.json()


def news_payload(author_id: int, **overrides: Any) -> Dict[str, Any]:
    body = {
        "title": "Test",
        "excerpt": "Short excerpt",
        "content": "Longer content",
        "published": True,
        "authorId": author_id,
    }
    body.update(overrides)
    return body
