"""Tests for the sqlite Store."""

import pytest

from newsroom.errors import ReferentialConflict, SlugConflict


def _news(author_id, slug, title="T"):
    return {
        "slug": slug,
        "title": title,
        "excerpt": "e",
        "content": "c",
        "published": True,
        "authorId": author_id,
    }


def test_author_roundtrip(store):
    a = store.create_author("Anna", "anna@example.is")
    assert a["id"] > 0
    assert store.find_author(a["id"]) == a
    assert store.find_author(a["id"] + 100) is None

    updated = store.update_author(a["id"], {"name": "Anna B"})
    assert updated == {"id": a["id"], "name": "Anna B", "email": "anna@example.is"}


def test_list_authors_desc_by_id_with_total(store):
    ids = [store.create_author(f"a{i}", f"a{i}@example.com")["id"] for i in range(5)]
    rows, total = store.list_authors(limit=2, offset=1)
    assert total == 5
    assert [r["id"] for r in rows] == sorted(ids, reverse=True)[1:3]

    rows, total = store.list_authors(limit=10, offset=50)
    assert rows == [] and total == 5


def test_news_rows_embed_author(store):
    a = store.create_author("Anna", "anna@example.is")
    n = store.create_news(_news(a["id"], "first"))
    assert n["slug"] == "first"
    assert n["published"] is True
    assert n["author"] == {"id": a["id"], "name": "Anna", "email": "anna@example.is"}
    assert n["createdAt"].endswith("Z")


def test_list_news_newest_first(store):
    a = store.create_author("Anna", "anna@example.is")
    for slug in ("one", "two", "three"):
        store.create_news(_news(a["id"], slug))
    rows, total = store.list_news(limit=10, offset=0)
    assert total == 3
    assert [r["slug"] for r in rows] == ["three", "two", "one"]


def test_slug_exists_with_exclusion(store):
    a = store.create_author("Anna", "anna@example.is")
    n = store.create_news(_news(a["id"], "taken"))
    assert store.slug_exists("taken")
    assert not store.slug_exists("taken", exclude_id=n["id"])
    assert not store.slug_exists("free")
    assert store.find_news_by_slug("taken", exclude_id=n["id"]) is None


def test_duplicate_slug_raises_slug_conflict(store):
    a = store.create_author("Anna", "anna@example.is")
    store.create_news(_news(a["id"], "dup"))
    with pytest.raises(SlugConflict):
        store.create_news(_news(a["id"], "dup"))
    _, total = store.list_news(10, 0)
    assert total == 1


def test_foreign_key_backstops(store):
    a = store.create_author("Anna", "anna@example.is")
    with pytest.raises(ReferentialConflict):
        store.create_news(_news(a["id"] + 1, "orphan"))

    store.create_news(_news(a["id"], "kept"))
    with pytest.raises(ReferentialConflict):
        store.delete_author(a["id"])
    assert store.find_author(a["id"]) is not None
    assert store.count_news(a["id"]) == 1


def test_update_and_delete_news(store):
    a = store.create_author("Anna", "anna@example.is")
    n = store.create_news(_news(a["id"], "before"))
    updated = store.update_news(n["id"], {"slug": "after", "published": False, "bogus": 1})
    assert updated["slug"] == "after"
    assert updated["published"] is False
    assert store.delete_news(n["id"]) is True
    assert store.delete_news(n["id"]) is False
    assert store.delete_author(a["id"]) is True


def test_reset_clears_tables(store):
    a = store.create_author("Anna", "anna@example.is")
    store.create_news(_news(a["id"], "x"))
    store.reset()
    assert store.list_authors(10, 0) == ([], 0)
    assert store.list_news(10, 0) == ([], 0)
