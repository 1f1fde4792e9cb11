# tools/seed.py
from __future__ import annotations
import argparse
import sys
from typing import Any, Dict, List

# Project imports
sys.path.append(".")
from newsroom.config import DB_PATH
from newsroom.data_loader import get_seed, get_seed_authors, get_seed_news
from newsroom.db import Store
from newsroom.errors import NewsroomError
from newsroom.services import AuthorService, NewsService
from newsroom.validate_data import DATA, SCHEMAS, validate_file


def seed(store: Store, data: Dict[str, Any], reset: bool = False) -> Dict[str, int]:
    """
    Insert seed authors then news through the services, so seeded rows get
    the same validation, sanitization and slug handling as API writes.
    """
    store.ensure_schema()
    if reset:
        store.reset()
        print("[reset] cleared news and authors")

    authors = AuthorService(store)
    news = NewsService(store)

    ids: Dict[str, int] = {}
    for a in get_seed_authors(data):
        created = authors.create({"name": a["name"], "email": a["email"]})
        ids[a["key"]] = created["id"]
    print(f"[authors] {len(ids)} inserted")

    slugs: List[str] = []
    for n in get_seed_news(data):
        created = news.create({
            "title": n["title"],
            "excerpt": n["excerpt"],
            "content": n["content"],
            "published": n["published"],
            "authorId": ids[n["author"]],
        })
        slugs.append(created["slug"])
    print(f"[news] {len(slugs)} inserted")
    return {"authors": len(ids), "news": len(slugs)}


def main() -> int:
    p = argparse.ArgumentParser(description="Load data/seed.yaml into the newsroom database.")
    p.add_argument("--db", default=DB_PATH, help=f"SQLite file (default: {DB_PATH})")
    p.add_argument("--file", default="seed.yaml", help="Seed file under data/ (default: seed.yaml)")
    p.add_argument("--reset", action="store_true", help="Delete existing news and authors first")
    args = p.parse_args()

    if not validate_file(DATA / args.file, SCHEMAS / "seed.schema.json", args.file):
        return 1

    print(f"[start] seeding {args.db} from {args.file} reset={args.reset}")
    try:
        counts = seed(Store(args.db), get_seed(args.file), reset=args.reset)
    except NewsroomError as e:
        print(f"[error] seeding stopped: {e}", file=sys.stderr)
        return 1
    print(f"[done] authors={counts['authors']} news={counts['news']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
