"""
Boot check for deploys: imports every module, builds the schema in a scratch
database and confirms each endpoint listed on the index page has a route.

    newsroom-smoke        (installed console script)
    python -m newsroom.smoke
"""
import importlib
import re
import sys
import tempfile
from pathlib import Path
from typing import List, Set, Tuple

MODULES = [
    "newsroom.config",
    "newsroom.errors",
    "newsroom.logging_utils",
    "newsroom.slug",
    "newsroom.sanitize",
    "newsroom.models",
    "newsroom.validation",
    "newsroom.integrity",
    "newsroom.paging",
    "newsroom.db",
    "newsroom.services",
    "newsroom.data_loader",
    "newsroom.validate_data",
    "newsroom.main",
]

_PARAM = re.compile(r"\{[^}]+\}|:\w+")


def _shape(path: str) -> str:
    return _PARAM.sub("{}", path)


def routed(app) -> Set[Tuple[str, str]]:
    pairs = set()
    for route in app.routes:
        for method in getattr(route, "methods", None) or ():
            pairs.add((method, _shape(route.path)))
    return pairs


def missing_routes(app, endpoints) -> List[str]:
    have = routed(app)
    out = []
    for group in endpoints.values():
        for entry in group:
            method, path = entry.split(" ", 1)
            if (method, _shape(path)) not in have:
                out.append(entry)
    return out


def main() -> int:
    try:
        for m in MODULES:
            importlib.import_module(m)
    except Exception as e:
        print(f"[smoke] import failure: {e}", file=sys.stderr)
        return 1
    print("[smoke] imports ok")

    from newsroom.db import Store
    from newsroom.main import ENDPOINTS, create_app

    with tempfile.TemporaryDirectory() as tmp:
        store = Store(str(Path(tmp) / "smoke.db"))
        store.ensure_schema()
        _, total = store.list_news(limit=1, offset=0)
        print(f"[smoke] schema ok (news={total})")

        missing = missing_routes(create_app(store), ENDPOINTS)

    if missing:
        for entry in missing:
            print(f"[smoke] no route for {entry}", file=sys.stderr)
        return 1
    print("[smoke] routes ok")
    return 0


if __name__ == "__main__":
    sys.exit(main())
