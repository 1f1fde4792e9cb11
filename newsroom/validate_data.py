import json
import sys
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validate

# Paths (repo root, not newsroom/)
ROOT = Path(__file__).resolve().parent.parent
DATA = ROOT / "data"
SCHEMAS = ROOT / "schemas"


def _load_yaml(p: Path) -> Any:
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _load_json(p: Path) -> Any:
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def check_references(data: dict) -> list:
    """Every news item must point at an author key declared in the same file."""
    keys = {a.get("key") for a in data.get("authors", [])}
    return [
        f"news[{i}] references unknown author {n.get('author')!r}"
        for i, n in enumerate(data.get("news", []))
        if n.get("author") not in keys
    ]


def validate_file(data_file: Path, schema_file: Path, name: str) -> bool:
    try:
        data = _load_yaml(data_file)
        schema = _load_json(schema_file)
        validate(instance=data, schema=schema)
    except FileNotFoundError as e:
        print(f"[ERROR] Missing file: {e.filename}")
        return False
    except ValidationError as e:
        print(f"[ERROR] {name} failed validation: {e.message}")
        return False
    problems = check_references(data)
    for p in problems:
        print(f"[ERROR] {name}: {p}")
    if problems:
        return False
    print(f"[OK] {name} validated successfully")
    return True


def main() -> int:
    ok = validate_file(DATA / "seed.yaml", SCHEMAS / "seed.schema.json", "seed.yaml")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
