import os
from typing import Any, Dict, List, Optional

import yaml  # pip install pyyaml

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
SEED_FILE = "seed.yaml"


def load_yaml(path: str, data_dir: Optional[str] = None) -> Any:
    abspath = path if os.path.isabs(path) else os.path.join(data_dir or DATA_DIR, path)
    with open(abspath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_seed(path: str = SEED_FILE) -> Dict[str, Any]:
    return load_yaml(path)


def get_seed_authors(seed: Dict[str, Any]) -> List[Dict[str, Any]]:
    return seed.get("authors", [])


def get_seed_news(seed: Dict[str, Any], author_key: Optional[str] = None) -> List[Dict[str, Any]]:
    news = seed.get("news", [])
    if author_key:
        news = [n for n in news if n.get("author") == author_key]
    return news
