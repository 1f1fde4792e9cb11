# newsroom/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# Storage
DB_PATH = os.environ.get("NEWSROOM_DB_PATH", "newsroom.db")

# Logging
LOG_LEVEL = os.environ.get("NEWSROOM_LOG_LEVEL", "INFO")

# Recompute-and-retry attempts after the slug UNIQUE constraint fires
SLUG_WRITE_RETRIES = int(os.environ.get("NEWSROOM_SLUG_RETRIES", "3"))
SLUG_FALLBACK = "news"

# Paging
PAGE_LIMIT_DEFAULT = 10
PAGE_LIMIT_MAX = 100

# Field bounds (characters, after trimming)
MAX_NAME = 100
MAX_EMAIL = 255
MAX_TITLE = 200
MAX_EXCERPT = 500

# Largest value SQLite stores in an INTEGER column
SQLITE_MAX_INT = 2**63 - 1
