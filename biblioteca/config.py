import os
from pathlib import Path

DB_PATH = os.environ.get("BIBLIOTECA_DB_PATH", str(Path.cwd() / "biblioteca.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"
SQL_ECHO = os.environ.get("BIBLIOTECA_SQL_ECHO", "").lower() in ("1", "true", "yes")

LOG_LEVEL = os.environ.get("BIBLIOTECA_LOG_LEVEL", "INFO").upper()

# Default page size for list endpoints
PAGE_LIMIT = int(os.environ.get("BIBLIOTECA_PAGE_LIMIT", "50"))
