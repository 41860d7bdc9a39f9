"""Shared pytest configuration: point the app at a throwaway SQLite database."""
from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_chat.db")
