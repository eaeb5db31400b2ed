"""Root conftest — shared test configuration."""

import os

# Never touch a real printer or the working-directory database from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("PRINTER_TYPE", "none")
os.environ.setdefault("LOG_FORMAT", "text")
