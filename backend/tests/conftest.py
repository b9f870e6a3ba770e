from __future__ import annotations

import os

# Settings and the default engine are built at import time.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("APP_SECRET_KEY", "test-secret-key-for-stock-watchlist-suite")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("FINNHUB_API_KEY", "")
