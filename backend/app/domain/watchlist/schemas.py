from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class WatchlistItem:
    user_id: int
    symbol: str
    company: str
    exchange: str | None = None
    tv_symbol: str | None = None
    added_at: datetime | None = None


@dataclass(slots=True)
class WatchlistEntryView:
    """Watchlist row with a resolved exchange and TradingView symbol."""

    symbol: str
    company: str
    exchange: str
    tv_symbol: str | None
    added_at: datetime | None = None


@dataclass(slots=True)
class WatchlistMutationResult:
    success: bool
    message: str
