from __future__ import annotations


class WatchlistError(ValueError):
    """Base error for watchlist operations."""


class InvalidSymbolError(WatchlistError):
    def __init__(self) -> None:
        super().__init__("Invalid symbol")


class DuplicateWatchlistItemError(WatchlistError):
    def __init__(self) -> None:
        super().__init__("Already in watchlist")


class WatchlistItemNotFoundError(WatchlistError):
    def __init__(self) -> None:
        super().__init__("Not found in watchlist")
