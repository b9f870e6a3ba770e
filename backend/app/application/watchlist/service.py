from __future__ import annotations

from collections.abc import Callable
import logging

from app.domain.auth.schemas import User
from app.domain.watchlist.errors import DuplicateWatchlistItemError, InvalidSymbolError
from app.domain.watchlist.schemas import WatchlistEntryView, WatchlistItem, WatchlistMutationResult
from app.domain.watchlist.symbols import (
    DEFAULT_EXCHANGE,
    build_tradingview_symbol,
    exchange_prefix,
    map_provider_exchange_to_tradingview,
    normalize_symbol,
    normalize_tv_symbol,
)
from app.infrastructure.clients.finnhub import FinnhubClient
from app.infrastructure.db.uow import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)

MESSAGE_ADDED = "Added to watchlist"
MESSAGE_ALREADY_PRESENT = "Already in watchlist"
MESSAGE_REMOVED = "Removed from watchlist"
MESSAGE_NOT_FOUND = "Not found in watchlist"


class WatchlistApplicationService:
    def __init__(
        self,
        *,
        uow: SqlAlchemyUnitOfWork,
        market_data_client: FinnhubClient | None = None,
        on_watchlist_changed: Callable[[str], object] | None = None,
    ) -> None:
        self._uow = uow
        self._market_data_client = market_data_client
        self._on_watchlist_changed = on_watchlist_changed

    def add_item(
        self,
        *,
        user: User,
        symbol: str,
        company: str,
        tv_symbol: str | None = None,
    ) -> WatchlistMutationResult:
        clean_symbol = normalize_symbol(symbol)
        clean_tv_symbol = normalize_tv_symbol(tv_symbol)
        exchange = exchange_prefix(clean_tv_symbol) or exchange_prefix(symbol)
        if clean_tv_symbol is None and exchange is not None:
            clean_tv_symbol = build_tradingview_symbol(clean_symbol, exchange)

        with self._uow as uow:
            repo = _require_watchlist_repo(uow)
            if repo.get_item(user_id=user.id, symbol=clean_symbol) is not None:
                return WatchlistMutationResult(success=False, message=MESSAGE_ALREADY_PRESENT)
            try:
                repo.add_item(
                    user_id=user.id,
                    symbol=clean_symbol,
                    company=(company or "").strip() or clean_symbol,
                    exchange=exchange,
                    tv_symbol=clean_tv_symbol,
                )
            except DuplicateWatchlistItemError:
                return WatchlistMutationResult(success=False, message=MESSAGE_ALREADY_PRESENT)
            uow.commit()

        logger.info("Watchlist item added", extra={"user_id": user.id, "symbol": clean_symbol})
        self._notify_changed(user)
        return WatchlistMutationResult(success=True, message=MESSAGE_ADDED)

    def remove_item(self, *, user: User, symbol: str) -> WatchlistMutationResult:
        clean_symbol = normalize_symbol(symbol)
        with self._uow as uow:
            repo = _require_watchlist_repo(uow)
            removed = repo.remove_item(user_id=user.id, symbol=clean_symbol)
            if not removed:
                return WatchlistMutationResult(success=False, message=MESSAGE_NOT_FOUND)
            uow.commit()

        logger.info("Watchlist item removed", extra={"user_id": user.id, "symbol": clean_symbol})
        self._notify_changed(user)
        return WatchlistMutationResult(success=True, message=MESSAGE_REMOVED)

    def list_items(self, *, user: User) -> list[WatchlistEntryView]:
        with self._uow as uow:
            repo = _require_watchlist_repo(uow)
            items = repo.list_items(user_id=user.id)

        views: list[WatchlistEntryView] = []
        backfill: list[tuple[str, str, str | None]] = []
        for item in items:
            view, inferred = self._resolve_exchange(item)
            views.append(view)
            if inferred:
                backfill.append((view.symbol, view.exchange, view.tv_symbol))

        if backfill:
            self._backfill_exchanges(user_id=user.id, updates=backfill)
        return views

    def is_member(self, *, user: User, symbol: str) -> bool:
        try:
            clean_symbol = normalize_symbol(symbol)
        except InvalidSymbolError:
            return False
        with self._uow as uow:
            repo = _require_watchlist_repo(uow)
            return repo.get_item(user_id=user.id, symbol=clean_symbol) is not None

    def list_symbols_by_email(self, *, email: str) -> list[str]:
        normalized = (email or "").strip().lower()
        if not normalized:
            return []
        with self._uow as uow:
            repo = _require_watchlist_repo(uow)
            return repo.list_symbols_by_email(email_normalized=normalized)

    def _resolve_exchange(self, item: WatchlistItem) -> tuple[WatchlistEntryView, bool]:
        symbol = item.symbol.strip().upper()
        stored_exchange = item.exchange if item.exchange and item.exchange != DEFAULT_EXCHANGE else None
        exchange = stored_exchange or exchange_prefix(item.tv_symbol)
        tv_symbol = item.tv_symbol
        inferred = False

        if not tv_symbol and exchange:
            tv_symbol = build_tradingview_symbol(symbol, exchange)

        if not tv_symbol:
            exchange = self._lookup_exchange(symbol)
            tv_symbol = build_tradingview_symbol(symbol, exchange)
            inferred = exchange is not None

        view = WatchlistEntryView(
            symbol=symbol,
            company=item.company or symbol,
            exchange=exchange or DEFAULT_EXCHANGE,
            tv_symbol=tv_symbol,
            added_at=item.added_at,
        )
        return view, inferred

    def _lookup_exchange(self, symbol: str) -> str | None:
        if self._market_data_client is None:
            return None
        try:
            provider_exchange = self._market_data_client.get_exchange(symbol=symbol)
        except Exception:
            logger.exception("Exchange lookup failed", extra={"symbol": symbol})
            return None
        return map_provider_exchange_to_tradingview(provider_exchange)

    def _backfill_exchanges(self, *, user_id: int, updates: list[tuple[str, str, str | None]]) -> None:
        try:
            with self._uow as uow:
                repo = _require_watchlist_repo(uow)
                for symbol, exchange, tv_symbol in updates:
                    repo.update_exchange(user_id=user_id, symbol=symbol, exchange=exchange, tv_symbol=tv_symbol)
                uow.commit()
        except Exception:
            logger.exception("Exchange backfill failed", extra={"user_id": user_id})

    def _notify_changed(self, user: User) -> None:
        if self._on_watchlist_changed is None or not user.email:
            return
        try:
            self._on_watchlist_changed(user.email)
        except Exception:
            logger.exception("Failed to clear recommendation cache for user", extra={"user_id": user.id})


def _require_watchlist_repo(uow: SqlAlchemyUnitOfWork):
    if uow.watchlist_repo is None:
        raise RuntimeError("Watchlist repository not configured")
    return uow.watchlist_repo
