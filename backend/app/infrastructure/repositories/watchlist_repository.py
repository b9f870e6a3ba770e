from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.watchlist.errors import DuplicateWatchlistItemError
from app.domain.watchlist.schemas import WatchlistItem
from app.infrastructure.db.mappers import watchlist_item_to_domain
from app.infrastructure.db.models.user import UserModel
from app.infrastructure.db.models.watchlist import WatchlistItemModel


class SqlAlchemyWatchlistRepository:
    def __init__(self, *, session: Session) -> None:
        self._session = session

    def list_items(self, *, user_id: int) -> list[WatchlistItem]:
        rows = (
            self._session.execute(
                select(WatchlistItemModel)
                .where(WatchlistItemModel.user_id == user_id)
                .order_by(WatchlistItemModel.added_at.desc(), WatchlistItemModel.id.desc())
            )
            .scalars()
            .all()
        )
        return [watchlist_item_to_domain(row) for row in rows]

    def get_item(self, *, user_id: int, symbol: str) -> WatchlistItem | None:
        row = self._session.execute(
            select(WatchlistItemModel).where(
                WatchlistItemModel.user_id == user_id,
                WatchlistItemModel.symbol == symbol,
            )
        ).scalar_one_or_none()
        if row is None:
            return None
        return watchlist_item_to_domain(row)

    def add_item(
        self,
        *,
        user_id: int,
        symbol: str,
        company: str,
        exchange: str | None = None,
        tv_symbol: str | None = None,
    ) -> WatchlistItem:
        item = WatchlistItemModel(
            user_id=user_id,
            symbol=symbol,
            company=company,
            exchange=exchange,
            tv_symbol=tv_symbol,
        )
        self._session.add(item)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateWatchlistItemError() from exc
        self._session.refresh(item)
        return watchlist_item_to_domain(item)

    def remove_item(self, *, user_id: int, symbol: str) -> bool:
        result = self._session.execute(
            delete(WatchlistItemModel).where(
                WatchlistItemModel.user_id == user_id,
                WatchlistItemModel.symbol == symbol,
            )
        )
        self._session.flush()
        return (result.rowcount or 0) > 0

    def update_exchange(self, *, user_id: int, symbol: str, exchange: str, tv_symbol: str | None) -> None:
        self._session.execute(
            update(WatchlistItemModel)
            .where(
                WatchlistItemModel.user_id == user_id,
                WatchlistItemModel.symbol == symbol,
            )
            .values(exchange=exchange, tv_symbol=tv_symbol)
        )
        self._session.flush()

    def list_symbols_by_email(self, *, email_normalized: str) -> list[str]:
        rows = self._session.execute(
            select(WatchlistItemModel.symbol)
            .join(WatchlistItemModel.user)
            .where(UserModel.email_normalized == email_normalized)
            .order_by(WatchlistItemModel.added_at.desc(), WatchlistItemModel.id.desc())
        ).scalars()
        return [str(symbol) for symbol in rows]
