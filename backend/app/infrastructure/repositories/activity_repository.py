from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.domain.activity.schemas import ActivityRecord
from app.infrastructure.db.mappers import activity_to_domain
from app.infrastructure.db.models.activity import UserActivityModel


class SqlAlchemyActivityRepository:
    def __init__(self, *, session: Session) -> None:
        self._session = session

    def add(
        self,
        *,
        type: str,
        created_at: datetime,
        user_id: int | None = None,
        anonymous_id: str | None = None,
        symbol: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ActivityRecord:
        row = UserActivityModel(
            user_id=user_id,
            anonymous_id=anonymous_id,
            type=type,
            symbol=symbol,
            meta=meta,
            created_at=created_at,
        )
        self._session.add(row)
        self._session.flush()
        return activity_to_domain(row)

    def get(self, *, activity_id: int) -> ActivityRecord | None:
        row = self._session.get(UserActivityModel, activity_id)
        if row is None:
            return None
        return activity_to_domain(row)

    def list_for_user(
        self,
        *,
        user_id: int,
        limit: int,
        since: datetime | None = None,
        types: Iterable[str] | None = None,
    ) -> list[ActivityRecord]:
        stmt = select(UserActivityModel).where(UserActivityModel.user_id == user_id)
        if since is not None:
            stmt = stmt.where(UserActivityModel.created_at >= since)
        if types is not None:
            stmt = stmt.where(UserActivityModel.type.in_(list(types)))
        stmt = stmt.order_by(UserActivityModel.created_at.desc(), UserActivityModel.id.desc()).limit(limit)
        rows = self._session.execute(stmt).scalars().all()
        return [activity_to_domain(row) for row in rows]

    def delete(self, *, activity_id: int) -> bool:
        result = self._session.execute(delete(UserActivityModel).where(UserActivityModel.id == activity_id))
        self._session.flush()
        return (result.rowcount or 0) > 0

    def delete_older_than(self, *, cutoff: datetime) -> int:
        result = self._session.execute(delete(UserActivityModel).where(UserActivityModel.created_at < cutoff))
        self._session.flush()
        return result.rowcount or 0
