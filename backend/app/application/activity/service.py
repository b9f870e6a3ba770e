from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import logging
from typing import Any

from app.domain.activity.errors import (
    ActivityForbiddenError,
    ActivityIdentityRequiredError,
    ActivityNotFoundError,
    InvalidActivityTypeError,
)
from app.domain.activity.schemas import ACTIVITY_TYPES, ActivityRecord
from app.domain.auth.schemas import User
from app.infrastructure.db.uow import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 200
MAX_ANONYMOUS_ID_LENGTH = 128


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class ActivityApplicationService:
    def __init__(
        self,
        *,
        uow: SqlAlchemyUnitOfWork,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow = uow
        self._clock = clock

    def record(
        self,
        *,
        type: str,
        user: User | None = None,
        anonymous_id: str | None = None,
        symbol: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ActivityRecord:
        normalized_type = (type or "").strip().lower()
        if normalized_type not in ACTIVITY_TYPES:
            raise InvalidActivityTypeError()

        anonymous = (anonymous_id or "").strip()[:MAX_ANONYMOUS_ID_LENGTH] or None
        if user is None and anonymous is None:
            raise ActivityIdentityRequiredError()

        clean_symbol = (symbol or "").strip().upper() or None
        with self._uow as uow:
            repo = _require_activity_repo(uow)
            record = repo.add(
                type=normalized_type,
                created_at=self._clock(),
                user_id=user.id if user is not None else None,
                anonymous_id=None if user is not None else anonymous,
                symbol=clean_symbol,
                meta=meta or None,
            )
            uow.commit()
        return record

    def list_recent(self, *, user: User, limit: int = DEFAULT_LIST_LIMIT) -> list[ActivityRecord]:
        bounded = max(1, min(MAX_LIST_LIMIT, limit))
        with self._uow as uow:
            repo = _require_activity_repo(uow)
            return repo.list_for_user(user_id=user.id, limit=bounded)

    def recent_symbols_for_user(self, *, user_id: int, days: int = 30, limit: int = 100) -> list[str]:
        """Symbols from the user's recent activity, newest first, without repeats."""
        since = self._clock() - timedelta(days=days)
        with self._uow as uow:
            repo = _require_activity_repo(uow)
            records = repo.list_for_user(
                user_id=user_id,
                limit=limit,
                since=since,
                types=sorted(ACTIVITY_TYPES),
            )

        symbols: list[str] = []
        seen: set[str] = set()
        for record in records:
            if record.symbol and record.symbol not in seen:
                seen.add(record.symbol)
                symbols.append(record.symbol)
        return symbols

    def delete(self, *, user: User, activity_id: int) -> None:
        with self._uow as uow:
            repo = _require_activity_repo(uow)
            record = repo.get(activity_id=activity_id)
            if record is None:
                raise ActivityNotFoundError()
            if record.user_id != user.id:
                raise ActivityForbiddenError()
            repo.delete(activity_id=activity_id)
            uow.commit()

    def purge_expired(self, *, retention_days: int) -> int:
        if retention_days <= 0:
            return 0
        cutoff = self._clock() - timedelta(days=retention_days)
        with self._uow as uow:
            repo = _require_activity_repo(uow)
            deleted = repo.delete_older_than(cutoff=cutoff)
            uow.commit()
        logger.info("Expired activity purged", extra={"deleted": deleted, "retention_days": retention_days})
        return deleted


def _require_activity_repo(uow: SqlAlchemyUnitOfWork):
    if uow.activity_repo is None:
        raise RuntimeError("Activity repository not configured")
    return uow.activity_repo
