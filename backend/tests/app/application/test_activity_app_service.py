from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.activity.service import ActivityApplicationService
from app.domain.activity.errors import (
    ActivityForbiddenError,
    ActivityIdentityRequiredError,
    ActivityNotFoundError,
    InvalidActivityTypeError,
)
from app.domain.activity.schemas import ActivityRecord
from app.domain.auth.schemas import User

NOW = datetime(2026, 2, 10, 14, 0, 0, tzinfo=timezone.utc)


class FakeActivityRepository:
    def __init__(self) -> None:
        self.records: dict[int, ActivityRecord] = {}
        self._next_id = 1
        self.list_calls: list[dict] = []

    def add(self, *, type: str, created_at: datetime, user_id=None, anonymous_id=None, symbol=None, meta=None):
        record = ActivityRecord(
            id=self._next_id,
            type=type,
            created_at=created_at,
            user_id=user_id,
            anonymous_id=anonymous_id,
            symbol=symbol,
            meta=meta,
        )
        self.records[record.id] = record
        self._next_id += 1
        return record

    def get(self, *, activity_id: int) -> ActivityRecord | None:
        return self.records.get(activity_id)

    def list_for_user(self, *, user_id: int, limit: int, since=None, types=None) -> list[ActivityRecord]:
        self.list_calls.append({"user_id": user_id, "limit": limit, "since": since, "types": types})
        rows = [
            record
            for record in self.records.values()
            if record.user_id == user_id
            and (since is None or record.created_at >= since)
            and (types is None or record.type in types)
        ]
        rows.sort(key=lambda record: (record.created_at, record.id), reverse=True)
        return rows[:limit]

    def delete(self, *, activity_id: int) -> bool:
        return self.records.pop(activity_id, None) is not None

    def delete_older_than(self, *, cutoff: datetime) -> int:
        doomed = [key for key, record in self.records.items() if record.created_at < cutoff]
        for key in doomed:
            del self.records[key]
        return len(doomed)


class FakeUoW:
    def __init__(self, *, activity_repo: FakeActivityRepository) -> None:
        self.activity_repo = activity_repo
        self.auth_repo = None
        self.watchlist_repo = None
        self.commits = 0
        self.rollbacks = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type:
            self.rollback()
        return None

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class FakeClock:
    def __init__(self) -> None:
        self.now = NOW

    def __call__(self) -> datetime:
        return self.now


def _user(user_id: int = 1) -> User:
    return User(id=user_id, email=f"user{user_id}@example.com", is_active=True, created_at=NOW, updated_at=NOW)


def _build_service() -> tuple[ActivityApplicationService, FakeActivityRepository, FakeUoW, FakeClock]:
    repo = FakeActivityRepository()
    uow = FakeUoW(activity_repo=repo)
    clock = FakeClock()
    return ActivityApplicationService(uow=uow, clock=clock), repo, uow, clock


def test_record_for_user_normalizes_fields() -> None:
    service, repo, uow, _ = _build_service()

    record = service.record(type=" View ", user=_user(), symbol="aapl", meta={"source": "search"})

    assert record.type == "view"
    assert record.symbol == "AAPL"
    assert record.user_id == 1
    assert record.anonymous_id is None
    assert record.created_at == NOW
    assert record.meta == {"source": "search"}
    assert uow.commits == 1
    assert repo.records[record.id] is record


def test_record_for_anonymous_visitor() -> None:
    service, _, _, _ = _build_service()

    record = service.record(type="impression", anonymous_id="  visitor-42 ")

    assert record.user_id is None
    assert record.anonymous_id == "visitor-42"
    assert record.symbol is None


def test_authenticated_record_ignores_anonymous_id() -> None:
    service, _, _, _ = _build_service()

    record = service.record(type="click", user=_user(), anonymous_id="visitor-42")

    assert record.user_id == 1
    assert record.anonymous_id is None


@pytest.mark.parametrize("activity_type", ["", "purchase", None])
def test_record_rejects_unknown_type(activity_type: str | None) -> None:
    service, repo, _, _ = _build_service()

    with pytest.raises(InvalidActivityTypeError, match="Invalid activity type"):
        service.record(type=activity_type, user=_user())
    assert repo.records == {}


def test_record_requires_identity() -> None:
    service, _, _, _ = _build_service()

    with pytest.raises(ActivityIdentityRequiredError):
        service.record(type="view", anonymous_id="   ")


def test_list_recent_clamps_limit() -> None:
    service, repo, _, _ = _build_service()

    service.list_recent(user=_user(), limit=0)
    service.list_recent(user=_user(), limit=10_000)

    assert [call["limit"] for call in repo.list_calls] == [1, 200]


def test_recent_symbols_for_user_dedupes_newest_first() -> None:
    service, _, _, clock = _build_service()
    user = _user()
    for offset, symbol in enumerate(["MSFT", "AAPL", "MSFT", None, "NVDA"]):
        clock.now = NOW + timedelta(minutes=offset)
        service.record(type="view", user=user, symbol=symbol)
    service.record(type="view", user=_user(2), symbol="TSLA")

    symbols = service.recent_symbols_for_user(user_id=1, days=30, limit=50)

    assert symbols == ["NVDA", "MSFT", "AAPL"]


def test_recent_symbols_for_user_respects_lookback_window() -> None:
    service, _, _, clock = _build_service()
    clock.now = NOW - timedelta(days=45)
    service.record(type="view", user=_user(), symbol="OLD")
    clock.now = NOW
    service.record(type="view", user=_user(), symbol="NEW")

    assert service.recent_symbols_for_user(user_id=1, days=30) == ["NEW"]


def test_delete_checks_ownership() -> None:
    service, repo, _, _ = _build_service()
    record = service.record(type="view", user=_user(1), symbol="AAPL")

    with pytest.raises(ActivityForbiddenError):
        service.delete(user=_user(2), activity_id=record.id)
    with pytest.raises(ActivityNotFoundError):
        service.delete(user=_user(1), activity_id=999)

    service.delete(user=_user(1), activity_id=record.id)
    assert repo.records == {}


def test_purge_expired_deletes_records_past_retention() -> None:
    service, repo, _, clock = _build_service()
    clock.now = NOW - timedelta(days=120)
    service.record(type="view", user=_user(), symbol="OLD")
    clock.now = NOW
    service.record(type="view", user=_user(), symbol="NEW")

    assert service.purge_expired(retention_days=90) == 1
    assert [record.symbol for record in repo.records.values()] == ["NEW"]
    assert service.purge_expired(retention_days=0) == 0
