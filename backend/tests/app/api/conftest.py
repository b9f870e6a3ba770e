from __future__ import annotations

from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.deps import (
    get_activity_service,
    get_auth_service,
    get_current_user,
    get_optional_user,
    get_recommendation_service,
    get_watchlist_service,
)
from app.api.errors import install_api_error_handlers
from app.api.v1.router import api_router
from app.domain.activity.errors import (
    ActivityForbiddenError,
    ActivityIdentityRequiredError,
    ActivityNotFoundError,
    InvalidActivityTypeError,
)
from app.domain.activity.schemas import ACTIVITY_TYPES, ActivityRecord
from app.domain.auth.constants import (
    ERROR_EMAIL_ALREADY_REGISTERED,
    ERROR_INVALID_EMAIL_OR_PASSWORD,
    ERROR_RESET_TOKEN_INVALID,
    ERROR_USER_NOT_FOUND,
)
from app.domain.auth.preferences import normalize_preferences
from app.domain.auth.schemas import AccessToken, User, UserPreferences
from app.domain.recommendations.schemas import Recommendation
from app.domain.watchlist.schemas import WatchlistEntryView, WatchlistMutationResult
from app.domain.watchlist.symbols import normalize_symbol

NOW = datetime(2026, 2, 10, 14, 0, 0, tzinfo=timezone.utc)


def fake_user() -> User:
    return User(
        id=1,
        email="trader@example.com",
        is_active=True,
        created_at=NOW,
        updated_at=NOW,
        last_login_at=NOW,
    )


class FakeRecommendationService:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int, User | None]] = []
        self.fail = False

    def get_popular_recommendations(self, *, limit: int = 10) -> list[Recommendation]:
        self.calls.append(("popular", limit, None))
        return self._build(limit, "Popular among users")

    def get_personalized_recommendations(self, *, limit: int = 10, identity: User | None = None) -> list[Recommendation]:
        self.calls.append(("personal", limit, identity))
        if self.fail:
            raise RuntimeError("boom")
        return self._build(limit, "Related to your watchlist")

    @staticmethod
    def _build(limit: int, reason: str) -> list[Recommendation]:
        symbols = ["AAPL", "MSFT", "GOOGL"]
        return [
            Recommendation(symbol=symbol, score=round(1 - index * 0.1, 2), reasons=(reason,))
            for index, symbol in enumerate(symbols[:limit])
        ]


class FakeWatchlistService:
    def __init__(self) -> None:
        self.symbols: dict[str, str] = {}
        self.changed = 0

    def list_items(self, *, user: User) -> list[WatchlistEntryView]:
        _ = user
        return [
            WatchlistEntryView(
                symbol=symbol,
                company=company,
                exchange="NASDAQ",
                tv_symbol=f"NASDAQ:{symbol}",
                added_at=NOW,
            )
            for symbol, company in self.symbols.items()
        ]

    def add_item(self, *, user: User, symbol: str, company: str, tv_symbol: str | None = None):
        _ = (user, tv_symbol)
        clean = normalize_symbol(symbol)
        if clean in self.symbols:
            return WatchlistMutationResult(success=False, message="Already in watchlist")
        self.symbols[clean] = company
        self.changed += 1
        return WatchlistMutationResult(success=True, message="Added to watchlist")

    def remove_item(self, *, user: User, symbol: str):
        _ = user
        clean = normalize_symbol(symbol)
        if self.symbols.pop(clean, None) is None:
            return WatchlistMutationResult(success=False, message="Not found in watchlist")
        self.changed += 1
        return WatchlistMutationResult(success=True, message="Removed from watchlist")

    def is_member(self, *, user: User, symbol: str) -> bool:
        _ = user
        return symbol in self.symbols


class FakeActivityService:
    def __init__(self) -> None:
        self.records: dict[int, ActivityRecord] = {}
        self.list_limits: list[int] = []

    def record(self, *, type: str, user=None, anonymous_id=None, symbol=None, meta=None) -> ActivityRecord:
        if (type or "").lower() not in ACTIVITY_TYPES:
            raise InvalidActivityTypeError()
        if user is None and not anonymous_id:
            raise ActivityIdentityRequiredError()
        record = ActivityRecord(
            id=len(self.records) + 1,
            type=type.lower(),
            created_at=NOW,
            user_id=user.id if user else None,
            anonymous_id=None if user else anonymous_id,
            symbol=symbol.upper() if symbol else None,
            meta=meta,
        )
        self.records[record.id] = record
        return record

    def list_recent(self, *, user: User, limit: int = 20) -> list[ActivityRecord]:
        self.list_limits.append(limit)
        return [record for record in self.records.values() if record.user_id == user.id]

    def delete(self, *, user: User, activity_id: int) -> None:
        record = self.records.get(activity_id)
        if record is None:
            raise ActivityNotFoundError()
        if record.user_id != user.id:
            raise ActivityForbiddenError()
        del self.records[activity_id]


class FakeAuthService:
    def __init__(self) -> None:
        self.users: dict[str, str] = {}
        self.reset_requests: list[str] = []
        self.registered_preferences: list[UserPreferences | None] = []
        self.preferences: dict[int, UserPreferences] = {}

    def register(self, *, email: str, password: str, preferences: UserPreferences | None = None) -> User:
        if email.lower() in self.users:
            raise ValueError(ERROR_EMAIL_ALREADY_REGISTERED)
        self.users[email.lower()] = password
        self.registered_preferences.append(preferences)
        user = fake_user()
        user.email = email
        if preferences is not None:
            user.preferences = preferences
        return user

    def get_preferences(self, *, user_id: int) -> UserPreferences:
        if user_id not in self.preferences:
            raise ValueError(ERROR_USER_NOT_FOUND)
        return self.preferences[user_id]

    def update_preferences(self, *, user_id: int, preferences: UserPreferences) -> UserPreferences:
        if user_id not in self.preferences:
            raise ValueError(ERROR_USER_NOT_FOUND)
        updated = normalize_preferences(
            full_name=preferences.full_name,
            country=preferences.country,
            investment_goals=preferences.investment_goals,
            risk_tolerance=preferences.risk_tolerance,
            preferred_industry=preferences.preferred_industry,
        )
        self.preferences[user_id] = updated
        return updated

    def login(self, *, email: str, password: str) -> AccessToken:
        if self.users.get(email.lower()) != password:
            raise ValueError(ERROR_INVALID_EMAIL_OR_PASSWORD)
        return AccessToken(access_token="token-123", expires_in=3600)

    def get_current_user_from_token(self, *, token: str) -> User:
        if token != "token-123":
            raise ValueError("Invalid token")
        return fake_user()

    def request_password_reset(self, *, email: str) -> None:
        self.reset_requests.append(email)

    def reset_password(self, *, token: str, new_password: str) -> str:
        _ = new_password
        if token != "good-token":
            raise ValueError(ERROR_RESET_TOKEN_INVALID)
        return "trader@example.com"


class IdentityHolder:
    def __init__(self) -> None:
        self.user: User | None = None


@pytest.fixture
def recommendation_service() -> FakeRecommendationService:
    return FakeRecommendationService()


@pytest.fixture
def watchlist_service() -> FakeWatchlistService:
    return FakeWatchlistService()


@pytest.fixture
def activity_service() -> FakeActivityService:
    return FakeActivityService()


@pytest.fixture
def auth_service() -> FakeAuthService:
    return FakeAuthService()


@pytest.fixture
def identity() -> IdentityHolder:
    return IdentityHolder()


@pytest.fixture
def api_client(
    recommendation_service: FakeRecommendationService,
    watchlist_service: FakeWatchlistService,
    activity_service: FakeActivityService,
    auth_service: FakeAuthService,
    identity: IdentityHolder,
) -> Generator[TestClient, None, None]:
    app = FastAPI()
    install_api_error_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[get_current_user] = fake_user
    app.dependency_overrides[get_optional_user] = lambda: identity.user
    app.dependency_overrides[get_recommendation_service] = lambda: recommendation_service
    app.dependency_overrides[get_watchlist_service] = lambda: watchlist_service
    app.dependency_overrides[get_activity_service] = lambda: activity_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app) as client:
        yield client


@pytest.fixture
def anonymous_client(auth_service: FakeAuthService, watchlist_service: FakeWatchlistService):
    """Client whose bearer handling runs for real against a fake auth service."""
    app = FastAPI()
    install_api_error_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_watchlist_service] = lambda: watchlist_service
    with TestClient(app) as client:
        yield client
