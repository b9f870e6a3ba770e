from __future__ import annotations

from collections.abc import Sequence
import logging

from app.application.activity.service import ActivityApplicationService
from app.application.recommendations.cache import RecommendationCache
from app.domain.auth.schemas import User
from app.domain.recommendations.popularity import POPULAR_STOCK_SYMBOLS
from app.domain.recommendations.schemas import Recommendation
from app.domain.recommendations.scoring import score_personalized, score_popular
from app.infrastructure.db.uow import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)

POPULAR_TTL_SECONDS = 60
PERSONAL_TTL_SECONDS = 300
ACTIVITY_LOOKBACK_DAYS = 30
ACTIVITY_SIGNAL_LIMIT = 100


def popular_cache_key(limit: int) -> str:
    return f"popular:{limit}"


def personal_cache_prefix(email: str) -> str:
    return f"personal:{email.strip().lower()}:"


def personal_cache_key(email: str, limit: int) -> str:
    return f"{personal_cache_prefix(email)}{limit}"


class RecommendationApplicationService:
    def __init__(
        self,
        *,
        uow: SqlAlchemyUnitOfWork,
        cache: RecommendationCache,
        popularity_table: Sequence[str] = POPULAR_STOCK_SYMBOLS,
        popular_ttl_seconds: int = POPULAR_TTL_SECONDS,
        personal_ttl_seconds: int = PERSONAL_TTL_SECONDS,
        activity_service: ActivityApplicationService | None = None,
    ) -> None:
        self._uow = uow
        self._cache = cache
        self._table = tuple(popularity_table)
        self._popular_ttl_seconds = popular_ttl_seconds
        self._personal_ttl_seconds = personal_ttl_seconds
        self._activity_service = activity_service

    def get_popular_recommendations(self, *, limit: int = 10) -> list[Recommendation]:
        key = popular_cache_key(limit)
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached[:limit])

        result = score_popular(self._table)[:limit]
        self._cache.set(key, result, self._popular_ttl_seconds)
        return result

    def get_personalized_recommendations(
        self,
        *,
        limit: int = 10,
        identity: User | None = None,
    ) -> list[Recommendation]:
        if identity is None or not identity.email:
            return self.get_popular_recommendations(limit=limit)

        key = personal_cache_key(identity.email, limit)
        cached = self._cache.get(key)
        if cached is not None:
            return list(cached[:limit])

        watchlist = [symbol.upper() for symbol in self._load_watchlist_symbols(email=identity.email)]
        recent = self._load_recent_symbols(user_id=identity.id)

        result = score_personalized(self._table, watchlist=watchlist, recent_symbols=recent)[:limit]
        self._cache.set(key, result, self._personal_ttl_seconds)
        return result

    def clear_recommendations_cache_for_user(self, email: str) -> int:
        if not email:
            return 0
        removed = self._cache.invalidate_prefix(personal_cache_prefix(email))
        logger.debug("Recommendation cache invalidated", extra={"email": email, "removed": removed})
        return removed

    def _load_watchlist_symbols(self, *, email: str) -> list[str]:
        try:
            with self._uow as uow:
                if uow.watchlist_repo is None:
                    raise RuntimeError("Watchlist repository not configured")
                return uow.watchlist_repo.list_symbols_by_email(email_normalized=email.strip().lower())
        except Exception:
            logger.exception("Watchlist lookup failed; personalizing without exclusions", extra={"email": email})
            return []

    def _load_recent_symbols(self, *, user_id: int) -> list[str]:
        if self._activity_service is None:
            return []
        try:
            return self._activity_service.recent_symbols_for_user(
                user_id=user_id,
                days=ACTIVITY_LOOKBACK_DAYS,
                limit=ACTIVITY_SIGNAL_LIMIT,
            )
        except Exception:
            logger.exception("Activity lookup failed; personalizing without activity", extra={"user_id": user_id})
            return []
