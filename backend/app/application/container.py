from __future__ import annotations

from functools import lru_cache

from app.application.activity.service import ActivityApplicationService
from app.application.auth.service import AuthApplicationService
from app.application.recommendations.cache import RecommendationCache
from app.application.recommendations.service import RecommendationApplicationService
from app.application.watchlist.service import WatchlistApplicationService
from app.core.config import settings
from app.infrastructure.clients.finnhub import FinnhubClient
from app.infrastructure.db.session import SessionLocal
from app.infrastructure.db.uow import SqlAlchemyUnitOfWork
from app.infrastructure.notifications.email import SmtpPasswordResetMailer


@lru_cache
def _finnhub_client() -> FinnhubClient | None:
    if not settings.finnhub_api_key:
        return None
    return FinnhubClient(
        settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout_seconds=settings.market_data_timeout_seconds,
    )


@lru_cache
def _recommendation_cache() -> RecommendationCache:
    return RecommendationCache(max_entries=settings.recommendation_cache_max_entries)


@lru_cache
def _password_reset_mailer() -> SmtpPasswordResetMailer:
    return SmtpPasswordResetMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.smtp_user,
        password=settings.smtp_password,
        sender=settings.email_from,
        timeout_seconds=settings.smtp_timeout_seconds,
    )


def build_uow() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=SessionLocal)


def build_recommendation_cache() -> RecommendationCache:
    return _recommendation_cache()


def build_activity_service() -> ActivityApplicationService:
    return ActivityApplicationService(uow=build_uow())


def build_recommendation_service() -> RecommendationApplicationService:
    return RecommendationApplicationService(
        uow=build_uow(),
        cache=build_recommendation_cache(),
        popular_ttl_seconds=settings.recommendation_popular_ttl_seconds,
        personal_ttl_seconds=settings.recommendation_personal_ttl_seconds,
        activity_service=build_activity_service(),
    )


def build_watchlist_service() -> WatchlistApplicationService:
    recommendations = build_recommendation_service()
    return WatchlistApplicationService(
        uow=build_uow(),
        market_data_client=_finnhub_client(),
        on_watchlist_changed=recommendations.clear_recommendations_cache_for_user,
    )


def build_auth_service() -> AuthApplicationService:
    return AuthApplicationService(uow=build_uow(), mailer=_password_reset_mailer())


def shutdown_clients() -> None:
    if _finnhub_client.cache_info().currsize == 0:
        return
    client = _finnhub_client()
    if client is not None:
        client.close()
    _finnhub_client.cache_clear()
