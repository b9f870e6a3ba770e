from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.activity.service import ActivityApplicationService
from app.application.auth.service import AuthApplicationService
from app.application.container import (
    build_activity_service,
    build_auth_service,
    build_recommendation_service,
    build_watchlist_service,
)
from app.application.recommendations.service import RecommendationApplicationService
from app.application.watchlist.service import WatchlistApplicationService
from app.domain.auth.schemas import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service() -> AuthApplicationService:
    return build_auth_service()


def get_watchlist_service() -> WatchlistApplicationService:
    return build_watchlist_service()


def get_recommendation_service() -> RecommendationApplicationService:
    return build_recommendation_service()


def get_activity_service() -> ActivityApplicationService:
    return build_activity_service()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    service: AuthApplicationService = Depends(get_auth_service),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized_error("Authentication credentials were not provided")

    try:
        return service.get_current_user_from_token(token=credentials.credentials)
    except ValueError as exc:
        raise _unauthorized_error(str(exc)) from exc


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    service: AuthApplicationService = Depends(get_auth_service),
) -> User | None:
    """Resolve the caller if a valid bearer token is present, otherwise ``None``."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    try:
        return service.get_current_user_from_token(token=credentials.credentials)
    except ValueError:
        return None
    except Exception:
        logger.exception("Identity resolution failed; treating caller as anonymous")
        return None


def _unauthorized_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
