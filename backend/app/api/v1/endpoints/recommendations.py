from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_optional_user, get_recommendation_service
from app.api.errors import raise_api_error
from app.api.v1.dto.mappers import to_recommendation_out
from app.api.v1.dto.recommendations import RecommendationsOut
from app.application.recommendations.service import RecommendationApplicationService
from app.domain.auth.schemas import User

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
POPULAR_TYPE = "popular"


@router.get("", response_model=RecommendationsOut)
def list_recommendations(
    limit: int = Query(default=DEFAULT_LIMIT),
    recommendation_type: str | None = Query(default=None, alias="type"),
    identity: User | None = Depends(get_optional_user),
    service: RecommendationApplicationService = Depends(get_recommendation_service),
) -> RecommendationsOut:
    bounded_limit = max(1, min(MAX_LIMIT, limit))
    try:
        if (recommendation_type or "").strip().lower() == POPULAR_TYPE:
            items = service.get_popular_recommendations(limit=bounded_limit)
        else:
            items = service.get_personalized_recommendations(limit=bounded_limit, identity=identity)
    except Exception:
        logger.exception("Failed to build recommendations")
        raise_api_error(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code="RECOMMENDATIONS_UNAVAILABLE",
            message="Failed to get recommendations",
        )
    return RecommendationsOut(data=[to_recommendation_out(item) for item in items])
