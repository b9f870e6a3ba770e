from __future__ import annotations

from app.api.v1.dto.activity import ActivityOut
from app.api.v1.dto.auth import AccessTokenOut, UserOut, UserPreferencesOut
from app.api.v1.dto.recommendations import RecommendationOut
from app.api.v1.dto.watchlist import WatchlistItemOut, WatchlistMutationOut
from app.domain.activity.schemas import ActivityRecord
from app.domain.auth.schemas import AccessToken, User, UserPreferences
from app.domain.recommendations.schemas import Recommendation
from app.domain.watchlist.schemas import WatchlistEntryView, WatchlistMutationResult


def to_user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
        last_login_at=user.last_login_at,
        preferences=to_user_preferences_out(user.preferences),
    )


def to_user_preferences_out(preferences: UserPreferences) -> UserPreferencesOut:
    return UserPreferencesOut(
        full_name=preferences.full_name,
        country=preferences.country,
        investment_goals=preferences.investment_goals,
        risk_tolerance=preferences.risk_tolerance,
        preferred_industry=preferences.preferred_industry,
    )


def to_access_token_out(token: AccessToken) -> AccessTokenOut:
    return AccessTokenOut(
        access_token=token.access_token,
        token_type=token.token_type,
        expires_in=token.expires_in,
    )


def to_watchlist_item_out(item: WatchlistEntryView) -> WatchlistItemOut:
    return WatchlistItemOut(
        symbol=item.symbol,
        company=item.company,
        exchange=item.exchange,
        tv_symbol=item.tv_symbol,
        added_at=item.added_at,
    )


def to_watchlist_mutation_out(result: WatchlistMutationResult) -> WatchlistMutationOut:
    return WatchlistMutationOut(success=result.success, message=result.message)


def to_recommendation_out(item: Recommendation) -> RecommendationOut:
    return RecommendationOut(
        symbol=item.symbol,
        score=item.score,
        reasons=list(item.reasons),
        metadata=dict(item.metadata) if item.metadata is not None else None,
    )


def to_activity_out(record: ActivityRecord) -> ActivityOut:
    return ActivityOut(
        id=record.id,
        type=record.type,
        symbol=record.symbol,
        meta=record.meta,
        user_id=record.user_id,
        anonymous_id=record.anonymous_id,
        created_at=record.created_at,
    )
