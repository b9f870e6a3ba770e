from __future__ import annotations

from app.domain.activity.schemas import ActivityRecord
from app.domain.auth.schemas import PasswordResetToken, User, UserCredentials, UserPreferences
from app.domain.watchlist.schemas import WatchlistItem
from app.infrastructure.db.models.activity import UserActivityModel
from app.infrastructure.db.models.password_reset import PasswordResetTokenModel
from app.infrastructure.db.models.user import UserModel
from app.infrastructure.db.models.watchlist import WatchlistItemModel


def user_to_domain(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
        last_login_at=model.last_login_at,
        preferences=user_preferences_to_domain(model),
    )


def user_preferences_to_domain(model: UserModel) -> UserPreferences:
    return UserPreferences(
        full_name=model.full_name,
        country=model.country,
        investment_goals=model.investment_goals,
        risk_tolerance=model.risk_tolerance,
        preferred_industry=model.preferred_industry,
    )


def user_to_credentials(model: UserModel) -> UserCredentials:
    return UserCredentials(
        id=model.id,
        email=model.email,
        email_normalized=model.email_normalized,
        password_hash=model.password_hash,
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
        last_login_at=model.last_login_at,
    )


def watchlist_item_to_domain(model: WatchlistItemModel) -> WatchlistItem:
    return WatchlistItem(
        user_id=model.user_id,
        symbol=model.symbol,
        company=model.company,
        exchange=model.exchange,
        tv_symbol=model.tv_symbol,
        added_at=model.added_at,
    )


def activity_to_domain(model: UserActivityModel) -> ActivityRecord:
    return ActivityRecord(
        id=model.id,
        type=model.type,
        created_at=model.created_at,
        user_id=model.user_id,
        anonymous_id=model.anonymous_id,
        symbol=model.symbol,
        meta=model.meta,
    )


def password_reset_token_to_domain(model: PasswordResetTokenModel) -> PasswordResetToken:
    return PasswordResetToken(
        token_hash=model.token_hash,
        email=model.email,
        expires_at=model.expires_at,
        created_at=model.created_at,
    )
