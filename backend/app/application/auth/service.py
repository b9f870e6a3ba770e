from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import logging
from urllib.parse import urlencode

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    normalize_email,
    verify_password,
)
from app.domain.auth.constants import (
    ERROR_EMAIL_ALREADY_REGISTERED,
    ERROR_INVALID_EMAIL_OR_PASSWORD,
    ERROR_INVALID_TOKEN,
    ERROR_INVALID_USER_ID,
    ERROR_RESET_TOKEN_EXPIRED,
    ERROR_RESET_TOKEN_INVALID,
    ERROR_USER_INACTIVE,
    ERROR_USER_NOT_FOUND,
)
from app.domain.auth.preferences import normalize_preferences
from app.domain.auth.schemas import AccessToken, User, UserCredentials, UserPreferences
from app.infrastructure.db.uow import SqlAlchemyUnitOfWork
from app.infrastructure.notifications.email import SmtpPasswordResetMailer

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class AuthApplicationService:
    def __init__(
        self,
        *,
        uow: SqlAlchemyUnitOfWork,
        mailer: SmtpPasswordResetMailer | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow = uow
        self._mailer = mailer
        self._clock = clock

    def register(self, *, email: str, password: str, preferences: UserPreferences | None = None) -> User:
        normalized_email = normalize_email(email)
        with self._uow as uow:
            repo = _require_auth_repo(uow)
            if repo.get_user_by_email_normalized(email_normalized=normalized_email) is not None:
                raise ValueError(ERROR_EMAIL_ALREADY_REGISTERED)
            user = repo.create_user(
                email=email.strip(),
                email_normalized=normalized_email,
                password_hash=hash_password(password),
                preferences=_normalized_preferences(preferences or UserPreferences()),
            )
            uow.commit()
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def get_preferences(self, *, user_id: int) -> UserPreferences:
        user = self.get_user(user_id=user_id)
        if user is None:
            raise ValueError(ERROR_USER_NOT_FOUND)
        return user.preferences

    def update_preferences(self, *, user_id: int, preferences: UserPreferences) -> UserPreferences:
        with self._uow as uow:
            updated = _require_auth_repo(uow).update_preferences(
                user_id=user_id,
                preferences=_normalized_preferences(preferences),
            )
            if updated is None:
                raise ValueError(ERROR_USER_NOT_FOUND)
            uow.commit()
        logger.info("User preferences updated", extra={"user_id": user_id})
        return updated.preferences

    def login(self, *, email: str, password: str) -> AccessToken:
        user = self._authenticate(email=email, password=password)
        expires_in = settings.auth_access_token_expire_days * 24 * 60 * 60
        token = create_access_token(
            subject=str(user.id),
            secret_key=settings.app_secret_key,
            expires_delta=timedelta(seconds=expires_in),
            additional_claims={"email": user.email},
        )
        return AccessToken(access_token=token, expires_in=expires_in)

    def get_user(self, *, user_id: int) -> User | None:
        if user_id < 1:
            raise ValueError(ERROR_INVALID_USER_ID)
        with self._uow as uow:
            repo = _require_auth_repo(uow)
            return repo.get_user_by_id(user_id=user_id)

    def get_current_user_from_token(self, *, token: str) -> User:
        payload = decode_access_token(token=token, secret_key=settings.app_secret_key)
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError) as exc:
            raise ValueError(ERROR_INVALID_TOKEN) from exc

        user = self.get_user(user_id=user_id)
        if user is None or not user.is_active:
            raise ValueError(ERROR_INVALID_TOKEN)
        return user

    def request_password_reset(self, *, email: str) -> None:
        """Issue a reset token and mail it. Unknown emails are accepted silently."""
        normalized_email = normalize_email(email)
        token = generate_reset_token()
        ttl_minutes = settings.password_reset_token_ttl_minutes

        with self._uow as uow:
            auth_repo = _require_auth_repo(uow)
            reset_repo = _require_password_reset_repo(uow)
            if auth_repo.get_user_by_email_normalized(email_normalized=normalized_email) is None:
                logger.info("Password reset requested for unknown email")
                return
            reset_repo.delete_for_email(email=normalized_email)
            reset_repo.create(
                token_hash=hash_reset_token(token),
                email=normalized_email,
                expires_at=self._clock() + timedelta(minutes=ttl_minutes),
            )
            uow.commit()

        if self._mailer is None:
            logger.warning("No mailer configured; password reset email not sent")
            return
        reset_url = f"{settings.password_reset_url_base}?{urlencode({'token': token})}"
        try:
            self._mailer.send_password_reset(
                email=normalized_email,
                reset_url=reset_url,
                expires_in_minutes=ttl_minutes,
            )
        except Exception:
            logger.exception("Password reset email delivery failed")

    def reset_password(self, *, token: str, new_password: str) -> str:
        token_hash = hash_reset_token(token or "")
        with self._uow as uow:
            reset_repo = _require_password_reset_repo(uow)
            auth_repo = _require_auth_repo(uow)

            record = reset_repo.get_by_token_hash(token_hash=token_hash)
            if record is None:
                raise ValueError(ERROR_RESET_TOKEN_INVALID)
            if _as_utc(record.expires_at) < self._clock():
                reset_repo.delete(token_hash=token_hash)
                uow.commit()
                raise ValueError(ERROR_RESET_TOKEN_EXPIRED)

            password_hash = hash_password(new_password)
            if not auth_repo.update_password(email_normalized=record.email, password_hash=password_hash):
                reset_repo.delete(token_hash=token_hash)
                uow.commit()
                raise ValueError(ERROR_RESET_TOKEN_INVALID)
            reset_repo.delete(token_hash=token_hash)
            uow.commit()

        logger.info("Password reset completed")
        return record.email

    def purge_expired_reset_tokens(self) -> int:
        with self._uow as uow:
            deleted = _require_password_reset_repo(uow).delete_expired(now=self._clock())
            uow.commit()
        return deleted

    def _authenticate(self, *, email: str, password: str) -> User:
        normalized_email = normalize_email(email)
        with self._uow as uow:
            repo = _require_auth_repo(uow)
            user = repo.get_user_by_email_normalized(email_normalized=normalized_email)
            if user is None or not verify_password(password, user.password_hash):
                raise ValueError(ERROR_INVALID_EMAIL_OR_PASSWORD)
            if not user.is_active:
                raise ValueError(ERROR_USER_INACTIVE)

            updated_user = repo.update_last_login(user_id=user.id)
            uow.commit()
            if updated_user is not None:
                return updated_user
            return _credentials_to_user(user)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _require_auth_repo(uow: SqlAlchemyUnitOfWork):
    if uow.auth_repo is None:
        raise RuntimeError("Auth repository not configured")
    return uow.auth_repo


def _require_password_reset_repo(uow: SqlAlchemyUnitOfWork):
    if uow.password_reset_repo is None:
        raise RuntimeError("Password reset repository not configured")
    return uow.password_reset_repo


def _normalized_preferences(preferences: UserPreferences) -> UserPreferences:
    return normalize_preferences(
        full_name=preferences.full_name,
        country=preferences.country,
        investment_goals=preferences.investment_goals,
        risk_tolerance=preferences.risk_tolerance,
        preferred_industry=preferences.preferred_industry,
    )


def _credentials_to_user(user: UserCredentials) -> User:
    return User(
        id=user.id,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
        last_login_at=user.last_login_at,
    )
