from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.domain.auth.schemas import PasswordResetToken
from app.infrastructure.db.mappers import password_reset_token_to_domain
from app.infrastructure.db.models.password_reset import PasswordResetTokenModel


class SqlAlchemyPasswordResetRepository:
    def __init__(self, *, session: Session) -> None:
        self._session = session

    def create(self, *, token_hash: str, email: str, expires_at: datetime) -> PasswordResetToken:
        row = PasswordResetTokenModel(token_hash=token_hash, email=email, expires_at=expires_at)
        self._session.add(row)
        self._session.flush()
        return password_reset_token_to_domain(row)

    def get_by_token_hash(self, *, token_hash: str) -> PasswordResetToken | None:
        row = self._session.execute(
            select(PasswordResetTokenModel).where(PasswordResetTokenModel.token_hash == token_hash)
        ).scalar_one_or_none()
        if row is None:
            return None
        return password_reset_token_to_domain(row)

    def delete(self, *, token_hash: str) -> None:
        self._session.execute(
            delete(PasswordResetTokenModel).where(PasswordResetTokenModel.token_hash == token_hash)
        )
        self._session.flush()

    def delete_for_email(self, *, email: str) -> int:
        result = self._session.execute(delete(PasswordResetTokenModel).where(PasswordResetTokenModel.email == email))
        self._session.flush()
        return result.rowcount or 0

    def delete_expired(self, *, now: datetime) -> int:
        result = self._session.execute(
            delete(PasswordResetTokenModel).where(PasswordResetTokenModel.expires_at <= now)
        )
        self._session.flush()
        return result.rowcount or 0
