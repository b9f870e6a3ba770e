from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.db.base import Base

if TYPE_CHECKING:
    from app.infrastructure.db.models.watchlist import WatchlistItemModel


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    email_normalized: Mapped[str] = mapped_column(String(320), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    full_name: Mapped[str] = mapped_column(String(120), default="", server_default="", nullable=False)
    country: Mapped[str] = mapped_column(String(2), default="us", server_default="us", nullable=False)
    investment_goals: Mapped[str] = mapped_column(String(64), default="Growth", server_default="Growth", nullable=False)
    risk_tolerance: Mapped[str] = mapped_column(String(64), default="Medium", server_default="Medium", nullable=False)
    preferred_industry: Mapped[str] = mapped_column(
        String(64),
        default="Technology",
        server_default="Technology",
        nullable=False,
    )

    watchlist_items: Mapped[list["WatchlistItemModel"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("email_normalized", name="uq_users_email_normalized"),)
