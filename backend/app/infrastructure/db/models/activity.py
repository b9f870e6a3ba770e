from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.db.base import Base


class UserActivityModel(Base):
    __tablename__ = "user_activities"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    anonymous_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    symbol: Mapped[str | None] = mapped_column(String(32), nullable=True)
    meta: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "(user_id IS NULL) <> (anonymous_id IS NULL)",
            name="ck_user_activities_single_identity",
        ),
        CheckConstraint(
            "type IN ('view', 'search', 'click', 'impression')",
            name="ck_user_activities_type",
        ),
        Index("ix_user_activities_user_type", "user_id", "type"),
        Index("ix_user_activities_anonymous_type", "anonymous_id", "type"),
        Index("ix_user_activities_created_at", "created_at"),
    )
