"""user profile preferences

Revision ID: 0002_user_preferences
Revises: 0001_initial_schema
Create Date: 2026-10-19 12:00:00.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_user_preferences"
down_revision = "0001_initial_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("users", sa.Column("full_name", sa.String(length=120), server_default="", nullable=False))
    op.add_column("users", sa.Column("country", sa.String(length=2), server_default="us", nullable=False))
    op.add_column(
        "users",
        sa.Column("investment_goals", sa.String(length=64), server_default="Growth", nullable=False),
    )
    op.add_column(
        "users",
        sa.Column("risk_tolerance", sa.String(length=64), server_default="Medium", nullable=False),
    )
    op.add_column(
        "users",
        sa.Column("preferred_industry", sa.String(length=64), server_default="Technology", nullable=False),
    )


def downgrade() -> None:
    op.drop_column("users", "preferred_industry")
    op.drop_column("users", "risk_tolerance")
    op.drop_column("users", "investment_goals")
    op.drop_column("users", "country")
    op.drop_column("users", "full_name")
