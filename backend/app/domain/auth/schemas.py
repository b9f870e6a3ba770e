from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class UserPreferences:
    full_name: str = ""
    country: str = "us"
    investment_goals: str = "Growth"
    risk_tolerance: str = "Medium"
    preferred_industry: str = "Technology"


@dataclass(slots=True)
class User:
    id: int
    email: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None
    preferences: UserPreferences = field(default_factory=UserPreferences)


@dataclass(slots=True)
class UserCredentials:
    id: int
    email: str
    email_normalized: str
    password_hash: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None


@dataclass(slots=True)
class AccessToken:
    access_token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(slots=True)
class PasswordResetToken:
    token_hash: str
    email: str
    expires_at: datetime
    created_at: datetime | None = None
