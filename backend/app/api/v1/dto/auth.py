from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8, max_length=128)
    full_name: str | None = Field(default=None, max_length=120)
    country: str | None = Field(default=None, max_length=2)
    investment_goals: str | None = Field(default=None, max_length=64)
    risk_tolerance: str | None = Field(default=None, max_length=64)
    preferred_industry: str | None = Field(default=None, max_length=64)


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8, max_length=128)


class PasswordResetRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)


class PasswordResetConfirm(BaseModel):
    token: str = Field(min_length=1, max_length=256)
    new_password: str = Field(min_length=8, max_length=128)


class PasswordResetOut(BaseModel):
    success: bool
    message: str
    email: str | None = None


class AccessTokenOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    access_token: str
    token_type: str
    expires_in: int


class UserPreferencesIn(BaseModel):
    full_name: str = Field(max_length=120)
    country: str = Field(min_length=2, max_length=2)
    investment_goals: str = Field(min_length=1, max_length=64)
    risk_tolerance: str = Field(min_length=1, max_length=64)
    preferred_industry: str = Field(min_length=1, max_length=64)


class UserPreferencesOut(BaseModel):
    full_name: str
    country: str
    investment_goals: str
    risk_tolerance: str
    preferred_industry: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None = None
    preferences: UserPreferencesOut
