from __future__ import annotations

from app.domain.auth.constants import (
    ERROR_INVALID_COUNTRY,
    ERROR_INVALID_FULL_NAME,
    ERROR_INVALID_PREFERENCE,
)
from app.domain.auth.schemas import UserPreferences

MAX_FULL_NAME_LENGTH = 120
MAX_PREFERENCE_LENGTH = 64


def normalize_preferences(
    *,
    full_name: str | None = None,
    country: str | None = None,
    investment_goals: str | None = None,
    risk_tolerance: str | None = None,
    preferred_industry: str | None = None,
) -> UserPreferences:
    """Trim and validate profile preferences.

    ``None`` keeps the default for that field. Country codes are stored
    lowercase, the way the country picker emits them.
    """
    defaults = UserPreferences()

    name = (full_name or "").strip()
    if len(name) > MAX_FULL_NAME_LENGTH:
        raise ValueError(ERROR_INVALID_FULL_NAME)

    code = defaults.country if country is None else country.strip().lower()
    if len(code) != 2 or not code.isalpha():
        raise ValueError(ERROR_INVALID_COUNTRY)

    return UserPreferences(
        full_name=name,
        country=code,
        investment_goals=_choice(investment_goals, defaults.investment_goals),
        risk_tolerance=_choice(risk_tolerance, defaults.risk_tolerance),
        preferred_industry=_choice(preferred_industry, defaults.preferred_industry),
    )


def _choice(value: str | None, default: str) -> str:
    if value is None:
        return default
    cleaned = value.strip()
    if not cleaned or len(cleaned) > MAX_PREFERENCE_LENGTH:
        raise ValueError(ERROR_INVALID_PREFERENCE)
    return cleaned
