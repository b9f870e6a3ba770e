from __future__ import annotations

import pytest

from app.domain.auth.preferences import normalize_preferences
from app.domain.auth.schemas import UserPreferences


def test_missing_values_fall_back_to_defaults() -> None:
    assert normalize_preferences() == UserPreferences(
        full_name="",
        country="us",
        investment_goals="Growth",
        risk_tolerance="Medium",
        preferred_industry="Technology",
    )


def test_values_are_trimmed_and_country_lowercased() -> None:
    prefs = normalize_preferences(
        full_name="  Ada Trader ",
        country=" GB ",
        investment_goals=" Income ",
        risk_tolerance="Low",
        preferred_industry="Energy",
    )

    assert prefs == UserPreferences(
        full_name="Ada Trader",
        country="gb",
        investment_goals="Income",
        risk_tolerance="Low",
        preferred_industry="Energy",
    )


@pytest.mark.parametrize("country", ["", "u", "usa", "1a"])
def test_country_must_be_two_letters(country: str) -> None:
    with pytest.raises(ValueError, match="two-letter"):
        normalize_preferences(country=country)


def test_blank_or_oversized_choice_is_rejected() -> None:
    with pytest.raises(ValueError, match="between 1 and 64"):
        normalize_preferences(preferred_industry="  ")
    with pytest.raises(ValueError, match="between 1 and 64"):
        normalize_preferences(investment_goals="x" * 65)


def test_full_name_length_is_bounded() -> None:
    assert normalize_preferences(full_name="").full_name == ""
    with pytest.raises(ValueError, match="at most 120"):
        normalize_preferences(full_name="a" * 121)
