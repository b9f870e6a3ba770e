from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from app.domain.recommendations.popularity import POPULAR_STOCK_SYMBOLS
from app.domain.recommendations.scoring import (
    REASON_POPULAR,
    REASON_WATCHLIST_AFFINITY,
    clamp_score,
    popularity_score_from_rank,
    score_personalized,
    score_popular,
)


def test_popularity_table_has_unique_uppercase_symbols() -> None:
    assert len(POPULAR_STOCK_SYMBOLS) == len(set(POPULAR_STOCK_SYMBOLS))
    assert all(symbol == symbol.upper() for symbol in POPULAR_STOCK_SYMBOLS)
    assert POPULAR_STOCK_SYMBOLS[:3] == ("AAPL", "MSFT", "GOOGL")


def test_popularity_score_from_rank_decreases_with_rank() -> None:
    assert popularity_score_from_rank(0, 4) == 1.0
    assert popularity_score_from_rank(1, 4) == 0.75
    assert popularity_score_from_rank(0, 0) == 0.0


def test_clamp_score_bounds() -> None:
    assert clamp_score(1.2) == 1.0
    assert clamp_score(-0.1) == 0.0
    assert clamp_score(0.42) == 0.42


def test_score_popular_uses_full_table_length_as_denominator() -> None:
    table = [f"S{index:03d}" for index in range(150)]

    result = score_popular(table)

    assert len(result) == 100
    assert result[0].score == pytest.approx(1.0)
    assert result[99].score == pytest.approx(51 / 150)
    assert all(item.reasons == (REASON_POPULAR,) for item in result)


def test_score_personalized_excludes_watchlist_and_applies_affinity() -> None:
    table = ["AAPL", "MSFT", "AMZN", "NVDA"]

    result = score_personalized(table, watchlist=["aapl"])

    symbols = [item.symbol for item in result]
    assert "AAPL" not in symbols
    assert symbols == ["MSFT", "AMZN", "NVDA"]

    amzn = result[1]
    # candidate index 1 of a 4-entry table
    assert amzn.score == pytest.approx(0.75 * 0.8 + 0.15)
    assert amzn.reasons == (REASON_POPULAR, REASON_WATCHLIST_AFFINITY)
    assert result[0].reasons == (REASON_POPULAR,)


def test_score_personalized_recent_activity_leaves_scores_unchanged() -> None:
    table = ("AAPL", "MSFT", "GOOGL", "NFLX")

    with_activity = score_personalized(table, watchlist=["AAPL"], recent_symbols=["nflx"])
    without_activity = score_personalized(table, watchlist=["AAPL"])

    nflx = next(item for item in with_activity if item.symbol == "NFLX")
    # candidate index 2 of a 4-entry table, no affinity
    assert nflx.score == pytest.approx(0.4)
    assert nflx.reasons == (REASON_POPULAR,)
    assert nflx.metadata == {"recent_activity": True}
    assert [(item.symbol, item.score) for item in with_activity] == [
        (item.symbol, item.score) for item in without_activity
    ]


def test_score_personalized_is_sorted_descending() -> None:
    table = ["AAA", "BBB", "CCC", "DDD"]

    result = score_personalized(table, watchlist=["BZZ"])

    assert [item.symbol for item in result] == ["AAA", "BBB", "CCC", "DDD"]
    assert [item.score for item in result] == pytest.approx([0.8, 0.75, 0.4, 0.2])


def test_score_personalized_keeps_popularity_order_for_equal_scores() -> None:
    # BBB at index 0 scores 0.8; AAA at index 3 scores 13/16 * 0.8 + 0.15 == 0.8
    table = ["BBB", "CCC", "DDD", "AAA"] + [f"Z{index:02d}" for index in range(12)]

    result = score_personalized(table, watchlist=["AMD"])

    assert [item.symbol for item in result[:2]] == ["BBB", "AAA"]
    assert result[0].score == result[1].score


def test_score_personalized_affinity_stays_within_bounds() -> None:
    result = score_personalized(["AAPL", "ABC"], watchlist=["AMD"])

    assert result[0].symbol == "AAPL"
    assert result[0].score == pytest.approx(0.95)
    assert all(0.0 <= item.score <= 1.0 for item in result)


def test_recommendations_are_frozen() -> None:
    item = score_popular(["AAPL"])[0]

    with pytest.raises(FrozenInstanceError):
        item.score = 0.1  # type: ignore[misc]
    assert isinstance(item.reasons, tuple)
