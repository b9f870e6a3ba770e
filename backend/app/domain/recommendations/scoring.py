from __future__ import annotations

from collections.abc import Collection, Sequence
from types import MappingProxyType

from app.domain.recommendations.schemas import Recommendation

POPULAR_POOL_SIZE = 100
PERSONAL_POOL_SIZE = 200
POPULARITY_WEIGHT = 0.8
AFFINITY_BOOST = 0.15

REASON_POPULAR = "Popular among users"
REASON_WATCHLIST_AFFINITY = "Related to your watchlist"

# Annotation only; never feeds the score.
RECENT_ACTIVITY_METADATA = MappingProxyType({"recent_activity": True})


def popularity_score_from_rank(index: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return (total - index) / total


def clamp_score(value: float) -> float:
    return max(0.0, min(1.0, value))


def score_popular(table: Sequence[str]) -> list[Recommendation]:
    total = len(table)
    return [
        Recommendation(
            symbol=symbol,
            score=clamp_score(popularity_score_from_rank(index, total)),
            reasons=(REASON_POPULAR,),
        )
        for index, symbol in enumerate(table[:POPULAR_POOL_SIZE])
    ]


def score_personalized(
    table: Sequence[str],
    *,
    watchlist: Collection[str],
    recent_symbols: Collection[str] = (),
) -> list[Recommendation]:
    """Rank popular symbols the caller does not already watch.

    The affinity boost fires when a candidate shares its first character with
    any watchlisted symbol, a deliberately coarse similarity signal. Symbols
    from ``recent_symbols`` are tagged in ``metadata`` and ranked like any
    other candidate.
    """
    watch_set = {symbol.upper() for symbol in watchlist if symbol}
    first_chars = {symbol[0] for symbol in watch_set}
    recent_set = {symbol.upper() for symbol in recent_symbols if symbol}
    total = len(table)

    candidates = [symbol for symbol in table if symbol not in watch_set][:PERSONAL_POOL_SIZE]

    scored: list[Recommendation] = []
    for index, symbol in enumerate(candidates):
        affinity = AFFINITY_BOOST if symbol[0] in first_chars else 0.0
        reasons = (REASON_POPULAR, REASON_WATCHLIST_AFFINITY) if affinity else (REASON_POPULAR,)
        score = popularity_score_from_rank(index, total) * POPULARITY_WEIGHT + affinity
        scored.append(
            Recommendation(
                symbol=symbol,
                score=clamp_score(score),
                reasons=reasons,
                metadata=RECENT_ACTIVITY_METADATA if symbol in recent_set else None,
            )
        )

    # sorted() is stable, so equal scores keep popularity order.
    return sorted(scored, key=lambda item: item.score, reverse=True)
