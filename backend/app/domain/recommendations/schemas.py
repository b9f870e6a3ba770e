from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Recommendation:
    symbol: str
    score: float
    reasons: tuple[str, ...] = ()
    metadata: Mapping[str, Any] | None = None
