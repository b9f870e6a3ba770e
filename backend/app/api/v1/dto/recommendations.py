from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RecommendationOut(BaseModel):
    symbol: str
    score: float = Field(ge=0.0, le=1.0)
    reasons: list[str]
    metadata: dict[str, Any] | None = None


class RecommendationsOut(BaseModel):
    data: list[RecommendationOut]
