from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class WatchlistItemCreate(BaseModel):
    symbol: str = Field(min_length=1, max_length=48)
    company: str = Field(default="", max_length=255)
    tv_symbol: str | None = Field(default=None, max_length=48)


class WatchlistItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    company: str
    exchange: str
    tv_symbol: str | None = None
    added_at: datetime | None = None


class WatchlistMutationOut(BaseModel):
    success: bool
    message: str


class WatchlistMembershipOut(BaseModel):
    symbol: str
    in_watchlist: bool
