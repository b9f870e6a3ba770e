from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityCreate(BaseModel):
    type: str = Field(default="", max_length=32)
    symbol: str | None = Field(default=None, max_length=32)
    meta: dict[str, Any] | None = None
    anonymous_id: str | None = Field(default=None, max_length=128)


class ActivityCreatedOut(BaseModel):
    success: bool = True
    id: int


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    symbol: str | None = None
    meta: dict[str, Any] | None = None
    user_id: int | None = None
    anonymous_id: str | None = None
    created_at: datetime


class ActivityListOut(BaseModel):
    data: list[ActivityOut]


class ActivityDeletedOut(BaseModel):
    success: bool = True
