from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ActivityType(str, Enum):
    VIEW = "view"
    SEARCH = "search"
    CLICK = "click"
    IMPRESSION = "impression"


ACTIVITY_TYPES = frozenset(item.value for item in ActivityType)


@dataclass(slots=True)
class ActivityRecord:
    id: int
    type: str
    created_at: datetime
    user_id: int | None = None
    anonymous_id: str | None = None
    symbol: str | None = None
    meta: dict[str, Any] | None = None
