from __future__ import annotations


class ActivityError(ValueError):
    """Base error for activity log operations."""


class InvalidActivityTypeError(ActivityError):
    def __init__(self) -> None:
        super().__init__("Invalid activity type")


class ActivityIdentityRequiredError(ActivityError):
    def __init__(self) -> None:
        super().__init__("Not authenticated; provide anonymous_id for unauthenticated events")


class ActivityNotFoundError(ActivityError):
    def __init__(self) -> None:
        super().__init__("Not found")


class ActivityForbiddenError(ActivityError):
    def __init__(self) -> None:
        super().__init__("Forbidden")
