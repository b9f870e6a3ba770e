from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_activity_service, get_current_user, get_optional_user
from app.api.errors import raise_api_error
from app.api.v1.dto.activity import (
    ActivityCreate,
    ActivityCreatedOut,
    ActivityDeletedOut,
    ActivityListOut,
)
from app.api.v1.dto.mappers import to_activity_out
from app.application.activity.service import DEFAULT_LIST_LIMIT, ActivityApplicationService
from app.domain.activity.errors import (
    ActivityForbiddenError,
    ActivityIdentityRequiredError,
    ActivityNotFoundError,
    InvalidActivityTypeError,
)
from app.domain.auth.schemas import User

router = APIRouter()


@router.post("", response_model=ActivityCreatedOut, status_code=status.HTTP_201_CREATED)
def record_activity(
    payload: ActivityCreate,
    identity: User | None = Depends(get_optional_user),
    service: ActivityApplicationService = Depends(get_activity_service),
) -> ActivityCreatedOut:
    try:
        record = service.record(
            type=payload.type,
            user=identity,
            anonymous_id=payload.anonymous_id,
            symbol=payload.symbol,
            meta=payload.meta,
        )
    except InvalidActivityTypeError as exc:
        raise_api_error(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="INVALID_ACTIVITY_TYPE",
            message=str(exc),
        )
    except ActivityIdentityRequiredError as exc:
        raise_api_error(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="NOT_AUTHENTICATED",
            message=str(exc),
        )
    return ActivityCreatedOut(success=True, id=record.id)


@router.get("", response_model=ActivityListOut)
def list_activity(
    limit: int = Query(default=DEFAULT_LIST_LIMIT),
    current_user: User = Depends(get_current_user),
    service: ActivityApplicationService = Depends(get_activity_service),
) -> ActivityListOut:
    records = service.list_recent(user=current_user, limit=limit)
    return ActivityListOut(data=[to_activity_out(record) for record in records])


@router.delete("/{activity_id}", response_model=ActivityDeletedOut)
def delete_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    service: ActivityApplicationService = Depends(get_activity_service),
) -> ActivityDeletedOut:
    try:
        service.delete(user=current_user, activity_id=activity_id)
    except ActivityNotFoundError as exc:
        raise_api_error(status_code=status.HTTP_404_NOT_FOUND, code="ACTIVITY_NOT_FOUND", message=str(exc))
    except ActivityForbiddenError as exc:
        raise_api_error(status_code=status.HTTP_403_FORBIDDEN, code="ACTIVITY_FORBIDDEN", message=str(exc))
    return ActivityDeletedOut(success=True)
