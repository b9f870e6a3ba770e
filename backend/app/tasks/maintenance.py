from __future__ import annotations

from app.application.container import build_activity_service, build_auth_service
from app.core.celery_app import celery_app
from app.core.config import settings


@celery_app.task(name="app.tasks.maintenance.purge_expired_activity")
def purge_expired_activity() -> dict[str, int]:
    service = build_activity_service()
    deleted = service.purge_expired(retention_days=settings.activity_retention_days)
    return {"retention_days": settings.activity_retention_days, "deleted": deleted}


@celery_app.task(name="app.tasks.maintenance.purge_expired_password_reset_tokens")
def purge_expired_password_reset_tokens() -> dict[str, int]:
    service = build_auth_service()
    return {"deleted": service.purge_expired_reset_tokens()}
