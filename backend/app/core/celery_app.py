from __future__ import annotations

from celery import Celery

from app.core.config import settings

celery_app = Celery(
    "stock_watchlist",
    broker=settings.redis_url,
    include=["app.tasks.maintenance"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    beat_schedule={
        "purge-expired-activity-hourly": {
            "task": "app.tasks.maintenance.purge_expired_activity",
            "schedule": 60 * 60,
        },
        "purge-expired-password-reset-tokens-hourly": {
            "task": "app.tasks.maintenance.purge_expired_password_reset_tokens",
            "schedule": 60 * 60,
        },
    },
)
