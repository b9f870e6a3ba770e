from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from app.infrastructure.db.base import Base
from app.infrastructure.db.session import engine as default_engine

# Registers every model on Base.metadata.
from app.infrastructure.db import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None) -> None:
    target = engine or default_engine
    Base.metadata.create_all(bind=target)
    logger.info("Database schema ensured", extra={"tables": sorted(Base.metadata.tables)})
