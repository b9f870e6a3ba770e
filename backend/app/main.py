from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import install_api_error_handlers
from app.api.v1.router import api_router
from app.application.container import shutdown_clients
from app.core.config import settings
from app.core.logging import configure_logging
from app.infrastructure.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info("Stock watchlist API started", extra={"env": settings.app_env})
    yield
    shutdown_clients()


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    application = FastAPI(title="Stock Watchlist API", version="0.1.0", lifespan=lifespan)
    install_api_error_handlers(application)

    application.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router, prefix="/api/v1")

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
