from fastapi import APIRouter

from app.api.v1.endpoints.activity import router as activity_router
from app.api.v1.endpoints.auth import router as auth_router
from app.api.v1.endpoints.health import router as health_router
from app.api.v1.endpoints.recommendations import router as recommendations_router
from app.api.v1.endpoints.watchlist import router as watchlist_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(watchlist_router, prefix="/watchlist", tags=["watchlist"])
api_router.include_router(recommendations_router, prefix="/recommendations", tags=["recommendations"])
api_router.include_router(activity_router, prefix="/activity", tags=["activity"])
