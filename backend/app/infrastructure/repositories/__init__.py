from app.infrastructure.repositories.activity_repository import SqlAlchemyActivityRepository
from app.infrastructure.repositories.auth_repository import SqlAlchemyAuthRepository
from app.infrastructure.repositories.password_reset_repository import SqlAlchemyPasswordResetRepository
from app.infrastructure.repositories.watchlist_repository import SqlAlchemyWatchlistRepository

__all__ = [
    "SqlAlchemyActivityRepository",
    "SqlAlchemyAuthRepository",
    "SqlAlchemyPasswordResetRepository",
    "SqlAlchemyWatchlistRepository",
]
