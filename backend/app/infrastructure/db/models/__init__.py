from app.infrastructure.db.models.activity import UserActivityModel
from app.infrastructure.db.models.password_reset import PasswordResetTokenModel
from app.infrastructure.db.models.user import UserModel
from app.infrastructure.db.models.watchlist import WatchlistItemModel

__all__ = [
    "PasswordResetTokenModel",
    "UserActivityModel",
    "UserModel",
    "WatchlistItemModel",
]
