from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import Session

from app.infrastructure.repositories import (
    SqlAlchemyActivityRepository,
    SqlAlchemyAuthRepository,
    SqlAlchemyPasswordResetRepository,
    SqlAlchemyWatchlistRepository,
)


class SqlAlchemyUnitOfWork:
    def __init__(self, *, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self.session: Session | None = None
        self.auth_repo: SqlAlchemyAuthRepository | None = None
        self.watchlist_repo: SqlAlchemyWatchlistRepository | None = None
        self.activity_repo: SqlAlchemyActivityRepository | None = None
        self.password_reset_repo: SqlAlchemyPasswordResetRepository | None = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._session_factory()
        self.auth_repo = SqlAlchemyAuthRepository(session=self.session)
        self.watchlist_repo = SqlAlchemyWatchlistRepository(session=self.session)
        self.activity_repo = SqlAlchemyActivityRepository(session=self.session)
        self.password_reset_repo = SqlAlchemyPasswordResetRepository(session=self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.session is None:
            return
        if exc_type is not None:
            self.session.rollback()
        self.session.close()
        self.session = None
        self.auth_repo = None
        self.watchlist_repo = None
        self.activity_repo = None
        self.password_reset_repo = None

    def commit(self) -> None:
        if self.session is None:
            raise RuntimeError("Unit of work has no active session")
        self.session.commit()

    def rollback(self) -> None:
        if self.session is None:
            raise RuntimeError("Unit of work has no active session")
        self.session.rollback()
