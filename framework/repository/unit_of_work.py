"""
Unit of Work: manages repositories and transaction boundaries.
"""

from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Callable, Dict, Optional, Tuple, Type, TypeVar
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.exceptions.errors import InvalidArgumentError, PersistenceError, UnitOfWorkDisposedError
from .base import BaseRepository

M = TypeVar("M", bound=SQLModel)
R = TypeVar("R", bound=BaseRepository)


class UnitOfWorkState(str, Enum):
    """Lifecycle of a unit of work."""
    CREATED = "CREATED"
    STAGING = "STAGING"
    COMMITTED = "COMMITTED"
    DISPOSED = "DISPOSED"


class UnitOfWork:
    """Manages related repositories with a shared session and transaction commit/rollback.

    Use one instance per logical operation (one HTTP request) and never share
    it between concurrent callers. Nothing is written until ``commit()``.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided (e.g. UnitOfWork.from_session())."""
        if session is None:
            raise InvalidArgumentError("Session must be provided. Use UnitOfWork.from_session() or pass session explicitly.")

        self.session = session
        # Staged writes stay in memory until commit() or an explicit flush()
        self.session.sync_session.autoflush = False
        self._repositories: Dict[Tuple[type, type], BaseRepository] = {}
        self._flushed_changes = 0
        self._committed = False
        self._disposed = False

    @classmethod
    async def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Create UnitOfWork from an existing session."""
        return cls(session=session)

    @classmethod
    @asynccontextmanager
    async def scope(cls, session_factory: Callable[[], AsyncSession]) -> AsyncIterator["UnitOfWork"]:
        """Open a session from the factory and dispose the unit of work on every exit path."""
        async with cls(session=session_factory()) as uow:
            yield uow

    @property
    def state(self) -> UnitOfWorkState:
        if self._disposed:
            return UnitOfWorkState.DISPOSED
        if self.pending_changes:
            return UnitOfWorkState.STAGING
        if self._committed:
            return UnitOfWorkState.COMMITTED
        return UnitOfWorkState.CREATED

    @property
    def pending_changes(self) -> int:
        """Staged inserts, modified rows and deletes not yet committed."""
        if self._disposed:
            return 0
        session = self.session
        modified = sum(1 for instance in session.dirty if session.is_modified(instance))
        return len(session.new) + modified + len(session.deleted) + self._flushed_changes

    def get_repository(self, repo_class: Type[R], model_class: Optional[Type[M]] = None) -> R:
        """Get or create a repository instance (cached per repository class and model)."""
        self._ensure_active()
        model_class = model_class or repo_class.model
        if model_class is None:
            raise InvalidArgumentError(f"{repo_class.__name__} needs a model class")

        cache_key = (repo_class, model_class)
        if cache_key not in self._repositories:
            self._repositories[cache_key] = repo_class(self.session, model_class)
            logger.debug(f"Repository {repo_class.__name__}[{model_class.__name__}] created")
        return self._repositories[cache_key]

    def repository(self, model_class: Type[M]) -> BaseRepository[M]:
        """Generic repository for a model without a dedicated repository class."""
        return self.get_repository(BaseRepository, model_class)

    async def commit(self) -> int:
        """Commit all staged changes atomically; returns how many were written."""
        self._ensure_active()
        changes = self.pending_changes
        if not changes:
            logger.debug("Commit skipped: no pending changes")
            return 0

        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self._flushed_changes = 0
            logger.error(f"Commit failed, transaction rolled back: {str(e)}")
            raise PersistenceError("Failed to persist changes", detail={"pending_changes": changes}) from e

        self._flushed_changes = 0
        self._committed = True
        logger.info(f"Committed {changes} change(s)")
        return changes

    async def rollback(self) -> None:
        """Rollback all changes."""
        self._ensure_active()
        await self.session.rollback()
        self._flushed_changes = 0

    async def flush(self) -> None:
        """Flush session (e.g. to get auto-increment IDs); commit still decides the outcome."""
        self._ensure_active()
        changes = self.pending_changes - self._flushed_changes
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            self._flushed_changes = 0
            logger.error(f"Flush failed, transaction rolled back: {str(e)}")
            raise PersistenceError("Failed to flush changes") from e
        self._flushed_changes += changes

    async def dispose(self) -> None:
        """Release the session; the unit of work is unusable afterwards."""
        if self._disposed:
            return
        await self.session.close()
        self._repositories.clear()
        self._flushed_changes = 0
        self._disposed = True
        logger.debug("Unit of work disposed")

    def _ensure_active(self) -> None:
        if self._disposed:
            raise UnitOfWorkDisposedError("Unit of work has been disposed")

    async def __aenter__(self):
        self._ensure_active()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._disposed:
            return
        try:
            if exc_type is not None:
                await self.rollback()
            elif self.pending_changes:
                logger.warning(f"Discarding {self.pending_changes} uncommitted change(s)")
                await self.rollback()
        finally:
            await self.dispose()
