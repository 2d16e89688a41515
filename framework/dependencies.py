"""
FastAPI dependencies: request-scoped session and unit of work, paging input.
"""

from typing import AsyncGenerator
from fastapi import Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.repository.pagination import PaginationParameters
from framework.repository.unit_of_work import UnitOfWork


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    manager = DatabaseManager.get_instance()
    async for session in manager.sql.get_session():
        yield session


async def get_uow(
    db: AsyncSession = Depends(get_db)
) -> AsyncGenerator[UnitOfWork, None]:
    """Dependency: UnitOfWork scoped to the request, disposed when the request ends."""
    async with UnitOfWork(session=db) as uow:
        yield uow


def get_pagination(
    page_number: int = Query(1, description="1-based page number"),
    page_size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        description=f"Items per page (capped at {settings.MAX_PAGE_SIZE})",
    ),
) -> PaginationParameters:
    """Dependency: paging query parameters."""
    return PaginationParameters(page_number=page_number, page_size=page_size)
