"""
Repository pattern: data access abstraction, decouples service layer from database session.
"""

from .base import BaseRepository, IRepository
from .pagination import PagedList, PaginationParameters
from .unit_of_work import UnitOfWork, UnitOfWorkState

__all__ = [
    "BaseRepository",
    "IRepository",
    "PagedList",
    "PaginationParameters",
    "UnitOfWork",
    "UnitOfWorkState",
]
