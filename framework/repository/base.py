"""
Repository abstract base class and generic implementation.

Reads hit the store immediately; create/update/delete only stage changes on
the shared session, which the owning UnitOfWork flushes on commit.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, List, Optional, Tuple, Type, TypeVar
from sqlalchemy import inspect
from sqlmodel import SQLModel, select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.config import settings
from framework.exceptions.errors import InvalidArgumentError, NotFoundError
from .pagination import PagedList, validate_paging

T = TypeVar("T", bound=SQLModel)


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def get(self, *predicates: Any, **filters: Any) -> Optional[T]:
        """First entity matching all predicates, or None."""

    @abstractmethod
    async def get_all(self) -> List[T]:
        """All entities, unbounded."""

    @abstractmethod
    async def get_paged(self, page_number: int, page_size: int, *predicates: Any, **filters: Any) -> PagedList[T]:
        """One page of entities plus paging metadata."""

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Stage an insert."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Stage a full-row replace keyed by identifier.

        A detached entity costs one primary-key lookup and raises
        NotFoundError before commit when no stored row matches.
        """

    @abstractmethod
    async def delete(self, entity: T) -> T:
        """Stage a removal keyed by identifier.

        A detached entity costs one primary-key lookup and raises
        NotFoundError before commit when no stored row matches.
        """


class BaseRepository(IRepository[T]):
    """Generic repository implementation with SQLModel CRUD; subclasses can add custom queries.

    Subclasses bind their entity type with a ``model`` class attribute and can
    then be built from a session alone (``TenantRepository(session)``).
    """

    model: ClassVar[Optional[Type[SQLModel]]] = None

    def __init__(self, session: AsyncSession, model: Optional[Type[T]] = None):
        """Initialize repository with session and model."""
        model = model or type(self).model
        if model is None:
            raise InvalidArgumentError(f"{type(self).__name__} needs a model class")
        self.session = session
        self.model = model
        self._mapper = inspect(model)
        self._pk_keys: Tuple[str, ...] = tuple(
            self._mapper.get_property_by_column(column).key
            for column in self._mapper.primary_key
        )

    # --- reads ---

    async def get_by_id(self, id: Any) -> Optional[T]:
        """Get entity by primary key (identity map first)."""
        return await self.session.get(self.model, id)

    async def get(self, *predicates: Any, **filters: Any) -> Optional[T]:
        """Get the first entity matching predicates (e.g. Product.price > 10) and filters (e.g. name='x')."""
        statement = self._where(select(self.model), predicates, filters)
        statement = statement.order_by(*self._order_by()).limit(1)
        result = await self.session.exec(statement)
        return result.first()

    async def get_all(self) -> List[T]:
        """Get all entities in primary-key order."""
        statement = select(self.model).order_by(*self._order_by())
        result = await self.session.exec(statement)
        return list(result.all())

    async def find_all(self, *predicates: Any, **filters: Any) -> List[T]:
        """Find entities by predicates and filters."""
        statement = self._where(select(self.model), predicates, filters)
        statement = statement.order_by(*self._order_by())
        result = await self.session.exec(statement)
        return list(result.all())

    async def count(self, *predicates: Any, **filters: Any) -> int:
        """Count entities matching predicates and filters."""
        statement = self._where(select(func.count()).select_from(self.model), predicates, filters)
        result = await self.session.exec(statement)
        return result.one()

    async def get_paged(
        self,
        page_number: int = 1,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
        *predicates: Any,
        **filters: Any,
    ) -> PagedList[T]:
        """Count matching rows, then fetch rows [(page_number-1)*page_size, page_number*page_size)."""
        validate_paging(page_number, page_size)
        total_count = await self.count(*predicates, **filters)

        statement = self._where(select(self.model), predicates, filters)
        statement = (
            statement.order_by(*self._order_by())
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )
        result = await self.session.exec(statement)
        return PagedList.create(result.all(), total_count, page_number, page_size)

    # --- staged writes ---

    async def create(self, entity: T) -> T:
        """Create entity (insert is staged until commit)."""
        self._check_entity(entity, "create")
        self.session.add(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Update entity; returns the session-tracked instance.

        A detached entity (built from request data) replaces the stored row
        with the same identifier.
        """
        self._check_entity(entity, "update")
        if entity in self.session:
            self.session.add(entity)
            return entity

        identity = self._identity(entity)
        if await self.session.get(self.model, identity) is None:
            raise NotFoundError(
                f"{self.model.__name__} {identity!r} not found",
                detail={"id": identity},
            )
        return await self.session.merge(entity)

    async def delete(self, entity: T) -> T:
        """Delete entity (removal is staged until commit)."""
        self._check_entity(entity, "delete")
        if entity in self.session:
            if inspect(entity).pending:
                # Never flushed: dropping it from the session is enough
                self.session.expunge(entity)
            else:
                await self.session.delete(entity)
            return entity

        identity = self._identity(entity)
        stored = await self.session.get(self.model, identity)
        if stored is None:
            raise NotFoundError(
                f"{self.model.__name__} {identity!r} not found",
                detail={"id": identity},
            )
        await self.session.delete(stored)
        return entity

    async def delete_by_id(self, id: Any) -> bool:
        """Delete entity by primary key; False when nothing matched."""
        entity = await self.get_by_id(id)
        if entity is None:
            return False
        await self.session.delete(entity)
        return True

    # --- helpers ---

    def _order_by(self):
        return [getattr(self.model, key) for key in self._pk_keys]

    def _where(self, statement, predicates, filters):
        for key, value in filters.items():
            if key not in self._mapper.column_attrs:
                raise InvalidArgumentError(
                    f"{self.model.__name__} has no field '{key}'",
                    detail={"field": key},
                )
            statement = statement.where(getattr(self.model, key) == value)
        if predicates:
            statement = statement.where(*predicates)
        return statement

    def _check_entity(self, entity: Any, operation: str) -> None:
        if entity is None:
            raise InvalidArgumentError(f"Cannot {operation} None as {self.model.__name__}")
        if not isinstance(entity, self.model):
            raise InvalidArgumentError(
                f"Cannot {operation} {type(entity).__name__} in {self.model.__name__} repository"
            )

    def _identity(self, entity: T) -> Any:
        values = tuple(getattr(entity, key) for key in self._pk_keys)
        if any(value is None for value in values):
            raise InvalidArgumentError(
                f"{self.model.__name__} has no identifier; stage it with create() instead"
            )
        return values[0] if len(values) == 1 else values
