"""
Paged query results and paging parameters.
"""

import math
from typing import Any, Callable, Dict, Generic, Iterable, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from framework.config import settings
from framework.exceptions.errors import InvalidArgumentError

T = TypeVar("T")
U = TypeVar("U")


def validate_paging(page_number: int, page_size: int) -> None:
    """Raise InvalidArgumentError unless page_number >= 1 and page_size >= 1."""
    if page_number < 1:
        raise InvalidArgumentError(
            f"page_number must be >= 1, got {page_number}",
            detail={"page_number": page_number},
        )
    if page_size < 1:
        raise InvalidArgumentError(
            f"page_size must be >= 1, got {page_size}",
            detail={"page_size": page_size},
        )


class PaginationParameters(BaseModel):
    """Paging query input; page_size is clamped to settings.MAX_PAGE_SIZE."""

    page_number: int = 1
    page_size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)

    @field_validator("page_size")
    @classmethod
    def cap_page_size(cls, value: int) -> int:
        return min(value, settings.MAX_PAGE_SIZE)

    @model_validator(mode="after")
    def check_bounds(self) -> "PaginationParameters":
        validate_paging(self.page_number, self.page_size)
        return self


class PagedList(BaseModel, Generic[T]):
    """
    One window of an ordered result set plus its position in the whole.

    Immutable after construction. A page_number past total_pages yields an
    empty page, not an error.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    items: Tuple[T, ...] = ()
    total_count: int
    page_number: int
    page_size: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @computed_field(alias="hasPrevious")
    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @computed_field(alias="hasNext")
    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    @model_validator(mode="after")
    def check_window(self) -> "PagedList[T]":
        validate_paging(self.page_number, self.page_size)
        if self.total_count < 0:
            raise InvalidArgumentError(f"total_count must be >= 0, got {self.total_count}")
        if len(self.items) > self.page_size:
            raise InvalidArgumentError(
                f"page holds {len(self.items)} items but page_size is {self.page_size}"
            )
        return self

    @classmethod
    def create(
        cls, items: Iterable[T], total_count: int, page_number: int, page_size: int
    ) -> "PagedList[T]":
        """Wrap a pre-sliced page and a separately computed total."""
        return cls(
            items=tuple(items),
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
        )

    @classmethod
    def from_sequence(cls, source: Iterable[T], page_number: int, page_size: int) -> "PagedList[T]":
        """Slice a full ordered sequence into the requested page."""
        validate_paging(page_number, page_size)
        rows = list(source)
        start = (page_number - 1) * page_size
        return cls.create(rows[start:start + page_size], len(rows), page_number, page_size)

    def map_items(self, func: Callable[[T], U]) -> "PagedList[U]":
        """Same paging metadata, items transformed by func."""
        return PagedList.create(
            (func(item) for item in self.items),
            self.total_count,
            self.page_number,
            self.page_size,
        )

    def to_response(self) -> Dict[str, Any]:
        """External shape: {items, totalCount, pageNumber, pageSize, totalPages, hasPrevious, hasNext}."""
        payload = self.model_dump(by_alias=True)
        payload["items"] = list(payload["items"])
        return payload
