"""Catalog module repository implementations."""

from enum import Enum
from typing import Optional
from framework.repository.base import BaseRepository
from framework.repository.pagination import PagedList
from .models import Category, Product


class PriceCriterion(str, Enum):
    """How a product price is compared with the requested price."""
    GREATER = "greater"
    LESS = "less"
    EQUAL = "equal"


class CategoryRepository(BaseRepository[Category]):
    """Category repository."""

    model = Category

    async def get_by_name(self, name: str) -> Optional[Category]:
        """Find category by name."""
        return await self.get(name=name)


class ProductRepository(BaseRepository[Product]):
    """Product repository."""

    model = Product

    async def get_paged_by_category(
        self,
        category_id: int,
        page_number: int,
        page_size: int
    ) -> PagedList[Product]:
        """Page through the products of one category."""
        return await self.get_paged(page_number, page_size, category_id=category_id)

    async def get_paged_by_price(
        self,
        price: float,
        criterion: PriceCriterion,
        page_number: int,
        page_size: int
    ) -> PagedList[Product]:
        """Page through products priced above, below or exactly at price."""
        if criterion == PriceCriterion.GREATER:
            predicate = Product.price > price
        elif criterion == PriceCriterion.LESS:
            predicate = Product.price < price
        else:
            predicate = Product.price == price
        return await self.get_paged(page_number, page_size, predicate)

    async def count_by_category(self, category_id: int) -> int:
        """Count products in a category."""
        return await self.count(category_id=category_id)
