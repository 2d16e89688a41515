from typing import Any, Dict, Optional
from loguru import logger
from framework.exceptions.errors import BusinessException, NotFoundError
from framework.repository.pagination import PagedList, PaginationParameters
from framework.repository.unit_of_work import UnitOfWork
from .models import Category, Product
from .repository import CategoryRepository, PriceCriterion, ProductRepository

class CatalogService:
    def __init__(self, uow: UnitOfWork):
        """Initialize Catalog Service with UnitOfWork."""
        self.uow = uow

    @property
    def categories(self) -> CategoryRepository:
        return self.uow.get_repository(CategoryRepository)

    @property
    def products(self) -> ProductRepository:
        return self.uow.get_repository(ProductRepository)

    # --- categories ---

    async def list_categories(self, paging: PaginationParameters) -> PagedList[Category]:
        return await self.categories.get_paged(paging.page_number, paging.page_size)

    async def get_category(self, category_id: int) -> Category:
        category = await self.categories.get(Category.id == category_id)
        if category is None:
            raise NotFoundError(f"Category {category_id} not found")
        return category

    async def create_category(self, name: str, image_url: Optional[str] = None) -> Category:
        """Register a new category; names are unique."""
        if await self.categories.get_by_name(name):
            raise BusinessException("Category name already registered", status_code=409, code=409)

        category = await self.categories.create(Category(name=name, image_url=image_url))
        await self.uow.commit()
        logger.info(f"Category {name} created with id {category.id}")
        return category

    async def update_category(self, category_id: int, name: str, image_url: Optional[str] = None) -> Category:
        """Replace a category's data."""
        existing = await self.categories.get_by_name(name)
        if existing and existing.id != category_id:
            raise BusinessException("Category name already registered", status_code=409, code=409)

        category = await self.categories.update(Category(id=category_id, name=name, image_url=image_url))
        await self.uow.commit()
        logger.info(f"Category {category_id} updated")
        return category

    async def delete_category(self, category_id: int) -> Category:
        """Delete an empty category."""
        category = await self.get_category(category_id)
        if await self.products.count_by_category(category_id):
            raise BusinessException("Category still has products", status_code=409, code=409)

        await self.categories.delete(category)
        await self.uow.commit()
        logger.info(f"Category {category_id} deleted")
        return category

    # --- products ---

    async def list_products(
        self,
        paging: PaginationParameters,
        category_id: Optional[int] = None
    ) -> PagedList[Product]:
        if category_id is None:
            return await self.products.get_paged(paging.page_number, paging.page_size)
        await self.get_category(category_id)
        return await self.products.get_paged_by_category(category_id, paging.page_number, paging.page_size)

    async def list_products_by_price(
        self,
        price: float,
        criterion: PriceCriterion,
        paging: PaginationParameters
    ) -> PagedList[Product]:
        return await self.products.get_paged_by_price(price, criterion, paging.page_number, paging.page_size)

    async def get_product(self, product_id: int) -> Product:
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    async def create_product(self, data: Dict[str, Any]) -> Product:
        """Register a product under an existing category."""
        await self.get_category(data["category_id"])
        product = await self.products.create(Product(**data))
        await self.uow.commit()
        logger.info(f"Product {product.name} created with id {product.id}")
        return product

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Product:
        """Replace a product's data."""
        await self.get_category(data["category_id"])
        product = await self.products.update(Product(id=product_id, **data))
        await self.uow.commit()
        logger.info(f"Product {product_id} updated")
        return product

    async def delete_product(self, product_id: int) -> None:
        if not await self.products.delete_by_id(product_id):
            raise NotFoundError(f"Product {product_id} not found")
        await self.uow.commit()
        logger.info(f"Product {product_id} deleted")
