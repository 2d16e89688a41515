from fastapi import APIRouter, Depends, Query
from typing import Optional
from pydantic import BaseModel, Field
from framework.dependencies import get_pagination, get_uow
from framework.repository.pagination import PaginationParameters
from framework.repository.unit_of_work import UnitOfWork
from framework.response import ResponseModel
from ..repository import PriceCriterion
from ..service import CatalogService

router = APIRouter()

class CategorySchema(BaseModel):
    name: str = Field(min_length=1, max_length=80)
    image_url: Optional[str] = Field(default=None, max_length=300)

class ProductSchema(BaseModel):
    name: str = Field(min_length=1, max_length=80)
    description: Optional[str] = Field(default=None, max_length=300)
    price: float = Field(gt=0)
    image_url: Optional[str] = Field(default=None, max_length=300)
    stock: int = Field(default=0, ge=0)
    category_id: int

def get_catalog_service(uow: UnitOfWork = Depends(get_uow)) -> CatalogService:
    """Dependency: create CatalogService."""
    return CatalogService(uow)

# --- categories ---

@router.get("/categories")
async def list_categories(
    paging: PaginationParameters = Depends(get_pagination),
    service: CatalogService = Depends(get_catalog_service)
):
    """List categories one page at a time (id order)."""
    return ResponseModel.page(await service.list_categories(paging))

@router.get("/categories/{category_id}")
async def get_category(category_id: int, service: CatalogService = Depends(get_catalog_service)):
    category = await service.get_category(category_id)
    return ResponseModel.success(data=category.model_dump())

@router.post("/categories")
async def create_category(data: CategorySchema, service: CatalogService = Depends(get_catalog_service)):
    category = await service.create_category(data.name, data.image_url)
    return ResponseModel.success(data=category.model_dump())

@router.put("/categories/{category_id}")
async def update_category(
    category_id: int,
    data: CategorySchema,
    service: CatalogService = Depends(get_catalog_service)
):
    category = await service.update_category(category_id, data.name, data.image_url)
    return ResponseModel.success(data=category.model_dump())

@router.delete("/categories/{category_id}")
async def delete_category(category_id: int, service: CatalogService = Depends(get_catalog_service)):
    category = await service.delete_category(category_id)
    return ResponseModel.success(data=category.model_dump())

# --- products ---

@router.get("/products")
async def list_products(
    category_id: Optional[int] = None,
    paging: PaginationParameters = Depends(get_pagination),
    service: CatalogService = Depends(get_catalog_service)
):
    """List products, optionally restricted to one category."""
    return ResponseModel.page(await service.list_products(paging, category_id=category_id))

@router.get("/products/price")
async def list_products_by_price(
    price: float = Query(..., ge=0),
    criterion: PriceCriterion = PriceCriterion.GREATER,
    paging: PaginationParameters = Depends(get_pagination),
    service: CatalogService = Depends(get_catalog_service)
):
    """List products priced greater than, less than or equal to price."""
    return ResponseModel.page(await service.list_products_by_price(price, criterion, paging))

@router.get("/products/{product_id}")
async def get_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    product = await service.get_product(product_id)
    return ResponseModel.success(data=product.model_dump())

@router.post("/products")
async def create_product(data: ProductSchema, service: CatalogService = Depends(get_catalog_service)):
    product = await service.create_product(data.model_dump())
    return ResponseModel.success(data=product.model_dump())

@router.put("/products/{product_id}")
async def update_product(
    product_id: int,
    data: ProductSchema,
    service: CatalogService = Depends(get_catalog_service)
):
    product = await service.update_product(product_id, data.model_dump())
    return ResponseModel.success(data=product.model_dump())

@router.delete("/products/{product_id}")
async def delete_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    await service.delete_product(product_id)
    return ResponseModel.success(data={"id": product_id})
