from typing import Optional
from sqlmodel import SQLModel, Field

class Category(SQLModel, table=True):
    __tablename__ = "categories"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=80)
    image_url: Optional[str] = Field(default=None, max_length=300)

class Product(SQLModel, table=True):
    __tablename__ = "products"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=80)
    description: Optional[str] = Field(default=None, max_length=300)
    price: float = Field(description="Unit price")
    image_url: Optional[str] = Field(default=None, max_length=300)
    stock: int = Field(default=0, description="Units in stock")
    category_id: int = Field(foreign_key="categories.id", index=True)
