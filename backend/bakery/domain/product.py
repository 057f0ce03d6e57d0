"""
Product Domain Model

Represents a bakery product in the catalog.

Author: Dreamy Delights
Date: 2025-06-14
"""
from pydantic import Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from bakery.domain.base import DomainModel, RequestSchema


class Product(DomainModel):
    """
    Product domain model - represents a product in the catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name shown on the storefront
        description: Long description
        price: Unit price
        category: Catalog category (cakes, cupcakes, cookies, ...)
        image_url: Public URL of the product image
        featured: Shown in the storefront's featured section
        available: Can currently be ordered
        stock: Units on hand
        active: Visible in the public catalog
        created_by / updated_by: Admin username of the last writer
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., ge=0, description="Unit price")
    category: Optional[str] = Field(None, description="Product category")
    image_url: Optional[str] = Field(None, description="Public image URL")
    # Object storage key of an uploaded image
    image_path: Optional[str] = Field(None, exclude=True)

    featured: bool = Field(False, description="Featured on the storefront")
    available: bool = Field(True, description="Available for ordering")
    stock: int = Field(0, ge=0, description="Units on hand")
    active: bool = Field(True, description="Visible in the public catalog")

    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock <= 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['isOutOfStock'] = self.is_out_of_stock
        return data


class ProductCreate(RequestSchema):
    """Schema for creating a new product"""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    featured: bool = False
    available: bool = True
    stock: int = Field(0, ge=0)
    active: bool = True


class ProductUpdate(RequestSchema):
    """
    Schema for updating an existing product

    Blank values mean "leave unchanged" for every field except description,
    which may be cleared.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    featured: Optional[bool] = None
    available: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None

    @field_validator('name', 'price', 'category', 'image_url', 'featured',
                     'available', 'stock', 'active', mode='before')
    @classmethod
    def blank_means_unchanged(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def changes(self) -> dict:
        """Fields that were actually provided, keyed by column name"""
        return self.model_dump(exclude_none=True)
