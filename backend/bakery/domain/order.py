"""
Order Domain Models

Represents customer orders and their line items.

Author: Dreamy Delights
Date: 2025-06-14
"""
from pydantic import AliasChoices, Field, ConfigDict, field_validator
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from decimal import Decimal

from bakery.domain.base import DomainModel, RequestSchema


ORDER_STATUSES = (
    "pending",
    "confirmed",
    "processing",
    "preparing",
    "ready",
    "delivered",
    "completed",
    "cancelled",
)


class OrderItem(DomainModel):
    """
    Order line item

    Accepts the cart item shape (``id``) as well as ``productId``.
    """
    product_id: str = Field(
        ...,
        validation_alias=AliasChoices("productId", "product_id", "id"),
    )
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    customizations: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('product_id', mode='before')
    @classmethod
    def id_as_string(cls, value: Union[str, int]) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class ShippingAddress(DomainModel):
    name: Optional[str] = None
    address: str = Field(..., min_length=1)
    city: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None


class OrderTotals(DomainModel):
    subtotal: Decimal
    tax_amount: Decimal
    delivery_fee: Decimal
    total_amount: Decimal


class Order(DomainModel):
    """
    Order domain model

    Fields:
        id: Internal order ID
        user_id: Customer who placed the order
        status: One of ORDER_STATUSES
        items: Line items
        subtotal / tax_amount / delivery_fee / total_amount: Totals computed
            server side when the order was placed
        shipping_address: Delivery address
        customer_info: Free-form contact data sent by the checkout form
        updated_by: Admin username of the last status change
    """
    id: int = Field(..., description="Internal order ID")
    user_id: Optional[int] = None
    status: str = Field("pending")
    items: List[OrderItem] = Field(default_factory=list)

    subtotal: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    delivery_fee: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")

    shipping_address: Optional[ShippingAddress] = None
    contact_phone: Optional[str] = None
    additional_notes: Optional[str] = None
    customer_info: Dict[str, Any] = Field(default_factory=dict)

    # Joined from users for admin listings
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None

    updated_by: Optional[str] = None
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['itemCount'] = self.item_count
        return data


class OrderCreate(RequestSchema):
    """Checkout request body"""
    items: List[OrderItem] = Field(..., min_length=1)
    shipping_address: ShippingAddress
    contact_phone: Optional[str] = None
    additional_notes: Optional[str] = None
    customer_info: Optional[Dict[str, Any]] = None
    # Client-side total, kept only for logging; the server recomputes
    total_amount: Optional[Decimal] = None


class OrderStatusUpdate(RequestSchema):
    model_config = ConfigDict(str_strip_whitespace=True)

    status: str

    @field_validator('status')
    @classmethod
    def known_status(cls, value: str) -> str:
        value = value.lower()
        if value not in ORDER_STATUSES:
            raise ValueError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")
        return value
