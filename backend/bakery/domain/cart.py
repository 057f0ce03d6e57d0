"""
Cart Domain Model

A cart belongs to one user and holds a list of line items. The line items are
stored together on the cart row as JSON.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from bakery.domain.base import DomainModel, RequestSchema


class CartItem(DomainModel):
    """One product line in a cart; ``id`` is the product id"""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: Optional[str] = None
    customizations: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, value: Union[str, int]) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart(DomainModel):
    user_id: int
    items: List[CartItem] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    def find_item(self, item_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": float(self.total),
            "updatedAt": self.updated_at,
        }


class AddCartItemRequest(RequestSchema):
    item: CartItem


class UpdateCartItemRequest(RequestSchema):
    quantity: int = Field(..., ge=0)
