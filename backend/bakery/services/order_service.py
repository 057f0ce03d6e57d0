"""
Order Service
Checkout and order status management

Totals are always computed here from the submitted line items and the
configured tax rate and delivery fee. A client-supplied total is only logged.

Author: Dreamy Delights
Date: 2025-06-18
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from bakery.core.config import settings
from bakery.core.errors import NotFoundError
from bakery.domain.order import Order, OrderCreate, OrderItem, OrderTotals
from bakery.repositories.order_repository import OrderRepository

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def calculate_totals(
    items: List[OrderItem],
    tax_rate: Optional[Decimal] = None,
    delivery_fee: Optional[Decimal] = None
) -> OrderTotals:
    """
    subtotal = sum(price * quantity)
    tax = subtotal * tax_rate
    total = subtotal + tax + delivery_fee

    Each figure is rounded to cents.
    """
    tax_rate = settings.TAX_PERCENTAGE if tax_rate is None else Decimal(tax_rate)
    delivery_fee = settings.DELIVERY_FEE if delivery_fee is None else Decimal(delivery_fee)

    subtotal = sum((item.line_total for item in items), Decimal("0")).quantize(CENTS, ROUND_HALF_UP)
    tax_amount = (subtotal * tax_rate).quantize(CENTS, ROUND_HALF_UP)
    delivery_fee = delivery_fee.quantize(CENTS, ROUND_HALF_UP)
    total_amount = subtotal + tax_amount + delivery_fee

    return OrderTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        delivery_fee=delivery_fee,
        total_amount=total_amount,
    )


class OrderService:

    def __init__(self, repo: Optional[OrderRepository] = None):
        self.repo = repo or OrderRepository()

    def place_order(self, user_id: int, request: OrderCreate) -> Order:
        """Create a pending order for the user with server-side totals"""
        totals = calculate_totals(request.items)

        if request.total_amount is not None and Decimal(request.total_amount) != totals.total_amount:
            logger.info(
                f"Client total {request.total_amount} for user {user_id} differs from "
                f"computed total {totals.total_amount}; using computed total"
            )

        order = self.repo.create(
            user_id=user_id,
            items=request.items,
            totals=totals,
            shipping_address=request.shipping_address,
            contact_phone=request.contact_phone,
            additional_notes=request.additional_notes,
            customer_info=request.customer_info,
        )

        logger.info(f"Order {order.id} created for user {user_id}: total {totals.total_amount}")
        return order

    def list_user_orders(self, user_id: int) -> List[Order]:
        return self.repo.find_by_user(user_id)

    def list_orders(self, status: Optional[str] = None, limit: int = 100, offset: int = 0) -> Tuple[List[Order], int]:
        return self.repo.find_all(status=status, limit=limit, offset=offset)

    def update_status(self, order_id: int, status: str, updated_by: str) -> Order:
        """
        Raises:
            NotFoundError: unknown order
        """
        order = self.repo.update_status(order_id, status, updated_by)
        if order is None:
            raise NotFoundError("Order not found")

        logger.info(f"Order {order_id} status set to {status} by {updated_by}")
        return order
