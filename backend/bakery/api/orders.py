"""
Orders API Endpoints
Checkout and the customer's own order history

Author: Dreamy Delights
Date: 2025-06-18
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from bakery.api.deps import get_order_service
from bakery.core.auth import get_current_user
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.order import OrderCreate
from bakery.domain.user import User
from bakery.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderCreate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Place an order

    Totals are computed on the server:
    - subtotal = sum of price x quantity
    - tax = subtotal x TAX_PERCENTAGE
    - total = subtotal + tax + DELIVERY_FEE
    """
    try:
        order = service.place_order(user.id, body)

        return {
            "success": True,
            "orderId": order.id,
            "message": "Order created successfully",
            "totals": {
                "subtotal": float(order.subtotal),
                "tax": float(order.tax_amount),
                "deliveryFee": float(order.delivery_fee),
                "total": float(order.total_amount),
            }
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating order for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating order: {str(e)}")


@router.get("/user")
async def get_user_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """The caller's orders, newest first"""
    try:
        orders = service.list_user_orders(user.id)

        return {
            "success": True,
            "data": [order.to_dict() for order in orders],
            "count": len(orders)
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching orders for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")
