"""
Admin Orders API Endpoints
Order list and status changes for admins holding manage_orders
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bakery.api.deps import get_order_service
from bakery.core.admin_auth import require_permission
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.admin import AdminPrincipal
from bakery.domain.order import ORDER_STATUSES, OrderStatusUpdate
from bakery.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()

require_manage_orders = require_permission("manage_orders")


@router.get("/orders")
async def list_orders(
    status: Optional[str] = Query(None, description="Filter by order status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    admin: AdminPrincipal = Depends(require_manage_orders),
    service: OrderService = Depends(get_order_service)
):
    """All orders, newest first"""
    try:
        if status and status not in ORDER_STATUSES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}"
            )

        orders, total = service.list_orders(status=status, limit=limit, offset=offset)

        return {
            "success": True,
            "data": [order.to_dict() for order in orders],
            "total": total,
            "count": len(orders)
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching orders: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.put("/orders/{order_id}/status")
async def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    admin: AdminPrincipal = Depends(require_manage_orders),
    service: OrderService = Depends(get_order_service)
):
    try:
        order = service.update_status(order_id, body.status, updated_by=admin.username)

        return {
            "success": True,
            "message": f"Order status updated to {order.status}",
            "data": order.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating order {order_id} status: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating order status: {str(e)}")
