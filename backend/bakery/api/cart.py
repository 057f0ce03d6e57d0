"""
Cart API Endpoints
The authenticated customer's cart. Every response carries items, total and updatedAt.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from bakery.api.deps import get_cart_service
from bakery.core.auth import get_current_user
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.cart import AddCartItemRequest, UpdateCartItemRequest
from bakery.domain.user import User
from bakery.services.cart_service import CartService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_cart(
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    try:
        cart = service.get_cart(user.id)
        return {"success": True, **cart.to_dict()}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching cart for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching cart: {str(e)}")


@router.post("/items")
async def add_cart_item(
    body: AddCartItemRequest,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Add an item; an item already in the cart has its quantity increased"""
    try:
        cart = service.add_item(user.id, body.item)
        return {"success": True, "message": "Item added to cart", **cart.to_dict()}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error adding item to cart for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error adding item to cart: {str(e)}")


@router.put("/items/{item_id}")
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Set an item's quantity; 0 removes it"""
    try:
        cart = service.update_item_quantity(user.id, item_id, body.quantity)
        return {"success": True, "message": "Cart updated", **cart.to_dict()}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating cart item {item_id} for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating cart: {str(e)}")


@router.delete("/items/{item_id}")
async def remove_cart_item(
    item_id: str,
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    try:
        cart = service.remove_item(user.id, item_id)
        return {"success": True, "message": "Item removed from cart", **cart.to_dict()}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error removing cart item {item_id} for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error removing item from cart: {str(e)}")


@router.delete("")
async def clear_cart(
    user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    try:
        cart = service.clear(user.id)
        return {"success": True, "message": "Cart cleared", **cart.to_dict()}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error clearing cart for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error clearing cart: {str(e)}")
