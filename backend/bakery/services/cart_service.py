"""
Cart Service
Per-user shopping cart rules: merging repeated items, quantity changes, totals
"""
import logging
from typing import Optional

from bakery.core.errors import NotFoundError
from bakery.domain.cart import Cart, CartItem
from bakery.repositories.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class CartService:
    """
    Cart operations for one authenticated user at a time.

    Adding an item whose id is already in the cart increases that line's
    quantity; setting a quantity of 0 removes the line.
    """

    def __init__(self, repo: Optional[CartRepository] = None):
        self.repo = repo or CartRepository()

    def get_cart(self, user_id: int) -> Cart:
        """The user's cart; an empty one when none has been stored yet"""
        return self.repo.find_by_user(user_id) or Cart(user_id=user_id)

    def add_item(self, user_id: int, item: CartItem) -> Cart:
        cart = self.get_cart(user_id)

        existing = cart.find_item(item.id)
        if existing:
            existing.quantity += item.quantity
        else:
            cart.items.append(item)

        logger.debug(f"Cart of user {user_id}: added {item.quantity} x {item.id}")
        return self.repo.save(cart)

    def update_item_quantity(self, user_id: int, item_id: str, quantity: int) -> Cart:
        """
        Raises:
            NotFoundError: no cart, or the item is not in it
        """
        cart = self.repo.find_by_user(user_id)
        if cart is None:
            raise NotFoundError("Cart not found")

        existing = cart.find_item(item_id)
        if existing is None:
            raise NotFoundError("Item not found in cart")

        if quantity == 0:
            cart.items = [item for item in cart.items if item.id != item_id]
        else:
            existing.quantity = quantity

        return self.repo.save(cart)

    def remove_item(self, user_id: int, item_id: str) -> Cart:
        """
        Removing an id that is not in the cart leaves it unchanged.

        Raises:
            NotFoundError: the user has no cart
        """
        cart = self.repo.find_by_user(user_id)
        if cart is None:
            raise NotFoundError("Cart not found")

        cart.items = [item for item in cart.items if item.id != item_id]
        return self.repo.save(cart)

    def clear(self, user_id: int) -> Cart:
        self.repo.delete(user_id)
        return Cart(user_id=user_id)
