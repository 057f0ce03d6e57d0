"""
Cart Repository - one cart row per user, line items stored as JSONB
"""
import json
from typing import Optional

from bakery.domain.cart import Cart, CartItem
from bakery.core.database import get_db_connection_dict


class CartRepository:

    @staticmethod
    def _map_row_to_cart(row: dict) -> Cart:
        items = row.get('items') or []
        if isinstance(items, str):
            items = json.loads(items)
        return Cart(
            user_id=row['user_id'],
            items=[CartItem.model_validate(item) for item in items],
            updated_at=row.get('updated_at')
        )

    def find_by_user(self, user_id: int) -> Optional[Cart]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT user_id, items, updated_at
                FROM carts
                WHERE user_id = %s
            """, (user_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_cart(row)

        finally:
            cursor.close()
            conn.close()

    def save(self, cart: Cart) -> Cart:
        """Insert or replace the user's cart, stamping updated_at"""
        items_json = json.dumps([item.to_dict() for item in cart.items])

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO carts (user_id, items, updated_at)
                VALUES (%s, %s::jsonb, NOW())
                ON CONFLICT (user_id) DO UPDATE
                SET items = EXCLUDED.items, updated_at = NOW()
                RETURNING user_id, items, updated_at
            """, (cart.user_id, items_json))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_cart(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def delete(self, user_id: int) -> None:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM carts WHERE user_id = %s", (user_id,))
            conn.commit()

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
