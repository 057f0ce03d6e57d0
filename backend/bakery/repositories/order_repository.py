"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.

Author: Dreamy Delights
Date: 2025-06-14
"""
import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from bakery.domain.order import Order, OrderItem, OrderTotals, ShippingAddress
from bakery.core.database import get_db_connection_dict


ORDER_COLUMNS = """
    o.id, o.user_id, o.status,
    o.subtotal, o.tax_amount, o.delivery_fee, o.total_amount,
    o.shipping_address, o.contact_phone, o.additional_notes, o.customer_info,
    o.updated_by, o.created_at, o.updated_at,
    u.email as customer_email,
    u.display_name as customer_name
"""

# Orders that never turned into revenue
NON_REVENUE_STATUSES = ('cancelled',)


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Returns Order domain models with their line items.
    """

    @staticmethod
    def _map_row_to_order(row: dict, items: Optional[List[OrderItem]] = None) -> Order:
        order_dict = dict(row)
        order_dict.pop('order_id', None)
        order_dict['items'] = items or []
        order_dict['customer_info'] = order_dict.get('customer_info') or {}
        return Order(**order_dict)

    @staticmethod
    def _load_items(cursor, order_ids: List[int]) -> Dict[int, List[OrderItem]]:
        """Fetch the items of several orders in one query, grouped by order id"""
        items_by_order: Dict[int, List[OrderItem]] = {}
        if not order_ids:
            return items_by_order

        cursor.execute("""
            SELECT order_id, product_id, name, price, quantity, customizations
            FROM order_items
            WHERE order_id = ANY(%s)
            ORDER BY order_id, id
        """, (order_ids,))

        for item in cursor.fetchall():
            items_by_order.setdefault(item['order_id'], []).append(
                OrderItem(
                    product_id=item['product_id'],
                    name=item['name'],
                    price=item['price'],
                    quantity=item['quantity'],
                    customizations=item.get('customizations') or {}
                )
            )

        return items_by_order

    def create(
        self,
        user_id: int,
        items: List[OrderItem],
        totals: OrderTotals,
        shipping_address: ShippingAddress,
        contact_phone: Optional[str] = None,
        additional_notes: Optional[str] = None,
        customer_info: Optional[Dict[str, Any]] = None
    ) -> Order:
        """
        Insert an order and its line items in one transaction

        Returns:
            The stored Order (status pending)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO orders (
                    user_id, status, subtotal, tax_amount, delivery_fee, total_amount,
                    shipping_address, contact_phone, additional_notes, customer_info,
                    created_at, updated_at
                )
                VALUES (%s, 'pending', %s, %s, %s, %s, %s::jsonb, %s, %s, %s::jsonb, NOW(), NOW())
                RETURNING id, user_id, status, subtotal, tax_amount, delivery_fee, total_amount,
                          shipping_address, contact_phone, additional_notes, customer_info,
                          updated_by, created_at, updated_at
            """, (
                user_id,
                totals.subtotal,
                totals.tax_amount,
                totals.delivery_fee,
                totals.total_amount,
                json.dumps(shipping_address.model_dump()),
                contact_phone,
                additional_notes,
                json.dumps(customer_info or {}),
            ))
            order_row = cursor.fetchone()

            for item in items:
                cursor.execute("""
                    INSERT INTO order_items (order_id, product_id, name, price, quantity, customizations)
                    VALUES (%s, %s, %s, %s, %s, %s::jsonb)
                """, (
                    order_row['id'],
                    item.product_id,
                    item.name,
                    item.price,
                    item.quantity,
                    json.dumps(item.customizations),
                ))

            conn.commit()
            return self._map_row_to_order(order_row, items)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, order_id: int) -> Optional[Order]:
        """
        Find order by ID with its items

        Returns:
            Order or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders o
                LEFT JOIN users u ON o.user_id = u.id
                WHERE o.id = %s
            """, (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            items = self._load_items(cursor, [row['id']])
            return self._map_row_to_order(row, items.get(row['id'], []))

        finally:
            cursor.close()
            conn.close()

    def find_by_user(self, user_id: int, limit: int = 50) -> List[Order]:
        """A customer's own orders, newest first"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders o
                LEFT JOIN users u ON o.user_id = u.id
                WHERE o.user_id = %s
                ORDER BY o.created_at DESC
                LIMIT %s
            """, (user_id, limit))

            rows = cursor.fetchall()
            items_by_order = self._load_items(cursor, [row['id'] for row in rows])

            return [self._map_row_to_order(row, items_by_order.get(row['id'], [])) for row in rows]

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Order], int]:
        """
        Find orders for the admin list, newest first

        Returns:
            Tuple of (list of orders, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if status:
                conditions.append("o.status = %s")
                params.append(status)

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM orders o
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders o
                LEFT JOIN users u ON o.user_id = u.id
                WHERE {where_clause}
                ORDER BY o.created_at DESC
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            rows = cursor.fetchall()
            items_by_order = self._load_items(cursor, [row['id'] for row in rows])

            orders = [self._map_row_to_order(row, items_by_order.get(row['id'], [])) for row in rows]
            return orders, total

        finally:
            cursor.close()
            conn.close()

    def update_status(self, order_id: int, status: str, updated_by: Optional[str] = None) -> Optional[Order]:
        """
        Set an order's status

        Returns:
            Updated Order (without items) or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE orders
                SET status = %s, updated_by = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING id, user_id, status, subtotal, tax_amount, delivery_fee, total_amount,
                          shipping_address, contact_phone, additional_notes, customer_info,
                          updated_by, created_at, updated_at
            """, (status, updated_by, order_id))

            row = cursor.fetchone()
            conn.commit()

            if not row:
                return None
            return self._map_row_to_order(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get order statistics for the dashboard

        Returns:
            Dict with total_orders, revenue_orders (not cancelled),
            total_revenue, recent_orders (30 days)
            and pending_orders
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    COUNT(*) as total_orders,
                    COUNT(*) FILTER (WHERE status <> ALL(%s)) as revenue_orders,
                    COALESCE(SUM(total_amount) FILTER (WHERE status <> ALL(%s)), 0) as total_revenue,
                    COUNT(*) FILTER (WHERE created_at >= NOW() - INTERVAL '30 days') as recent_orders,
                    COUNT(*) FILTER (WHERE status = 'pending') as pending_orders
                FROM orders
            """, (list(NON_REVENUE_STATUSES), list(NON_REVENUE_STATUSES)))
            row = cursor.fetchone()

            return {
                'total_orders': row['total_orders'],
                'revenue_orders': row['revenue_orders'],
                'total_revenue': float(row['total_revenue']),
                'recent_orders': row['recent_orders'],
                'pending_orders': row['pending_orders'],
            }

        finally:
            cursor.close()
            conn.close()

    def get_window_totals(self, start: datetime, end: datetime) -> Dict[str, Any]:
        """
        Orders, revenue and distinct paying customers in [start, end)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    COUNT(*) as orders,
                    COALESCE(SUM(total_amount), 0) as revenue,
                    COUNT(DISTINCT user_id) as customers
                FROM orders
                WHERE created_at >= %s AND created_at < %s
                  AND status <> ALL(%s)
            """, (start, end, list(NON_REVENUE_STATUSES)))
            row = cursor.fetchone()

            return {
                'orders': row['orders'],
                'revenue': float(row['revenue']),
                'customers': row['customers'],
            }

        finally:
            cursor.close()
            conn.close()

    def get_top_products(self, limit: int = 5) -> List[Dict[str, Any]]:
        """Best sellers by quantity across all non-cancelled orders"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    oi.product_id,
                    MAX(oi.name) as name,
                    SUM(oi.quantity) as quantity,
                    COALESCE(SUM(oi.price * oi.quantity), 0) as revenue
                FROM order_items oi
                JOIN orders o ON o.id = oi.order_id
                WHERE o.status <> ALL(%s)
                GROUP BY oi.product_id
                ORDER BY quantity DESC, revenue DESC
                LIMIT %s
            """, (list(NON_REVENUE_STATUSES), limit))

            return [
                {
                    'productId': row['product_id'],
                    'name': row['name'],
                    'quantity': int(row['quantity']),
                    'revenue': float(row['revenue']),
                }
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()

    def get_sales_by_month(self, months: int = 6) -> List[Dict[str, Any]]:
        """Revenue and order count per calendar month, oldest first"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    TO_CHAR(DATE_TRUNC('month', created_at), 'YYYY-MM') as month,
                    COUNT(*) as orders,
                    COALESCE(SUM(total_amount), 0) as revenue
                FROM orders
                WHERE created_at >= DATE_TRUNC('month', NOW()) - (%s * INTERVAL '1 month')
                  AND status <> ALL(%s)
                GROUP BY 1
                ORDER BY 1
            """, (months - 1, list(NON_REVENUE_STATUSES)))

            return [
                {
                    'month': row['month'],
                    'orders': row['orders'],
                    'revenue': float(row['revenue']),
                }
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()
