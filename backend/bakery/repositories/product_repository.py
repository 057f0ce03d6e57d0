"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.

Author: Dreamy Delights
Date: 2025-06-14
"""
from typing import List, Optional, Tuple

from bakery.domain.product import Product
from bakery.core.database import get_db_connection_dict


PRODUCT_COLUMNS = """
    id, name, description, price, category, image_url, image_path,
    featured, available, stock, active,
    created_by, updated_by, created_at, updated_at
"""

# Columns an update may touch
UPDATABLE_COLUMNS = (
    'name', 'description', 'price', 'category', 'image_url', 'image_path',
    'featured', 'available', 'stock', 'active',
)


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Helper method to map database row to Product domain model"""
        return Product(
            id=row['id'],
            name=row['name'],
            description=row.get('description'),
            price=row['price'],
            category=row.get('category'),
            image_url=row.get('image_url'),
            image_path=row.get('image_path'),
            featured=row.get('featured', False),
            available=row.get('available', True),
            stock=row.get('stock') or 0,
            active=row.get('active', True),
            created_by=row.get('created_by'),
            updated_by=row.get('updated_by'),
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Internal product ID

        Returns:
            Product or None if not found
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

        finally:
            cursor.close()
            conn.close()

    def find_all(
        self,
        category: Optional[str] = None,
        active: Optional[bool] = None,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0
    ) -> Tuple[List[Product], int]:
        """
        Find products with filters, newest first

        Args:
            category: Filter by category
            active: Filter by catalog visibility
            featured: Filter by featured flag
            search: Search in name or description
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Tuple of (list of products, total count)
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if category:
                conditions.append("category = %s")
                params.append(category)

            if active is not None:
                conditions.append("active = %s")
                params.append(active)

            if featured is not None:
                conditions.append("featured = %s")
                params.append(featured)

            if search:
                conditions.append("(name ILIKE %s OR description ILIKE %s)")
                search_term = f"%{search}%"
                params.extend([search_term, search_term])

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT COUNT(*) as total
                FROM products
                WHERE {where_clause}
            """, params)
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE {where_clause}
                ORDER BY created_at DESC, id DESC
                LIMIT %s OFFSET %s
            """, params + [limit, offset])

            rows = cursor.fetchall()
            products = [self._map_row_to_product(row) for row in rows]

            return products, total

        finally:
            cursor.close()
            conn.close()

    def find_featured(self, limit: int = 6) -> List[Product]:
        """Active products flagged as featured, newest first"""
        products, _ = self.find_all(active=True, featured=True, limit=limit)
        return products

    def create(self, data: dict, created_by: Optional[str] = None) -> Product:
        """
        Insert a product

        Args:
            data: Column values (name, description, price, category, ...)
            created_by: Admin username

        Returns:
            The stored Product
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO products (
                    name, description, price, category, image_url, image_path,
                    featured, available, stock, active,
                    created_by, updated_by, created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, NOW(), NOW())
                RETURNING {PRODUCT_COLUMNS}
            """, (
                data['name'],
                data.get('description'),
                data['price'],
                data.get('category'),
                data.get('image_url'),
                data.get('image_path'),
                data.get('featured', False),
                data.get('available', True),
                data.get('stock', 0),
                data.get('active', True),
                created_by,
                created_by,
            ))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update(self, product_id: int, changes: dict, updated_by: Optional[str] = None) -> Optional[Product]:
        """
        Update the given columns of a product

        Unknown keys in ``changes`` are ignored.

        Returns:
            Updated Product or None if not found
        """
        update_fields = []
        values = []

        for column in UPDATABLE_COLUMNS:
            if column in changes:
                update_fields.append(f"{column} = %s")
                values.append(changes[column])

        update_fields.append("updated_by = %s")
        values.append(updated_by)
        update_fields.append("updated_at = NOW()")
        values.append(product_id)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE products
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()

            if not row:
                return None
            return self._map_row_to_product(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def delete(self, product_id: int) -> bool:
        """Delete a product; returns False when it did not exist"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM products WHERE id = %s RETURNING id", (product_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def toggle_featured(self, product_id: int, updated_by: Optional[str] = None) -> Optional[Product]:
        """Flip the featured flag; returns None when the product does not exist"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE products
                SET featured = NOT featured, updated_by = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, (updated_by, product_id))

            row = cursor.fetchone()
            conn.commit()

            if not row:
                return None
            return self._map_row_to_product(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def count(self) -> int:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT COUNT(*) as total FROM products")
            return cursor.fetchone()['total']

        finally:
            cursor.close()
            conn.close()
