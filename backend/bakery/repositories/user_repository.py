"""
User Repository - customer accounts
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from psycopg2.errors import UniqueViolation

from bakery.domain.user import User, UserSummary
from bakery.core.database import get_db_connection_dict
from bakery.core.errors import ValidationError


USER_COLUMNS = """
    id, email, password_hash, display_name, phone, address, photo_url,
    role, status, email_verified, last_login, created_at, updated_at
"""

UPDATABLE_COLUMNS = ('email', 'display_name', 'phone', 'address', 'photo_url')


class UserRepository:
    """Repository for customer accounts"""

    @staticmethod
    def _map_row_to_user(row: dict) -> User:
        return User(**{key: row.get(key) for key in User.model_fields if key in row})

    def find_by_id(self, user_id: int) -> Optional[User]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = %s", (user_id,))
            row = cursor.fetchone()
            return self._map_row_to_user(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def find_by_email(self, email: str) -> Optional[User]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE email = %s",
                (email.strip().lower(),)
            )
            row = cursor.fetchone()
            return self._map_row_to_user(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def create(self, email: str, password_hash: str, display_name: Optional[str] = None) -> User:
        """Insert a customer account (role customer, status active)"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO users (email, password_hash, display_name, role, status, created_at, updated_at)
                VALUES (%s, %s, %s, 'customer', 'active', NOW(), NOW())
                RETURNING {USER_COLUMNS}
            """, (email.strip().lower(), password_hash, display_name))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_user(row)

        except UniqueViolation:
            conn.rollback()
            raise ValidationError("Email already registered")

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update_profile(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        """
        Update profile columns

        Returns:
            Updated User or None if not found
        """
        update_fields = []
        values = []

        for column in UPDATABLE_COLUMNS:
            if column in changes:
                update_fields.append(f"{column} = %s")
                values.append(changes[column])

        update_fields.append("updated_at = NOW()")
        values.append(user_id)

        return self._update(update_fields, values)

    def update_status(self, user_id: int, status: str) -> Optional[User]:
        return self._update(["status = %s", "updated_at = NOW()"], [status, user_id])

    def update_role(self, user_id: int, role: str) -> Optional[User]:
        return self._update(["role = %s", "updated_at = NOW()"], [role, user_id])

    def touch_last_login(self, user_id: int) -> None:
        self._update(["last_login = NOW()"], [user_id])

    def _update(self, update_fields: List[str], values: List[Any]) -> Optional[User]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE users
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {USER_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_user(row) if row else None

        except UniqueViolation:
            conn.rollback()
            raise ValidationError("Email already registered")

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_all_with_stats(self, limit: int = 100, offset: int = 0) -> List[UserSummary]:
        """
        Customers with order aggregates for the admin list, newest first

        ``is_admin`` is set when an admin account shares the user's e-mail.
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    u.id, u.email, u.display_name, u.phone, u.address, u.photo_url,
                    u.role, u.status, u.email_verified, u.last_login,
                    u.created_at, u.updated_at,
                    COALESCE(o.total_orders, 0) as total_orders,
                    COALESCE(o.total_spent, 0) as total_spent,
                    EXISTS (
                        SELECT 1 FROM admin_users a WHERE LOWER(a.email) = LOWER(u.email)
                    ) as is_admin
                FROM users u
                LEFT JOIN (
                    SELECT user_id, COUNT(*) as total_orders, SUM(total_amount) as total_spent
                    FROM orders
                    WHERE status <> 'cancelled'
                    GROUP BY user_id
                ) o ON o.user_id = u.id
                ORDER BY u.created_at DESC
                LIMIT %s OFFSET %s
            """, (limit, offset))

            return [
                UserSummary(
                    **{key: row.get(key) for key in User.model_fields if key in row},
                    total_orders=row['total_orders'],
                    total_spent=float(row['total_spent']),
                    is_admin=row['is_admin'],
                )
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()

    def count(self) -> int:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT COUNT(*) as total FROM users")
            return cursor.fetchone()['total']

        finally:
            cursor.close()
            conn.close()

    def count_created_between(self, start: datetime, end: datetime) -> int:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT COUNT(*) as total
                FROM users
                WHERE created_at >= %s AND created_at < %s
            """, (start, end))
            return cursor.fetchone()['total']

        finally:
            cursor.close()
            conn.close()

    def get_signups_by_month(self, months: int = 6) -> List[Dict[str, Any]]:
        """New customers per calendar month, oldest first"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    TO_CHAR(DATE_TRUNC('month', created_at), 'YYYY-MM') as month,
                    COUNT(*) as customers
                FROM users
                WHERE created_at >= DATE_TRUNC('month', NOW()) - (%s * INTERVAL '1 month')
                GROUP BY 1
                ORDER BY 1
            """, (months - 1,))

            return [
                {'month': row['month'], 'customers': row['customers']}
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()
