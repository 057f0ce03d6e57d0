"""
Admin Repository - back-office accounts
"""
import json
from typing import List, Optional

from bakery.domain.admin import AdminUser, normalize_permissions
from bakery.core.database import get_db_connection_dict


ADMIN_COLUMNS = """
    id, username, email, hashed_password, role, permissions, active,
    last_login, created_at, updated_at
"""


class AdminRepository:

    @staticmethod
    def _map_row_to_admin(row: dict) -> AdminUser:
        return AdminUser(
            id=row['id'],
            username=row['username'],
            email=row.get('email'),
            hashed_password=row.get('hashed_password'),
            role=row.get('role') or 'editor',
            permissions=normalize_permissions(row.get('permissions')),
            active=bool(row.get('active')),
            last_login=row.get('last_login'),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, admin_id: int) -> Optional[AdminUser]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"SELECT {ADMIN_COLUMNS} FROM admin_users WHERE id = %s", (admin_id,))
            row = cursor.fetchone()
            return self._map_row_to_admin(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def find_by_username(self, username: str) -> Optional[AdminUser]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(
                f"SELECT {ADMIN_COLUMNS} FROM admin_users WHERE username = %s",
                (username,)
            )
            row = cursor.fetchone()
            return self._map_row_to_admin(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def create(
        self,
        username: str,
        hashed_password: str,
        role: str,
        permissions: List[str],
        email: Optional[str] = None
    ) -> AdminUser:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO admin_users (username, email, hashed_password, role, permissions, active, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s::jsonb, TRUE, NOW(), NOW())
                RETURNING {ADMIN_COLUMNS}
            """, (username, email, hashed_password, role, json.dumps(permissions)))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_admin(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def touch_last_login(self, admin_id: int) -> None:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(
                "UPDATE admin_users SET last_login = NOW() WHERE id = %s",
                (admin_id,)
            )
            conn.commit()

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def set_active_by_email(self, email: str, active: bool) -> int:
        """
        Enable or disable the admin account linked to a customer e-mail

        Returns:
            Number of admin rows changed
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE admin_users
                SET active = %s, updated_at = NOW()
                WHERE LOWER(email) = LOWER(%s)
            """, (active, email))
            changed = cursor.rowcount
            conn.commit()
            return changed

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
