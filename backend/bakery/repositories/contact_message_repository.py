"""
Contact Message Repository - public contact form submissions and the admin inbox

Author: Dreamy Delights
Date: 2025-07-02
"""
from typing import Any, Dict, List, Optional

from bakery.domain.contact import ContactMessage
from bakery.core.database import get_db_connection_dict


MESSAGE_COLUMNS = """
    id, first_name, last_name, email, phone, subject, message,
    status, priority, source, ip_address, user_agent,
    read_at, read_by, replied_at, replied_by, reply,
    created_at, updated_at
"""

# Columns an admin may edit directly
UPDATABLE_COLUMNS = ('status', 'priority', 'subject', 'message', 'phone', 'reply')


class ContactMessageRepository:
    """
    Repository for contact messages

    Submission metadata (ip_address, user_agent, created_at) is written once on
    insert and never updated.
    """

    @staticmethod
    def _map_row_to_message(row: dict) -> ContactMessage:
        return ContactMessage(**{key: row.get(key) for key in ContactMessage.model_fields if key in row})

    def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        subject: str,
        message: str,
        phone: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> ContactMessage:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO contact_messages (
                    first_name, last_name, email, phone, subject, message,
                    status, priority, source, ip_address, user_agent,
                    created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, 'unread', 'normal', 'website', %s, %s, NOW(), NOW())
                RETURNING {MESSAGE_COLUMNS}
            """, (first_name, last_name, email, phone, subject, message, ip_address, user_agent))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_message(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_all(self, status: Optional[str] = None, limit: int = 50) -> List[ContactMessage]:
        """Messages newest first, optionally filtered by status"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if status:
                conditions.append("status = %s")
                params.append(status)

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT {MESSAGE_COLUMNS}
                FROM contact_messages
                WHERE {where_clause}
                ORDER BY created_at DESC
                LIMIT %s
            """, params + [limit])

            return [self._map_row_to_message(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, message_id: int) -> Optional[ContactMessage]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(
                f"SELECT {MESSAGE_COLUMNS} FROM contact_messages WHERE id = %s",
                (message_id,)
            )
            row = cursor.fetchone()
            return self._map_row_to_message(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def get_stats(self) -> Dict[str, int]:
        """
        Inbox counters

        Returns:
            Dict with total, unread, read, replied and todayCount
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    COUNT(*) as total,
                    COUNT(*) FILTER (WHERE status = 'unread') as unread,
                    COUNT(*) FILTER (WHERE status = 'read') as read,
                    COUNT(*) FILTER (WHERE status = 'replied') as replied,
                    COUNT(*) FILTER (WHERE created_at >= DATE_TRUNC('day', NOW())) as today_count
                FROM contact_messages
            """)
            row = cursor.fetchone()

            return {
                'total': row['total'],
                'unread': row['unread'],
                'read': row['read'],
                'replied': row['replied'],
                'todayCount': row['today_count'],
            }

        finally:
            cursor.close()
            conn.close()

    def mark_read(self, message_id: int, read_by: str) -> Optional[ContactMessage]:
        """Mark a message read; a replied message keeps its status"""
        return self._update(
            [
                "status = CASE WHEN status = 'replied' THEN status ELSE 'read' END",
                "read_at = COALESCE(read_at, NOW())",
                "read_by = COALESCE(read_by, %s)",
                "updated_at = NOW()",
            ],
            [read_by, message_id]
        )

    def mark_replied(self, message_id: int, replied_by: str, reply: Optional[str]) -> Optional[ContactMessage]:
        return self._update(
            [
                "status = 'replied'",
                "reply = COALESCE(%s, reply)",
                "replied_at = NOW()",
                "replied_by = %s",
                "read_at = COALESCE(read_at, NOW())",
                "read_by = COALESCE(read_by, %s)",
                "updated_at = NOW()",
            ],
            [reply, replied_by, replied_by, message_id]
        )

    def update(self, message_id: int, changes: Dict[str, Any]) -> Optional[ContactMessage]:
        update_fields = []
        values = []

        for column in UPDATABLE_COLUMNS:
            if column in changes:
                update_fields.append(f"{column} = %s")
                values.append(changes[column])

        update_fields.append("updated_at = NOW()")
        values.append(message_id)

        return self._update(update_fields, values)

    def _update(self, update_fields: List[str], values: List[Any]) -> Optional[ContactMessage]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE contact_messages
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {MESSAGE_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_message(row) if row else None

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def delete(self, message_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM contact_messages WHERE id = %s RETURNING id", (message_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
