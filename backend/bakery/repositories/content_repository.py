"""
Content Repository - site content sections and admin settings

Both tables hold one JSONB document per key. Updates merge the incoming keys
into the stored document (``||``), creating the row when missing.
"""
import json
from typing import Any, Dict, List

from bakery.domain.content import ContentSection, AdminSetting
from bakery.core.database import get_db_connection_dict


class ContentRepository:

    def find_all_sections(self) -> List[ContentSection]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT section, data, updated_at, updated_by
                FROM content_sections
                ORDER BY section
            """)
            return [ContentSection(**row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def merge_section(self, section: str, data: Dict[str, Any], updated_by: str) -> ContentSection:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO content_sections (section, data, updated_at, updated_by)
                VALUES (%s, %s::jsonb, NOW(), %s)
                ON CONFLICT (section) DO UPDATE
                SET data = content_sections.data || EXCLUDED.data,
                    updated_at = NOW(),
                    updated_by = EXCLUDED.updated_by
                RETURNING section, data, updated_at, updated_by
            """, (section, json.dumps(data), updated_by))

            row = cursor.fetchone()
            conn.commit()
            return ContentSection(**row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_all_settings(self) -> List[AdminSetting]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT key, value, updated_at, updated_by
                FROM admin_settings
                ORDER BY key
            """)
            return [AdminSetting(**row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def merge_setting(self, key: str, value: Dict[str, Any], updated_by: str) -> AdminSetting:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO admin_settings (key, value, updated_at, updated_by)
                VALUES (%s, %s::jsonb, NOW(), %s)
                ON CONFLICT (key) DO UPDATE
                SET value = admin_settings.value || EXCLUDED.value,
                    updated_at = NOW(),
                    updated_by = EXCLUDED.updated_by
                RETURNING key, value, updated_at, updated_by
            """, (key, json.dumps(value), updated_by))

            row = cursor.fetchone()
            conn.commit()
            return AdminSetting(**row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
