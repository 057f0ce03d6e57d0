"""
Testimonial Repository
"""
from typing import List, Optional

from bakery.domain.testimonial import Testimonial
from bakery.core.database import get_db_connection_dict


TESTIMONIAL_COLUMNS = "id, name, text, rating, featured, created_at, updated_at"
UPDATABLE_COLUMNS = ('name', 'text', 'rating', 'featured')


class TestimonialRepository:

    @staticmethod
    def _map_row_to_testimonial(row: dict) -> Testimonial:
        return Testimonial(
            id=row['id'],
            name=row['name'],
            text=row['text'],
            rating=row.get('rating') or 5,
            featured=bool(row.get('featured')),
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_latest(self, limit: int = 10, featured: Optional[bool] = None) -> List[Testimonial]:
        """Testimonials newest first, optionally only featured ones"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            where_clause = "1=1"
            params = []
            if featured is not None:
                where_clause = "featured = %s"
                params.append(featured)

            cursor.execute(f"""
                SELECT {TESTIMONIAL_COLUMNS}
                FROM testimonials
                WHERE {where_clause}
                ORDER BY created_at DESC, id DESC
                LIMIT %s
            """, params + [limit])

            return [self._map_row_to_testimonial(row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def create(self, name: str, text: str, rating: int = 5, featured: bool = False) -> Testimonial:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO testimonials (name, text, rating, featured, created_at, updated_at)
                VALUES (%s, %s, %s, %s, NOW(), NOW())
                RETURNING {TESTIMONIAL_COLUMNS}
            """, (name, text, rating, featured))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_testimonial(row)

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def update(self, testimonial_id: int, changes: dict) -> Optional[Testimonial]:
        update_fields = []
        values = []

        for column in UPDATABLE_COLUMNS:
            if column in changes:
                update_fields.append(f"{column} = %s")
                values.append(changes[column])

        update_fields.append("updated_at = NOW()")
        values.append(testimonial_id)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE testimonials
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {TESTIMONIAL_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_testimonial(row) if row else None

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def delete(self, testimonial_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM testimonials WHERE id = %s RETURNING id", (testimonial_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()
