"""
Testimonial Service
"""
import logging
from typing import List, Optional

from bakery.core.errors import NotFoundError, ValidationError
from bakery.domain.testimonial import Testimonial, TestimonialCreate, TestimonialUpdate
from bakery.repositories.testimonial_repository import TestimonialRepository

logger = logging.getLogger(__name__)


class TestimonialService:

    def __init__(self, repo: Optional[TestimonialRepository] = None):
        self.repo = repo or TestimonialRepository()

    def list_latest(self, limit: int = 10) -> List[Testimonial]:
        return self.repo.find_latest(limit=limit)

    def list_featured(self, limit: int = 3) -> List[Testimonial]:
        """Featured testimonials, or the latest ones when none are featured"""
        featured = self.repo.find_latest(limit=limit, featured=True)
        if featured:
            return featured
        return self.repo.find_latest(limit=limit)

    def create(self, request: TestimonialCreate, created_by: str) -> Testimonial:
        testimonial = self.repo.create(
            name=request.name,
            text=request.text,
            rating=request.rating,
            featured=request.featured,
        )
        logger.info(f"Testimonial {testimonial.id} created by {created_by}")
        return testimonial

    def update(self, testimonial_id: int, request: TestimonialUpdate, updated_by: str) -> Testimonial:
        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise ValidationError("No fields to update")

        testimonial = self.repo.update(testimonial_id, changes)
        if testimonial is None:
            raise NotFoundError("Testimonial not found")

        logger.info(f"Testimonial {testimonial_id} updated by {updated_by}")
        return testimonial

    def delete(self, testimonial_id: int, deleted_by: str) -> None:
        if not self.repo.delete(testimonial_id):
            raise NotFoundError("Testimonial not found")
        logger.info(f"Testimonial {testimonial_id} deleted by {deleted_by}")
