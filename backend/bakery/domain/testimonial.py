"""
Customer testimonials shown on the storefront
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, ConfigDict

from bakery.domain.base import DomainModel, RequestSchema


class Testimonial(DomainModel):
    id: int
    name: str
    text: str
    rating: int = Field(5, ge=1, le=5)
    featured: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None


class TestimonialCreate(RequestSchema):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    featured: bool = False


class TestimonialUpdate(RequestSchema):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    text: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    featured: Optional[bool] = None
