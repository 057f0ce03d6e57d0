"""
Testimonials API Endpoints
Public reads plus create/update/delete for admins holding manage_testimonials
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from bakery.api.deps import get_testimonial_service
from bakery.core.admin_auth import require_permission
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.admin import AdminPrincipal
from bakery.domain.testimonial import TestimonialCreate, TestimonialUpdate
from bakery.services.testimonial_service import TestimonialService

logger = logging.getLogger(__name__)

router = APIRouter()

require_manage_testimonials = require_permission("manage_testimonials")


@router.get("")
async def get_testimonials(
    limit: int = Query(10, ge=1, le=100),
    service: TestimonialService = Depends(get_testimonial_service)
):
    """Latest testimonials, newest first"""
    try:
        testimonials = service.list_latest(limit=limit)

        return {
            "success": True,
            "data": [t.to_dict() for t in testimonials],
            "count": len(testimonials)
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching testimonials: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching testimonials: {str(e)}")


@router.get("/featured")
async def get_featured_testimonials(
    limit: int = Query(3, ge=1, le=50),
    service: TestimonialService = Depends(get_testimonial_service)
):
    """Featured testimonials; falls back to the latest when none are featured"""
    try:
        testimonials = service.list_featured(limit=limit)

        return {
            "success": True,
            "data": [t.to_dict() for t in testimonials],
            "count": len(testimonials)
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching featured testimonials: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching featured testimonials: {str(e)}")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    body: TestimonialCreate,
    admin: AdminPrincipal = Depends(require_manage_testimonials),
    service: TestimonialService = Depends(get_testimonial_service)
):
    try:
        testimonial = service.create(body, created_by=admin.username)

        return {
            "success": True,
            "message": "Testimonial created successfully",
            "data": testimonial.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating testimonial: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating testimonial: {str(e)}")


@router.put("/{testimonial_id}")
async def update_testimonial(
    testimonial_id: int,
    body: TestimonialUpdate,
    admin: AdminPrincipal = Depends(require_manage_testimonials),
    service: TestimonialService = Depends(get_testimonial_service)
):
    try:
        testimonial = service.update(testimonial_id, body, updated_by=admin.username)

        return {
            "success": True,
            "message": "Testimonial updated successfully",
            "data": testimonial.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating testimonial {testimonial_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating testimonial: {str(e)}")


@router.delete("/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: int,
    admin: AdminPrincipal = Depends(require_manage_testimonials),
    service: TestimonialService = Depends(get_testimonial_service)
):
    try:
        service.delete(testimonial_id, deleted_by=admin.username)
        return {"success": True, "message": "Testimonial deleted successfully"}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting testimonial {testimonial_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error deleting testimonial: {str(e)}")
