"""
Admin Products API Endpoints
Product management for admins holding manage_products

Create and update accept either a JSON body or multipart/form-data with an
optional ``image`` file (image/* only, up to MAX_IMAGE_SIZE_BYTES).

Author: Dreamy Delights
Date: 2025-06-16
"""
import json
import logging
from typing import Optional, Tuple, Type

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from bakery.api.deps import get_product_service
from bakery.core.admin_auth import require_permission
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.admin import AdminPrincipal
from bakery.domain.product import ProductCreate, ProductUpdate
from bakery.services.product_service import ImageUpload, ProductService

logger = logging.getLogger(__name__)

router = APIRouter()

require_manage_products = require_permission("manage_products")


async def _parse_product_request(
    request: Request,
    schema: Type[BaseModel],
    drop_blank: bool
) -> Tuple[BaseModel, Optional[ImageUpload]]:
    """
    Read a product payload from JSON or multipart form data

    Returns:
        (validated schema instance, uploaded image or None)
    """
    content_type = request.headers.get("content-type", "")
    image = None

    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        data = {}
        for key, value in form.items():
            if isinstance(value, UploadFile):
                if key == "image" and value.filename:
                    image = ImageUpload(
                        data=await value.read(),
                        filename=value.filename,
                        content_type=value.content_type,
                    )
                continue
            if drop_blank and value == "":
                continue
            data[key] = value
    else:
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        if not isinstance(data, dict):
            raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    try:
        return schema.model_validate(data), image
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())


@router.get("/products")
async def list_products(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Search by name or description"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    admin: AdminPrincipal = Depends(require_manage_products),
    service: ProductService = Depends(get_product_service)
):
    """All products, including inactive ones, newest first"""
    try:
        products, total = service.list_all(limit=limit, offset=offset, category=category, search=search)

        return {
            "success": True,
            "data": [product.to_dict() for product in products],
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products)
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.post("/products", status_code=status.HTTP_201_CREATED)
async def create_product(
    request: Request,
    admin: AdminPrincipal = Depends(require_manage_products),
    service: ProductService = Depends(get_product_service)
):
    """Create a product; name, description, price and category are required"""
    try:
        body, image = await _parse_product_request(request, ProductCreate, drop_blank=True)
        product = service.create(body, created_by=admin.username, image=image)

        return {
            "success": True,
            "message": "Product created successfully",
            "data": product.to_dict()
        }

    except (HTTPException, RequestValidationError):
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")


@router.put("/products/{product_id}")
async def update_product(
    product_id: int,
    request: Request,
    admin: AdminPrincipal = Depends(require_manage_products),
    service: ProductService = Depends(get_product_service)
):
    """Partial update; blank fields other than description leave the stored value"""
    try:
        body, image = await _parse_product_request(request, ProductUpdate, drop_blank=False)
        product = service.update(product_id, body, updated_by=admin.username, image=image)

        return {
            "success": True,
            "message": "Product updated successfully",
            "data": product.to_dict()
        }

    except (HTTPException, RequestValidationError):
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating product {product_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating product: {str(e)}")


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    admin: AdminPrincipal = Depends(require_manage_products),
    service: ProductService = Depends(get_product_service)
):
    try:
        service.delete(product_id, deleted_by=admin.username)
        return {"success": True, "message": "Product deleted successfully"}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting product {product_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error deleting product: {str(e)}")


@router.put("/products/{product_id}/featured")
async def toggle_featured(
    product_id: int,
    admin: AdminPrincipal = Depends(require_manage_products),
    service: ProductService = Depends(get_product_service)
):
    """Flip the product's featured flag"""
    try:
        product = service.toggle_featured(product_id, updated_by=admin.username)
        state = "featured" if product.featured else "unfeatured"

        return {
            "success": True,
            "featured": product.featured,
            "message": f"Product {state} successfully"
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error toggling featured for product {product_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating product: {str(e)}")
