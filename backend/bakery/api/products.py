"""
Products API Endpoints
Public catalog: listing, featured products and product detail

Author: Dreamy Delights
Date: 2025-06-16
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bakery.api.deps import get_product_service
from bakery.core.errors import BakeryError, to_http_exception
from bakery.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = Query(None, description="Filter by category"),
    service: ProductService = Depends(get_product_service)
):
    """
    Active products, newest first, paginated
    """
    try:
        products, total = service.list_public(page=page, limit=limit, category=category)

        return {
            "success": True,
            "data": [product.to_dict() for product in products],
            "pagination": {
                "page": page,
                "limit": limit,
                "count": len(products),
                "total": total,
            }
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/featured")
async def get_featured_products(
    limit: int = Query(6, ge=1, le=50),
    service: ProductService = Depends(get_product_service)
):
    """Active products flagged as featured"""
    try:
        products = service.list_featured(limit=limit)

        return {
            "success": True,
            "data": [product.to_dict() for product in products],
            "count": len(products)
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching featured products: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching featured products: {str(e)}")


@router.get("/{product_id}")
async def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service)
):
    """Single active product; 404 when missing or hidden"""
    try:
        product = service.get_public(product_id)

        return {
            "success": True,
            "data": product.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")
