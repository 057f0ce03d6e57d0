"""
Admin Auth API Endpoints
Back-office login and current-admin lookup

Author: Dreamy Delights
Date: 2025-06-20
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from bakery.api.deps import get_admin_auth_service
from bakery.core.admin_auth import verify_admin_token
from bakery.core.config import settings
from bakery.core.errors import BakeryError, to_http_exception
from bakery.core.rate_limit import rate_limit
from bakery.domain.admin import AdminLogin, AdminPrincipal
from bakery.services.admin_auth_service import AdminAuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
async def admin_login(
    body: AdminLogin,
    _: None = Depends(rate_limit(settings.LOGIN_RATE_LIMIT)),
    service: AdminAuthService = Depends(get_admin_auth_service)
):
    """
    Exchange username/password for an admin JWT

    Errors:
    - 400 missing username or password
    - 401 "Invalid credentials" / "Account disabled"
    - 500 ADMIN_JWT_SECRET not configured
    """
    try:
        token, admin = service.login(body.username, body.password)

        return {
            "success": True,
            "token": token,
            "admin": {
                "id": admin.id,
                "username": admin.username,
                "email": admin.email,
                "role": admin.role,
                "permissions": admin.permissions,
            },
            "message": "Login successful"
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error during admin login: {e}")
        raise HTTPException(status_code=500, detail=f"Error during login: {str(e)}")


@router.get("/me")
async def admin_me(admin: AdminPrincipal = Depends(verify_admin_token)):
    return {"success": True, "admin": admin.model_dump()}
