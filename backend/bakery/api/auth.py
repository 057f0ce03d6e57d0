"""
Customer Auth API Endpoints
Register, login and current-user lookup for storefront customers
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from bakery.api.deps import get_auth_service
from bakery.core.auth import get_current_user
from bakery.core.config import settings
from bakery.core.errors import BakeryError, to_http_exception
from bakery.core.rate_limit import rate_limit
from bakery.domain.user import User, UserLogin, UserRegister
from bakery.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: UserRegister,
    _: None = Depends(rate_limit(settings.LOGIN_RATE_LIMIT)),
    service: AuthService = Depends(get_auth_service)
):
    try:
        token, user = service.register(body)

        return {
            "success": True,
            "token": token,
            "user": user.to_dict(),
            "message": "Registration successful"
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error registering user: {e}")
        raise HTTPException(status_code=500, detail=f"Error registering user: {str(e)}")


@router.post("/login")
async def login(
    body: UserLogin,
    _: None = Depends(rate_limit(settings.LOGIN_RATE_LIMIT)),
    service: AuthService = Depends(get_auth_service)
):
    try:
        token, user = service.login(body.email, body.password)

        return {
            "success": True,
            "token": token,
            "user": user.to_dict(),
            "message": "Login successful"
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error during login: {e}")
        raise HTTPException(status_code=500, detail=f"Error during login: {str(e)}")


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"success": True, "user": user.to_dict()}
