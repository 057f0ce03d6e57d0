"""
Customer authentication dependencies
Validates storefront JWTs and loads the current user
"""
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from bakery.core.config import settings
from bakery.core.security import JWTError, decode_token
from bakery.domain.user import User
from bakery.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def decode_user_token(token: str) -> dict:
    """
    Decode and validate a customer JWT.

    Payload:
    {
        "sub": "42",
        "id": 42,
        "email": "ana@example.com",
        "role": "customer",
        "type": "user",
        "iat": 1234567890,
        "exp": 1234567890
    }
    """
    if not settings.JWT_SECRET:
        logger.error("JWT_SECRET is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error"
        )

    try:
        payload = decode_token(token, settings.JWT_SECRET)
    except JWTError:
        raise _unauthorized("Invalid authentication token")

    if payload.get("type") != "user":
        raise _unauthorized("Invalid authentication token")

    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> User:
    """
    Dependency that validates the bearer token and returns the stored user.

    Usage:
        @router.get("/cart")
        async def get_cart(user: User = Depends(get_current_user)):
            ...
    """
    if not credentials:
        raise _unauthorized("No valid authentication token provided")

    payload = decode_user_token(credentials.credentials)

    user_id = payload.get("id") or payload.get("sub")
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid authentication token")

    user = UserRepository().find_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")

    if user.is_banned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account disabled"
        )

    return user
