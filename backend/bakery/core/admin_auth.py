"""
Admin authentication and permission dependencies

Every back-office route depends on ``verify_admin_token`` (directly or through
one of the permission factories below). Permissions are read from the admin's
current database row, so revoking a permission takes effect on the next
request even while older tokens are still valid.

Author: Dreamy Delights
Date: 2025-06-20
"""
import logging
from typing import List, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from bakery.core.config import settings
from bakery.core.security import JWTError, decode_token
from bakery.domain.admin import AdminPrincipal
from bakery.repositories.admin_repository import AdminRepository

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


async def verify_admin_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AdminPrincipal:
    """
    Dependency that validates an admin JWT and returns the admin principal.

    Usage:
        @router.get("/admin/me")
        async def me(admin: AdminPrincipal = Depends(verify_admin_token)):
            ...
    """
    if not credentials:
        raise _unauthorized("Authorization token required")

    if not settings.ADMIN_JWT_SECRET:
        logger.error("ADMIN_JWT_SECRET is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error"
        )

    try:
        payload = decode_token(credentials.credentials, settings.ADMIN_JWT_SECRET)
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != "admin":
        raise _unauthorized("Invalid token payload")
    try:
        admin_id = int(payload.get("id"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")

    admin = AdminRepository().find_by_id(admin_id)
    if admin is None or not admin.active:
        raise _unauthorized("Invalid or inactive admin account")

    return AdminPrincipal(
        id=admin.id,
        username=admin.username,
        email=admin.email,
        role=admin.role,
        permissions=admin.permissions,
    )


def require_permission(permission: str):
    """
    Dependency factory for a single permission.

    Usage:
        @router.get("/analytics")
        async def analytics(admin: AdminPrincipal = Depends(require_permission("view_analytics"))):
            ...
    """
    async def permission_checker(
        admin: AdminPrincipal = Depends(verify_admin_token)
    ) -> AdminPrincipal:
        if not admin.has_permission(permission):
            logger.warning(f"Admin '{admin.username}' denied: missing {permission}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{permission}' required"
            )
        return admin

    return permission_checker


def require_any_permission(permissions: List[str]):
    """Dependency factory passing when the admin holds at least one of ``permissions``"""
    async def permission_checker(
        admin: AdminPrincipal = Depends(verify_admin_token)
    ) -> AdminPrincipal:
        if not admin.has_any_permission(permissions):
            logger.warning(f"Admin '{admin.username}' denied: needs one of {permissions}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"One of these permissions required: {', '.join(permissions)}"
            )
        return admin

    return permission_checker


async def require_super_admin(
    admin: AdminPrincipal = Depends(verify_admin_token)
) -> AdminPrincipal:
    if not admin.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super admin role required"
        )
    return admin
