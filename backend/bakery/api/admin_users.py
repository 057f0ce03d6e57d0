"""
Admin Users API Endpoints
Customer list with order aggregates, ban/unban and role changes
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from bakery.api.deps import get_user_service
from bakery.core.admin_auth import require_permission
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.admin import AdminPrincipal
from bakery.domain.user import UserRoleUpdate, UserStatusUpdate
from bakery.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

require_manage_users = require_permission("manage_users")


@router.get("/users")
async def list_users(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    admin: AdminPrincipal = Depends(require_manage_users),
    service: UserService = Depends(get_user_service)
):
    """Customers with totalOrders, totalSpent and isAdmin"""
    try:
        users = service.list_users(limit=limit, offset=offset)

        return {
            "success": True,
            "data": [user.to_dict() for user in users],
            "count": len(users)
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching users: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching users: {str(e)}")


@router.patch("/users/{user_id}/status")
async def update_user_status(
    user_id: int,
    body: UserStatusUpdate,
    admin: AdminPrincipal = Depends(require_manage_users),
    service: UserService = Depends(get_user_service)
):
    try:
        user = service.set_status(user_id, body.status, changed_by=admin.username)
        action = "disabled" if body.status == "banned" else "enabled"

        return {
            "success": True,
            "message": f"User {action} successfully",
            "data": user.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating user {user_id} status: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating user status: {str(e)}")


@router.patch("/users/{user_id}/role")
async def update_user_role(
    user_id: int,
    body: UserRoleUpdate,
    admin: AdminPrincipal = Depends(require_manage_users),
    service: UserService = Depends(get_user_service)
):
    try:
        user = service.set_role(user_id, body.role, changed_by=admin.username)

        return {
            "success": True,
            "message": f"User role updated to {user.role}",
            "data": user.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating user {user_id} role: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating user role: {str(e)}")
