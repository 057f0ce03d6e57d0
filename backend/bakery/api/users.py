"""
Users API Endpoints
The authenticated customer's profile
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from bakery.api.deps import get_user_service
from bakery.core.auth import get_current_user
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.user import ProfileUpdate, User
from bakery.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)):
    return {"success": True, "data": user.to_dict()}


@router.put("/profile")
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update name, email, phone or address"""
    try:
        updated = service.update_profile(user, body)

        return {
            "success": True,
            "message": "Profile updated successfully",
            "data": updated.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating profile for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating profile: {str(e)}")
