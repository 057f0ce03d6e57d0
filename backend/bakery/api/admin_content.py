"""
Admin Content API Endpoints
Site content sections and admin settings (JSON documents merged on update)
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException

from bakery.api.deps import get_content_repository
from bakery.core.admin_auth import require_any_permission, require_permission
from bakery.domain.admin import AdminPrincipal
from bakery.repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/content")
async def get_content(
    admin: AdminPrincipal = Depends(require_permission("manage_content")),
    repo: ContentRepository = Depends(get_content_repository)
):
    """All content sections keyed by section name"""
    try:
        sections = repo.find_all_sections()

        return {
            "success": True,
            "data": {section.section: section.to_dict() for section in sections}
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching content: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching content: {str(e)}")


@router.put("/content/{section}")
async def update_content(
    section: str,
    data: Dict[str, Any] = Body(...),
    admin: AdminPrincipal = Depends(require_permission("manage_content")),
    repo: ContentRepository = Depends(get_content_repository)
):
    """Merge the given keys into a content section"""
    try:
        if not data:
            raise HTTPException(status_code=400, detail="No fields to update")

        updated = repo.merge_section(section, data, updated_by=admin.username)
        logger.info(f"Content section '{section}' updated by {admin.username}")

        return {
            "success": True,
            "message": "Content updated successfully",
            "data": updated.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating content section '{section}': {e}")
        raise HTTPException(status_code=500, detail=f"Error updating content: {str(e)}")


@router.get("/settings")
async def get_settings(
    admin: AdminPrincipal = Depends(require_any_permission(["manage_settings", "manage_admins"])),
    repo: ContentRepository = Depends(get_content_repository)
):
    """All admin settings keyed by setting name"""
    try:
        settings_rows = repo.find_all_settings()

        return {
            "success": True,
            "data": {setting.key: setting.to_dict() for setting in settings_rows}
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching settings: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching settings: {str(e)}")


@router.put("/settings/{key}")
async def update_setting(
    key: str,
    value: Dict[str, Any] = Body(...),
    admin: AdminPrincipal = Depends(require_permission("manage_settings")),
    repo: ContentRepository = Depends(get_content_repository)
):
    """Merge the given keys into an admin setting"""
    try:
        if not value:
            raise HTTPException(status_code=400, detail="No fields to update")

        updated = repo.merge_setting(key, value, updated_by=admin.username)
        logger.info(f"Setting '{key}' updated by {admin.username}")

        return {
            "success": True,
            "message": "Settings updated successfully",
            "data": updated.to_dict()
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating setting '{key}': {e}")
        raise HTTPException(status_code=500, detail=f"Error updating settings: {str(e)}")
