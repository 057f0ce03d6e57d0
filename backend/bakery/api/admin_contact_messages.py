"""
Admin Contact Messages API Endpoints
The contact-message inbox: list, stats, read/reply, edit and delete

Reading needs manage_content or view_analytics; changes need manage_content.

Author: Dreamy Delights
Date: 2025-07-02
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bakery.api.deps import get_contact_service
from bakery.core.admin_auth import require_any_permission, require_permission
from bakery.core.errors import BakeryError, to_http_exception
from bakery.domain.admin import AdminPrincipal
from bakery.domain.contact import ContactMessageUpdate, ContactReply
from bakery.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()

require_inbox_read = require_any_permission(["manage_content", "view_analytics"])
require_inbox_write = require_permission("manage_content")


@router.get("/contact-messages")
async def list_contact_messages(
    status: Optional[str] = Query(None, description="unread, read or replied"),
    limit: int = Query(50, ge=1, le=500),
    admin: AdminPrincipal = Depends(require_inbox_read),
    service: ContactService = Depends(get_contact_service)
):
    try:
        messages = service.list_messages(status=status, limit=limit)

        return {
            "success": True,
            "data": [message.to_dict() for message in messages],
            "count": len(messages)
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching contact messages: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching contact messages: {str(e)}")


@router.get("/contact-messages/stats")
async def get_contact_message_stats(
    admin: AdminPrincipal = Depends(require_inbox_read),
    service: ContactService = Depends(get_contact_service)
):
    """Counts of total, unread, read and replied messages plus today's arrivals"""
    try:
        return {"success": True, "data": service.get_stats()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching contact message stats: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching contact message stats: {str(e)}")


@router.get("/contact-messages/{message_id}")
async def get_contact_message(
    message_id: int,
    admin: AdminPrincipal = Depends(require_inbox_read),
    service: ContactService = Depends(get_contact_service)
):
    try:
        message = service.get_message(message_id)
        return {"success": True, "data": message.to_dict()}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching contact message {message_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching contact message: {str(e)}")


@router.patch("/contact-messages/{message_id}/read")
async def mark_contact_message_read(
    message_id: int,
    admin: AdminPrincipal = Depends(require_inbox_write),
    service: ContactService = Depends(get_contact_service)
):
    try:
        message = service.mark_read(message_id, admin.username)

        return {
            "success": True,
            "message": "Message marked as read",
            "data": message.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error marking contact message {message_id} read: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating contact message: {str(e)}")


@router.patch("/contact-messages/{message_id}/reply")
async def reply_to_contact_message(
    message_id: int,
    body: ContactReply,
    admin: AdminPrincipal = Depends(require_inbox_write),
    service: ContactService = Depends(get_contact_service)
):
    """
    Mark a message replied; when reply text is given it is e-mailed to the
    sender. The e-mail outcome is reported in emailSent / emailError.
    """
    try:
        result = service.reply(message_id, admin.username, body.reply)

        return {
            "success": True,
            "message": "Reply sent successfully" if result.email_sent else "Message marked as replied",
            "emailSent": result.email_sent,
            "emailError": result.email_error,
            "data": result.message.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error replying to contact message {message_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error replying to contact message: {str(e)}")


@router.patch("/contact-messages/{message_id}")
async def update_contact_message(
    message_id: int,
    body: ContactMessageUpdate,
    admin: AdminPrincipal = Depends(require_inbox_write),
    service: ContactService = Depends(get_contact_service)
):
    try:
        message = service.update(message_id, body)

        return {
            "success": True,
            "message": "Message updated successfully",
            "data": message.to_dict()
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating contact message {message_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error updating contact message: {str(e)}")


@router.delete("/contact-messages/{message_id}")
async def delete_contact_message(
    message_id: int,
    admin: AdminPrincipal = Depends(require_inbox_write),
    service: ContactService = Depends(get_contact_service)
):
    try:
        service.delete(message_id)
        return {"success": True, "message": "Message deleted successfully"}

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting contact message {message_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error deleting contact message: {str(e)}")
