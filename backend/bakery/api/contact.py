"""
Contact API Endpoint
Public contact form submission
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status

from bakery.api.deps import get_contact_service
from bakery.core.config import settings
from bakery.core.errors import BakeryError, to_http_exception
from bakery.core.rate_limit import get_client_ip, rate_limit
from bakery.domain.contact import ContactMessageCreate
from bakery.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact_message(
    body: ContactMessageCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    _: None = Depends(rate_limit(settings.CONTACT_RATE_LIMIT)),
    service: ContactService = Depends(get_contact_service)
):
    """
    Store a contact message (status unread) and notify the shop owner by
    e-mail in the background.
    """
    try:
        message = service.submit(
            body,
            ip_address=get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )

        background_tasks.add_task(service.notify_admin, message)

        return {
            "success": True,
            "message": "Thank you for your message! We'll get back to you soon.",
            "data": {
                "id": message.id,
                "status": message.status,
                "createdAt": message.created_at,
            }
        }

    except HTTPException:
        raise
    except BakeryError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error saving contact message: {e}")
        raise HTTPException(status_code=500, detail=f"Error saving contact message: {str(e)}")
