"""
Contact Service
Public contact form intake and the admin contact-message inbox

Author: Dreamy Delights
Date: 2025-07-02
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from bakery.core.errors import NotFoundError, ValidationError
from bakery.domain.contact import (
    CONTACT_STATUSES,
    ContactMessage,
    ContactMessageCreate,
    ContactMessageUpdate,
)
from bakery.repositories.contact_message_repository import ContactMessageRepository
from bakery.services.email_service import EmailService

logger = logging.getLogger(__name__)


@dataclass
class ReplyResult:
    message: ContactMessage
    email_sent: bool = False
    email_error: Optional[str] = None


class ContactService:

    def __init__(
        self,
        repo: Optional[ContactMessageRepository] = None,
        email_service: Optional[EmailService] = None
    ):
        self.repo = repo or ContactMessageRepository()
        self.email = email_service or EmailService()

    def submit(self, request: ContactMessageCreate, ip_address: Optional[str], user_agent: Optional[str]) -> ContactMessage:
        message = self.repo.create(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone or None,
            subject=request.subject,
            message=request.message,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.info(f"Contact message {message.id} received from {ip_address}")
        return message

    def notify_admin(self, message: ContactMessage) -> None:
        """
        Background task: e-mail the shop owner about a new message.

        Delivery problems are logged only; the submission already succeeded.
        """
        if not self.email.is_configured:
            logger.debug("SMTP not configured; skipping contact notification")
            return

        try:
            self.email.send_admin_notification(message)
        except Exception as e:
            logger.error(f"Failed to send notification for contact message {message.id}: {e}")

    def list_messages(self, status: Optional[str] = None, limit: int = 50) -> List[ContactMessage]:
        if status and status not in CONTACT_STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(CONTACT_STATUSES)}")
        return self.repo.find_all(status=status, limit=limit)

    def get_stats(self) -> Dict[str, int]:
        return self.repo.get_stats()

    def get_message(self, message_id: int) -> ContactMessage:
        message = self.repo.find_by_id(message_id)
        if message is None:
            raise NotFoundError("Contact message not found")
        return message

    def mark_read(self, message_id: int, admin_username: str) -> ContactMessage:
        message = self.repo.mark_read(message_id, admin_username)
        if message is None:
            raise NotFoundError("Contact message not found")
        return message

    def reply(self, message_id: int, admin_username: str, reply_text: Optional[str]) -> ReplyResult:
        """
        Mark a message replied and e-mail the reply when there is text to send

        The message is marked replied even when the e-mail cannot be sent;
        the outcome is reported in the result.
        """
        reply_text = (reply_text or "").strip() or None

        message = self.repo.mark_replied(message_id, admin_username, reply_text)
        if message is None:
            raise NotFoundError("Contact message not found")

        result = ReplyResult(message=message)
        if not reply_text:
            return result

        if not self.email.is_configured:
            result.email_error = "Email service not configured"
            logger.warning(f"Reply to contact message {message_id} stored but not e-mailed: SMTP not configured")
            return result

        try:
            self.email.send_contact_reply(message, reply_text)
            result.email_sent = True
        except Exception as e:
            result.email_error = str(e)
            logger.error(f"Failed to e-mail reply for contact message {message_id}: {e}")

        return result

    def update(self, message_id: int, request: ContactMessageUpdate) -> ContactMessage:
        changes = request.changes()
        if not changes:
            raise ValidationError("No fields to update")

        message = self.repo.update(message_id, changes)
        if message is None:
            raise NotFoundError("Contact message not found")
        return message

    def delete(self, message_id: int) -> None:
        if not self.repo.delete(message_id):
            raise NotFoundError("Contact message not found")
        logger.info(f"Contact message {message_id} deleted")
