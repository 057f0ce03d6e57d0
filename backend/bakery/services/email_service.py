"""
Email Service
Outgoing SMTP mail: replies to contact messages and admin notifications
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

from bakery.core.config import settings
from bakery.domain.contact import ContactMessage

logger = logging.getLogger(__name__)


class EmailService:
    """
    Thin wrapper over smtplib.

    ``is_configured`` is False until SMTP_USER and SMTP_PASS are set; callers
    check it before sending.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: Optional[bool] = None,
        business_name: Optional[str] = None,
        admin_email: Optional[str] = None
    ):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.user = user if user is not None else settings.SMTP_USER
        self.password = password if password is not None else settings.SMTP_PASS
        self.use_tls = settings.SMTP_USE_TLS if use_tls is None else use_tls
        self.business_name = business_name or settings.BUSINESS_NAME
        self.admin_email = admin_email if admin_email is not None else settings.ADMIN_EMAIL

    @property
    def is_configured(self) -> bool:
        return bool(self.user and self.password)

    def send(self, to: str, subject: str, html: str, text: str, reply_to: Optional[str] = None) -> None:
        """
        Send a multipart (plain text + HTML) message

        Raises:
            smtplib.SMTPException, OSError: delivery failed
        """
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.business_name} <{self.user}>"
        msg['To'] = to
        if reply_to:
            msg['Reply-To'] = reply_to

        msg.attach(MIMEText(text, 'plain'))
        msg.attach(MIMEText(html, 'html'))

        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            if self.use_tls:
                server.starttls()
            server.login(self.user, self.password)
            server.send_message(msg)

        logger.info(f"Email sent to {to}: {subject}")

    def send_contact_reply(self, message: ContactMessage, reply_text: str) -> None:
        """Send an admin's reply to the author of a contact message"""
        subject = f"Re: {message.subject}"
        text = (
            f"Dear {message.full_name},\n\n"
            f"{reply_text}\n\n"
            f"--- Your original message ---\n"
            f"Subject: {message.subject}\n\n"
            f"{message.message}\n\n"
            f"Best regards,\n{self.business_name}\n"
        )
        html = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2 style="color: #d97706;">{escape(self.business_name)}</h2>
                <p>Dear {escape(message.full_name)},</p>
                <div style="white-space: pre-wrap;">{escape(reply_text)}</div>
                <hr>
                <p style="color: #666;"><strong>Your original message</strong></p>
                <p style="color: #666;"><strong>Subject:</strong> {escape(message.subject)}</p>
                <div style="color: #666; white-space: pre-wrap;">{escape(message.message)}</div>
                <p>Best regards,<br>{escape(self.business_name)}</p>
            </div>
        </body>
        </html>
        """
        self.send(message.email, subject, html, text, reply_to=self.admin_email or None)

    def send_admin_notification(self, message: ContactMessage) -> None:
        """Tell the shop owner a new contact message arrived"""
        if not self.admin_email:
            logger.debug("ADMIN_EMAIL not set; skipping contact notification")
            return

        subject = f"New Contact Message: {message.subject}"
        text = (
            f"New message from {message.full_name} <{message.email}>\n"
            f"Phone: {message.phone or 'N/A'}\n"
            f"Subject: {message.subject}\n\n"
            f"{message.message}\n"
        )
        html = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2>New contact message</h2>
                <p><strong>From:</strong> {escape(message.full_name)} &lt;{escape(message.email)}&gt;</p>
                <p><strong>Phone:</strong> {escape(message.phone or 'N/A')}</p>
                <p><strong>Subject:</strong> {escape(message.subject)}</p>
                <div style="background: #f9f9f9; padding: 15px; white-space: pre-wrap;">{escape(message.message)}</div>
                <p style="color: #666;">Received {message.created_at:%Y-%m-%d %H:%M} from {escape(message.ip_address or 'unknown')}</p>
            </div>
        </body>
        </html>
        """
        self.send(self.admin_email, subject, html, text, reply_to=message.email)
