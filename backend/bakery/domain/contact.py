"""
Contact form messages and the admin inbox
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, ConfigDict, field_validator

from bakery.domain.base import DomainModel, RequestSchema


CONTACT_STATUSES = ("unread", "read", "replied")


class ContactMessage(DomainModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: str = "unread"
    priority: str = "normal"
    source: str = "website"
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    read_at: Optional[datetime] = None
    read_by: Optional[str] = None
    replied_at: Optional[datetime] = None
    replied_by: Optional[str] = None
    reply: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ContactMessageCreate(RequestSchema):
    """Public contact form submission"""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class ContactReply(RequestSchema):
    reply: Optional[str] = None


class ContactMessageUpdate(RequestSchema):
    """
    Admin edit of a message. Submission metadata (created_at, ip_address,
    user_agent) is not part of this schema and so never writable.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    status: Optional[Literal["unread", "read", "replied"]] = None
    priority: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    phone: Optional[str] = None
    reply: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)
