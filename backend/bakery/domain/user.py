"""
Customer account models
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, ConfigDict, field_validator

from bakery.domain.base import DomainModel, RequestSchema


USER_ROLES = ("customer", "admin", "editor")
USER_STATUSES = ("active", "banned")


class User(DomainModel):
    """Customer account (the storefront user)"""
    id: int
    email: str
    password_hash: Optional[str] = Field(None, exclude=True)
    display_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    photo_url: Optional[str] = None
    role: str = "customer"
    status: str = "active"
    email_verified: bool = False
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def is_banned(self) -> bool:
        return self.status == "banned"


class UserSummary(User):
    """User row enriched with order aggregates for the admin user list"""
    total_orders: int = 0
    total_spent: float = 0.0
    is_admin: bool = False


class UserRegister(RequestSchema):
    email: EmailStr
    password: str = Field(..., min_length=6)
    display_name: Optional[str] = None

    @field_validator('email')
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UserLogin(RequestSchema):
    email: str = ""
    password: str = ""


class ProfileUpdate(RequestSchema):
    """Editable profile fields; ``name`` maps to display_name"""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_none=True)
        if 'name' in data:
            data['display_name'] = data.pop('name')
        if 'email' in data:
            data['email'] = data['email'].lower()
        return data


class UserStatusUpdate(RequestSchema):
    status: Literal["active", "banned"]


class UserRoleUpdate(RequestSchema):
    role: Literal["customer", "admin", "editor"]
