"""
Admin (back-office) accounts, roles and permissions

Author: Dreamy Delights
Date: 2025-06-20
"""
import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from bakery.domain.base import DomainModel, RequestSchema


PERMISSIONS = (
    "manage_products",
    "manage_orders",
    "manage_users",
    "manage_testimonials",
    "manage_content",
    "view_analytics",
    "manage_settings",
    "manage_admins",
)

# Default permission list per admin role
ROLE_PERMISSIONS: Dict[str, List[str]] = {
    "super_admin": list(PERMISSIONS),
    "manager": [p for p in PERMISSIONS if p != "manage_admins"],
    "editor": ["manage_products", "manage_testimonials", "manage_content"],
    "support": ["manage_orders", "manage_users", "view_analytics"],
    "analyst": ["view_analytics"],
}

ADMIN_ROLES = tuple(ROLE_PERMISSIONS.keys())


def normalize_permissions(value: Any) -> List[str]:
    """
    Permissions may be stored as a list of names or as a ``{name: bool}``
    map. Both normalise to the list of granted names.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if isinstance(value, dict):
        return [key for key, granted in value.items() if granted]
    return [str(p) for p in value]


class AdminUser(DomainModel):
    id: int
    username: str
    email: Optional[str] = None
    hashed_password: Optional[str] = Field(None, exclude=True)
    role: str = "editor"
    permissions: List[str] = Field(default_factory=list)
    active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminPrincipal(BaseModel):
    """The verified admin attached to a request"""
    id: int
    username: str
    email: Optional[str] = None
    role: str
    permissions: List[str] = Field(default_factory=list)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def has_any_permission(self, permissions: List[str]) -> bool:
        return any(p in self.permissions for p in permissions)

    @property
    def is_super_admin(self) -> bool:
        return self.role == "super_admin"


class AdminLogin(RequestSchema):
    username: str = ""
    password: str = ""
