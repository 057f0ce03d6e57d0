"""
Admin Auth Service
Back-office login and admin token issuance

Author: Dreamy Delights
Date: 2025-06-20
"""
import logging
from typing import Optional, Tuple

from bakery.core.config import settings
from bakery.core.errors import AuthenticationError, ConfigurationError, ValidationError
from bakery.core.security import create_token, verify_password
from bakery.domain.admin import AdminUser
from bakery.repositories.admin_repository import AdminRepository

logger = logging.getLogger(__name__)


def issue_admin_token(admin: AdminUser) -> str:
    """
    Sign an admin session token

    Claims: id, username, role, permissions, type "admin"
    """
    if not settings.ADMIN_JWT_SECRET:
        logger.error("ADMIN_JWT_SECRET is not configured")
        raise ConfigurationError("Server configuration error")

    return create_token(
        {
            "id": admin.id,
            "username": admin.username,
            "role": admin.role,
            "permissions": admin.permissions,
            "type": "admin",
        },
        settings.ADMIN_JWT_SECRET,
        settings.ADMIN_TOKEN_EXPIRE_HOURS,
    )


class AdminAuthService:

    def __init__(self, repo: Optional[AdminRepository] = None):
        self.repo = repo or AdminRepository()

    def login(self, username: str, password: str) -> Tuple[str, AdminUser]:
        """
        Check credentials and issue a token

        Raises:
            ValidationError: missing username or password
            AuthenticationError: bad credentials or disabled account
            ConfigurationError: ADMIN_JWT_SECRET not set
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")

        admin = self.repo.find_by_username(username)
        if admin is None or not verify_password(password, admin.hashed_password or ""):
            logger.warning(f"Failed admin login for '{username}'")
            raise AuthenticationError("Invalid credentials")

        if not admin.active:
            logger.warning(f"Login attempt on disabled admin account '{username}'")
            raise AuthenticationError("Account disabled")

        token = issue_admin_token(admin)
        self.repo.touch_last_login(admin.id)

        logger.info(f"Admin '{username}' logged in (role {admin.role})")
        return token, admin
