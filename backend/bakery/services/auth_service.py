"""
Customer Auth Service
E-mail/password registration and login for storefront customers
"""
import logging
from typing import Optional, Tuple

from bakery.core.config import settings
from bakery.core.errors import (
    AuthenticationError,
    ConfigurationError,
    PermissionDeniedError,
    ValidationError,
)
from bakery.core.security import create_token, hash_password, verify_password
from bakery.domain.user import User, UserRegister
from bakery.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def issue_user_token(user: User) -> str:
    """Sign a customer session token"""
    if not settings.JWT_SECRET:
        logger.error("JWT_SECRET is not configured")
        raise ConfigurationError("Server configuration error")

    return create_token(
        {
            "sub": str(user.id),
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "type": "user",
        },
        settings.JWT_SECRET,
        settings.USER_TOKEN_EXPIRE_HOURS,
    )


class AuthService:

    def __init__(self, repo: Optional[UserRepository] = None):
        self.repo = repo or UserRepository()

    def register(self, request: UserRegister) -> Tuple[str, User]:
        """
        Raises:
            ValidationError: e-mail already registered
        """
        if self.repo.find_by_email(request.email):
            raise ValidationError("Email already registered")

        user = self.repo.create(
            email=request.email,
            password_hash=hash_password(request.password),
            display_name=request.display_name,
        )
        logger.info(f"Registered customer {user.id}")
        return issue_user_token(user), user

    def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        Raises:
            ValidationError: missing e-mail or password
            AuthenticationError: unknown e-mail or wrong password
            PermissionDeniedError: banned account
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.repo.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash or ""):
            logger.warning("Failed customer login attempt")
            raise AuthenticationError("Invalid email or password")

        if user.is_banned:
            logger.warning(f"Login attempt by banned user {user.id}")
            raise PermissionDeniedError("Account disabled")

        self.repo.touch_last_login(user.id)
        logger.info(f"Customer {user.id} logged in")
        return issue_user_token(user), user
