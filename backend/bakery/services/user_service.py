"""
User Service
Customer profile updates and admin user management
"""
import logging
from typing import List, Optional

from bakery.core.errors import NotFoundError, ValidationError
from bakery.domain.user import ProfileUpdate, User, UserSummary
from bakery.repositories.admin_repository import AdminRepository
from bakery.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:

    def __init__(
        self,
        repo: Optional[UserRepository] = None,
        admin_repo: Optional[AdminRepository] = None
    ):
        self.repo = repo or UserRepository()
        self.admin_repo = admin_repo or AdminRepository()

    def update_profile(self, user: User, request: ProfileUpdate) -> User:
        changes = request.changes()
        if not changes:
            raise ValidationError("No fields to update")

        new_email = changes.get('email')
        if new_email and new_email != user.email:
            other = self.repo.find_by_email(new_email)
            if other is not None and other.id != user.id:
                raise ValidationError("Email already registered")

        updated = self.repo.update_profile(user.id, changes)
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    def list_users(self, limit: int = 100, offset: int = 0) -> List[UserSummary]:
        return self.repo.find_all_with_stats(limit=limit, offset=offset)

    def set_status(self, user_id: int, status: str, changed_by: str) -> User:
        """
        Ban or re-activate a customer; a linked admin account follows
        """
        user = self.repo.update_status(user_id, status)
        if user is None:
            raise NotFoundError("User not found")

        linked = self.admin_repo.set_active_by_email(user.email, status == "active")
        logger.info(
            f"User {user_id} set to {status} by {changed_by}"
            + (f" ({linked} linked admin account updated)" if linked else "")
        )
        return user

    def set_role(self, user_id: int, role: str, changed_by: str) -> User:
        user = self.repo.update_role(user_id, role)
        if user is None:
            raise NotFoundError("User not found")

        logger.info(f"User {user_id} role set to {role} by {changed_by}")
        return user
