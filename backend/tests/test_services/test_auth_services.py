"""
Unit tests for customer and admin authentication services
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from bakery.core.config import settings
from bakery.core.errors import AuthenticationError, PermissionDeniedError, ValidationError
from bakery.core.security import decode_token, hash_password, verify_password
from bakery.domain.admin import AdminUser
from bakery.domain.user import User, UserRegister
from bakery.services import admin_auth_service, auth_service

NOW = datetime(2025, 6, 20, 12, 0, tzinfo=timezone.utc)

PASSWORD_HASH = hash_password("secret123")


class TestPasswordHashing:

    def test_verify(self):
        assert verify_password("secret123", PASSWORD_HASH) is True
        assert verify_password("wrong", PASSWORD_HASH) is False

    def test_malformed_hash_never_matches(self):
        assert verify_password("secret123", "") is False
        assert verify_password("secret123", "plain-text") is False


class TestAuthService:

    def _user(self, **overrides):
        data = dict(id=7, email="ana@example.com", password_hash=PASSWORD_HASH, created_at=NOW)
        data.update(overrides)
        return User(**data)

    def test_register_hashes_password_and_issues_token(self):
        repo = MagicMock()
        repo.find_by_email.return_value = None
        repo.create.return_value = self._user()
        service = auth_service.AuthService(repo=repo)

        token, user = service.register(UserRegister(email="ana@example.com", password="secret123"))

        kwargs = repo.create.call_args.kwargs
        assert kwargs["email"] == "ana@example.com"
        assert kwargs["password_hash"] != "secret123"
        assert verify_password("secret123", kwargs["password_hash"])

        payload = decode_token(token, settings.JWT_SECRET)
        assert payload["id"] == 7
        assert payload["type"] == "user"

    def test_register_duplicate_email(self):
        repo = MagicMock()
        repo.find_by_email.return_value = self._user()
        service = auth_service.AuthService(repo=repo)

        with pytest.raises(ValidationError, match="Email already registered"):
            service.register(UserRegister(email="ana@example.com", password="secret123"))
        repo.create.assert_not_called()

    def test_login_success_updates_last_login(self):
        repo = MagicMock()
        repo.find_by_email.return_value = self._user()
        service = auth_service.AuthService(repo=repo)

        token, user = service.login("ana@example.com", "secret123")

        assert user.id == 7
        repo.touch_last_login.assert_called_once_with(7)

    @pytest.mark.parametrize("email,password", [("", "secret123"), ("ana@example.com", "")])
    def test_login_requires_both_fields(self, email, password):
        service = auth_service.AuthService(repo=MagicMock())

        with pytest.raises(ValidationError):
            service.login(email, password)

    def test_login_wrong_password(self):
        repo = MagicMock()
        repo.find_by_email.return_value = self._user()
        service = auth_service.AuthService(repo=repo)

        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            service.login("ana@example.com", "wrong")
        repo.touch_last_login.assert_not_called()

    def test_login_banned(self):
        repo = MagicMock()
        repo.find_by_email.return_value = self._user(status="banned")
        service = auth_service.AuthService(repo=repo)

        with pytest.raises(PermissionDeniedError, match="Account disabled"):
            service.login("ana@example.com", "secret123")


class TestAdminAuthService:

    def _admin(self, **overrides):
        data = dict(
            id=1,
            username="jamie",
            hashed_password=PASSWORD_HASH,
            role="editor",
            permissions=["manage_products"],
            active=True,
        )
        data.update(overrides)
        return AdminUser(**data)

    def test_login_issues_admin_token(self):
        repo = MagicMock()
        repo.find_by_username.return_value = self._admin()
        service = admin_auth_service.AdminAuthService(repo=repo)

        token, admin = service.login(" jamie ", "secret123")

        repo.find_by_username.assert_called_once_with("jamie")
        repo.touch_last_login.assert_called_once_with(1)
        payload = decode_token(token, settings.ADMIN_JWT_SECRET)
        assert payload["type"] == "admin"
        assert payload["permissions"] == ["manage_products"]
        assert payload["role"] == "editor"

    def test_missing_fields(self):
        service = admin_auth_service.AdminAuthService(repo=MagicMock())

        with pytest.raises(ValidationError, match="Username and password are required"):
            service.login("", "")

    def test_unknown_user(self):
        repo = MagicMock()
        repo.find_by_username.return_value = None
        service = admin_auth_service.AdminAuthService(repo=repo)

        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            service.login("ghost", "secret123")

    def test_disabled_account(self):
        repo = MagicMock()
        repo.find_by_username.return_value = self._admin(active=False)
        service = admin_auth_service.AdminAuthService(repo=repo)

        with pytest.raises(AuthenticationError, match="Account disabled"):
            service.login("jamie", "secret123")
        repo.touch_last_login.assert_not_called()
