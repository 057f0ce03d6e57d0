"""
Pytest fixtures and configuration for Dreamy Delights backend tests

Settings are read from the environment when ``bakery`` is first imported, so
test values are set here before anything from the package is loaded.

Author: Dreamy Delights
Date: 2025-06-14
"""
import os

os.environ["DATABASE_URL"] = ""
os.environ["JWT_SECRET"] = "test-user-secret"
os.environ["ADMIN_JWT_SECRET"] = "test-admin-secret"
os.environ["TAX_PERCENTAGE"] = "0.08"
os.environ["DELIVERY_FEE"] = "5.00"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASS"] = ""
os.environ["ADMIN_EMAIL"] = "owner@dreamydelights.test"
os.environ["STORAGE_BUCKET"] = ""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from bakery.core.admin_auth import verify_admin_token
from bakery.core.auth import get_current_user
from bakery.core.rate_limit import rate_limiter
from bakery.domain.admin import AdminPrincipal, ROLE_PERMISSIONS
from bakery.domain.user import User
from bakery.main import app


NOW = datetime(2025, 6, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Every test starts with an empty rate-limit window"""
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def client():
    """
    FastAPI test client

    Dependency overrides installed by a test are removed afterwards.
    """
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db():
    """
    A MagicMock connection/cursor pair.

    Usage:
        @patch('bakery.repositories.x.get_db_connection_dict')
        def test_...(self, mock_get_conn, mock_db):
            mock_get_conn.return_value = mock_db.conn
    """
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value = cursor

    class _Db:
        pass

    db = _Db()
    db.conn = conn
    db.cursor = cursor
    return db


@pytest.fixture
def customer():
    return User(
        id=7,
        email="ana@example.com",
        display_name="Ana Baker",
        role="customer",
        status="active",
        created_at=NOW,
    )


@pytest.fixture
def as_customer(customer):
    """Authenticate requests as ``customer``"""
    app.dependency_overrides[get_current_user] = lambda: customer
    return customer


@pytest.fixture
def as_admin():
    """
    Factory authenticating requests as an admin.

    Usage:
        as_admin(["manage_products"])
        as_admin(role="super_admin")
    """
    def _login(permissions=None, role="editor", username="jamie"):
        if permissions is None:
            permissions = ROLE_PERMISSIONS[role]
        admin = AdminPrincipal(
            id=1,
            username=username,
            email=f"{username}@dreamydelights.test",
            role=role,
            permissions=list(permissions),
        )
        app.dependency_overrides[verify_admin_token] = lambda: admin
        return admin

    return _login


@pytest.fixture
def product_row():
    """A products row as returned by RealDictCursor"""
    return {
        'id': 12,
        'name': 'Strawberry Shortcake',
        'description': 'Layers of sponge, cream and fresh strawberries',
        'price': Decimal('32.50'),
        'category': 'cakes',
        'image_url': 'https://storage.test/products/abc.jpg',
        'image_path': 'products/abc.jpg',
        'featured': True,
        'available': True,
        'stock': 4,
        'active': True,
        'created_by': 'jamie',
        'updated_by': 'jamie',
        'created_at': NOW,
        'updated_at': NOW,
    }


@pytest.fixture
def contact_row():
    return {
        'id': 3,
        'first_name': 'Lee',
        'last_name': 'Park',
        'email': 'lee@example.com',
        'phone': None,
        'subject': 'Wedding cake',
        'message': 'Do you deliver on Sundays?',
        'status': 'unread',
        'priority': 'normal',
        'source': 'website',
        'ip_address': '203.0.113.9',
        'user_agent': 'pytest',
        'read_at': None,
        'read_by': None,
        'replied_at': None,
        'replied_by': None,
        'reply': None,
        'created_at': NOW,
        'updated_at': NOW,
    }
