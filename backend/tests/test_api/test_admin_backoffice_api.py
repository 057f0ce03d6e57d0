"""
Tests for admin order, user, dashboard and content endpoints
"""
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from bakery.api.deps import (
    get_content_repository,
    get_dashboard_service,
    get_order_service,
    get_user_service,
)
from bakery.core.errors import NotFoundError
from bakery.domain.content import AdminSetting, ContentSection
from bakery.domain.order import Order
from bakery.domain.user import User, UserSummary
from bakery.main import app

NOW = datetime(2025, 6, 20, 12, 0, tzinfo=timezone.utc)


def _override(provider):
    mock = MagicMock()
    app.dependency_overrides[provider] = lambda: mock
    return mock


class TestAdminOrders:

    def test_list_orders_with_status_filter(self, client, as_admin):
        as_admin(["manage_orders"])
        service = _override(get_order_service)
        service.list_orders.return_value = (
            [Order(id=5, user_id=7, status="pending", total_amount=Decimal("20.00"),
                   customer_email="ana@example.com", created_at=NOW)],
            1,
        )

        response = client.get("/api/admin/orders?status=pending")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["data"][0]["customerEmail"] == "ana@example.com"
        service.list_orders.assert_called_once_with(status="pending", limit=100, offset=0)

    def test_unknown_status_filter(self, client, as_admin):
        as_admin(["manage_orders"])
        service = _override(get_order_service)

        response = client.get("/api/admin/orders?status=lost")

        assert response.status_code == 400
        service.list_orders.assert_not_called()

    def test_update_status(self, client, as_admin):
        as_admin(["manage_orders"], username="sam")
        service = _override(get_order_service)
        service.update_status.return_value = Order(id=5, status="preparing", updated_by="sam", created_at=NOW)

        response = client.put("/api/admin/orders/5/status", json={"status": " Preparing "})

        assert response.status_code == 200
        assert response.json()["message"] == "Order status updated to preparing"
        service.update_status.assert_called_once_with(5, "preparing", updated_by="sam")

    def test_update_to_invalid_status(self, client, as_admin):
        as_admin(["manage_orders"])
        service = _override(get_order_service)

        response = client.put("/api/admin/orders/5/status", json={"status": "eaten"})

        assert response.status_code == 400
        service.update_status.assert_not_called()

    def test_update_unknown_order(self, client, as_admin):
        as_admin(["manage_orders"])
        service = _override(get_order_service)
        service.update_status.side_effect = NotFoundError("Order not found")

        response = client.put("/api/admin/orders/404/status", json={"status": "ready"})

        assert response.status_code == 404


class TestAdminUsers:

    def test_list_users_with_aggregates(self, client, as_admin):
        as_admin(["manage_users"])
        service = _override(get_user_service)
        service.list_users.return_value = [
            UserSummary(id=7, email="ana@example.com", created_at=NOW,
                        total_orders=3, total_spent=61.5, is_admin=True)
        ]

        response = client.get("/api/admin/users")

        assert response.status_code == 200
        user = response.json()["data"][0]
        assert user["totalOrders"] == 3
        assert user["totalSpent"] == 61.5
        assert user["isAdmin"] is True

    def test_ban_user(self, client, as_admin):
        as_admin(["manage_users"])
        service = _override(get_user_service)
        service.set_status.return_value = User(id=7, email="ana@example.com", status="banned", created_at=NOW)

        response = client.patch("/api/admin/users/7/status", json={"status": "banned"})

        assert response.status_code == 200
        assert response.json()["message"] == "User disabled successfully"
        service.set_status.assert_called_once_with(7, "banned", changed_by="jamie")

    def test_invalid_status_value(self, client, as_admin):
        as_admin(["manage_users"])
        service = _override(get_user_service)

        response = client.patch("/api/admin/users/7/status", json={"status": "suspended"})

        assert response.status_code == 400
        service.set_status.assert_not_called()

    def test_change_role(self, client, as_admin):
        as_admin(["manage_users"])
        service = _override(get_user_service)
        service.set_role.return_value = User(id=7, email="ana@example.com", role="editor", created_at=NOW)

        response = client.patch("/api/admin/users/7/role", json={"role": "editor"})

        assert response.status_code == 200
        assert response.json()["message"] == "User role updated to editor"


class TestAdminDashboard:

    def test_stats_allowed_for_product_managers(self, client, as_admin):
        as_admin(["manage_products"])
        service = _override(get_dashboard_service)
        service.get_stats.return_value = {"totalProducts": 4, "totalOrders": 0}

        response = client.get("/api/admin/dashboard/stats")

        assert response.status_code == 200
        assert response.json()["data"]["totalProducts"] == 4

    def test_analytics_requires_view_analytics(self, client, as_admin):
        as_admin(["manage_products"])
        service = _override(get_dashboard_service)

        response = client.get("/api/admin/analytics")

        assert response.status_code == 403
        service.get_analytics.assert_not_called()

    def test_analytics(self, client, as_admin):
        as_admin(role="analyst")
        service = _override(get_dashboard_service)
        service.get_analytics.return_value = {"revenueGrowth": 12.5}

        response = client.get("/api/admin/analytics")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"revenueGrowth": 12.5}}


class TestAdminContent:

    def test_get_content_keyed_by_section(self, client, as_admin):
        as_admin(["manage_content"])
        repo = _override(get_content_repository)
        repo.find_all_sections.return_value = [
            ContentSection(section="hero", data={"title": "Fresh every morning"}, updated_at=NOW)
        ]

        response = client.get("/api/admin/content")

        assert response.status_code == 200
        assert response.json()["data"]["hero"]["data"] == {"title": "Fresh every morning"}

    def test_update_section_merges(self, client, as_admin):
        as_admin(["manage_content"])
        repo = _override(get_content_repository)
        repo.merge_section.return_value = ContentSection(
            section="hero", data={"title": "New", "subtitle": "Kept"}, updated_by="jamie"
        )

        response = client.put("/api/admin/content/hero", json={"title": "New"})

        assert response.status_code == 200
        repo.merge_section.assert_called_once_with("hero", {"title": "New"}, updated_by="jamie")

    def test_empty_update_is_rejected(self, client, as_admin):
        as_admin(["manage_content"])
        repo = _override(get_content_repository)

        response = client.put("/api/admin/content/hero", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"
        repo.merge_section.assert_not_called()

    def test_settings_readable_by_admin_managers(self, client, as_admin):
        as_admin(["manage_admins"])
        repo = _override(get_content_repository)
        repo.find_all_settings.return_value = [AdminSetting(key="store", value={"open": True})]

        response = client.get("/api/admin/settings")

        assert response.status_code == 200
        assert response.json()["data"]["store"]["value"] == {"open": True}

    def test_settings_write_requires_manage_settings(self, client, as_admin):
        as_admin(["manage_admins"])
        repo = _override(get_content_repository)

        response = client.put("/api/admin/settings/store", json={"open": False})

        assert response.status_code == 403
        repo.merge_setting.assert_not_called()

    def test_update_setting(self, client, as_admin):
        as_admin(role="manager")
        repo = _override(get_content_repository)
        repo.merge_setting.return_value = AdminSetting(key="store", value={"open": False}, updated_by="jamie")

        response = client.put("/api/admin/settings/store", json={"open": False})

        assert response.status_code == 200
        assert response.json()["message"] == "Settings updated successfully"
