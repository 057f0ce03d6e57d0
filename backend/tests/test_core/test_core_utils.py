"""
Tests for configuration parsing, rate limiting, domain helpers and the
health endpoints
"""
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from bakery.core.config import Settings
from bakery.core.rate_limit import RateLimiter
from bakery.domain.admin import ROLE_PERMISSIONS, PERMISSIONS, normalize_permissions
from bakery.domain.order import OrderItem
from bakery.domain.product import ProductUpdate


class TestSettings:

    def test_allowed_origins_comma_list(self):
        settings = Settings(ALLOWED_ORIGINS="http://localhost:3000, https://dreamydelights.test")

        assert settings.get_allowed_origins() == ["http://localhost:3000", "https://dreamydelights.test"]

    def test_allowed_origins_json_array(self):
        settings = Settings(ALLOWED_ORIGINS='["https://dreamydelights.test"]')

        assert settings.get_allowed_origins() == ["https://dreamydelights.test"]

    def test_tax_is_a_fraction(self):
        assert Settings(TAX_PERCENTAGE="0.0825").TAX_PERCENTAGE == Decimal("0.0825")


class TestRateLimiter:

    def test_blocks_after_limit(self):
        limiter = RateLimiter()

        results = [limiter.is_allowed("ip:1", max_requests=3)[0] for _ in range(4)]

        assert results == [True, True, True, False]

    def test_identifiers_are_independent(self):
        limiter = RateLimiter()
        for _ in range(3):
            limiter.is_allowed("ip:1", max_requests=3)

        allowed, remaining, _ = limiter.is_allowed("ip:2", max_requests=3)

        assert allowed is True
        assert remaining == 2

    def test_retry_after_is_positive(self):
        limiter = RateLimiter()
        limiter.is_allowed("ip:1", max_requests=1, window_seconds=60)

        allowed, remaining, retry_after = limiter.is_allowed("ip:1", max_requests=1, window_seconds=60)

        assert allowed is False
        assert remaining == 0
        assert 0 < retry_after <= 61

    def test_reset(self):
        limiter = RateLimiter()
        limiter.is_allowed("ip:1", max_requests=1)
        limiter.reset()

        assert limiter.is_allowed("ip:1", max_requests=1)[0] is True


class TestPermissions:

    def test_list_is_kept(self):
        assert normalize_permissions(["manage_products", "view_analytics"]) == ["manage_products", "view_analytics"]

    def test_boolean_map(self):
        assert normalize_permissions({"manage_products": True, "manage_orders": False}) == ["manage_products"]

    def test_json_text(self):
        assert normalize_permissions('{"view_analytics": true}') == ["view_analytics"]
        assert normalize_permissions("") == []
        assert normalize_permissions(None) == []

    def test_role_templates(self):
        assert ROLE_PERMISSIONS["super_admin"] == list(PERMISSIONS)
        assert "manage_admins" not in ROLE_PERMISSIONS["manager"]
        assert ROLE_PERMISSIONS["analyst"] == ["view_analytics"]


class TestDomainModels:

    def test_order_item_accepts_cart_shape(self):
        item = OrderItem.model_validate({"id": 12, "name": "Cupcake", "price": "3.50", "quantity": 2})

        assert item.product_id == "12"
        assert item.line_total == Decimal("7.00")
        assert item.to_dict()["productId"] == "12"

    def test_product_update_blank_strings_mean_unchanged(self):
        update = ProductUpdate.model_validate({"name": "  ", "category": "", "stock": 3})

        assert update.changes() == {"stock": 3}


class TestHealthEndpoints:

    def test_api_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_server_time(self, client):
        before = int(datetime.now(timezone.utc).timestamp() * 1000)

        body = client.get("/api/server-time").json()

        assert body["success"] is True
        assert body["timestamp"] >= before

    def test_health_degraded_without_database(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["database"]["status"] == "disconnected"
        assert "DATABASE_URL not configured" in body["database"]["error"]

    @patch('bakery.main.get_db_connection_dict_with_retry')
    def test_health_with_database(self, mock_connect, client):
        mock_connect.return_value = MagicMock()

        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["database"]["status"] == "connected"

    @patch('bakery.core.database.time.sleep')
    @patch('bakery.core.database.psycopg2.connect')
    def test_connection_retry_backs_off(self, mock_connect, mock_sleep):
        from bakery.core import database

        mock_connect.side_effect = psycopg2.OperationalError("server closed the connection")

        with patch.object(database.settings, "DATABASE_URL", "postgresql://localhost/bakery"):
            with pytest.raises(psycopg2.OperationalError):
                database.get_db_connection_dict_with_retry(max_retries=3, retry_delay=0.5)

        assert mock_connect.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.5, 1.0]
