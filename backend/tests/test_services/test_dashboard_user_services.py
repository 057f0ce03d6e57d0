"""
Unit tests for DashboardService, UserService and TestimonialService
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from bakery.core.errors import NotFoundError, ValidationError
from bakery.domain import testimonial
from bakery.domain.user import ProfileUpdate, User
from bakery.services import dashboard_service, testimonial_service, user_service

NOW = datetime(2025, 6, 20, 12, 0, tzinfo=timezone.utc)


class TestGrowthPercent:

    @pytest.mark.parametrize("current,previous,expected", [
        (150, 100, 50.0),
        (50, 100, -50.0),
        (10, 0, 100.0),
        (0, 0, 0.0),
        (1, 3, -66.67),
    ])
    def test_growth(self, current, previous, expected):
        assert dashboard_service.growth_percent(current, previous) == expected


class TestDashboardService:

    @pytest.fixture
    def repos(self):
        product_repo, order_repo, user_repo = MagicMock(), MagicMock(), MagicMock()
        product_repo.count.return_value = 12
        user_repo.count.return_value = 40
        order_repo.get_stats.return_value = {
            'total_orders': 8,
            'revenue_orders': 8,
            'total_revenue': 250.0,
            'recent_orders': 3,
            'pending_orders': 2,
        }
        return product_repo, order_repo, user_repo

    def test_stats(self, repos):
        service = dashboard_service.DashboardService(*repos)

        stats = service.get_stats()

        assert stats == {
            'totalProducts': 12,
            'totalOrders': 8,
            'totalUsers': 40,
            'totalRevenue': 250.0,
            'recentOrders': 3,
            'pendingOrders': 2,
            'averageOrderValue': 31.25,
        }

    def test_average_without_orders(self, repos):
        repos[1].get_stats.return_value = {
            'total_orders': 0, 'revenue_orders': 0, 'total_revenue': 0.0, 'recent_orders': 0, 'pending_orders': 0,
        }

        stats = dashboard_service.DashboardService(*repos).get_stats()

        assert stats['averageOrderValue'] == 0

    def test_average_ignores_cancelled_orders(self, repos):
        # one delivered order of 50 and one cancelled order of 100
        repos[1].get_stats.return_value = {
            'total_orders': 2, 'revenue_orders': 1, 'total_revenue': 50.0,
            'recent_orders': 2, 'pending_orders': 0,
        }
        service = dashboard_service.DashboardService(*repos)

        assert service.get_stats()['averageOrderValue'] == 50.0
        assert service.get_stats()['totalOrders'] == 2

    def test_analytics(self, repos):
        product_repo, order_repo, user_repo = repos
        order_repo.get_window_totals.side_effect = [
            {'orders': 6, 'revenue': 180.0, 'customers': 4},
            {'orders': 4, 'revenue': 120.0, 'customers': 3},
        ]
        user_repo.count_created_between.side_effect = [5, 0]
        order_repo.get_top_products.return_value = [
            {'productId': '12', 'name': 'Cupcake', 'quantity': 20, 'revenue': 70.0}
        ]
        order_repo.get_sales_by_month.return_value = [{'month': '2025-05', 'orders': 3, 'revenue': 90.0}]
        user_repo.get_signups_by_month.return_value = [{'month': '2025-06', 'customers': 5}]

        analytics = dashboard_service.DashboardService(*repos).get_analytics(now=NOW)

        assert analytics['monthlyRevenue'] == 180.0
        assert analytics['recentOrdersCount'] == 6
        assert analytics['revenueGrowth'] == 50.0
        assert analytics['orderGrowth'] == 50.0
        assert analytics['customerGrowth'] == 100.0
        assert analytics['totalCustomers'] == 40
        assert analytics['topProducts'][0]['name'] == 'Cupcake'

        months = [entry['month'] for entry in analytics['salesByMonth']]
        assert months == ['2025-01', '2025-02', '2025-03', '2025-04', '2025-05', '2025-06']
        assert analytics['salesByMonth'][4] == {'month': '2025-05', 'orders': 3, 'revenue': 90.0}
        assert analytics['salesByMonth'][0] == {'month': '2025-01', 'orders': 0, 'revenue': 0}
        assert analytics['customersByMonth'][-1] == {'month': '2025-06', 'customers': 5}

    def test_months_wrap_around_year(self):
        filled = dashboard_service._fill_months(
            [], ['orders'], 3, datetime(2025, 2, 1, tzinfo=timezone.utc)
        )

        assert [entry['month'] for entry in filled] == ['2024-12', '2025-01', '2025-02']


class TestUserService:

    def _user(self, **overrides):
        data = dict(id=7, email="ana@example.com", created_at=NOW)
        data.update(overrides)
        return User(**data)

    def test_update_profile(self):
        repo = MagicMock()
        repo.update_profile.return_value = self._user(display_name="Ana B.")
        service = user_service.UserService(repo=repo, admin_repo=MagicMock())

        service.update_profile(self._user(), ProfileUpdate(name="Ana B."))

        repo.update_profile.assert_called_once_with(7, {"display_name": "Ana B."})

    def test_update_profile_without_changes(self):
        service = user_service.UserService(repo=MagicMock(), admin_repo=MagicMock())

        with pytest.raises(ValidationError, match="No fields to update"):
            service.update_profile(self._user(), ProfileUpdate())

    def test_email_taken_by_another_user(self):
        repo = MagicMock()
        repo.find_by_email.return_value = self._user(id=8, email="lee@example.com")
        service = user_service.UserService(repo=repo, admin_repo=MagicMock())

        with pytest.raises(ValidationError, match="Email already registered"):
            service.update_profile(self._user(), ProfileUpdate(email="Lee@Example.com"))
        repo.update_profile.assert_not_called()

    def test_ban_disables_linked_admin(self):
        repo, admin_repo = MagicMock(), MagicMock()
        repo.update_status.return_value = self._user(status="banned")
        admin_repo.set_active_by_email.return_value = 1
        service = user_service.UserService(repo=repo, admin_repo=admin_repo)

        service.set_status(7, "banned", changed_by="jamie")

        admin_repo.set_active_by_email.assert_called_once_with("ana@example.com", False)

    def test_set_role_unknown_user(self):
        repo = MagicMock()
        repo.update_role.return_value = None
        service = user_service.UserService(repo=repo, admin_repo=MagicMock())

        with pytest.raises(NotFoundError):
            service.set_role(99, "editor", changed_by="jamie")


class TestTestimonialService:

    def _testimonial(self, **overrides):
        data = dict(id=1, name="Maria", text="Lovely", rating=5, created_at=NOW)
        data.update(overrides)
        return testimonial.Testimonial(**data)

    def test_featured(self):
        repo = MagicMock()
        repo.find_latest.return_value = [self._testimonial(featured=True)]
        service = testimonial_service.TestimonialService(repo=repo)

        result = service.list_featured(limit=3)

        assert len(result) == 1
        repo.find_latest.assert_called_once_with(limit=3, featured=True)

    def test_featured_falls_back_to_latest(self):
        repo = MagicMock()
        repo.find_latest.side_effect = [[], [self._testimonial()]]
        service = testimonial_service.TestimonialService(repo=repo)

        result = service.list_featured(limit=3)

        assert [t.id for t in result] == [1]
        assert repo.find_latest.call_args.kwargs == {"limit": 3}

    def test_update_without_changes(self):
        service = testimonial_service.TestimonialService(repo=MagicMock())

        with pytest.raises(ValidationError):
            service.update(1, testimonial.TestimonialUpdate(), updated_by="jamie")

    def test_delete_unknown(self):
        repo = MagicMock()
        repo.delete.return_value = False
        service = testimonial_service.TestimonialService(repo=repo)

        with pytest.raises(NotFoundError, match="Testimonial not found"):
            service.delete(99, deleted_by="jamie")
