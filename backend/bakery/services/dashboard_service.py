"""
Dashboard Service
Headline statistics and analytics for the back-office dashboard

Author: Dreamy Delights
Date: 2025-06-24
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from bakery.repositories.order_repository import OrderRepository
from bakery.repositories.product_repository import ProductRepository
from bakery.repositories.user_repository import UserRepository


# Length of the "recent" window and of the window it is compared against
WINDOW_DAYS = 30
TREND_MONTHS = 6
TOP_PRODUCTS = 5


def growth_percent(current: float, previous: float) -> float:
    """
    Percent change of ``current`` over ``previous``

    Both empty -> 0; only the current window has data -> 100.
    """
    if not previous:
        return 100.0 if current else 0.0
    return round((current - previous) / previous * 100, 2)


def _fill_months(rows: List[Dict[str, Any]], value_keys: List[str], months: int,
                 now: datetime) -> List[Dict[str, Any]]:
    """Return one entry per month (oldest first), zero-filling months without data"""
    by_month = {row['month']: row for row in rows}
    year, month = now.year, now.month
    keys = []
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12

    filled = []
    for key in reversed(keys):
        row = by_month.get(key, {})
        entry = {'month': key}
        for value_key in value_keys:
            entry[value_key] = row.get(value_key, 0)
        filled.append(entry)
    return filled


def _average_order_value(order_stats: Dict[str, Any]) -> float:
    """Revenue per order, counting only the orders that contribute revenue"""
    paid_orders = order_stats['revenue_orders']
    if not paid_orders:
        return 0
    return round(order_stats['total_revenue'] / paid_orders, 2)


class DashboardService:

    def __init__(
        self,
        product_repo: Optional[ProductRepository] = None,
        order_repo: Optional[OrderRepository] = None,
        user_repo: Optional[UserRepository] = None
    ):
        self.product_repo = product_repo or ProductRepository()
        self.order_repo = order_repo or OrderRepository()
        self.user_repo = user_repo or UserRepository()

    def get_stats(self) -> Dict[str, Any]:
        """
        Dashboard headline numbers

        Returns:
            totalProducts, totalOrders, totalUsers, totalRevenue (2 dp),
            recentOrders (last 30 days), pendingOrders, averageOrderValue
        """
        order_stats = self.order_repo.get_stats()
        total_orders = order_stats['total_orders']
        total_revenue = order_stats['total_revenue']

        return {
            'totalProducts': self.product_repo.count(),
            'totalOrders': total_orders,
            'totalUsers': self.user_repo.count(),
            'totalRevenue': round(total_revenue, 2),
            'recentOrders': order_stats['recent_orders'],
            'pendingOrders': order_stats['pending_orders'],
            'averageOrderValue': _average_order_value(order_stats),
        }

    def get_analytics(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Analytics panel data

        Growth figures compare the last 30 days with the 30 days before.
        """
        now = now or datetime.now(timezone.utc)
        current_start = now - timedelta(days=WINDOW_DAYS)
        previous_start = current_start - timedelta(days=WINDOW_DAYS)

        order_stats = self.order_repo.get_stats()
        current = self.order_repo.get_window_totals(current_start, now)
        previous = self.order_repo.get_window_totals(previous_start, current_start)

        new_customers = self.user_repo.count_created_between(current_start, now)
        previous_customers = self.user_repo.count_created_between(previous_start, current_start)

        products_count = self.product_repo.count()
        users_count = self.user_repo.count()
        total_orders = order_stats['total_orders']
        total_revenue = round(order_stats['total_revenue'], 2)

        return {
            'productsCount': products_count,
            'ordersCount': total_orders,
            'usersCount': users_count,
            'monthlyRevenue': round(current['revenue'], 2),
            'recentOrdersCount': current['orders'],
            'totalRevenue': total_revenue,
            'totalOrders': total_orders,
            'totalCustomers': users_count,
            'averageOrderValue': _average_order_value(order_stats),
            'revenueGrowth': growth_percent(current['revenue'], previous['revenue']),
            'orderGrowth': growth_percent(current['orders'], previous['orders']),
            'customerGrowth': growth_percent(new_customers, previous_customers),
            'topProducts': self.order_repo.get_top_products(limit=TOP_PRODUCTS),
            'salesByMonth': _fill_months(
                self.order_repo.get_sales_by_month(months=TREND_MONTHS),
                ['orders', 'revenue'], TREND_MONTHS, now
            ),
            'customersByMonth': _fill_months(
                self.user_repo.get_signups_by_month(months=TREND_MONTHS),
                ['customers'], TREND_MONTHS, now
            ),
        }
