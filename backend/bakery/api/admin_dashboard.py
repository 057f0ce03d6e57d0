"""
Admin Dashboard API Endpoints
Headline statistics and analytics
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from bakery.api.deps import get_dashboard_service
from bakery.core.admin_auth import require_any_permission, require_permission
from bakery.domain.admin import AdminPrincipal
from bakery.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard/stats")
async def get_dashboard_stats(
    admin: AdminPrincipal = Depends(
        require_any_permission(["view_analytics", "manage_products", "manage_orders"])
    ),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Get dashboard statistics

    Returns:
    - totalProducts, totalOrders, totalUsers
    - totalRevenue and averageOrderValue
    - recentOrders (last 30 days) and pendingOrders
    """
    try:
        return {"success": True, "data": service.get_stats()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching dashboard stats: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching dashboard stats: {str(e)}")


@router.get("/analytics")
async def get_analytics(
    admin: AdminPrincipal = Depends(require_permission("view_analytics")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """
    Analytics panel data: totals, 30-day growth, top products and monthly trends
    """
    try:
        return {"success": True, "data": service.get_analytics()}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching analytics: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching analytics: {str(e)}")
