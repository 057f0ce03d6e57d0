"""
Service providers for route dependencies

Routers receive services through ``Depends`` so tests can swap them with
``app.dependency_overrides``.
"""
from bakery.services.admin_auth_service import AdminAuthService
from bakery.services.auth_service import AuthService
from bakery.services.cart_service import CartService
from bakery.services.contact_service import ContactService
from bakery.services.dashboard_service import DashboardService
from bakery.services.order_service import OrderService
from bakery.services.product_service import ProductService
from bakery.services.testimonial_service import TestimonialService
from bakery.services.user_service import UserService
from bakery.repositories.content_repository import ContentRepository


def get_product_service() -> ProductService:
    return ProductService()


def get_cart_service() -> CartService:
    return CartService()


def get_order_service() -> OrderService:
    return OrderService()


def get_auth_service() -> AuthService:
    return AuthService()


def get_admin_auth_service() -> AdminAuthService:
    return AdminAuthService()


def get_user_service() -> UserService:
    return UserService()


def get_testimonial_service() -> TestimonialService:
    return TestimonialService()


def get_contact_service() -> ContactService:
    return ContactService()


def get_dashboard_service() -> DashboardService:
    return DashboardService()


def get_content_repository() -> ContentRepository:
    return ContentRepository()
