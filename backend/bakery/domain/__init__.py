"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities and the
request bodies that create or change them.

Author: Dreamy Delights
Date: 2025-06-14
"""
from bakery.domain.product import Product
from bakery.domain.cart import Cart, CartItem
from bakery.domain.order import Order, OrderItem, ShippingAddress, ORDER_STATUSES
from bakery.domain.user import User, UserSummary
from bakery.domain.admin import AdminUser, AdminPrincipal, PERMISSIONS, ROLE_PERMISSIONS
from bakery.domain.testimonial import Testimonial
from bakery.domain.contact import ContactMessage
from bakery.domain.content import ContentSection, AdminSetting

__all__ = [
    'Product',
    'Cart',
    'CartItem',
    'Order',
    'OrderItem',
    'ShippingAddress',
    'ORDER_STATUSES',
    'User',
    'UserSummary',
    'AdminUser',
    'AdminPrincipal',
    'PERMISSIONS',
    'ROLE_PERMISSIONS',
    'Testimonial',
    'ContactMessage',
    'ContentSection',
    'AdminSetting',
]
