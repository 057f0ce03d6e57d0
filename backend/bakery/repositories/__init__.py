"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.

Author: Dreamy Delights
Date: 2025-06-14
"""
from bakery.repositories.product_repository import ProductRepository
from bakery.repositories.order_repository import OrderRepository
from bakery.repositories.cart_repository import CartRepository
from bakery.repositories.user_repository import UserRepository
from bakery.repositories.admin_repository import AdminRepository
from bakery.repositories.testimonial_repository import TestimonialRepository
from bakery.repositories.contact_message_repository import ContactMessageRepository
from bakery.repositories.content_repository import ContentRepository

__all__ = [
    'ProductRepository',
    'OrderRepository',
    'CartRepository',
    'UserRepository',
    'AdminRepository',
    'TestimonialRepository',
    'ContactMessageRepository',
    'ContentRepository',
]
