"""Test data factories backed by Faker."""

from littlebugshop_client.factories.cart import CartFactory
from littlebugshop_client.factories.data import TestDataGenerator
from littlebugshop_client.factories.products import ProductFactory
from littlebugshop_client.factories.users import UserFactory

__all__ = [
    "CartFactory",
    "ProductFactory",
    "TestDataGenerator",
    "UserFactory",
]
