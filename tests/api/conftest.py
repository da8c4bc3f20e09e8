"""
Fixtures for tests against a live LittleBugShop backend.

Clients log in with the seeded accounts from the settings (ADMIN_USERNAME,
USER_USERNAME, ...). Tests in this directory carry the ``api`` marker and
only run with --run-api or RUN_API_TESTS=true.
"""

from typing import Awaitable, Callable, Optional, Tuple

import pytest_asyncio

from littlebugshop_client.factories import ProductFactory
from littlebugshop_client.http import ApiClient
from littlebugshop_client.models import Product
from littlebugshop_client.validators import ResponseValidator

CreateProduct = Callable[[Optional[Product]], Awaitable[Tuple[Product, int]]]


@pytest_asyncio.fixture
async def anonymous_client(shop_urls):
    """Client without a token."""
    async with ApiClient(shop_urls) as client:
        yield client


@pytest_asyncio.fixture
async def admin_client(shop_urls, shop_settings):
    """Client logged in as the seeded admin."""
    async with ApiClient(shop_urls) as client:
        await client.login(shop_settings.admin_username, shop_settings.admin_password)
        yield client


@pytest_asyncio.fixture
async def regular_client(shop_urls, shop_settings):
    """Client logged in as the seeded regular user."""
    async with ApiClient(shop_urls) as client:
        await client.login(shop_settings.user_username, shop_settings.user_password)
        yield client


@pytest_asyncio.fixture
async def empty_cart_client(regular_client):
    """Regular user client whose cart was cleared before the test."""
    await regular_client.delete(regular_client.urls.cart.delete)
    yield regular_client


@pytest_asyncio.fixture
async def create_product(admin_client) -> CreateProduct:
    """Create a product as admin, returning the sent data and the new id."""

    async def create(product: Optional[Product] = None) -> Tuple[Product, int]:
        product = product or ProductFactory.generate_product()
        response = await admin_client.post(admin_client.urls.products.create, json_data=product)
        ResponseValidator.validate_status_code(
            response, 201, "Product creation by admin should return 201 status"
        )
        return product, ResponseValidator.get_response_body(response)["id"]

    return create
