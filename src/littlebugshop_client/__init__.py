"""
LittleBugShop API Test Client.

URL registry, async HTTP client and test data factories for testing the
LittleBugShop online bookstore API.

Example usage:
    ```python
    from littlebugshop_client import ApiClient, UserFactory, little_bug_shop

    urls = little_bug_shop("http://localhost:5052")
    urls.users.register            # http://localhost:5052/api/Users/register
    urls.products.get_by_id(42)    # http://localhost:5052/api/Products/42

    async with ApiClient(urls) as client:
        response = await client.post(
            urls.users.register,
            json_data=UserFactory.generate_user(),
            authenticated=False,
        )
        assert response.status_code == 201
    ```

Test metadata helpers (Allure) live in ``littlebugshop_client.reporting``;
fixtures and markers are provided by the bundled pytest plugin.
"""

__version__ = "0.1.0"

# URL registry
from littlebugshop_client.urls import (
    DEFAULT_BASE_URL,
    API_PREFIX,
    EndpointDefinition,
    LittleBugShopUrls,
    little_bug_shop,
)

# Configuration
from littlebugshop_client.config import (
    ShopSettings,
    get_settings,
    configure_settings,
    reset_settings,
    configure_logging,
)

# HTTP client
from littlebugshop_client.http import (
    ApiClient,
    AuthProvider,
    TokenAuthProvider,
    raise_for_status,
)

# Exceptions
from littlebugshop_client.exceptions import (
    LittleBugShopClientError,
    AuthenticationError,
    InvalidCredentialsError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    NetworkError,
    TimeoutError,
    ConnectionError,
    StatusNotReachedError,
)

# Test helpers
from littlebugshop_client.validators import ResponseValidator
from littlebugshop_client.retry import retry_until_status
from littlebugshop_client.factories import (
    CartFactory,
    ProductFactory,
    TestDataGenerator,
    UserFactory,
)

__all__ = [
    "__version__",
    # URL registry
    "DEFAULT_BASE_URL",
    "API_PREFIX",
    "EndpointDefinition",
    "LittleBugShopUrls",
    "little_bug_shop",
    # Configuration
    "ShopSettings",
    "get_settings",
    "configure_settings",
    "reset_settings",
    "configure_logging",
    # HTTP client
    "ApiClient",
    "AuthProvider",
    "TokenAuthProvider",
    "raise_for_status",
    # Exceptions
    "LittleBugShopClientError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "StatusNotReachedError",
    # Test helpers
    "ResponseValidator",
    "retry_until_status",
    "CartFactory",
    "ProductFactory",
    "TestDataGenerator",
    "UserFactory",
]
