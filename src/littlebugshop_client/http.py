"""
Async HTTP client for LittleBugShop API tests.

Built on httpx with:
- Bearer token authentication
- Request/response logging
- Retries for transport-level failures
- Timeout configuration

Requests go to absolute URLs produced by the URL registry and return the
``httpx.Response`` whatever its status code, since asserting on error
statuses is what the tests are for. Helpers that need a successful response
call ``raise_for_status``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union
import logging

import httpx
from pydantic import BaseModel

from littlebugshop_client.config import get_settings
from littlebugshop_client.exceptions import (
    LittleBugShopClientError,
    InvalidCredentialsError,
    NetworkError,
    ConnectionError as ClientConnectionError,
    TimeoutError as ClientTimeoutError,
)
from littlebugshop_client.models import LoginRequest, LoginResponse
from littlebugshop_client.urls import LittleBugShopUrls, little_bug_shop

logger = logging.getLogger(__name__)

JsonBody = Union[Dict[str, Any], list, BaseModel]


class AuthProvider(ABC):
    """Abstract base class for authentication providers."""

    @abstractmethod
    async def get_access_token(self) -> Optional[str]:
        """Get the current access token."""
        ...

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if currently authenticated."""
        ...


class TokenAuthProvider(AuthProvider):
    """Holds the bearer token returned by /Users/login."""

    def __init__(self, access_token: Optional[str] = None):
        self._access_token = access_token

    async def get_access_token(self) -> Optional[str]:
        return self._access_token

    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def set_tokens(self, access_token: str) -> None:
        """Set the authentication token."""
        self._access_token = access_token

    def clear_tokens(self) -> None:
        """Clear the authentication token."""
        self._access_token = None


def raise_for_status(response: httpx.Response) -> httpx.Response:
    """
    Convert an error response to the matching exception.

    Args:
        response: Response to check

    Returns:
        The response itself when its status is 2xx

    Raises:
        LittleBugShopClientError: Subclass matching the status code
    """
    if response.is_success:
        return response

    raise LittleBugShopClientError.from_response(response)


class ApiClient:
    """
    Async HTTP client for LittleBugShop API tests.

    This client handles:
    - Authentication header injection
    - Logging of every request and its status
    - Retries for connection failures and timeouts

    Example usage:
        ```python
        async with ApiClient() as client:
            await client.login("admin", "admin123")
            response = await client.post(
                client.urls.products.create,
                json_data=ProductFactory.generate_product(),
            )
            assert response.status_code == 201
        ```
    """

    def __init__(
        self,
        urls: Optional[LittleBugShopUrls] = None,
        *,
        auth_provider: Optional[TokenAuthProvider] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            urls: URL registry used by login/logout (default: little_bug_shop())
            auth_provider: Token holder, shared between clients if needed
            timeout: Request timeout in seconds (default: API_TIMEOUT)
            max_retries: Attempts for transport failures (default: MAX_RETRIES)
            headers: Additional headers to include in all requests
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        settings = get_settings()
        self.urls = urls or little_bug_shop()
        self.auth_provider = auth_provider or TokenAuthProvider()
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.max_retries = max(1, max_retries if max_retries is not None else settings.max_retries)
        self._default_headers = headers or {}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_authenticated(self) -> bool:
        return self.auth_provider.is_authenticated()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ApiClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _build_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build request headers."""
        headers = {
            "Accept": "application/json",
            **self._default_headers,
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    async def _add_auth_header(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Add authentication header if available and not set explicitly."""
        if "Authorization" in headers:
            return headers
        if self.auth_provider.is_authenticated():
            token = await self.auth_provider.get_access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        url: str,
        *,
        json_data: Optional[JsonBody] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """
        Make an HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            url: Absolute request URL
            json_data: JSON body (dict, list or Pydantic model)
            params: Query parameters, None values dropped
            headers: Additional headers
            authenticated: Whether to send the bearer token

        Returns:
            httpx.Response object, for any status code

        Raises:
            ConnectionError: When the server cannot be reached
            TimeoutError: When every attempt timed out
        """
        client = await self._get_client()

        request_headers = self._build_headers(headers)
        if authenticated:
            request_headers = await self._add_auth_header(request_headers)

        if isinstance(json_data, BaseModel):
            json_data = json_data.model_dump(mode="json", by_alias=True, exclude_none=True)

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.info(f"{method} request to: {url}")

        last_exception: Optional[LittleBugShopClientError] = None
        for attempt in range(self.max_retries):
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                    headers=request_headers,
                )
                logger.info(f"Response status: {response.status_code}")
                return response
            except httpx.TimeoutException as e:
                last_exception = ClientTimeoutError(f"Request timed out: {e}")
            except httpx.ConnectError as e:
                last_exception = ClientConnectionError(f"Connection failed: {e}")
            except httpx.TransportError as e:
                last_exception = NetworkError(f"Request failed: {e}")

            if attempt < self.max_retries - 1:
                logger.warning(
                    f"{method} {url} failed (attempt {attempt + 1}/{self.max_retries}): {last_exception}"
                )

        raise last_exception

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request(
            "GET",
            url,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )

    async def post(
        self,
        url: str,
        *,
        json_data: Optional[JsonBody] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST",
            url,
            json_data=json_data,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )

    async def put(
        self,
        url: str,
        *,
        json_data: Optional[JsonBody] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request(
            "PUT",
            url,
            json_data=json_data,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )

    async def patch(
        self,
        url: str,
        *,
        json_data: Optional[JsonBody] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request(
            "PATCH",
            url,
            json_data=json_data,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )

    async def delete(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request(
            "DELETE",
            url,
            params=params,
            headers=headers,
            authenticated=authenticated,
        )

    # =========================================================================
    # Authentication
    # =========================================================================

    async def login(self, username: str, password: str) -> LoginResponse:
        """
        Authenticate with username and password and keep the token.

        Args:
            username: Username
            password: Password

        Returns:
            Login response with the bearer token

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            LittleBugShopClientError: If login fails for other reasons
        """
        response = await self.post(
            self.urls.users.login,
            json_data=LoginRequest(username=username, password=password),
            authenticated=False,
        )
        if response.status_code == 401:
            raise InvalidCredentialsError.from_response(response, username=username)
        raise_for_status(response)

        result = LoginResponse.model_validate(response.json())
        self.auth_provider.set_tokens(result.token)
        logger.info(f"Logged in as {username}")
        return result

    async def logout(self) -> httpx.Response:
        """Logout on the backend and drop the token whatever the outcome."""
        try:
            return await self.post(self.urls.users.logout)
        finally:
            self.auth_provider.clear_tokens()
            logger.debug("Authentication token cleared")

    def set_token(self, access_token: str) -> None:
        """Use a pre-existing bearer token."""
        self.auth_provider.set_tokens(access_token)

    def clear_token(self) -> None:
        """Send subsequent requests unauthenticated."""
        self.auth_provider.clear_tokens()

    def __repr__(self) -> str:
        auth_status = "authenticated" if self.is_authenticated else "not authenticated"
        return f"ApiClient(base_url={self.urls.base_url!r}, {auth_status})"
