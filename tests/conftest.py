"""Pytest configuration and fixtures shared by the unit and API tests."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

pytest_plugins = "pytester"


# ============================================================================
# Mock HTTP Responses
# ============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Optional[Any] = None,
    text: str = "",
    headers: Optional[Dict[str, str]] = None,
    url: str = "http://localhost:5052/api/test",
    method: str = "GET",
) -> httpx.Response:
    """Create a real httpx.Response bound to a request, for testing."""
    request = httpx.Request(method, url)
    if json_data is not None:
        return httpx.Response(status_code, json=json_data, headers=headers, request=request)
    return httpx.Response(status_code, text=text, headers=headers, request=request)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def base_url():
    """Default base URL for testing."""
    return "http://localhost:5052"


@pytest.fixture
def mock_login_response():
    """Mock successful login response."""
    return {
        "message": "Login successful",
        "token": "test-jwt-token",
        "user": {
            "id": 1,
            "username": "admin",
            "email": "admin@littlebugshop.com",
            "firstName": "Admin",
            "lastName": "User",
            "phoneNumber": None,
            "role": "Admin",
            "createdAt": "2025-01-01T00:00:00Z",
        },
    }


@pytest.fixture
def mock_problem_details():
    """ASP.NET validation problem details body."""
    return {
        "type": "https://tools.ietf.org/html/rfc9110#section-15.5.1",
        "title": "One or more validation errors occurred.",
        "status": 400,
        "errors": {
            "Email": ["The Email field is not a valid e-mail address."],
            "Password": ["The field Password must be a string with a minimum length of 6."],
        },
    }


@pytest.fixture
def make_response():
    """Factory fixture for httpx responses, see create_mock_response."""
    return create_mock_response


@pytest.fixture
def make_transport():
    """Factory fixture for a RecordingTransport around a request handler."""
    return RecordingTransport
