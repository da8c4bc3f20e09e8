"""
Errors raised by the LittleBugShop test client.

HTTP errors are built from the backend's error body with
``LittleBugShopClientError.from_response``, which reads the ASP.NET problem
details (``title``, ``errors``) and the shop's ``message``/``errorCode``
members and picks the subclass for the status code:

    ```python
    try:
        raise_for_status(response)
    except ValidationError as e:
        e.field_errors    # {"Email": ["The Email field is not a valid e-mail address."]}
    except ConflictError as e:
        e.error_code      # "USR_EXISTS"
    ```

Plain requests return the response whatever its status so tests can assert
on it; only helpers that need a successful response (login,
retry_until_status, raise_for_status) raise.
"""

from typing import Dict, List, Optional, Type

import httpx

from littlebugshop_client.models import ProblemDetails


def parse_problem_details(response: httpx.Response) -> ProblemDetails:
    """Read the error body of ``response``; non-JSON bodies become ``detail``."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        return ProblemDetails.model_validate(body)
    return ProblemDetails(status=response.status_code, detail=response.text or None)


class LittleBugShopClientError(Exception):
    """
    Base exception for all LittleBugShop client errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code, None for transport failures
        error_code: ``errorCode`` from the response body
        field_errors: ``errors`` from a problem details body, by field name
        response: The response the error was built from
    """

    status: Optional[int] = None
    default_message = "LittleBugShop API error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        field_errors: Optional[Dict[str, List[str]]] = None,
        response: Optional[httpx.Response] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code if status_code is not None else self.status
        self.error_code = error_code
        self.field_errors = field_errors or {}
        self.response = response

    @classmethod
    def from_response(cls, response: httpx.Response, **kwargs) -> "LittleBugShopClientError":
        """
        Build an error from a non-2xx response.

        Called on the base class the subclass is chosen from the status code;
        called on a subclass that subclass is used. Extra keyword arguments go
        to the constructor.
        """
        error_class = error_class_for_status(response.status_code) if cls is LittleBugShopClientError else cls
        problem = parse_problem_details(response)
        return error_class(
            problem.summary or f"HTTP {response.status_code}",
            status_code=response.status_code,
            error_code=problem.error_code,
            field_errors=problem.errors,
            response=response,
            **kwargs,
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.insert(0, f"[{self.error_code}]")
        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")
        text = " ".join(parts)
        if self.field_errors:
            text += ": " + "; ".join(
                f"{field}: {' '.join(messages)}" if field else " ".join(messages)
                for field, messages in self.field_errors.items()
            )
        return text

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code}, "
            f"error_code={self.error_code!r})"
        )


class RetryAfterMixin:
    """Adds ``retry_after`` (seconds) from the Retry-After header."""

    response: Optional[httpx.Response]

    @property
    def retry_after(self) -> Optional[int]:
        if self.response is None:
            return None
        value = self.response.headers.get("Retry-After", "")
        return int(value) if value.isdigit() else None


# =============================================================================
# Client errors (4xx)
# =============================================================================


class ValidationError(LittleBugShopClientError):
    """Model validation failed (400); see ``field_errors``."""

    status = 400
    default_message = "One or more validation errors occurred."


class AuthenticationError(LittleBugShopClientError):
    """Missing, invalid or expired bearer token (401)."""

    status = 401
    default_message = "Authentication required"


class InvalidCredentialsError(AuthenticationError):
    """/Users/login rejected the username or password."""

    default_message = "Invalid username or password"

    def __init__(self, message: Optional[str] = None, *, username: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.username = username


class AuthorizationError(LittleBugShopClientError):
    """The user's role does not allow the operation (403), e.g. a regular user creating products."""

    status = 403
    default_message = "Access denied"


class NotFoundError(LittleBugShopClientError):
    status = 404
    default_message = "Resource not found"


class ConflictError(LittleBugShopClientError):
    """Duplicate username or email on registration (409)."""

    status = 409
    default_message = "Resource conflict"


class RateLimitError(RetryAfterMixin, LittleBugShopClientError):
    status = 429
    default_message = "Rate limit exceeded"


# =============================================================================
# Server errors (5xx)
# =============================================================================


class ServerError(LittleBugShopClientError):
    status = 500
    default_message = "Server error"


class ServiceUnavailableError(RetryAfterMixin, ServerError):
    status = 503
    default_message = "Service temporarily unavailable"


# =============================================================================
# Transport errors
# =============================================================================


class NetworkError(LittleBugShopClientError):
    """The backend could not be reached at all."""

    default_message = "Network error"


class TimeoutError(NetworkError):
    default_message = "Request timed out"


class ConnectionError(NetworkError):
    default_message = "Failed to connect to server"


# =============================================================================
# Polling
# =============================================================================


class StatusNotReachedError(LittleBugShopClientError):
    """A polled request never returned the expected status."""

    def __init__(
        self,
        expected_status: int,
        attempts: int,
        last_status: Optional[int] = None,
        *,
        message: Optional[str] = None,
    ):
        super().__init__(
            message
            or (
                f"Failed to get status {expected_status} after {attempts} attempts. "
                f"Last status: {last_status}"
            ),
            status_code=last_status,
        )
        self.expected_status = expected_status
        self.attempts = attempts
        self.last_status = last_status


# =============================================================================
# Status mapping
# =============================================================================

STATUS_CODE_EXCEPTIONS: Dict[int, Type[LittleBugShopClientError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
    500: ServerError,
    502: ServerError,
    503: ServiceUnavailableError,
    504: ServerError,
}


def error_class_for_status(status_code: int) -> Type[LittleBugShopClientError]:
    """Exception class for an HTTP status; unmapped 5xx fall back to ServerError."""
    error_class = STATUS_CODE_EXCEPTIONS.get(status_code)
    if error_class is None:
        error_class = ServerError if 500 <= status_code < 600 else LittleBugShopClientError
    return error_class


def exception_from_response(response: httpx.Response) -> LittleBugShopClientError:
    """Shorthand for ``LittleBugShopClientError.from_response(response)``."""
    return LittleBugShopClientError.from_response(response)
