"""
Response assertion helpers.

Failures raise AssertionError with a readable message so pytest reports
them like plain ``assert`` statements.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Sequence, Type, TypeVar, Union, overload

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

M = TypeVar("M", bound=BaseModel)


def _describe(response: httpx.Response) -> str:
    try:
        request = response.request
    except RuntimeError:
        # Response built without a request
        return "response"
    return f"{request.method} {request.url}"


class ResponseValidator:
    """Static assertions on httpx responses and parsed bodies."""

    @staticmethod
    def validate_status_code(
        response: httpx.Response,
        expected: Union[int, Iterable[int]],
        message: Optional[str] = None,
    ) -> None:
        """Assert the status code equals ``expected`` (or is one of them)."""
        allowed = (expected,) if isinstance(expected, int) else tuple(expected)
        if response.status_code not in allowed:
            wanted = allowed[0] if len(allowed) == 1 else f"one of {list(allowed)}"
            raise AssertionError(
                f"{message or 'Unexpected status code'}: expected {wanted}, "
                f"got {response.status_code} for {_describe(response)}. "
                f"Body: {response.text[:500]}"
            )

    @staticmethod
    def validate_success(response: httpx.Response, message: Optional[str] = None) -> None:
        """Assert a 2xx status code."""
        if not 200 <= response.status_code < 300:
            raise AssertionError(
                f"{message or 'Expected a success status'}: got {response.status_code} "
                f"for {_describe(response)}. Body: {response.text[:500]}"
            )

    @staticmethod
    def validate_content_type(response: httpx.Response, expected_type: str) -> None:
        content_type = response.headers.get("content-type", "")
        if expected_type not in content_type:
            raise AssertionError(
                f"Expected content type containing {expected_type!r}, got {content_type!r}"
            )

    @staticmethod
    def validate_response_time(response: httpx.Response, max_seconds: float) -> None:
        """Assert the request completed within ``max_seconds``."""
        elapsed = response.elapsed.total_seconds()
        if elapsed > max_seconds:
            raise AssertionError(
                f"Response took {elapsed:.3f}s, limit is {max_seconds:.3f}s for {_describe(response)}"
            )

    @staticmethod
    def validate_json_schema(response: httpx.Response, model: Type[M]) -> M:
        """Assert the JSON body matches ``model`` and return the parsed instance."""
        body = ResponseValidator.get_response_body(response)
        try:
            return model.model_validate(body)
        except PydanticValidationError as e:
            raise AssertionError(
                f"Response body does not match {model.__name__}: {e}"
            ) from e

    @overload
    @staticmethod
    def get_response_body(response: httpx.Response) -> Any: ...

    @overload
    @staticmethod
    def get_response_body(response: httpx.Response, model: Type[M]) -> M: ...

    @staticmethod
    def get_response_body(response: httpx.Response, model: Optional[Type[M]] = None):
        """Parse the JSON body, optionally into ``model``."""
        try:
            body = response.json()
        except ValueError as e:
            raise AssertionError(
                f"Response body is not valid JSON for {_describe(response)}: {response.text[:200]!r}"
            ) from e
        if model is not None:
            return model.model_validate(body)
        return body

    @staticmethod
    def validate_required_fields(data: Any, required_fields: Sequence[str]) -> None:
        """
        Assert each field is present and not None.

        Works on dicts (keys as sent by the backend) and pydantic models
        (attribute names or aliases).
        """
        for field in required_fields:
            if isinstance(data, Mapping):
                present = field in data
                value = data.get(field)
            elif isinstance(data, BaseModel):
                name = field if field in type(data).model_fields else next(
                    (n for n, f in type(data).model_fields.items() if f.alias == field),
                    None,
                )
                present = name is not None
                value = getattr(data, name) if name else None
            else:
                present = hasattr(data, field)
                value = getattr(data, field, None)

            if not present:
                raise AssertionError(f"Missing required field {field!r}")
            if value is None:
                raise AssertionError(f"Required field {field!r} is None")
