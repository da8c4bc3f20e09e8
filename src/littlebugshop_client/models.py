"""
Request and response models for the LittleBugShop API.

The backend speaks camelCase JSON; models use snake_case attributes with
camelCase aliases and accept either form on input.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ShopModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self, *, exclude: Optional[set] = None) -> dict:
        """JSON body as sent to the backend (camelCase, None values dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=exclude)


# =============================================================================
# Users
# =============================================================================


class RegisterRequest(ShopModel):
    username: str
    password: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None


class LoginRequest(ShopModel):
    username: str
    password: str


class UserInfo(ShopModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    role: str
    created_at: str


class RegisterResponse(ShopModel):
    message: str
    user: UserInfo


class LoginResponse(ShopModel):
    message: Optional[str] = None
    token: str
    user: Optional[UserInfo] = None


# =============================================================================
# Products
# =============================================================================


class Product(ShopModel):
    """Book product as created by admins and returned by /Products."""

    id: Optional[int] = None
    name: str
    author: str
    genre: str
    isbn: str
    price: float
    description: str
    type: str
    stock_quantity: int
    low_stock_threshold: int


# =============================================================================
# Cart
# =============================================================================


class AddCartItemRequest(ShopModel):
    product_id: int
    quantity: int


class CartItem(ShopModel):
    id: Optional[int] = None
    product_id: int
    product_name: Optional[str] = None
    author: Optional[str] = None
    unit_price: Optional[float] = None
    quantity: int
    total_price: Optional[float] = None


class Cart(ShopModel):
    items: List[CartItem] = Field(default_factory=list)
    total_amount: Optional[float] = None


# =============================================================================
# Errors
# =============================================================================


class ProblemDetails(ShopModel):
    """
    Error body returned by the backend.

    ASP.NET answers with RFC 9110 problem details (``title``, ``status``,
    ``errors`` keyed by field name, ``traceId``); the shop's own handlers add
    ``message`` and ``errorCode``. Every member is optional.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    type: Optional[str] = None
    title: Optional[str] = None
    status: Optional[int] = None
    detail: Optional[str] = None
    message: Optional[str] = None
    error_code: Optional[str] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    trace_id: Optional[str] = None

    @field_validator("errors", mode="before")
    @classmethod
    def _normalize_errors(cls, value: Any) -> Dict[str, List[str]]:
        if isinstance(value, dict):
            return {
                str(field): [str(m) for m in messages] if isinstance(messages, list) else [str(messages)]
                for field, messages in value.items()
            }
        if isinstance(value, list):
            return {"": [str(m) for m in value]}
        return {}

    @property
    def summary(self) -> Optional[str]:
        """Most specific human-readable message in the body."""
        return self.message or self.detail or self.title
