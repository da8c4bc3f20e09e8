"""
Endpoint URL registry for the LittleBugShop API.

Test code obtains every URL from here instead of building paths by hand:

    ```python
    from littlebugshop_client import little_bug_shop

    shop = little_bug_shop()
    shop.users.register                 # "http://localhost:5052/api/Users/register"
    shop.users.get_by_id(123)           # "http://localhost:5052/api/Users/123"
    shop.reviews.get_by_id(10, 5)       # ".../api/products/10/Reviews/5"
    shop.coupons.admin.usage(7)         # ".../api/Coupons/admin/coupons/7/usage"

    little_bug_shop("https://staging.example.com").users.login
    # "https://staging.example.com/api/Users/login"
    ```

Zero-parameter operations resolve to plain strings, parameterized operations
resolve to functions returning strings. Group namespaces are created lazily on
first access and cached on the registry instance. Route casing is part of the
wire contract with the backend and must not be normalized.
"""

from dataclasses import dataclass
from string import Formatter
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Tuple, Type, TypeVar, overload
from urllib.parse import quote

DEFAULT_BASE_URL = "http://localhost:5052"
API_PREFIX = "/api"

G = TypeVar("G", bound="EndpointGroup")


def encode_segment(value: Any) -> str:
    """Render a path parameter as a single percent-encoded path segment."""
    return quote(str(value), safe="")


@dataclass(frozen=True)
class EndpointDefinition:
    """Static description of one endpoint in the registry."""

    group: str
    operation: str
    template: str
    parameters: Tuple[str, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)


class Path:
    """Fixed path below a group root. Resolves to the URL string."""

    parameters: Tuple[str, ...] = ()

    def __init__(self, template: str = ""):
        self.template = template
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, group: None, owner: Optional[type] = None) -> "Path": ...

    @overload
    def __get__(self, group: "EndpointGroup", owner: Optional[type] = None) -> str: ...

    def __get__(self, group, owner=None):
        if group is None:
            return self
        return group._url(self.template)


class PathTemplate:
    """
    Path with ``{placeholder}`` segments below a group root.

    Resolves to a function taking the placeholders positionally (or by name)
    in declaration order and returning the URL string.
    """

    def __init__(self, template: str):
        self.template = template
        self.parameters: Tuple[str, ...] = tuple(
            field for _, field, _, _ in Formatter().parse(template) if field
        )
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def _bind(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Dict[str, Any]:
        if len(args) > len(self.parameters):
            raise TypeError(
                f"{self.name}() takes {len(self.parameters)} positional arguments "
                f"but {len(args)} were given"
            )
        values = dict(zip(self.parameters, args))
        for key, value in kwargs.items():
            if key not in self.parameters:
                raise TypeError(f"{self.name}() got an unexpected keyword argument '{key}'")
            if key in values:
                raise TypeError(f"{self.name}() got multiple values for argument '{key}'")
            values[key] = value
        missing = [p for p in self.parameters if p not in values]
        if missing:
            raise TypeError(f"{self.name}() missing required arguments: {', '.join(missing)}")
        return values

    @overload
    def __get__(self, group: None, owner: Optional[type] = None) -> "PathTemplate": ...

    @overload
    def __get__(self, group: "EndpointGroup", owner: Optional[type] = None) -> Callable[..., str]: ...

    def __get__(self, group, owner=None):
        if group is None:
            return self

        def build(*args: Any, **kwargs: Any) -> str:
            values = self._bind(args, kwargs)
            path = self.template.format(
                **{key: encode_segment(value) for key, value in values.items()}
            )
            return group._url(path)

        build.__name__ = self.name
        build.__qualname__ = f"{type(group).__name__}.{self.name}"
        return build


class Group(Generic[G]):
    """Nested namespace, created on first access and cached on the parent."""

    def __init__(self, group_class: Type[G]):
        self.group_class = group_class
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, parent: None, owner: Optional[type] = None) -> "Group[G]": ...

    @overload
    def __get__(self, parent: object, owner: Optional[type] = None) -> G: ...

    def __get__(self, parent, owner=None):
        if parent is None:
            return self
        group = self.group_class(parent._url(""))
        # Non-data descriptor: the instance attribute shadows it from now on
        parent.__dict__[self.name] = group
        return group


class EndpointGroup:
    """Base class for a resource group rooted at ``root`` below its parent."""

    root: str = ""

    def __init__(self, prefix: str):
        self._prefix = f"{prefix}{self.root}"

    def _url(self, path: str) -> str:
        return f"{self._prefix}{path}"

    @classmethod
    def definitions(cls, group_name: str, parent_path: str = "") -> Iterator[EndpointDefinition]:
        """Enumerate the endpoints of this group and its nested groups."""
        base = f"{parent_path}{cls.root}"
        for name, attribute in vars(cls).items():
            if isinstance(attribute, (Path, PathTemplate)):
                yield EndpointDefinition(
                    group=group_name,
                    operation=name,
                    template=f"{base}{attribute.template}",
                    parameters=attribute.parameters,
                )
            elif isinstance(attribute, Group):
                yield from attribute.group_class.definitions(f"{group_name}.{name}", base)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._prefix!r})"


# =============================================================================
# Resource groups
# =============================================================================


class UsersAdminEndpoints(EndpointGroup):
    root = "/admin/users"

    users = Path()
    get_user_by_id = PathTemplate("/{id}")
    update_user = PathTemplate("/{id}")
    reset_password = PathTemplate("/{id}/reset-password")


class UsersEndpoints(EndpointGroup):
    root = "/Users"

    register = Path("/register")
    login = Path("/login")
    logout = Path("/logout")
    get_by_id = PathTemplate("/{id}")
    admin = Group(UsersAdminEndpoints)


class ProductsEndpoints(EndpointGroup):
    root = "/Products"

    list = Path()
    create = Path()
    get_by_id = PathTemplate("/{id}")
    update = PathTemplate("/{id}")
    delete = PathTemplate("/{id}")
    availability = PathTemplate("/{id}/availability")
    stock = PathTemplate("/{id}/stock")
    increase_stock = PathTemplate("/{id}/stock/increase")
    decrease_stock = PathTemplate("/{id}/stock/decrease")


class CartEndpoints(EndpointGroup):
    root = "/Cart"

    get = Path()
    delete = Path()
    clear = Path()
    add_item = Path("/items")
    update_item = PathTemplate("/items/{item_id}")
    remove_item = PathTemplate("/items/{item_id}")
    checkout = Path("/checkout")
    apply_coupon = Path("/apply-coupon")
    remove_coupon = Path("/remove-coupon")


class OrdersEndpoints(EndpointGroup):
    root = "/Orders"

    create = Path("/create")
    place = Path("/place")
    list = Path()
    my_orders = Path("/my-orders")
    get_by_id = PathTemplate("/{id}")
    delete = PathTemplate("/{id}")
    update_status = PathTemplate("/{id}/status")
    pending = Path("/pending")
    cancel = PathTemplate("/{id}/cancel")


class ProfileAddressesEndpoints(EndpointGroup):
    root = "/addresses"

    add = Path()
    update = PathTemplate("/{id}")
    delete = PathTemplate("/{id}")
    set_default = PathTemplate("/{id}/set-default")


class ProfileEndpoints(EndpointGroup):
    root = "/users/profile"

    get = Path()
    update = Path()
    change_password = Path("/change-password")
    addresses = Group(ProfileAddressesEndpoints)


class ReviewsAdminEndpoints(EndpointGroup):
    root = "/admin/reviews"

    list = Path()


class ReviewsEndpoints(EndpointGroup):
    # Reviews hang off products, so the group has no root of its own
    root = ""

    create = PathTemplate("/products/{product_id}/Reviews")
    list = PathTemplate("/products/{product_id}/Reviews")
    get_by_id = PathTemplate("/products/{product_id}/Reviews/{review_id}")
    delete = PathTemplate("/products/{product_id}/Reviews/{review_id}")
    my_review = PathTemplate("/products/{product_id}/my-review")
    mark_helpful = PathTemplate("/reviews/{review_id}/helpful")
    moderate = PathTemplate("/products/{product_id}/Reviews/{review_id}/moderate")
    admin = Group(ReviewsAdminEndpoints)


class WishlistEndpoints(EndpointGroup):
    root = "/Wishlist"

    get = Path()
    clear = Path()
    add_item = PathTemplate("/items/{product_id}")
    remove_item = PathTemplate("/items/{product_id}")
    check_item = PathTemplate("/check/{product_id}")
    move_to_cart = Path("/move-to-cart")
    count = Path("/count")


class PaymentMethodsEndpoints(EndpointGroup):
    root = "/payment-methods"

    list = Path()
    add = Path()
    get_by_id = PathTemplate("/{id}")
    update = PathTemplate("/{id}")
    delete = PathTemplate("/{id}")
    set_default = PathTemplate("/{id}/set-default")


class PaymentsAdminEndpoints(EndpointGroup):
    root = "/admin"

    transactions = Path("/transactions")
    statistics = Path("/statistics")


class PaymentsEndpoints(EndpointGroup):
    root = "/payments"

    process = Path("/process")
    transactions = Path("/transactions")
    get_transaction = PathTemplate("/transactions/{id}")
    refund = Path("/refund")
    admin = Group(PaymentsAdminEndpoints)


class CouponsAdminEndpoints(EndpointGroup):
    root = "/admin/coupons"

    list = Path()
    create = Path()
    update = PathTemplate("/{id}")
    delete = PathTemplate("/{id}")
    usage = PathTemplate("/{id}/usage")


class CouponsEndpoints(EndpointGroup):
    root = "/Coupons"

    validate = PathTemplate("/validate/{code}")
    admin = Group(CouponsAdminEndpoints)


class SessionEndpoints(EndpointGroup):
    root = "/Session"

    get = Path()


# =============================================================================
# Registry
# =============================================================================


class LittleBugShopUrls:
    """
    URL registry bound to one base URL.

    The base URL is taken as given (trailing slashes stripped); an empty or
    missing value falls back to ``DEFAULT_BASE_URL``. Nothing is validated
    here, malformed input simply yields malformed URLs.
    """

    users = Group(UsersEndpoints)
    products = Group(ProductsEndpoints)
    cart = Group(CartEndpoints)
    orders = Group(OrdersEndpoints)
    profile = Group(ProfileEndpoints)
    reviews = Group(ReviewsEndpoints)
    wishlist = Group(WishlistEndpoints)
    payment_methods = Group(PaymentMethodsEndpoints)
    payments = Group(PaymentsEndpoints)
    coupons = Group(CouponsEndpoints)
    session = Group(SessionEndpoints)

    def __init__(self, base_url: Optional[str] = None):
        self._base_url = (base_url or DEFAULT_BASE_URL).rstrip("/") or DEFAULT_BASE_URL

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def api_url(self) -> str:
        return f"{self._base_url}{API_PREFIX}"

    def _url(self, path: str) -> str:
        return f"{self.api_url}{path}"

    @classmethod
    def definitions(cls) -> Iterator[EndpointDefinition]:
        """Enumerate every endpoint known to the registry."""
        for name, attribute in vars(cls).items():
            if isinstance(attribute, Group):
                yield from attribute.group_class.definitions(name)

    def __repr__(self) -> str:
        return f"LittleBugShopUrls(base_url={self._base_url!r})"


def little_bug_shop(base_url: Optional[str] = None) -> LittleBugShopUrls:
    """
    Create a URL registry.

    Args:
        base_url: Override for the API base URL. When omitted or empty the
            configured ``BASE_URL`` is used, then ``DEFAULT_BASE_URL``.

    Returns:
        A fresh LittleBugShopUrls instance
    """
    if not base_url:
        from littlebugshop_client.config import get_settings

        base_url = get_settings().base_url
    return LittleBugShopUrls(base_url)
