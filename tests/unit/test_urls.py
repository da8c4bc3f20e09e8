"""Tests for the endpoint URL registry."""

import pytest

from littlebugshop_client.config import configure_settings
from littlebugshop_client.urls import (
    DEFAULT_BASE_URL,
    EndpointDefinition,
    LittleBugShopUrls,
    encode_segment,
    little_bug_shop,
)

DEFAULT = "http://localhost:5052"
STAGING = "https://staging.example.com"


@pytest.fixture
def shop():
    return LittleBugShopUrls(DEFAULT)


# Every operation with the parameters used to resolve it and the path it must
# produce below "<base>/api".
ENDPOINTS = [
    # Users
    ("users", "register", None, "/Users/register"),
    ("users", "login", None, "/Users/login"),
    ("users", "logout", None, "/Users/logout"),
    ("users", "get_by_id", (7,), "/Users/7"),
    ("users.admin", "users", None, "/Users/admin/users"),
    ("users.admin", "get_user_by_id", (7,), "/Users/admin/users/7"),
    ("users.admin", "update_user", (7,), "/Users/admin/users/7"),
    ("users.admin", "reset_password", (7,), "/Users/admin/users/7/reset-password"),
    # Products
    ("products", "list", None, "/Products"),
    ("products", "create", None, "/Products"),
    ("products", "get_by_id", (3,), "/Products/3"),
    ("products", "update", (3,), "/Products/3"),
    ("products", "delete", (3,), "/Products/3"),
    ("products", "availability", (3,), "/Products/3/availability"),
    ("products", "stock", (3,), "/Products/3/stock"),
    ("products", "increase_stock", (3,), "/Products/3/stock/increase"),
    ("products", "decrease_stock", (3,), "/Products/3/stock/decrease"),
    # Cart
    ("cart", "get", None, "/Cart"),
    ("cart", "delete", None, "/Cart"),
    ("cart", "clear", None, "/Cart"),
    ("cart", "add_item", None, "/Cart/items"),
    ("cart", "update_item", (11,), "/Cart/items/11"),
    ("cart", "remove_item", (11,), "/Cart/items/11"),
    ("cart", "checkout", None, "/Cart/checkout"),
    ("cart", "apply_coupon", None, "/Cart/apply-coupon"),
    ("cart", "remove_coupon", None, "/Cart/remove-coupon"),
    # Orders
    ("orders", "create", None, "/Orders/create"),
    ("orders", "place", None, "/Orders/place"),
    ("orders", "list", None, "/Orders"),
    ("orders", "my_orders", None, "/Orders/my-orders"),
    ("orders", "pending", None, "/Orders/pending"),
    ("orders", "get_by_id", (5,), "/Orders/5"),
    ("orders", "delete", (5,), "/Orders/5"),
    ("orders", "update_status", (5,), "/Orders/5/status"),
    ("orders", "cancel", (5,), "/Orders/5/cancel"),
    # Profile
    ("profile", "get", None, "/users/profile"),
    ("profile", "update", None, "/users/profile"),
    ("profile", "change_password", None, "/users/profile/change-password"),
    ("profile.addresses", "add", None, "/users/profile/addresses"),
    ("profile.addresses", "update", (2,), "/users/profile/addresses/2"),
    ("profile.addresses", "delete", (2,), "/users/profile/addresses/2"),
    ("profile.addresses", "set_default", (2,), "/users/profile/addresses/2/set-default"),
    # Reviews
    ("reviews", "create", (10,), "/products/10/Reviews"),
    ("reviews", "list", (10,), "/products/10/Reviews"),
    ("reviews", "get_by_id", (10, 5), "/products/10/Reviews/5"),
    ("reviews", "delete", (10, 5), "/products/10/Reviews/5"),
    ("reviews", "moderate", (10, 5), "/products/10/Reviews/5/moderate"),
    ("reviews", "my_review", (10,), "/products/10/my-review"),
    ("reviews", "mark_helpful", (5,), "/reviews/5/helpful"),
    ("reviews.admin", "list", None, "/admin/reviews"),
    # Wishlist
    ("wishlist", "get", None, "/Wishlist"),
    ("wishlist", "clear", None, "/Wishlist"),
    ("wishlist", "move_to_cart", None, "/Wishlist/move-to-cart"),
    ("wishlist", "count", None, "/Wishlist/count"),
    ("wishlist", "add_item", (4,), "/Wishlist/items/4"),
    ("wishlist", "remove_item", (4,), "/Wishlist/items/4"),
    ("wishlist", "check_item", (4,), "/Wishlist/check/4"),
    # Payment methods
    ("payment_methods", "list", None, "/payment-methods"),
    ("payment_methods", "add", None, "/payment-methods"),
    ("payment_methods", "get_by_id", (9,), "/payment-methods/9"),
    ("payment_methods", "update", (9,), "/payment-methods/9"),
    ("payment_methods", "delete", (9,), "/payment-methods/9"),
    ("payment_methods", "set_default", (9,), "/payment-methods/9/set-default"),
    # Payments
    ("payments", "process", None, "/payments/process"),
    ("payments", "transactions", None, "/payments/transactions"),
    ("payments", "refund", None, "/payments/refund"),
    ("payments", "get_transaction", (8,), "/payments/transactions/8"),
    ("payments.admin", "transactions", None, "/payments/admin/transactions"),
    ("payments.admin", "statistics", None, "/payments/admin/statistics"),
    # Coupons
    ("coupons", "validate", ("CODE123",), "/Coupons/validate/CODE123"),
    ("coupons.admin", "list", None, "/Coupons/admin/coupons"),
    ("coupons.admin", "create", None, "/Coupons/admin/coupons"),
    ("coupons.admin", "update", (7,), "/Coupons/admin/coupons/7"),
    ("coupons.admin", "delete", (7,), "/Coupons/admin/coupons/7"),
    ("coupons.admin", "usage", (7,), "/Coupons/admin/coupons/7/usage"),
    # Session
    ("session", "get", None, "/Session"),
]


def resolve(registry, group_path, operation, args):
    group = registry
    for name in group_path.split("."):
        group = getattr(group, name)
    leaf = getattr(group, operation)
    return leaf if args is None else leaf(*args)


class TestLittleBugShopUrls:
    """Tests for URL resolution."""

    @pytest.mark.parametrize(
        "group_path,operation,args,path",
        ENDPOINTS,
        ids=[f"{g}.{o}" for g, o, _, _ in ENDPOINTS],
    )
    def test_endpoint_path(self, shop, group_path, operation, args, path):
        """Test every operation resolves to base + /api + its path."""
        assert resolve(shop, group_path, operation, args) == f"{DEFAULT}/api{path}"

    def test_every_definition_is_covered(self):
        """Test the table above lists every endpoint of the registry."""
        defined = {(d.group, d.operation) for d in LittleBugShopUrls.definitions()}
        tested = {(g, o) for g, o, _, _ in ENDPOINTS}
        assert defined == tested

    def test_zero_parameter_leaves_are_strings(self, shop):
        assert isinstance(shop.users.register, str)
        assert isinstance(shop.cart.get, str)

    def test_parameterized_leaves_are_callables(self, shop):
        assert callable(shop.users.get_by_id)
        assert callable(shop.reviews.get_by_id)

    def test_zero_parameter_leaves_are_idempotent(self, shop):
        assert shop.users.register == shop.users.register
        assert shop.products.list == shop.products.list

    def test_none_and_empty_base_url_use_default(self):
        """Test omitted and empty base URLs fall back to the default."""
        expected = f"{DEFAULT_BASE_URL}/api/Users/register"
        assert LittleBugShopUrls(None).users.register == expected
        assert LittleBugShopUrls("").users.register == expected
        assert LittleBugShopUrls().users.register == expected

    def test_custom_base_url(self):
        urls = LittleBugShopUrls(STAGING)
        assert urls.users.login == f"{STAGING}/api/Users/login"

    def test_trailing_slash_is_stripped(self):
        urls = LittleBugShopUrls(f"{STAGING}/")
        assert urls.base_url == STAGING
        assert urls.users.login == f"{STAGING}/api/Users/login"

    def test_api_url(self):
        assert LittleBugShopUrls(STAGING).api_url == f"{STAGING}/api"

    def test_get_by_id_accepts_numbers_and_strings(self, shop):
        assert shop.users.get_by_id(123) == f"{DEFAULT}/api/Users/123"
        assert shop.users.get_by_id("abc") == f"{DEFAULT}/api/Users/abc"

    def test_review_parameters_in_declaration_order(self, shop):
        assert shop.reviews.get_by_id(10, 5) == f"{DEFAULT}/api/products/10/Reviews/5"

    def test_parameters_by_keyword(self, shop):
        assert shop.reviews.get_by_id(review_id=5, product_id=10) == (
            f"{DEFAULT}/api/products/10/Reviews/5"
        )
        assert shop.cart.update_item(item_id=3) == f"{DEFAULT}/api/Cart/items/3"

    def test_coupon_code(self, shop):
        assert shop.coupons.validate("CODE123") == f"{DEFAULT}/api/Coupons/validate/CODE123"

    def test_suffix_independent_of_base_url(self):
        """Test the path after the base URL is the same for any base."""
        default = LittleBugShopUrls(DEFAULT)
        staging = LittleBugShopUrls(STAGING)
        assert default.orders.cancel(1)[len(DEFAULT):] == staging.orders.cancel(1)[len(STAGING):]
        assert default.wishlist.count[len(DEFAULT):] == staging.wishlist.count[len(STAGING):]

    def test_admin_namespaces_contain_admin(self, shop):
        assert "admin" in shop.users.admin.users
        assert "admin" in shop.reviews.admin.list
        assert "admin" in shop.payments.admin.statistics
        assert "admin" in shop.coupons.admin.usage(1)

    def test_construction_never_raises(self):
        """Test odd base URLs are accepted as given."""
        assert LittleBugShopUrls("not a url").session.get == "not a url/api/Session"
        assert LittleBugShopUrls("/").users.login == f"{DEFAULT_BASE_URL}/api/Users/login"

    def test_instances_are_independent(self):
        first = LittleBugShopUrls(DEFAULT)
        second = LittleBugShopUrls(STAGING)
        assert first.users.login != second.users.login
        assert first.users is not second.users

    def test_repr(self):
        assert repr(LittleBugShopUrls(STAGING)) == f"LittleBugShopUrls(base_url={STAGING!r})"


class TestPathParameters:
    """Tests for parameter encoding and arity checks."""

    def test_encode_segment(self):
        assert encode_segment(42) == "42"
        assert encode_segment("CODE123") == "CODE123"
        assert encode_segment("a/b") == "a%2Fb"
        assert encode_segment("a b?c") == "a%20b%3Fc"

    def test_parameters_are_percent_encoded(self, shop):
        assert shop.coupons.validate("SAVE 10/OFF") == (
            f"{DEFAULT}/api/Coupons/validate/SAVE%2010%2FOFF"
        )

    def test_negative_and_zero_ids(self, shop):
        assert shop.products.get_by_id(-1) == f"{DEFAULT}/api/Products/-1"
        assert shop.products.get_by_id(0) == f"{DEFAULT}/api/Products/0"

    def test_missing_parameter(self, shop):
        with pytest.raises(TypeError, match="missing"):
            shop.reviews.get_by_id(10)

    def test_too_many_parameters(self, shop):
        with pytest.raises(TypeError, match="positional"):
            shop.users.get_by_id(1, 2)

    def test_unknown_keyword(self, shop):
        with pytest.raises(TypeError, match="unexpected keyword"):
            shop.users.get_by_id(user_id=1)

    def test_duplicate_parameter(self, shop):
        with pytest.raises(TypeError, match="multiple values"):
            shop.users.get_by_id(1, id=2)

    def test_builder_name(self, shop):
        assert shop.products.availability.__name__ == "availability"


class TestLazyGroups:
    """Tests for group namespaces created on first access."""

    def test_group_not_created_before_access(self):
        urls = LittleBugShopUrls(DEFAULT)
        assert "users" not in vars(urls)

    def test_group_cached_after_access(self):
        urls = LittleBugShopUrls(DEFAULT)
        users = urls.users
        assert vars(urls)["users"] is users
        assert urls.users is users

    def test_nested_group_cached(self, shop):
        assert shop.coupons.admin is shop.coupons.admin


class TestDefinitions:
    """Tests for endpoint enumeration."""

    def test_definition_fields(self):
        definitions = {(d.group, d.operation): d for d in LittleBugShopUrls.definitions()}
        review = definitions[("reviews", "get_by_id")]
        assert review == EndpointDefinition(
            group="reviews",
            operation="get_by_id",
            template="/products/{product_id}/Reviews/{review_id}",
            parameters=("product_id", "review_id"),
        )
        assert review.arity == 2
        assert definitions[("users", "register")].arity == 0

    def test_arity_at_most_two(self):
        assert all(0 <= d.arity <= 2 for d in LittleBugShopUrls.definitions())

    def test_templates_have_no_trailing_slash(self):
        assert not any(d.template.endswith("/") for d in LittleBugShopUrls.definitions())


class TestLittleBugShopFactory:
    """Tests for the little_bug_shop() factory."""

    def test_explicit_base_url(self):
        assert little_bug_shop(STAGING).users.login == f"{STAGING}/api/Users/login"

    def test_base_url_from_settings(self):
        configure_settings(base_url="http://shop.test:8080")
        assert little_bug_shop().users.login == "http://shop.test:8080/api/Users/login"

    def test_empty_base_url_uses_settings(self):
        configure_settings(base_url="http://shop.test:8080")
        assert little_bug_shop("").base_url == "http://shop.test:8080"

    def test_base_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("BASE_URL", STAGING)
        assert little_bug_shop().users.register == f"{STAGING}/api/Users/register"

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("BASE_URL", raising=False)
        assert little_bug_shop().users.register == f"{DEFAULT_BASE_URL}/api/Users/register"

    def test_fresh_instance_per_call(self):
        assert little_bug_shop(STAGING) is not little_bug_shop(STAGING)
