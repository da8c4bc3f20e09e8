"""Cart items for /Cart/items tests."""

from typing import Any, List, Optional

from faker import Faker

from littlebugshop_client.models import AddCartItemRequest

fake = Faker()

MAX_CART_QUANTITY = 99


class CartFactory:
    """
    Generates AddCartItemRequest payloads.

    Methods taking an optional ``product_id`` keep a random one when it is
    not given.
    """

    @classmethod
    def generate_cart_item(cls, **overrides: Any) -> AddCartItemRequest:
        data = {
            "product_id": fake.random_int(min=1, max=1000),
            "quantity": fake.random_int(min=1, max=10),
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return AddCartItemRequest(**data)

    @classmethod
    def generate_cart_item_with_product_id(cls, product_id: int) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=product_id)

    @classmethod
    def generate_cart_item_with_quantity(cls, quantity: int) -> AddCartItemRequest:
        return cls.generate_cart_item(quantity=quantity)

    @classmethod
    def generate_cart_item_with_negative_product_id(cls) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=-fake.random_int(min=1, max=100))

    @classmethod
    def generate_cart_item_with_zero_product_id(cls) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=0)

    @classmethod
    def generate_cart_item_with_negative_quantity(cls, product_id: Optional[int] = None) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=product_id, quantity=-fake.random_int(min=1, max=10))

    @classmethod
    def generate_cart_item_with_zero_quantity(cls, product_id: Optional[int] = None) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=product_id, quantity=0)

    @classmethod
    def generate_cart_item_with_large_quantity(cls, product_id: Optional[int] = None) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=product_id, quantity=fake.random_int(min=1000, max=10000))

    @classmethod
    def generate_cart_item_with_non_existent_product_id(cls) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=fake.random_int(min=999999, max=9999999))

    @classmethod
    def generate_cart_items(cls, count: int) -> List[AddCartItemRequest]:
        return [cls.generate_cart_item() for _ in range(count)]

    @classmethod
    def generate_unique_cart_items(cls, count: int) -> List[AddCartItemRequest]:
        """Cart items with pairwise distinct product ids (count <= 1000)."""
        product_ids = fake.random_sample(elements=list(range(1, 1001)), length=count)
        return [cls.generate_cart_item_with_product_id(product_id) for product_id in product_ids]

    @classmethod
    def generate_single_quantity_cart_item(cls, product_id: Optional[int] = None) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=product_id, quantity=1)

    @classmethod
    def generate_max_quantity_cart_item(cls, product_id: Optional[int] = None) -> AddCartItemRequest:
        return cls.generate_cart_item(product_id=product_id, quantity=MAX_CART_QUANTITY)
