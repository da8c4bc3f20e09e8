"""Book products for /Products tests."""

from typing import Any, List

from faker import Faker

from littlebugshop_client.models import Product

fake = Faker()

BOOK_GENRES = [
    "Fiction",
    "Non-Fiction",
    "Science Fiction",
    "Fantasy",
    "Mystery",
    "Thriller",
    "Romance",
    "Horror",
    "Biography",
    "History",
    "Self-Help",
    "Business",
    "Children",
    "Young Adult",
    "Poetry",
]

PRODUCT_TYPES = [
    "Book",
    "E-Book",
    "Audiobook",
    "Hardcover",
    "Paperback",
]


def _price(min_value: float, max_value: float) -> float:
    return round(fake.pyfloat(right_digits=2, min_value=min_value, max_value=max_value), 2)


def _author() -> str:
    return f"{fake.first_name()} {fake.last_name()}"


class ProductFactory:
    """Generates Product payloads for admin product creation."""

    @classmethod
    def generate_product(cls, **overrides: Any) -> Product:
        data = {
            "name": fake.catch_phrase(),
            "author": _author(),
            "genre": fake.random_element(BOOK_GENRES),
            "isbn": cls.generate_isbn(),
            "price": _price(5, 100),
            "description": fake.paragraph(nb_sentences=fake.random_int(min=2, max=5)),
            "type": fake.random_element(PRODUCT_TYPES),
            "stock_quantity": fake.random_int(min=0, max=500),
            "low_stock_threshold": fake.random_int(min=5, max=20),
        }
        data.update(overrides)
        return Product(**data)

    @classmethod
    def generate_product_with_name(cls, name: str) -> Product:
        return cls.generate_product(name=name)

    @classmethod
    def generate_product_with_author(cls, author: str) -> Product:
        return cls.generate_product(author=author)

    @classmethod
    def generate_product_with_genre(cls, genre: str) -> Product:
        return cls.generate_product(genre=genre)

    @classmethod
    def generate_product_with_type(cls, product_type: str) -> Product:
        return cls.generate_product(type=product_type)

    @classmethod
    def generate_product_with_price(cls, price: float) -> Product:
        return cls.generate_product(price=price)

    @classmethod
    def generate_product_with_stock(cls, stock_quantity: int) -> Product:
        return cls.generate_product(stock_quantity=stock_quantity)

    @classmethod
    def generate_product_with_low_stock(cls) -> Product:
        """Stock strictly below the low stock threshold."""
        threshold = fake.random_int(min=10, max=20)
        return cls.generate_product(
            stock_quantity=fake.random_int(min=1, max=threshold - 1),
            low_stock_threshold=threshold,
        )

    @classmethod
    def generate_out_of_stock_product(cls) -> Product:
        return cls.generate_product(stock_quantity=0)

    @classmethod
    def generate_product_with_high_stock(cls) -> Product:
        return cls.generate_product(stock_quantity=fake.random_int(min=200, max=1000))

    @classmethod
    def generate_product_with_negative_price(cls) -> Product:
        return cls.generate_product(price=-_price(1, 100))

    @classmethod
    def generate_product_with_zero_price(cls) -> Product:
        return cls.generate_product(price=0)

    @classmethod
    def generate_product_with_invalid_isbn(cls) -> Product:
        return cls.generate_product(isbn=fake.pystr(min_chars=5, max_chars=5))

    @classmethod
    def generate_product_with_empty_fields(cls) -> Product:
        return Product(
            name="",
            author="",
            genre="",
            isbn="",
            price=0,
            description="",
            type="",
            stock_quantity=0,
            low_stock_threshold=0,
        )

    @classmethod
    def generate_product_with_long_name(cls) -> Product:
        return cls.generate_product(name=" ".join(fake.words(nb=50)))

    @classmethod
    def generate_product_with_long_description(cls) -> Product:
        return cls.generate_product(description="\n\n".join(fake.paragraphs(nb=20)))

    @classmethod
    def generate_product_with_special_characters_in_name(cls) -> Product:
        special = fake.random_element(["!", "@", "#", "$", "%", "&", "*"])
        return cls.generate_product(name=f"{' '.join(fake.words(nb=2))}{special}{fake.word()}")

    @classmethod
    def generate_products(cls, count: int) -> List[Product]:
        return [cls.generate_product() for _ in range(count)]

    @classmethod
    def generate_products_by_genre(cls, genre: str, count: int) -> List[Product]:
        return [cls.generate_product_with_genre(genre) for _ in range(count)]

    @classmethod
    def generate_products_by_author(cls, author: str, count: int) -> List[Product]:
        return [cls.generate_product_with_author(author) for _ in range(count)]

    @staticmethod
    def generate_isbn() -> str:
        """ISBN-13 shaped string, e.g. 978-3-1234-5678-9 (check digit not computed)."""
        return (
            f"978-{fake.random_digit()}-{fake.numerify('####')}-"
            f"{fake.numerify('####')}-{fake.random_digit()}"
        )

    @staticmethod
    def generate_isbn10() -> str:
        return (
            f"{fake.random_digit()}-{fake.numerify('####')}-"
            f"{fake.numerify('####')}-{fake.random_digit()}"
        )

    @classmethod
    def generate_minimal_product(cls) -> Product:
        return Product(
            name=" ".join(fake.words(nb=fake.random_int(min=2, max=4))),
            author=_author(),
            genre=fake.random_element(BOOK_GENRES),
            isbn=cls.generate_isbn(),
            price=_price(10, 50),
            description=fake.sentence(),
            type=fake.random_element(PRODUCT_TYPES),
            stock_quantity=fake.random_int(min=10, max=100),
            low_stock_threshold=10,
        )

    @classmethod
    def generate_bestseller_product(cls) -> Product:
        return cls.generate_product(
            genre=fake.random_element(["Fiction", "Mystery", "Thriller", "Science Fiction"]),
            price=_price(20, 50),
            stock_quantity=fake.random_int(min=100, max=500),
            type="Hardcover",
        )

    @classmethod
    def generate_budget_product(cls) -> Product:
        return cls.generate_product(price=_price(1, 10), type="Paperback")

    @classmethod
    def generate_digital_product(cls) -> Product:
        # Digital products have unlimited stock
        return cls.generate_product(
            type=fake.random_element(["E-Book", "Audiobook"]),
            stock_quantity=9999,
            low_stock_threshold=0,
        )

    @staticmethod
    def available_genres() -> List[str]:
        return list(BOOK_GENRES)

    @staticmethod
    def available_types() -> List[str]:
        return list(PRODUCT_TYPES)
