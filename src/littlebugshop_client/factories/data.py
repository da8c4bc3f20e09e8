"""Generic random values for ad-hoc test data."""

import string
import time

from faker import Faker

fake = Faker()


class TestDataGenerator:
    __test__ = False

    @staticmethod
    def generate_random_string(length: int = 10) -> str:
        return "".join(fake.random_choices(list(string.ascii_letters + string.digits), length=length))

    @staticmethod
    def generate_random_email() -> str:
        return f"test_{TestDataGenerator.generate_random_string(8)}@example.com"

    @staticmethod
    def generate_random_number(min_value: int = 1, max_value: int = 1000) -> int:
        return fake.random_int(min=min_value, max=max_value)

    @staticmethod
    def generate_random_boolean() -> bool:
        return fake.pybool()

    @staticmethod
    def get_current_timestamp() -> int:
        """Milliseconds since the epoch."""
        return int(time.time() * 1000)

    @staticmethod
    def generate_uuid() -> str:
        return fake.uuid4()
