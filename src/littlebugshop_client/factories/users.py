"""Registration data for /Users/register tests."""

import string
import time
from typing import Any, List

from faker import Faker

from littlebugshop_client.models import RegisterRequest

fake = Faker()

PASSWORD_SPECIAL_CHARS = "@#$%&*!"


class UserFactory:
    """
    Generates RegisterRequest payloads.

    Valid users have a lowercase username and email, and a password with
    upper- and lowercase letters, digits and a special character.
    """

    @classmethod
    def generate_user(cls, **overrides: Any) -> RegisterRequest:
        data = {
            "username": fake.user_name().lower(),
            "password": cls.generate_secure_password(),
            "email": fake.email().lower(),
            "first_name": fake.first_name(),
            "last_name": fake.last_name(),
            "phone_number": fake.phone_number(),
        }
        data.update(overrides)
        return RegisterRequest(**data)

    @classmethod
    def generate_minimal_user(cls, **overrides: Any) -> RegisterRequest:
        """User without the optional phone number."""
        return cls.generate_user(**{"phone_number": None, **overrides})

    @classmethod
    def generate_user_with_username(cls, username: str) -> RegisterRequest:
        return cls.generate_user(username=username)

    @classmethod
    def generate_user_with_email(cls, email: str) -> RegisterRequest:
        return cls.generate_user(email=email)

    @classmethod
    def generate_user_with_invalid_email(cls) -> RegisterRequest:
        # No @ symbol
        return cls.generate_user(email=fake.pystr(min_chars=10, max_chars=10))

    @classmethod
    def generate_user_with_weak_password(cls) -> RegisterRequest:
        return cls.generate_user(password=fake.pystr(min_chars=3, max_chars=3))

    @classmethod
    def generate_user_with_empty_fields(cls) -> RegisterRequest:
        return RegisterRequest(
            username="",
            password="",
            email="",
            first_name="",
            last_name="",
            phone_number="",
        )

    @classmethod
    def generate_user_with_special_username(cls) -> RegisterRequest:
        separator = fake.random_element(["_", "-", "."])
        username = f"{fake.word()}{separator}{fake.random_int(min=100, max=999)}"
        return cls.generate_user(username=username.lower())

    @classmethod
    def generate_users(cls, count: int) -> List[RegisterRequest]:
        return [cls.generate_user() for _ in range(count)]

    @staticmethod
    def generate_secure_password() -> str:
        return UserFactory.generate_password(length=10)

    @staticmethod
    def generate_password(
        length: int = 10,
        include_uppercase: bool = True,
        include_lowercase: bool = True,
        include_numbers: bool = True,
        include_special: bool = True,
    ) -> str:
        """
        Random password containing at least one character of each enabled class.

        When `length` is shorter than the number of enabled classes the password
        holds just one character per class.
        """
        classes = [
            (include_uppercase, string.ascii_uppercase),
            (include_lowercase, string.ascii_lowercase),
            (include_numbers, string.digits),
            (include_special, PASSWORD_SPECIAL_CHARS),
        ]
        alphabets = [alphabet for enabled, alphabet in classes if enabled]
        if not alphabets:
            raise ValueError("At least one character class must be enabled")

        chars = [fake.random_element(tuple(alphabet)) for alphabet in alphabets]
        remaining = length - len(chars)
        if remaining > 0:
            chars.extend(fake.random_elements(tuple("".join(alphabets)), length=remaining))
        fake.random.shuffle(chars)
        return "".join(chars)

    @staticmethod
    def generate_unique_username() -> str:
        return f"{fake.user_name().lower()}_{int(time.time() * 1000)}"

    @staticmethod
    def generate_unique_email() -> str:
        return f"test_{int(time.time() * 1000)}_{fake.email().lower()}"
