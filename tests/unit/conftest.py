"""Fixtures for unit tests: no backend, no environment leaking in."""

import pytest

from littlebugshop_client.config import ShopSettings, reset_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run each test with default settings and no environment profile."""
    monkeypatch.chdir(tmp_path)
    for name in ShopSettings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)
    reset_settings()
    yield
    reset_settings()
