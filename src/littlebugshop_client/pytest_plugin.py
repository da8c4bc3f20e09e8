"""
Pytest plugin for LittleBugShop API test suites.

Registered through the ``pytest11`` entry point, so any project with
littlebugshop_client installed gets:

- ``--run-api``, ``--shop-env`` and ``--shop-base-url`` command line options
- the ``api``, ``known_bug`` and ``suite_description`` markers
- the ``shop_settings``, ``shop_urls`` and ``test_metadata`` fixtures

Tests marked ``api`` talk to a live backend and are skipped unless
``--run-api`` is given or RUN_API_TESTS is set.
"""

import logging

import pytest

from littlebugshop_client.config import (
    ShopSettings,
    configure_logging,
    configure_settings,
    get_settings,
)
from littlebugshop_client.reporting import (
    SUITE_DESCRIPTION_MARKER,
    KnownBug,
    TestMetadata,
)
from littlebugshop_client.urls import LittleBugShopUrls, little_bug_shop

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    group = parser.getgroup("littlebugshop", "LittleBugShop API tests")
    group.addoption(
        "--run-api",
        action="store_true",
        default=False,
        help="Run tests marked 'api' against a live backend.",
    )
    group.addoption(
        "--shop-env",
        action="store",
        default=None,
        help="Environment name, selects envProfiles/<env>.env (overrides ENV).",
    )
    group.addoption(
        "--shop-base-url",
        action="store",
        default=None,
        help="Backend base URL (overrides BASE_URL).",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "api: test needs a running LittleBugShop backend"
    )
    config.addinivalue_line(
        "markers",
        "known_bug(bug_id, environments=()): expected failure caused by a reported bug",
    )
    config.addinivalue_line(
        "markers", f"{SUITE_DESCRIPTION_MARKER}(text): description shared by a test suite"
    )

    env = config.getoption("--shop-env")
    base_url = config.getoption("--shop-base-url")
    if env or base_url:
        configure_settings(env=env, base_url=base_url)

    configure_logging()


def pytest_report_header(config):
    settings = get_settings()
    return f"littlebugshop: env={settings.env}, base_url={settings.base_url}"


def known_bug_from_marker(marker: pytest.Mark) -> KnownBug:
    """Build a KnownBug from ``@pytest.mark.known_bug(bug_id, environments=...)``."""
    bug_id = marker.args[0] if marker.args else marker.kwargs["bug_id"]
    environments = marker.args[1] if len(marker.args) > 1 else marker.kwargs.get("environments", ())
    if isinstance(environments, str):
        environments = (environments,)
    return KnownBug(bug_id, tuple(environments))


def pytest_collection_modifyitems(config, items):
    settings = get_settings()
    run_api = config.getoption("--run-api") or settings.run_api_tests
    skip_api = pytest.mark.skip(
        reason="needs a live backend (use --run-api or RUN_API_TESTS=true)"
    )

    for item in items:
        if not run_api and item.get_closest_marker("api") is not None:
            item.add_marker(skip_api)

        for marker in item.iter_markers(name="known_bug"):
            bug = known_bug_from_marker(marker)
            if bug.applies_to(settings.env):
                logger.debug(f"{item.nodeid} expected to fail: known bug {bug.bug_id}")
                item.add_marker(
                    pytest.mark.xfail(reason=f"Known bug {bug.bug_id}: {bug.url()}", strict=True)
                )


@pytest.fixture(scope="session")
def shop_settings() -> ShopSettings:
    """Settings of the current test session."""
    return get_settings()


@pytest.fixture(scope="session")
def shop_urls(shop_settings: ShopSettings) -> LittleBugShopUrls:
    """URL registry for the configured backend."""
    return little_bug_shop(shop_settings.base_url)


@pytest.fixture
def test_metadata(request: pytest.FixtureRequest, shop_settings: ShopSettings) -> TestMetadata:
    """Records description, severity, links and known bugs for the current test."""
    return TestMetadata(request, env=shop_settings.env)
