"""
Test metadata for pytest and Allure reports.

Every piece of metadata is recorded twice: as a ``user_properties`` entry on
the pytest item (visible in JUnit XML and the terminal report) and as an
Allure label or link.

Example usage:
    ```python
    @describe_suite(
        suite="Authentication",
        suite_description="User authentication and registration tests",
        epic="User Management",
        feature="User Registration",
    )
    class TestRegistration:
        async def test_register(self, test_metadata):
            test_metadata.setup_test(
                description="Verify successful user registration with valid data",
                owner="QA Team",
                severity=TestSeverity.CRITICAL,
                known_bugs=[KnownBug("BUG-123", environments=("staging",))],
            )
    ```
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple, TypeVar

import allure
import pytest

from littlebugshop_client.config import get_settings

logger = logging.getLogger(__name__)

TestSeverity = allure.severity_level

T = TypeVar("T")

SUITE_DESCRIPTION_MARKER = "suite_description"


@dataclass(frozen=True)
class KnownBug:
    """A reported bug expected to make a test fail, optionally per environment."""

    __test__ = False

    bug_id: str
    environments: Tuple[str, ...] = ()

    def applies_to(self, env: str) -> bool:
        """True when no environments are listed or ``env`` is one of them."""
        if not self.environments:
            return True
        return any(e.lower() == env.lower() for e in self.environments)

    def url(self, bug_tracker_url: Optional[str] = None) -> str:
        base = (bug_tracker_url or get_settings().bug_tracker_url).rstrip("/")
        return f"{base}/{self.bug_id}"


def describe_suite(
    suite: Optional[str] = None,
    suite_description: Optional[str] = None,
    epic: Optional[str] = None,
    feature: Optional[str] = None,
    story: Optional[str] = None,
) -> Callable[[T], T]:
    """Decorator applying suite level metadata to a test class or function."""
    decorators = []
    if suite:
        decorators.append(allure.suite(suite))
    if epic:
        decorators.append(allure.epic(epic))
    if feature:
        decorators.append(allure.feature(feature))
    if story:
        decorators.append(allure.story(story))
    if suite_description:
        decorators.append(getattr(pytest.mark, SUITE_DESCRIPTION_MARKER)(suite_description))

    def apply(target: T) -> T:
        for decorator in decorators:
            target = decorator(target)
        return target

    return apply


class TestMetadata:
    """Per-test metadata recorder, available as the ``test_metadata`` fixture."""

    __test__ = False

    def __init__(self, request: pytest.FixtureRequest, env: Optional[str] = None):
        self._request = request
        self._node = request.node
        self._env = env

    @property
    def env(self) -> str:
        return self._env or get_settings().env

    def _annotate(self, kind: str, value: str) -> None:
        self._node.user_properties.append((kind, value))

    @property
    def suite_description(self) -> Optional[str]:
        marker = self._node.get_closest_marker(SUITE_DESCRIPTION_MARKER)
        return marker.args[0] if marker and marker.args else None

    def description(self, text: str) -> None:
        """Test description; the suite description is prepended in Allure."""
        self._annotate("Description", text)
        suite_description = self.suite_description
        if suite_description is not None:
            full_description = (
                f"Suite Description:\n{suite_description}\n\nTest Case Description:\n{text}"
            )
        else:
            full_description = f"Test Case Description:\n{text}"
        allure.dynamic.description(full_description)

    def owner(self, owner: str) -> None:
        self._annotate("Owner", owner)
        allure.dynamic.label("owner", owner)

    def severity(self, severity: allure.severity_level) -> None:
        self._annotate("Severity", severity.value)
        allure.dynamic.severity(severity)

    def epic(self, epic: str) -> None:
        self._annotate("Epic", epic)
        allure.dynamic.epic(epic)

    def feature(self, feature: str) -> None:
        self._annotate("Feature", feature)
        allure.dynamic.feature(feature)

    def story(self, story: str) -> None:
        self._annotate("Story", story)
        allure.dynamic.story(story)

    def suite(self, suite: str) -> None:
        self._annotate("Suite", suite)
        allure.dynamic.suite(suite)

    def tms(self, tms_id: str, url: str) -> None:
        """Link to the test case in the test management system."""
        self._annotate("TMS", f"{tms_id} - {url}")
        allure.dynamic.testcase(url, tms_id)

    def issue(self, issue_id: str, url: str) -> None:
        self._annotate("Issue", f"{issue_id} - {url}")
        allure.dynamic.issue(url, issue_id)

    def setup_test(
        self,
        description: Optional[str] = None,
        owner: Optional[str] = None,
        severity: Optional[allure.severity_level] = None,
        tms: Optional[Tuple[str, str]] = None,
        known_bugs: Optional[Sequence[KnownBug]] = None,
    ) -> None:
        """Apply the usual per-test metadata in one call."""
        if description:
            self.description(description)
        if owner:
            self.owner(owner)
        if severity:
            self.severity(severity)
        if tms:
            self.tms(*tms)
        if known_bugs:
            self.mark_known_bugs(known_bugs)

    def mark_known_bugs(self, known_bugs: Iterable[KnownBug]) -> list:
        """
        Mark the test as an expected failure for bugs affecting this environment.

        The xfail is strict: once the bug is fixed and the test passes, it is
        reported as failed until the marking is removed.

        Returns:
            The bugs that apply to the current environment
        """
        applied = [bug for bug in known_bugs if bug.applies_to(self.env)]
        for bug in applied:
            self._mark_known_bug(bug)
        return applied

    def _mark_known_bug(self, bug: KnownBug) -> None:
        bug_url = bug.url()
        affected = ", ".join(bug.environments) if bug.environments else "all environments"

        allure.dynamic.issue(bug_url, bug.bug_id)
        allure.dynamic.tag(f"Known Bug: {bug.bug_id}")
        logger.warning(
            f"Known bug {bug.bug_id} affects {affected} (current env: {self.env}); "
            f"the test must fail. If the bug is fixed, remove the known bug marking."
        )

        self._annotate(
            f"Known Bug {bug.bug_id}",
            f"This test has been reported as failing by known bug: {bug.bug_id}. Bug link: {bug_url}",
        )
        self._request.applymarker(
            pytest.mark.xfail(reason=f"Known bug {bug.bug_id}: {bug_url}", strict=True)
        )
