"""pytest plugin for fakecheck.

Provides fixtures:
    fake_scope: FakeScope of the current test
    fake: Shortcut for fake_scope.fake

Configuration (pytest.ini or pyproject.toml):
    fakecheck_report_calls: Attach the call log of every fake to failed
        test reports (default: false). The fakecheck_report marker enables
        it for a single test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fakecheck.application.reporters.plain_text import PlainTextReporter

# Register fixtures from fixtures module
from fakecheck.presentation.pytest_plugin.fixtures import SCOPE_KEY, fake, fake_scope

if TYPE_CHECKING:
    from collections.abc import Generator

    from fakecheck.application.reporters.protocol import ReporterProtocol
    from fakecheck.application.scope import FakeScope

# Export fixtures for pytest discovery
__all__ = [
    "fake",
    "fake_scope",
]

REPORT_CALLS_INI = "fakecheck_report_calls"
REPORT_MARKER = "fakecheck_report"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        REPORT_CALLS_INI,
        type="bool",
        default=False,
        help="Attach the call logs of fakes to failed test reports.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        f"{REPORT_MARKER}: attach the call logs of fakes to the report if the test fails",
    )


def _report_calls(item: pytest.Item) -> bool:
    if item.get_closest_marker(REPORT_MARKER) is not None:
        return True
    return bool(item.config.getini(REPORT_CALLS_INI))


@pytest.hookimpl(wrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item,
    call: pytest.CallInfo[None],
) -> Generator[None, pytest.TestReport, pytest.TestReport]:
    """Add one report section per fake when a test fails."""
    report = yield
    if report.when != "call" or not report.failed or not _report_calls(item):
        return report

    scope = item.stash.get(SCOPE_KEY, None)
    if scope is None:
        return report

    report.sections.extend(report_sections(scope, PlainTextReporter()))
    return report


def report_sections(scope: FakeScope, reporter: ReporterProtocol) -> list[tuple[str, str]]:
    """One (title, call log) report section per fake of the scope, in creation order."""
    return [
        (f"fakecheck: {manager.display_name}", reporter.report(manager))
        for manager in scope.managers
    ]
