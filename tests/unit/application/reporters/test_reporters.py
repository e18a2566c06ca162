"""Tests for PlainTextReporter and ConsoleReporter."""

import pytest

from fakecheck.application.fake_manager import FakeManager
from fakecheck.application.reporters.console import ConsoleConfig, ConsoleReporter
from fakecheck.application.reporters.plain_text import PlainTextReporter
from fakecheck.domain.model.action import RuleAction
from fakecheck.domain.model.configuration import FakeOptions
from fakecheck.domain.model.constraint import ANY, ExactValue
from tests.factories import make_arguments, make_manager, make_member

LOAD = make_member(name="load", return_type=int)


def _manager_with_calls() -> FakeManager:
    manager = make_manager(LOAD, options=FakeOptions(name="repo"))
    manager.register_rule(LOAD, (ExactValue(2),), RuleAction(raises=ValueError("full")))
    manager.register_rule(LOAD, (ExactValue(1),), RuleAction(returns=7))
    manager.dispatch(LOAD, make_arguments(LOAD, 1))
    with pytest.raises(ValueError):
        manager.dispatch(LOAD, make_arguments(LOAD, 2))
    return manager


class TestPlainTextReporter:
    """Tests for PlainTextReporter."""

    def test_numbered_calls(self) -> None:
        """Calls are numbered with their results."""
        output = PlainTextReporter().report(_manager_with_calls())
        assert output == (
            "Calls to repo (2):\n"
            "  1: tests.IFoo.load(baz=1) -> 7\n"
            "  2: tests.IFoo.load(baz=2) raised ValueError: full\n"
        )

    def test_without_results(self) -> None:
        """show_results=False lists only the calls."""
        output = PlainTextReporter(show_results=False).report(_manager_with_calls())
        assert "->" not in output
        assert "1: tests.IFoo.load(baz=1)" in output

    def test_no_calls(self) -> None:
        """Empty logs say so."""
        output = PlainTextReporter().report(make_manager(LOAD))
        assert "(no calls)" in output


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_default_values(self) -> None:
        """Default values are set correctly."""
        config = ConsoleConfig()
        assert config.max_calls is None
        assert config.show_results is True
        assert config.width == 120

    def test_negative_max_calls_raises(self) -> None:
        """max_calls must be >= 0."""
        with pytest.raises(ValueError, match="max_calls"):
            ConsoleConfig(max_calls=-1)


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_report_contains_name_and_count(self) -> None:
        """report() shows the fake's name and its call count."""
        output = ConsoleReporter().report(_manager_with_calls())
        assert "repo" in output
        assert "Calls:" in output

    def test_report_contains_calls(self) -> None:
        """Members, arguments and results are rendered."""
        output = ConsoleReporter().report(_manager_with_calls())
        assert "tests.IFoo.load" in output
        assert "baz=1" in output
        assert "ValueError" in output

    def test_max_calls_truncates(self) -> None:
        """Calls beyond max_calls are summarized."""
        manager = make_manager(LOAD)
        manager.register_rule(LOAD, (ANY,), RuleAction(returns=1))
        for value in range(3):
            manager.dispatch(LOAD, make_arguments(LOAD, value))
        output = ConsoleReporter(ConsoleConfig(max_calls=1)).report(manager)
        assert "... 2 more call(s)" in output
