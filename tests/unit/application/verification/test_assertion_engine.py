"""Tests for application/verification/assertion_engine.py."""

import pytest

from fakecheck.application.matching.argument_matcher import ArgumentMatcher
from fakecheck.application.recording.call_recorder import CallRecorder
from fakecheck.application.verification.assertion_engine import AssertionEngine
from fakecheck.domain.exceptions import ExpectationError
from fakecheck.domain.model.constraint import ANY, ExactValue
from fakecheck.domain.model.repeated import Repeated
from tests.factories import make_arguments, make_member, make_specification


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder(instance_id=1)


@pytest.fixture
def engine(recorder: CallRecorder) -> AssertionEngine:
    return AssertionEngine(recorder, ArgumentMatcher())


class TestAssertionEngine:
    """Tests for AssertionEngine."""

    def test_counts_matching_calls(self, recorder: CallRecorder, engine: AssertionEngine) -> None:
        """Only matching calls are counted."""
        member = make_member()
        for value in (1, 2, 1):
            recorder.record(member, make_arguments(member, value))
        assert engine.count(make_specification(member, ExactValue(1))) == 2
        assert engine.count(make_specification(member, ANY)) == 3

    def test_verify_counts_like_count(self, recorder: CallRecorder, engine: AssertionEngine) -> None:
        """verify() reports the same number count() returns."""
        member = make_member()
        for value in (1, 2, 1):
            recorder.record(member, make_arguments(member, value))
        specification = make_specification(member, ExactValue(1))
        result = engine.verify(specification, Repeated.at_least_once())
        assert result.matched_count == engine.count(specification) == 2

    def test_passes(self, recorder: CallRecorder, engine: AssertionEngine) -> None:
        """Satisfied counts pass without diagnostic."""
        member = make_member()
        recorder.record(member, make_arguments(member, 1))
        result = engine.verify(make_specification(member, ANY), Repeated.exactly(1))
        assert result.passed
        assert result.matched_count == 1
        assert result.diagnostic is None

    def test_fails_with_diagnostic(self, recorder: CallRecorder, engine: AssertionEngine) -> None:
        """Unsatisfied counts carry the diagnostic."""
        member = make_member()
        recorder.record(member, make_arguments(member, 1))
        recorder.record(member, make_arguments(member, 1))
        result = engine.verify(make_specification(member, ANY), Repeated.exactly(1))
        assert result.failed
        assert result.matched_count == 2
        assert "Expected to find it exactly once but found it #2 times" in (result.diagnostic or "")

        with pytest.raises(ExpectationError):
            result.raise_if_failed()

    def test_never(self, engine: AssertionEngine) -> None:
        """Never passes on an empty log."""
        member = make_member()
        assert engine.verify(make_specification(member, ANY), Repeated.never()).passed
