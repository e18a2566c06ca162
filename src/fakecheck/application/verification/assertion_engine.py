"""Assertion engine: verifies recorded calls against a specification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fakecheck.application.verification.diagnostics import build_diagnostic
from fakecheck.domain.model.outcome import VerificationResult

if TYPE_CHECKING:
    from fakecheck.application.matching.argument_matcher import ArgumentMatcher
    from fakecheck.application.recording.call_recorder import CallRecorder
    from fakecheck.domain.model.invocation import Invocation
    from fakecheck.domain.model.repeated import Repeated
    from fakecheck.domain.model.specification import CallSpecification


class AssertionEngine:
    """Counts matching calls in one instance's log and judges the count.

    Uses the same ArgumentMatcher as dispatch, so a call a rule would
    answer is a call verification counts.
    """

    __slots__ = ("_matcher", "_recorder")

    def __init__(self, recorder: CallRecorder, matcher: ArgumentMatcher) -> None:
        self._recorder = recorder
        self._matcher = matcher

    def count(self, specification: CallSpecification) -> int:
        """Number of recorded calls matching the specification."""
        return self._count(specification, self._recorder.query())

    def verify(self, specification: CallSpecification, repeated: Repeated) -> VerificationResult:
        """Check the call log against a repetition constraint.

        Args:
            specification: Expected call
            repeated: Accepted range of matching calls

        Returns:
            Passed result, or failed result carrying the diagnostic
        """
        calls = self._recorder.query()
        matched = self._count(specification, calls)
        if repeated.matches(matched):
            return VerificationResult(passed=True, matched_count=matched)
        return VerificationResult(
            passed=False,
            matched_count=matched,
            diagnostic=build_diagnostic(specification, repeated, matched, calls),
        )

    def _count(self, specification: CallSpecification, calls: tuple[Invocation, ...]) -> int:
        return sum(
            1 for call in calls if self._matcher.matches_call(specification, call.member, call.arguments)
        )
