"""Results of dispatch and verification."""

from __future__ import annotations

from dataclasses import dataclass

from fakecheck.domain.exceptions import ExpectationError


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """What the interception layer applies back to the call site.

    Attributes:
        value: Return value for the caller
        written_back: (parameter index, value) pairs for REF/OUT arguments
        rule_index: registration_index of the applied rule, None if defaulted
    """

    value: object = None
    written_back: tuple[tuple[int, object], ...] = ()
    rule_index: int | None = None

    @property
    def matched(self) -> bool:
        """True if a configured rule answered the call."""
        return self.rule_index is not None


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Outcome of one verification query.

    Attributes:
        passed: True if the observed count satisfied the constraint
        matched_count: Number of matching recorded calls
        diagnostic: Failure text, None when passed
    """

    passed: bool
    matched_count: int
    diagnostic: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.matched_count < 0:
            raise ValueError(f"matched_count must be >= 0, got {self.matched_count}")
        if self.passed and self.diagnostic is not None:
            raise ValueError("passed=True contradicts a diagnostic")
        if not self.passed and not self.diagnostic:
            raise ValueError("passed=False requires a diagnostic")

    @property
    def failed(self) -> bool:
        """True if verification failed."""
        return not self.passed

    def raise_if_failed(self) -> None:
        """Raise ExpectationError carrying the diagnostic when failed."""
        if self.diagnostic is not None:
            raise ExpectationError(self.diagnostic)
