"""Behavior rule value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fakecheck.domain.model.action import RuleAction
    from fakecheck.domain.model.specification import CallSpecification


@dataclass(frozen=True, slots=True)
class BehaviorRule:
    """Configured answer for the calls a specification matches.

    Among matching rules the highest registration_index wins.

    Attributes:
        specification: Which calls the rule answers
        action: What the rule does
        registration_index: Order of registration on the fake (0-based)
    """

    specification: CallSpecification
    action: RuleAction
    registration_index: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.registration_index < 0:
            raise ValueError(f"registration_index must be >= 0, got {self.registration_index}")
