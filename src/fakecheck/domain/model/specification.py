"""Call specification: member plus one constraint per parameter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fakecheck.domain.exceptions import ConfigurationError
from fakecheck.domain.model.constraint import CONSTRAINT_TYPES

if TYPE_CHECKING:
    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.member import MemberDescriptor


@dataclass(frozen=True, slots=True)
class CallSpecification:
    """Describes which calls a rule or a verification is about.

    Attributes:
        member: Member to match, generic arguments possibly open
        constraints: Exactly one constraint per declared parameter
    """

    member: MemberDescriptor
    constraints: tuple[ArgumentConstraint, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if len(self.constraints) != len(self.member.parameters):
            raise ConfigurationError(
                self.member.qualified_name,
                f"expected {len(self.member.parameters)} argument constraint(s), "
                f"got {len(self.constraints)}",
            )
        for constraint in self.constraints:
            if not isinstance(constraint, CONSTRAINT_TYPES):
                raise ConfigurationError(
                    self.member.qualified_name,
                    f"not an argument constraint: {type(constraint).__name__}",
                )
