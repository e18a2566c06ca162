"""Recorded invocation value object."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fakecheck.domain.model.argument import Argument
    from fakecheck.domain.model.member import MemberDescriptor


@dataclass(frozen=True, slots=True)
class Invocation:
    """One call made against a fake instance.

    Appended once to the instance's call log and never changed.

    Attributes:
        instance_id: Fake instance the call was made on
        member: Called member, generic arguments closed
        arguments: One Argument per declared parameter, values at call time
        return_value: Value handed back to the caller
        sequence_number: Position in the instance's log (1-based)
        raised: Exception a rule raised instead of returning, None otherwise
    """

    instance_id: int
    member: MemberDescriptor
    arguments: tuple[Argument, ...]
    return_value: object = field(default=None, compare=False)
    sequence_number: int = 1
    raised: BaseException | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.instance_id < 1:
            raise ValueError(f"instance_id must be >= 1, got {self.instance_id}")
        if self.sequence_number < 1:
            raise ValueError(f"sequence_number must be >= 1, got {self.sequence_number}")
        if len(self.arguments) != len(self.member.parameters):
            raise ValueError(
                f"{self.member.qualified_name} takes {len(self.member.parameters)} "
                f"argument(s), got {len(self.arguments)}"
            )
        if not self.member.is_closed:
            raise ValueError(f"{self.member.qualified_name} recorded with open type arguments")
