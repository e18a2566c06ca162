"""Rule book: configured behavior rules of one fake instance."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

from fakecheck.domain.model.rule import BehaviorRule

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fakecheck.domain.model.action import RuleAction
    from fakecheck.domain.model.specification import CallSpecification


class RuleBook:
    """Behavior rules in registration order.

    Registration order is the only precedence: the newest matching rule
    answers the call.

    Not locked itself; the owning FakeManager serializes access.
    """

    __slots__ = ("_indexes", "_rules")

    def __init__(self) -> None:
        self._rules: list[BehaviorRule] = []
        self._indexes = itertools.count()

    def register(self, specification: CallSpecification, action: RuleAction) -> BehaviorRule:
        """Append a rule with the next registration index."""
        rule = BehaviorRule(
            specification=specification,
            action=action,
            registration_index=next(self._indexes),
        )
        self._rules.append(rule)
        return rule

    def newest_first(self) -> Iterator[BehaviorRule]:
        """Iterate rules from the most recently registered."""
        return reversed(self._rules.copy())

    def rules(self) -> tuple[BehaviorRule, ...]:
        """All rules, oldest first."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
