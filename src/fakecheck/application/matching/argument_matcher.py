"""Argument matching: constraints against the arguments of a call."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fakecheck.application.matching.generics import resolve_against
from fakecheck.domain.model.constraint import (
    CONSTRAINT_TYPES,
    ExactValue,
    Predicate,
    SequenceEquals,
    Wildcard,
)
from fakecheck.domain.model.direction import ParameterDirection

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fakecheck.domain.model.argument import Argument
    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.domain.model.parameter import ParameterInfo
    from fakecheck.domain.model.specification import CallSpecification

logger = logging.getLogger(__name__)


def _equal(expected: object, actual: object) -> bool:
    """== that never raises; falls back to identity for odd __eq__."""
    if expected is actual:
        return True
    try:
        return bool(expected == actual)
    except (TypeError, ValueError):
        return False


class ArgumentMatcher:
    """Direction-aware evaluation of argument constraints.

    Contracts:
        - Parameters compared in declared order, first mismatch stops
        - Constraints on OUT parameters are never evaluated
        - REF parameters compare their value at call time
        - Generic members must have identical type arguments; open
          ones are resolved against the call first

    Stateless; shared by dispatch and verification.
    """

    def matches_call(
        self,
        specification: CallSpecification,
        member: MemberDescriptor,
        arguments: Sequence[Argument],
    ) -> bool:
        """Check whether a call is one the specification describes.

        Args:
            specification: Member and constraints to match
            member: Called member, type arguments closed
            arguments: Bound arguments of the call

        Returns:
            True if member and every argument match
        """
        expected = resolve_against(specification.member, member)
        if expected != member:
            return False
        return self.matches_arguments(specification.constraints, member.parameters, arguments)

    def matches_arguments(
        self,
        constraints: Sequence[ArgumentConstraint],
        parameters: Sequence[ParameterInfo],
        arguments: Sequence[Argument],
    ) -> bool:
        """Check each argument against the constraint of its parameter."""
        if not len(constraints) == len(parameters) == len(arguments):
            return False
        for constraint, parameter, argument in zip(constraints, parameters, arguments, strict=True):
            if parameter.direction is ParameterDirection.OUT:
                continue
            if not self.matches_value(constraint, argument.value):
                return False
        return True

    def matches_value(self, constraint: ArgumentConstraint, value: object) -> bool:
        """Check a single value against a single constraint.

        A predicate that raises counts as no match.
        """
        match constraint:
            case Wildcard():
                return True
            case ExactValue(value=expected):
                return _equal(expected, value)
            case Predicate(test=test, description=description):
                try:
                    return bool(test(value))
                except Exception:
                    logger.debug(
                        "Predicate <%s> raised for %r, treated as no match",
                        description,
                        value,
                        exc_info=True,
                    )
                    return False
            case SequenceEquals(elements=elements):
                return self._matches_sequence(elements, value)
        return False

    def _matches_sequence(self, elements: tuple[object, ...], value: object) -> bool:
        if not isinstance(value, (tuple, list)):
            return False
        if len(elements) != len(value):
            return False
        for element, actual in zip(elements, value, strict=True):
            if isinstance(element, CONSTRAINT_TYPES):
                if not self.matches_value(element, actual):
                    return False
            elif not _equal(element, actual):
                return False
        return True
