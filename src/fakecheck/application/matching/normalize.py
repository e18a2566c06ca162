"""Turning call-shaped configuration into one constraint per parameter.

Configuration is written like the call it describes:
``with_args("foo", ANY, "baz")``. Plain values become ExactValue, boxes
become the value they hold, and the trailing values for a *args parameter
are folded into a single constraint for the aggregated tuple.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fakecheck.domain.exceptions import ConfigurationError
from fakecheck.domain.model.boxes import Out, Ref
from fakecheck.domain.model.constraint import (
    CONSTRAINT_TYPES,
    ExactValue,
    SequenceEquals,
    Wildcard,
)
from fakecheck.domain.model.parameter import ParameterKind

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.member import MemberDescriptor


def as_constraint(value: object) -> ArgumentConstraint:
    """Wrap a configured value as a constraint.

    Constraints pass through. ``Ref(v)`` and ``Out(v)`` become ExactValue(v);
    an empty ``Out()`` configures nothing and becomes Wildcard.
    """
    if isinstance(value, CONSTRAINT_TYPES):
        return value
    if isinstance(value, Out):
        return Wildcard() if value.value is None else ExactValue(value.value)
    if isinstance(value, Ref):
        return ExactValue(value.value)
    return ExactValue(value)


def _variadic_constraint(rest: Sequence[object]) -> ArgumentConstraint:
    """Constraint for the *args slot from the remaining positional values.

    A single wildcard, predicate, sequence or tuple value applies to the
    whole tuple; anything else is matched element-wise.
    """
    if len(rest) == 1:
        single = as_constraint(rest[0])
        if not isinstance(single, ExactValue):
            return single
        if isinstance(single.value, (tuple, list)):
            return ExactValue(tuple(single.value))
    return SequenceEquals(tuple(_unbox(item) for item in rest))


def _unbox(value: object) -> object:
    if isinstance(value, (Ref, Out)):
        return value.value
    return value


def any_arguments(member: MemberDescriptor) -> tuple[ArgumentConstraint, ...]:
    """One Wildcard per parameter."""
    return tuple(Wildcard() for _ in member.parameters)


def normalize_constraints(
    member: MemberDescriptor,
    args: Sequence[object],
    kwargs: Mapping[str, object],
) -> tuple[ArgumentConstraint, ...]:
    """Bind call-shaped configuration to the member's parameters.

    Args:
        member: Member being configured
        args: Positional values or constraints
        kwargs: Keyword values or constraints

    Returns:
        Exactly one constraint per declared parameter

    Raises:
        ConfigurationError: Too many positionals, unknown or duplicate
            keywords, or parameters left without a constraint
    """
    positional = list(args)
    keywords = dict(kwargs)
    slots: list[ArgumentConstraint | None] = [None] * len(member.parameters)

    for index, parameter in enumerate(member.parameters):
        match parameter.kind:
            case ParameterKind.POSITIONAL:
                if positional:
                    if parameter.name in keywords:
                        raise ConfigurationError(
                            member.qualified_name,
                            f"multiple constraints for parameter '{parameter.name}'",
                        )
                    slots[index] = as_constraint(positional.pop(0))
                elif parameter.name in keywords:
                    slots[index] = as_constraint(keywords.pop(parameter.name))
            case ParameterKind.VARIADIC:
                slots[index] = _variadic_constraint(positional)
                positional = []
            case ParameterKind.KEYWORD_ONLY:
                if parameter.name in keywords:
                    slots[index] = as_constraint(keywords.pop(parameter.name))
            case ParameterKind.VARIADIC_KEYWORD:
                slots[index] = ExactValue({name: _unbox(value) for name, value in keywords.items()})
                keywords = {}

    if positional:
        raise ConfigurationError(
            member.qualified_name,
            f"expected at most {len(member.parameters)} positional constraint(s), "
            f"got {len(args)}",
        )
    if keywords:
        raise ConfigurationError(
            member.qualified_name,
            f"unexpected keyword constraint(s): {', '.join(sorted(keywords))}",
        )

    missing = [p.name for p, slot in zip(member.parameters, slots, strict=True) if slot is None]
    if missing:
        raise ConfigurationError(
            member.qualified_name,
            f"no constraint for parameter(s): {', '.join(missing)}",
        )
    return tuple(slot for slot in slots if slot is not None)
