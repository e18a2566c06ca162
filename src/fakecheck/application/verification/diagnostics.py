"""Diagnostic rendering for failed verifications.

Format (exact, asserted on by users' tests):

    <blank>
    <blank>
      Assertion failed for the following call:
        pkg.IFoo.bar(3)
      Expected to find it at least once but found it #0 times among the calls:
        1: pkg.IFoo.bar(baz=1)
        2: pkg.IFoo.bar(baz=2)
    <blank>

With an empty call log the third line reads
"but no calls were made to the fake object." and no calls are listed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fakecheck.domain.model.constraint import (
    CONSTRAINT_TYPES,
    ExactValue,
    Predicate,
    SequenceEquals,
    Wildcard,
)
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.naming import format_type, runtime_type

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.invocation import Invocation
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.domain.model.repeated import Repeated
    from fakecheck.domain.model.specification import CallSpecification

IGNORED = "<Ignored>"
OUT_PARAMETER = "<out parameter>"


def _has_default_text(value: object) -> bool:
    cls = type(value)
    return cls.__repr__ is object.__repr__ and cls.__str__ is object.__str__


def format_value(value: object) -> str:
    """Natural text of an argument value.

    None is ``<None>``, strings are double-quoted, sequences render as
    ``[a, b]``, mappings as ``{k: v}``, types by name. Objects without
    their own text render as their (parametrized) type name.
    """
    match value:
        case None:
            return "<None>"
        case str():
            return f'"{value}"'
        case tuple() | list():
            return "[" + ", ".join(format_value(item) for item in value) + "]"
        case dict():
            items = (f"{format_value(k)}: {format_value(v)}" for k, v in value.items())
            return "{" + ", ".join(items) + "}"
        case type():
            return format_type(value)
    if _has_default_text(value):
        return format_type(runtime_type(value))
    return str(value)


def format_member(member: MemberDescriptor) -> str:
    """declaring_type.name, plus [type, ...] for generic members."""
    head = member.qualified_name
    if not member.is_generic:
        return head
    rendered = (
        name if argument is None else format_type(argument)
        for name, argument in zip(member.generic_parameters, member.generic_arguments, strict=True)
    )
    return f"{head}[{', '.join(rendered)}]"


def format_constraint(constraint: ArgumentConstraint) -> str:
    """Text of an expected argument."""
    match constraint:
        case Wildcard():
            return IGNORED
        case ExactValue(value=value):
            return format_value(value)
        case Predicate(description=description):
            return f"<{description}>"
        case SequenceEquals(elements=elements):
            rendered = (
                format_constraint(element) if isinstance(element, CONSTRAINT_TYPES) else format_value(element)
                for element in elements
            )
            return "[" + ", ".join(rendered) + "]"
    return repr(constraint)


def format_specification(specification: CallSpecification) -> str:
    """Expected call: positional constraints, OUT shown as <out parameter>."""
    rendered = [
        OUT_PARAMETER if parameter.direction is ParameterDirection.OUT else format_constraint(constraint)
        for parameter, constraint in zip(
            specification.member.parameters,
            specification.constraints,
            strict=True,
        )
    ]
    return f"{format_member(specification.member)}({', '.join(rendered)})"


def format_invocation(invocation: Invocation) -> str:
    """Actual call: name=value per parameter."""
    rendered = [
        f"{parameter.name}={format_value(argument.value)}"
        for parameter, argument in zip(invocation.member.parameters, invocation.arguments, strict=True)
    ]
    return f"{format_member(invocation.member)}({', '.join(rendered)})"


def build_diagnostic(
    specification: CallSpecification,
    repeated: Repeated,
    matched_count: int,
    calls: Sequence[Invocation],
) -> str:
    """Full failure text for one verification.

    Args:
        specification: Expected call
        repeated: Repetition constraint that was not satisfied
        matched_count: Number of matching calls found
        calls: Whole call log of the instance, recording order

    Returns:
        Diagnostic starting with two newlines and ending with two
    """
    lines = [
        "  Assertion failed for the following call:",
        f"    {format_specification(specification)}",
    ]
    if not calls:
        lines.append(f"  Expected to find it {repeated} but no calls were made to the fake object.")
    else:
        lines.append(f"  Expected to find it {repeated} but found it #{matched_count} times among the calls:")
        lines.extend(f"    {number}: {format_invocation(call)}" for number, call in enumerate(calls, start=1))
    return "\n\n" + "\n".join(lines) + "\n\n"
