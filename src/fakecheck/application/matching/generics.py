"""Generic member resolution.

A generic member is identified by its type arguments. A call closes them,
explicitly (``fake.convert[int](...)``) or by inference from the actual
arguments. A configured specification may leave some open; those are
resolved against each call before the members are compared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar, get_args, get_origin

from fakecheck.domain.model.boxes import Out, Ref
from fakecheck.domain.model.constraint import CONSTRAINT_TYPES, ExactValue, SequenceEquals
from fakecheck.domain.model.naming import runtime_type

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fakecheck.domain.model.argument import Argument
    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.domain.model.parameter import ParameterInfo

_UNKNOWN = object()


def _type_variable_name(parameter: ParameterInfo, generic_parameters: tuple[str, ...]) -> str | None:
    """Name of the member type variable a parameter is declared as, if any."""
    annotation = parameter.annotation
    if get_origin(annotation) in (Ref, Out):
        args = get_args(annotation)
        annotation = args[0] if args else None
    if isinstance(annotation, TypeVar) and annotation.__name__ in generic_parameters:
        return annotation.__name__
    return None


def _infer(member: MemberDescriptor, samples: Sequence[object]) -> tuple[object | None, ...]:
    """Fill open type arguments from one sample value per parameter.

    Explicit arguments are kept. The first parameter declared as a type
    variable decides it. None and unknown samples carry no type.
    """
    resolved = dict(zip(member.generic_parameters, member.generic_arguments, strict=True))
    for parameter, sample in zip(member.parameters, samples, strict=True):
        name = _type_variable_name(parameter, member.generic_parameters)
        if name is None or resolved[name] is not None:
            continue
        if sample is _UNKNOWN or sample is None:
            continue
        resolved[name] = runtime_type(sample)
    return tuple(resolved[name] for name in member.generic_parameters)


def _sample_from_argument(parameter: ParameterInfo, value: object) -> object:
    if parameter.is_variadic:
        return value[0] if isinstance(value, tuple) and value else _UNKNOWN
    return value


def _sample_from_constraint(parameter: ParameterInfo, constraint: ArgumentConstraint) -> object:
    match constraint:
        case ExactValue(value=value):
            return _sample_from_argument(parameter, value)
        case SequenceEquals(elements=elements) if parameter.is_variadic:
            for element in elements:
                if isinstance(element, ExactValue):
                    return element.value
                if not isinstance(element, CONSTRAINT_TYPES):
                    return element
            return _UNKNOWN
        case _:
            return _UNKNOWN


def close_for_call(member: MemberDescriptor, arguments: Sequence[Argument]) -> MemberDescriptor:
    """Close a member's type arguments at the call site.

    Type variables that cannot be inferred from the arguments close over
    ``object``, so a recorded call is always fully resolved.
    """
    if not member.is_generic or member.is_closed:
        return member
    samples = [
        _sample_from_argument(parameter, argument.value)
        for parameter, argument in zip(member.parameters, arguments, strict=True)
    ]
    inferred = _infer(member, samples)
    return member.with_generic_arguments(tuple(object if arg is None else arg for arg in inferred))


def close_from_constraints(
    member: MemberDescriptor,
    constraints: Sequence[ArgumentConstraint],
) -> MemberDescriptor:
    """Infer type arguments of a configured member from its exact values.

    Type variables only constrained by wildcards or predicates stay open.
    """
    if not member.is_generic or member.is_closed:
        return member
    samples = [
        _sample_from_constraint(parameter, constraint)
        for parameter, constraint in zip(member.parameters, constraints, strict=True)
    ]
    return member.with_generic_arguments(_infer(member, samples))


def resolve_against(
    specification_member: MemberDescriptor,
    call_member: MemberDescriptor,
) -> MemberDescriptor:
    """Resolve a specification's open type arguments against a call's."""
    if not specification_member.is_generic or specification_member.is_closed:
        return specification_member
    if not specification_member.same_definition(call_member):
        return specification_member
    resolved = tuple(
        actual if expected is None else expected
        for expected, actual in zip(
            specification_member.generic_arguments,
            call_member.generic_arguments,
            strict=True,
        )
    )
    return specification_member.with_generic_arguments(resolved)


def substitute_type_arguments(annotation: object, member: MemberDescriptor) -> object:
    """Replace a bare member type variable by its resolved argument."""
    if isinstance(annotation, TypeVar):
        bound = dict(zip(member.generic_parameters, member.generic_arguments, strict=True))
        resolved = bound.get(annotation.__name__)
        if resolved is not None:
            return resolved
    return annotation
