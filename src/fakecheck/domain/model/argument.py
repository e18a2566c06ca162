"""Actual call argument value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.parameter import ParameterKind

if TYPE_CHECKING:
    from fakecheck.domain.model.member import MemberDescriptor


@dataclass(frozen=True, slots=True)
class Argument:
    """One bound argument of an intercepted call.

    Attributes:
        value: Value at call time. For *args the aggregated tuple,
            for **kwargs the dict of extra keywords.
        direction: Direction of the receiving parameter
    """

    value: object
    direction: ParameterDirection = ParameterDirection.IN


def rebuild_call(
    member: MemberDescriptor,
    arguments: tuple[Argument, ...],
) -> tuple[tuple[object, ...], dict[str, object]]:
    """Turn bound arguments back into (args, kwargs) for user callbacks.

    Args:
        member: Member the arguments were bound against
        arguments: One Argument per declared parameter

    Returns:
        Positional and keyword arguments, *args spread, **kwargs merged
    """
    args: list[object] = []
    kwargs: dict[str, object] = {}
    for parameter, argument in zip(member.parameters, arguments, strict=True):
        match parameter.kind:
            case ParameterKind.POSITIONAL:
                args.append(argument.value)
            case ParameterKind.VARIADIC:
                args.extend(argument.value)  # type: ignore[call-overload]
            case ParameterKind.KEYWORD_ONLY:
                kwargs[parameter.name] = argument.value
            case ParameterKind.VARIADIC_KEYWORD:
                kwargs.update(argument.value)  # type: ignore[call-overload]
    return tuple(args), kwargs
