"""Member descriptor value object."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from fakecheck.domain.model.parameter import ParameterInfo, ParameterKind


@dataclass(frozen=True, slots=True)
class MemberDescriptor:
    """Identity of a faked method or property.

    Equality is structural. Two instantiations of the same generic method
    with different type arguments are different members.

    Attributes:
        declaring_type: Rendered name of the faked type (module.Qualname)
        name: Member name
        parameters: Declared parameters in signature order (self excluded)
        generic_parameters: Names of the member's own type variables
        generic_arguments: Type arguments, one per generic parameter.
            None entries are open and resolved against the call site.
        return_type: Declared return annotation (not part of identity)
        is_coroutine: Declared with ``async def`` (not part of identity)
    """

    declaring_type: str
    name: str
    parameters: tuple[ParameterInfo, ...] = ()
    generic_parameters: tuple[str, ...] = ()
    generic_arguments: tuple[object | None, ...] = field(default=(), hash=False)
    return_type: object = field(default=None, compare=False, hash=False)
    is_coroutine: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.declaring_type:
            raise ValueError("declaring_type must not be empty")
        if not self.name:
            raise ValueError("member name must not be empty")

        names = [p.name for p in self.parameters]
        if len(names) != len(set(names)):
            raise ValueError(f"duplicate parameter names in {self.qualified_name}")

        kinds = [p.kind for p in self.parameters]
        if kinds.count(ParameterKind.VARIADIC) > 1:
            raise ValueError(f"{self.qualified_name} has more than one *args parameter")
        if kinds.count(ParameterKind.VARIADIC_KEYWORD) > 1:
            raise ValueError(f"{self.qualified_name} has more than one **kwargs parameter")

        if not self.generic_arguments:
            object.__setattr__(self, "generic_arguments", (None,) * len(self.generic_parameters))
        elif len(self.generic_arguments) != len(self.generic_parameters):
            raise ValueError(
                f"{self.qualified_name} takes {len(self.generic_parameters)} type argument(s), "
                f"got {len(self.generic_arguments)}"
            )

    @property
    def qualified_name(self) -> str:
        """declaring_type.name"""
        return f"{self.declaring_type}.{self.name}"

    @property
    def is_generic(self) -> bool:
        """True if the member declares its own type variables."""
        return bool(self.generic_parameters)

    @property
    def is_closed(self) -> bool:
        """True if every type argument is resolved."""
        return all(arg is not None for arg in self.generic_arguments)

    @property
    def variadic_index(self) -> int | None:
        """Position of the *args parameter, None if absent."""
        for index, parameter in enumerate(self.parameters):
            if parameter.is_variadic:
                return index
        return None

    def with_generic_arguments(self, arguments: tuple[object | None, ...]) -> MemberDescriptor:
        """Return the same member instantiated with other type arguments.

        Raises:
            ValueError: If the member is not generic or the count differs
        """
        if not self.is_generic:
            raise ValueError(f"{self.qualified_name} is not generic")
        return replace(self, generic_arguments=tuple(arguments))

    def same_definition(self, other: MemberDescriptor) -> bool:
        """Compare ignoring generic type arguments."""
        return (
            self.declaring_type == other.declaring_type
            and self.name == other.name
            and self.parameters == other.parameters
            and self.generic_parameters == other.generic_parameters
        )
