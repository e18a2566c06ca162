"""Member parameter value object."""

from dataclasses import dataclass, field
from enum import Enum, auto

from fakecheck.domain.model.direction import ParameterDirection


class ParameterKind(Enum):
    """Python parameter kind, as far as call binding is concerned."""

    POSITIONAL = auto()  # positional-only or positional-or-keyword
    VARIADIC = auto()  # *args
    KEYWORD_ONLY = auto()  # after * in signature
    VARIADIC_KEYWORD = auto()  # **kwargs


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    """Declared parameter of a faked member.

    Attributes:
        name: Parameter name
        annotation: Resolved annotation, None if untyped. For *args this is
            the element annotation.
        direction: IN, REF or OUT, derived from the annotation type only
        kind: Binding kind
    """

    name: str
    annotation: object = field(default=None, hash=False)
    direction: ParameterDirection = ParameterDirection.IN
    kind: ParameterKind = ParameterKind.POSITIONAL

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("parameter name must not be empty")

        if self.direction is not ParameterDirection.IN and self.kind in (
            ParameterKind.VARIADIC,
            ParameterKind.VARIADIC_KEYWORD,
        ):
            raise ValueError(f"variadic parameter '{self.name}' cannot be {self.direction.name}")

    @property
    def is_variadic(self) -> bool:
        """True for *args."""
        return self.kind is ParameterKind.VARIADIC
