"""Rule action value object."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from fakecheck.domain.exceptions import ConfigurationError

type CallCallback = Callable[..., object]


@dataclass(frozen=True, slots=True)
class RuleAction:
    """What a matching rule does with the call.

    Callbacks run first, in order. Then the rule either raises ``raises``
    or produces a value: ``returns_lazily(*args, **kwargs)`` when set,
    ``returns`` otherwise.

    Attributes:
        returns: Fixed return value
        returns_lazily: Computes the return value from the call's arguments
        raises: Exception propagated to the caller instead of returning
        callbacks: Side effects, called with the call's arguments
        out_and_ref_values: Replaces the values written back to REF/OUT
            parameters, positionally over those parameters. None keeps the
            values configured in the constraints.
    """

    returns: object = None
    returns_lazily: CallCallback | None = None
    raises: BaseException | None = None
    callbacks: tuple[CallCallback, ...] = ()
    out_and_ref_values: tuple[object, ...] | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.raises is not None and not isinstance(self.raises, BaseException):
            raise ConfigurationError(
                "action", f"raises must be an exception, got {type(self.raises).__name__}"
            )
        if self.raises is not None and (self.returns is not None or self.returns_lazily is not None):
            raise ConfigurationError("action", "cannot both raise and return a value")
        if self.returns_lazily is not None and self.returns is not None:
            raise ConfigurationError("action", "cannot combine returns and returns_lazily")
        if self.returns_lazily is not None and not callable(self.returns_lazily):
            raise ConfigurationError("action", "returns_lazily must be callable")
        for callback in self.callbacks:
            if not callable(callback):
                raise ConfigurationError(
                    "action", f"callback must be callable, got {type(callback).__name__}"
                )

    @property
    def is_failure(self) -> bool:
        """True if the action raises instead of returning."""
        return self.raises is not None
