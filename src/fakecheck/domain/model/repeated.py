"""Repetition constraints for verification."""

from __future__ import annotations

from dataclasses import dataclass


def _times(count: int) -> str:
    match count:
        case 1:
            return "once"
        case 2:
            return "twice"
        case _:
            return f"{count} times"


@dataclass(frozen=True, slots=True)
class Repeated:
    """Accepted range of matching call counts.

    Attributes:
        minimum: Lowest accepted count (>= 0)
        maximum: Highest accepted count, None for unbounded
        description: Text used in diagnostics ("at least once", ...)
    """

    minimum: int
    maximum: int | None
    description: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.minimum < 0:
            raise ValueError(f"minimum must be >= 0, got {self.minimum}")
        if self.maximum is not None and self.maximum < self.minimum:
            raise ValueError(f"maximum ({self.maximum}) must be >= minimum ({self.minimum})")
        if not self.description:
            raise ValueError("description must not be empty")

    @classmethod
    def at_least_once(cls) -> Repeated:
        return cls.at_least(1)

    @classmethod
    def never(cls) -> Repeated:
        return cls(minimum=0, maximum=0, description="never")

    @classmethod
    def exactly(cls, count: int) -> Repeated:
        return cls(minimum=count, maximum=count, description=f"exactly {_times(count)}")

    @classmethod
    def at_least(cls, count: int) -> Repeated:
        return cls(minimum=count, maximum=None, description=f"at least {_times(count)}")

    @classmethod
    def at_most(cls, count: int) -> Repeated:
        return cls(minimum=0, maximum=count, description=f"at most {_times(count)}")

    def matches(self, count: int) -> bool:
        """Check whether an observed count satisfies the constraint."""
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    def __str__(self) -> str:
        return self.description
