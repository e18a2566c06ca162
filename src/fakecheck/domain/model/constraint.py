"""Argument constraints.

Closed set of matchers over a single parameter:
    ExactValue: equal to a configured value
    Predicate: accepted by a callable
    Wildcard: anything
    SequenceEquals: element-wise match of the aggregated *args tuple
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ExactValue:
    """Matches an argument equal to ``value``.

    For REF and OUT parameters ``value`` is also what gets written back.
    """

    value: object = field(hash=False)


@dataclass(frozen=True, slots=True)
class Predicate:
    """Matches an argument the ``test`` callable accepts.

    Attributes:
        test: Called with the actual value, truthiness is authoritative
        description: Shown in diagnostics as ``<description>``
    """

    test: Callable[[object], bool]
    description: str = "Predicate"

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not callable(self.test):
            raise TypeError(f"test must be callable, got {type(self.test).__name__}")
        if not self.description:
            raise ValueError("description must not be empty")


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches any argument."""


@dataclass(frozen=True, slots=True)
class SequenceEquals:
    """Matches the *args tuple element-wise, in order, same count.

    Elements are raw values (compared with ==) or nested constraints.
    """

    elements: tuple[object, ...] = field(hash=False)

    def __post_init__(self) -> None:
        """Freeze elements into a tuple."""
        object.__setattr__(self, "elements", tuple(self.elements))


type ArgumentConstraint = ExactValue | Predicate | Wildcard | SequenceEquals

CONSTRAINT_TYPES = (ExactValue, Predicate, Wildcard, SequenceEquals)

ANY = Wildcard()


def that(test: Callable[[object], bool], description: str | None = None) -> Predicate:
    """Build a Predicate, described by the callable's name unless given."""
    if description is None:
        name = getattr(test, "__name__", "")
        description = name if name and name != "<lambda>" else "Predicate"
    return Predicate(test=test, description=description)


def same_sequence_as(elements: Iterable[object]) -> SequenceEquals:
    """Build a SequenceEquals for a *args parameter."""
    return SequenceEquals(tuple(elements))
