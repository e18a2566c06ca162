"""Dummy factory port.

Consumed by the engine for default return values and property
materialization. Users plug in their own by implementing this Protocol.
"""

from __future__ import annotations

from typing import Protocol


class DummyFactoryPort(Protocol):
    """Produces placeholder instances of arbitrary types.

    Example:
        class FixedDummies:
            def produce(self, tp: object) -> object | None:
                return Money(0) if tp is Money else None
    """

    def produce(self, tp: object) -> object | None:
        """Produce a dummy of ``tp``.

        Args:
            tp: Type or annotation to produce a value for

        Returns:
            A value, or None when no dummy is available. Exceptions are
            treated the same as None by the caller.
        """
        ...
