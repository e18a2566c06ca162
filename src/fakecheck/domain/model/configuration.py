"""Per-fake configuration.

Immutable options given when a fake is created. All fields have defaults.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FakeOptions:
    """Fake creation options DTO.

    Attributes:
        name: Display name used by reporters. None = rendered faked type.
        wrap_coroutines: Async members return an already-completed awaitable
            around the configured or default value. False = return the
            value itself.
    """

    name: str | None = None
    wrap_coroutines: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.name is not None and not self.name:
            raise ValueError("name must not be empty, use None for the default")
