"""Already-completed awaitable returned by coroutine members."""

from __future__ import annotations

from collections.abc import Generator


class CompletedAwaitable[T]:
    """Awaitable whose result is available before it is awaited.

    Awaiting it never suspends, so it works under any event loop and can
    be awaited any number of times.
    """

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def __await__(self) -> Generator[None, None, T]:
        return self._value
        yield  # makes this a generator function

    def done(self) -> bool:
        """Always True."""
        return True

    def result(self) -> T:
        """The wrapped value."""
        return self._value

    def __repr__(self) -> str:
        return f"CompletedAwaitable({self._value!r})"
