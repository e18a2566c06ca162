"""Default dummy factory.

Resolution order for a requested type:
    1. Factory registered for exactly that type
    2. Optional / union containing None -> None
    3. Awaitable, Coroutine -> completed awaitable around a dummy of the result
    4. Callable[..., T] -> function returning a dummy of T
    5. Abstract collections (Sequence, Mapping, ...) -> empty concrete container
    6. Fakeable class -> a new fake (through the owning scope)
    7. Class constructible without arguments -> new instance
    8. None
"""

from __future__ import annotations

import collections.abc
import logging
import threading
import types
from typing import TYPE_CHECKING, Union, get_args, get_origin

from fakecheck.domain.exceptions import ConfigurationError
from fakecheck.domain.model.awaitable import CompletedAwaitable
from fakecheck.domain.model.naming import format_type
from fakecheck.infrastructure.introspection import abstract_container_factory, is_fakeable

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_AWAITABLES = frozenset({collections.abc.Awaitable, collections.abc.Coroutine})


class DefaultDummyFactory:
    """Dummy factory used unless the scope is given another one.

    Implements DummyFactoryPort. Thread-safe registration.
    """

    __slots__ = ("_factories", "_fake_factory", "_lock")

    def __init__(self, fake_factory: Callable[[object], object] | None = None) -> None:
        """Initialize factory.

        Args:
            fake_factory: Creates a fake of a fakeable type. None = such
                types get constructed like any other class.
        """
        self._factories: dict[object, Callable[[], object]] = {}
        self._fake_factory = fake_factory
        self._lock = threading.Lock()

    def register(self, tp: object, factory: Callable[[], object]) -> None:
        """Use ``factory()`` for every dummy of ``tp``.

        Raises:
            ConfigurationError: factory is not callable
        """
        if not callable(factory):
            raise ConfigurationError(format_type(tp), "dummy factory must be callable")
        with self._lock:
            self._factories[tp] = factory

    def produce(self, tp: object) -> object | None:
        """Produce a dummy of ``tp``, None if none can be made."""
        with self._lock:
            registered = self._factories.get(tp)
        if registered is not None:
            return registered()

        origin = get_origin(tp)
        args = get_args(tp)

        if origin is Union or origin is types.UnionType:
            if type(None) in args:
                return None
            return self.produce(args[0])

        if origin in _AWAITABLES or tp in _AWAITABLES:
            return CompletedAwaitable(self.produce(args[-1]) if args else None)

        if origin is collections.abc.Callable or tp is collections.abc.Callable:
            result_type = args[-1] if args else None

            def dummy_callable(*_args: object, **_kwargs: object) -> object:
                return None if result_type is None else self.produce(result_type)

            return dummy_callable

        container = abstract_container_factory(tp)
        if container is not None:
            return container()

        if self._fake_factory is not None and is_fakeable(tp):
            return self._fake_factory(tp)

        return self._construct(origin or tp)

    def _construct(self, cls: object) -> object | None:
        if not isinstance(cls, type):
            return None
        try:
            return cls()
        except Exception:
            logger.debug(
                "No dummy for %s: not constructible without arguments",
                format_type(cls),
                exc_info=True,
            )
            return None
