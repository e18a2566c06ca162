"""Fake scope: creates fakes and owns everything they share.

A scope is the unit of isolation: one per test (the ``fake_scope``
fixture) or one per ``FakeScope()`` created by hand.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import TYPE_CHECKING

from fakecheck.application.dispatch.defaults import DefaultValueProvider
from fakecheck.application.fake_manager import FakeManager
from fakecheck.domain.exceptions import ConfigurationError
from fakecheck.domain.model.naming import format_type
from fakecheck.infrastructure.dummies import DefaultDummyFactory
from fakecheck.infrastructure.interception import FakeTypes

if TYPE_CHECKING:
    from collections.abc import Callable

    from fakecheck.domain.model.configuration import FakeOptions
    from fakecheck.domain.ports.dummy_factory import DummyFactoryPort

logger = logging.getLogger(__name__)


class FakeScope:
    """Factory and owner of fakes.

    Contracts:
        - instance ids are 1, 2, 3, ... in creation order within the scope
        - fakes of different scopes share no state
        - generated fake classes are cached per scope and released with it
        - nested fakes (unset properties, default return values of fakeable
          types) are created in the same scope

    Example:
        scope = FakeScope()
        repo = scope.fake(Repository)
        call_to(repo.load).with_args("id").returns(user)
    """

    __slots__ = ("_defaults", "_dummies", "_ids", "_lock", "_managers", "_types")

    def __init__(self, dummies: DummyFactoryPort | None = None) -> None:
        """Initialize scope.

        Args:
            dummies: Dummy factory for default values. None = DefaultDummyFactory
                creating nested fakes in this scope.
        """
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._managers: list[FakeManager] = []
        self._types = FakeTypes()
        self._dummies: DummyFactoryPort = (
            dummies if dummies is not None else DefaultDummyFactory(fake_factory=self.fake)
        )
        self._defaults = DefaultValueProvider(self._dummies)

    def fake[T](self, faked_type: type[T], options: FakeOptions | None = None) -> T:
        """Create a fake of a class, Protocol or ABC.

        Args:
            faked_type: Type to fake, possibly parametrized (``Repo[int]``)
            options: Creation options

        Returns:
            Instance of a generated subclass of faked_type

        Raises:
            UnfakeableTypeError: Final, enum, builtin or unsubclassable type
        """
        blueprint = self._types.blueprint(faked_type)
        with self._lock:
            instance_id = next(self._ids)

        manager = FakeManager(
            instance_id,
            blueprint.declaring_type,
            blueprint.methods,
            self._defaults,
            properties=blueprint.property_descriptors,
            options=options,
        )
        instance = self._types.instantiate(faked_type, manager)

        with self._lock:
            self._managers.append(manager)
        logger.debug("Created fake #%d of %s", instance_id, blueprint.declaring_type)
        return instance  # type: ignore[return-value]

    def register_dummy(self, tp: object, factory: Callable[[], object]) -> None:
        """Use ``factory()`` for default values of ``tp``.

        Raises:
            ConfigurationError: The scope was given a custom dummy factory
        """
        if not isinstance(self._dummies, DefaultDummyFactory):
            raise ConfigurationError(format_type(tp), "scope uses a custom dummy factory")
        self._dummies.register(tp, factory)

    @property
    def dummies(self) -> DummyFactoryPort:
        """Dummy factory of the scope."""
        return self._dummies

    @property
    def managers(self) -> tuple[FakeManager, ...]:
        """Managers of all fakes created so far, in creation order."""
        with self._lock:
            return tuple(self._managers)
