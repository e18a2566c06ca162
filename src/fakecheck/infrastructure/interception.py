"""Interception: generated subclasses that route members to a FakeManager.

A fake of ``T`` is an instance of a subclass of ``T`` generated once per
faked type and scope (FakeTypes):

    - every interceptable method becomes a FakeMethod descriptor
    - every property becomes a read/write property backed by the store
    - __getitem__/__setitem__ become the indexer
    - __init__ is never run; the manager is attached to the bare instance
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fakecheck.domain.exceptions import ConfigurationError, NotFakeError, UnfakeableTypeError
from fakecheck.domain.model.argument import Argument
from fakecheck.domain.model.boxes import Out, Ref
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.parameter import ParameterKind
from fakecheck.infrastructure.introspection import describe_type

if TYPE_CHECKING:
    import inspect

    from fakecheck.application.fake_manager import FakeManager
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.infrastructure.introspection import TypeBlueprint

logger = logging.getLogger(__name__)

MANAGER_ATTRIBUTE = "_fakecheck_manager"


class BoundFakeMethod:
    """A fake's method bound to its instance.

    Calling it dispatches to the manager. Subscripting it with type
    arguments (``fake.convert[int, str]``) instantiates a generic method
    explicitly.

    Attributes:
        manager: Manager of the owning fake
        member: Member descriptor, possibly with explicit type arguments
        signature: Call signature without self
    """

    __slots__ = ("manager", "member", "signature")

    def __init__(self, manager: FakeManager, member: MemberDescriptor, signature: inspect.Signature) -> None:
        self.manager = manager
        self.member = member
        self.signature = signature

    def __call__(self, *args: object, **kwargs: object) -> object:
        return intercept(self.manager, self.member, self.signature, args, kwargs)

    def __getitem__(self, type_arguments: object) -> BoundFakeMethod:
        arguments = type_arguments if isinstance(type_arguments, tuple) else (type_arguments,)
        try:
            member = self.member.with_generic_arguments(arguments)
        except ValueError as exc:
            raise ConfigurationError(self.member.qualified_name, str(exc)) from exc
        return BoundFakeMethod(self.manager, member, self.signature)

    def __repr__(self) -> str:
        return f"<fake method {self.member.qualified_name} of fake #{self.manager.instance_id}>"


class FakeMethod:
    """Class-level descriptor producing BoundFakeMethod on instance access."""

    __slots__ = ("member", "signature")

    def __init__(self, member: MemberDescriptor, signature: inspect.Signature) -> None:
        self.member = member
        self.signature = signature

    def __get__(self, instance: object, owner: type | None = None) -> object:
        if instance is None:
            return self
        return BoundFakeMethod(manager_of(instance), self.member, self.signature)


def intercept(
    manager: FakeManager,
    member: MemberDescriptor,
    signature: inspect.Signature,
    args: tuple[object, ...],
    kwargs: dict[str, object],
) -> object:
    """Bind a call, dispatch it, and write REF/OUT values back into the boxes.

    Raises:
        TypeError: Arguments do not fit the signature (nothing is recorded)
    """
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()

    arguments: list[Argument] = []
    boxes: list[Ref[object] | Out[object] | None] = []
    for parameter in member.parameters:
        raw = bound.arguments.get(parameter.name)
        box = None
        if parameter.direction is not ParameterDirection.IN and isinstance(raw, (Ref, Out)):
            box = raw
        match parameter.kind:
            case ParameterKind.VARIADIC:
                value: object = tuple(raw or ())  # type: ignore[call-overload]
            case ParameterKind.VARIADIC_KEYWORD:
                value = dict(raw or {})  # type: ignore[call-overload]
            case _:
                value = box.value if box is not None else raw
        arguments.append(Argument(value, parameter.direction))
        boxes.append(box)

    outcome = manager.dispatch(member, arguments)
    for index, written in outcome.written_back:
        box = boxes[index]
        if box is not None:
            box.value = written
    return outcome.value


def manager_of(fake: object) -> FakeManager:
    """Manager behind a fake or a fake's bound method.

    Raises:
        NotFakeError: Not created by fakecheck
    """
    if isinstance(fake, BoundFakeMethod):
        return fake.manager
    try:
        return object.__getattribute__(fake, MANAGER_ATTRIBUTE)
    except AttributeError:
        raise NotFakeError(type(fake)) from None


def is_fake(obj: object) -> bool:
    """True if obj was created by fakecheck."""
    try:
        manager_of(obj)
    except NotFakeError:
        return False
    return True


class FakeTypes:
    """Blueprints and generated subclasses of one scope, built once per faked type.

    Owned by a FakeScope, so generated types live as long as the scope.
    """

    __slots__ = ("_blueprints", "_classes", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._blueprints: dict[object, TypeBlueprint] = {}
        self._classes: dict[object, type] = {}

    def blueprint(self, faked_type: object) -> TypeBlueprint:
        """Describe a faked type once."""
        with self._lock:
            cached = self._blueprints.get(faked_type)
        if cached is not None:
            return cached
        blueprint = describe_type(faked_type)
        with self._lock:
            return self._blueprints.setdefault(faked_type, blueprint)

    def fake_class(self, faked_type: object) -> type:
        """Generated subclass for a faked type.

        Raises:
            UnfakeableTypeError: The type refuses to be subclassed
        """
        with self._lock:
            cached = self._classes.get(faked_type)
        if cached is not None:
            return cached
        cls = _build_class(faked_type, self.blueprint(faked_type))
        with self._lock:
            return self._classes.setdefault(faked_type, cls)

    def instantiate(self, faked_type: object, manager: FakeManager) -> object:
        """Bare instance of the generated class with its manager attached."""
        instance = object.__new__(self.fake_class(faked_type))
        object.__setattr__(instance, MANAGER_ATTRIBUTE, manager)
        return instance

    def __len__(self) -> int:
        with self._lock:
            return len(self._classes)


def _build_class(faked_type: object, blueprint: TypeBlueprint) -> type:
    origin = blueprint.origin

    namespace: dict[str, object] = {
        "__module__": origin.__module__,
        "__qualname__": f"Fake{origin.__qualname__}",
        "__repr__": _fake_repr,
        "__eq__": object.__eq__,
        "__ne__": object.__ne__,
        "__hash__": object.__hash__,
        "__fakecheck_blueprint__": blueprint,
    }
    for name, member in blueprint.methods.items():
        namespace[name] = FakeMethod(member, blueprint.signatures[name])
    for name, descriptor in blueprint.properties.items():
        namespace[name] = _property(descriptor)
    if blueprint.indexer is not None:
        namespace["__getitem__"], namespace["__setitem__"] = _indexer(blueprint.indexer)

    try:
        cls = type(origin)(f"Fake{origin.__name__}", (origin,), namespace)
    except TypeError as exc:
        raise UnfakeableTypeError(faked_type, str(exc)) from exc

    # Skipped members may still be abstract; a fake is always instantiable.
    if getattr(cls, "__abstractmethods__", None):
        cls.__abstractmethods__ = frozenset()
    logger.debug("Built fake class for %s", blueprint.declaring_type)
    return cls


def _fake_repr(self: object) -> str:
    return f"Faked {manager_of(self).declaring_type}"


def _property(descriptor: MemberDescriptor) -> property:
    def getter(self: object) -> object:
        return manager_of(self).get_property(descriptor)

    def setter(self: object, value: object) -> None:
        manager_of(self).set_property(descriptor, (), value)

    return property(getter, setter, doc=f"Faked property {descriptor.name}")


def _index_tuple(key: object) -> tuple[object, ...]:
    return key if isinstance(key, tuple) else (key,)


def _indexer(descriptor: MemberDescriptor) -> tuple[object, object]:
    def getitem(self: object, key: object) -> object:
        return manager_of(self).get_property(descriptor, _index_tuple(key))

    def setitem(self: object, key: object, value: object) -> None:
        manager_of(self).set_property(descriptor, _index_tuple(key), value)

    return getitem, setitem
