"""Introspection: faked type -> blueprint of its interceptable members.

Interceptable:
    - plain methods (sync and async), single-underscore ones included
    - properties and annotated attributes without a value
    - __getitem__/__setitem__ as the indexer

Left alone (cannot be overridden meaningfully):
    - @typing.final methods, staticmethods, classmethods, other dunders
"""

from __future__ import annotations

import collections.abc
import enum
import inspect
import logging
import typing
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, ClassVar, Generic, Protocol, TypeVar, get_args, get_origin

from fakecheck.domain.exceptions import UnfakeableTypeError
from fakecheck.domain.model.boxes import Out, Ref
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.member import MemberDescriptor
from fakecheck.domain.model.naming import format_type
from fakecheck.domain.model.parameter import ParameterInfo, ParameterKind

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

INDEXER = "[]"

_SKIPPED_BASES: frozenset[object] = frozenset({object, Generic, Protocol})

# Modules whose classes are never faked; dummies come from constructors instead.
_UNFAKEABLE_MODULES = frozenset({"builtins", "typing", "types", "collections", "collections.abc", "abc"})

_KINDS = {
    inspect.Parameter.POSITIONAL_ONLY: ParameterKind.POSITIONAL,
    inspect.Parameter.POSITIONAL_OR_KEYWORD: ParameterKind.POSITIONAL,
    inspect.Parameter.VAR_POSITIONAL: ParameterKind.VARIADIC,
    inspect.Parameter.KEYWORD_ONLY: ParameterKind.KEYWORD_ONLY,
    inspect.Parameter.VAR_KEYWORD: ParameterKind.VARIADIC_KEYWORD,
}


@dataclass(frozen=True, slots=True)
class TypeBlueprint:
    """Interceptable surface of a faked type.

    Attributes:
        faked_type: Type as requested (possibly parametrized)
        origin: Class the fake subclasses
        declaring_type: Rendered name used in descriptors
        methods: Method descriptors by name
        signatures: Call signatures (self excluded) by method name
        properties: Property descriptors by name
        indexer: Descriptor of __getitem__/__setitem__, None if absent
    """

    faked_type: object
    origin: type
    declaring_type: str
    methods: Mapping[str, MemberDescriptor]
    signatures: Mapping[str, inspect.Signature]
    properties: Mapping[str, MemberDescriptor]
    indexer: MemberDescriptor | None = None

    @property
    def property_descriptors(self) -> dict[str, MemberDescriptor]:
        """Properties plus the indexer under its name."""
        merged = dict(self.properties)
        if self.indexer is not None:
            merged[INDEXER] = self.indexer
        return merged


def direction_of(annotation: object) -> ParameterDirection:
    """Direction from the annotation's type.

    Only ``Ref[T]`` and ``Out[T]`` change direction. ``Annotated`` metadata
    is ignored, so ``Annotated[str, Out]`` is still an IN parameter.
    """
    origin = get_origin(annotation)
    if origin is Annotated:
        return direction_of(get_args(annotation)[0])
    if origin is Out or annotation is Out:
        return ParameterDirection.OUT
    if origin is Ref or annotation is Ref:
        return ParameterDirection.REF
    return ParameterDirection.IN


def is_fakeable(tp: object) -> bool:
    """True if a fake (generated subclass) can stand in for ``tp``."""
    origin = get_origin(tp) or tp
    if not isinstance(origin, type):
        return False
    if origin.__module__ in _UNFAKEABLE_MODULES:
        return False
    if getattr(origin, "__final__", False):
        return False
    return not issubclass(origin, enum.Enum)


def describe_type(faked_type: object) -> TypeBlueprint:
    """Collect the interceptable members of a type.

    Args:
        faked_type: Class, Protocol, ABC, or a parametrized generic of one

    Returns:
        TypeBlueprint of the type

    Raises:
        UnfakeableTypeError: Not a class, final, enum, or builtin
    """
    origin = get_origin(faked_type) or faked_type
    if not isinstance(origin, type):
        raise UnfakeableTypeError(faked_type, "not a class")
    if not is_fakeable(faked_type):
        raise UnfakeableTypeError(faked_type, "final, enum, or standard library type")

    substitutions = _class_substitutions(faked_type, origin)
    class_parameters = frozenset(tv.__name__ for tv in getattr(origin, "__parameters__", ()))
    declaring_type = format_type(faked_type)

    methods: dict[str, MemberDescriptor] = {}
    signatures: dict[str, inspect.Signature] = {}
    properties: dict[str, MemberDescriptor] = {}
    indexer: MemberDescriptor | None = None
    seen: set[str] = set()

    for klass in inspect.getmro(origin):
        if klass in _SKIPPED_BASES:
            continue

        for name, value in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)

            if name in ("__getitem__", "__setitem__"):
                if indexer is None and inspect.isfunction(value):
                    indexer = _describe_indexer(declaring_type, name, value, substitutions)
                continue
            if name.startswith("__"):
                continue

            if isinstance(value, property):
                properties[name] = _describe_property(declaring_type, name, value, substitutions)
            elif inspect.isfunction(value) and not getattr(value, "__final__", False):
                member, signature = _describe_method(
                    declaring_type, name, value, substitutions, class_parameters
                )
                methods[name] = member
                signatures[name] = signature

        for name, annotation in _class_annotations(klass).items():
            if name in seen or name.startswith("_") or _is_class_var(annotation):
                continue
            seen.add(name)
            properties[name] = MemberDescriptor(
                declaring_type=declaring_type,
                name=name,
                return_type=_substitute(annotation, substitutions),
            )

    return TypeBlueprint(
        faked_type=faked_type,
        origin=origin,
        declaring_type=declaring_type,
        methods=MappingProxyType(methods),
        signatures=MappingProxyType(signatures),
        properties=MappingProxyType(properties),
        indexer=indexer,
    )


# =============================================================================
# Members
# =============================================================================


def _describe_method(
    declaring_type: str,
    name: str,
    func: Callable[..., object],
    substitutions: Mapping[object, object],
    class_parameters: frozenset[str],
) -> tuple[MemberDescriptor, inspect.Signature]:
    signature = inspect.signature(func)
    declared = list(signature.parameters.values())
    if declared and declared[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        declared = declared[1:]

    hints = _function_hints(func)
    parameters: list[ParameterInfo] = []
    for parameter in declared:
        raw = None if parameter.annotation is inspect.Parameter.empty else parameter.annotation
        annotation = _substitute(hints.get(parameter.name, raw), substitutions)
        kind = _KINDS[parameter.kind]
        direction = (
            direction_of(annotation)
            if kind in (ParameterKind.POSITIONAL, ParameterKind.KEYWORD_ONLY)
            else ParameterDirection.IN
        )
        parameters.append(
            ParameterInfo(name=parameter.name, annotation=annotation, direction=direction, kind=kind)
        )

    return_type = _substitute(hints.get("return"), substitutions)
    member = MemberDescriptor(
        declaring_type=declaring_type,
        name=name,
        parameters=tuple(parameters),
        generic_parameters=_generic_parameters(func, parameters, return_type, class_parameters),
        return_type=return_type,
        is_coroutine=inspect.iscoroutinefunction(func),
    )
    return member, signature.replace(parameters=declared)


def _describe_property(
    declaring_type: str,
    name: str,
    value: property,
    substitutions: Mapping[object, object],
) -> MemberDescriptor:
    return_type = None
    if value.fget is not None:
        return_type = _function_hints(value.fget).get("return")
    return MemberDescriptor(
        declaring_type=declaring_type,
        name=name,
        return_type=_substitute(return_type, substitutions),
    )


def _describe_indexer(
    declaring_type: str,
    name: str,
    func: Callable[..., object],
    substitutions: Mapping[object, object],
) -> MemberDescriptor:
    hints = _function_hints(func)
    if name == "__getitem__":
        value_type = hints.get("return")
    else:
        names = list(inspect.signature(func).parameters)
        value_type = hints.get(names[-1]) if len(names) >= 3 else None
    return MemberDescriptor(
        declaring_type=declaring_type,
        name=INDEXER,
        return_type=_substitute(value_type, substitutions),
    )


def _generic_parameters(
    func: Callable[..., object],
    parameters: list[ParameterInfo],
    return_type: object,
    class_parameters: frozenset[str],
) -> tuple[str, ...]:
    """The method's own type variables, in order of first appearance.

    PEP 695 type parameters come first; type variables bound by the
    class are not the method's.
    """
    found: list[str] = [tv.__name__ for tv in getattr(func, "__type_params__", ())]
    collected: list[TypeVar] = []
    for parameter in parameters:
        _collect_type_vars(parameter.annotation, collected)
    _collect_type_vars(return_type, collected)
    for type_var in collected:
        if type_var.__name__ not in found and type_var.__name__ not in class_parameters:
            found.append(type_var.__name__)
    return tuple(found)


def _collect_type_vars(annotation: object, out: list[TypeVar]) -> None:
    if isinstance(annotation, TypeVar):
        if annotation not in out:
            out.append(annotation)
        return
    if isinstance(annotation, list):
        for item in annotation:
            _collect_type_vars(item, out)
        return
    for arg in get_args(annotation):
        _collect_type_vars(arg, out)


# =============================================================================
# Annotations
# =============================================================================


def _function_hints(func: Callable[..., object]) -> dict[str, object]:
    """Evaluated annotations, raw ones if forward references do not resolve."""
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception:
        logger.debug("Unresolvable annotations on %r, using raw ones", func, exc_info=True)
        return dict(getattr(func, "__annotations__", {}))


def _class_annotations(klass: type) -> dict[str, object]:
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except Exception:
        logger.debug("Unresolvable annotations on %r, using raw ones", klass, exc_info=True)
        return inspect.get_annotations(klass)


def _is_class_var(annotation: object) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _class_substitutions(faked_type: object, origin: type) -> dict[object, object]:
    """TypeVar -> argument for a parametrized faked type (``IRepo[int]``)."""
    args = get_args(faked_type)
    if not args:
        return {}
    return dict(zip(getattr(origin, "__parameters__", ()), args, strict=False))


def _substitute(annotation: object, substitutions: Mapping[object, object]) -> object:
    if not substitutions:
        return annotation
    if isinstance(annotation, TypeVar):
        return substitutions.get(annotation, annotation)
    origin = get_origin(annotation)
    if origin in (Ref, Out):
        args = get_args(annotation)
        if args:
            return origin[_substitute(args[0], substitutions)]
    return annotation


def abstract_container_factory(tp: object) -> Callable[[], object] | None:
    """Concrete empty container for an abstract collections.abc type."""
    origin = get_origin(tp) or tp
    return _ABSTRACT_CONTAINERS.get(origin)


_ABSTRACT_CONTAINERS: dict[object, Callable[[], object]] = {
    collections.abc.Iterable: tuple,
    collections.abc.Collection: tuple,
    collections.abc.Sequence: tuple,
    collections.abc.MutableSequence: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Iterator: lambda: iter(()),
}
