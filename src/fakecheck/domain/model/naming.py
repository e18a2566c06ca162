"""Type naming for descriptors and diagnostics."""

from __future__ import annotations

import types
from typing import TypeVar, Union, get_args, get_origin


def format_type(tp: object) -> str:
    """Render a type or annotation for humans.

    Builtins render bare (``int``), other classes as ``module.Qualname``,
    parametrized types as ``origin[arg, ...]``, type variables by name.
    """
    if tp is None or tp is type(None):
        return "None"
    if tp is Ellipsis:
        return "..."
    if isinstance(tp, TypeVar):
        return tp.__name__
    if isinstance(tp, list):
        return "[" + ", ".join(format_type(item) for item in tp) + "]"

    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        if origin is Union or origin is types.UnionType:
            return " | ".join(format_type(arg) for arg in args)
        if args:
            return f"{format_type(origin)}[{', '.join(format_type(arg) for arg in args)}]"
        return format_type(origin)

    if isinstance(tp, type):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


def runtime_type(value: object) -> object:
    """Type of a value, keeping parametrization when the instance remembers it.

    Instances created through a parametrized alias (``Box[int]()``) carry
    the alias in ``__orig_class__``.
    """
    return getattr(value, "__orig_class__", type(value))
