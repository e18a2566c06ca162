"""Argument matching and generic resolution."""

from fakecheck.application.matching.argument_matcher import ArgumentMatcher
from fakecheck.application.matching.generics import (
    close_for_call,
    close_from_constraints,
    resolve_against,
)
from fakecheck.application.matching.normalize import (
    any_arguments,
    as_constraint,
    normalize_constraints,
)

__all__ = [
    "ArgumentMatcher",
    "any_arguments",
    "as_constraint",
    "close_for_call",
    "close_from_constraints",
    "normalize_constraints",
    "resolve_against",
]
