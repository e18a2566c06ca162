"""fakecheck domain layer.

Pure domain logic with no external dependencies.
Only imports: typing, dataclasses, enum, collections.abc, types
"""

from fakecheck.domain.exceptions import (
    ConfigurationError,
    ExpectationError,
    FakeCheckError,
    NotFakeError,
    UnfakeableTypeError,
)
from fakecheck.domain.model import (
    Argument,
    BehaviorRule,
    CallSpecification,
    Invocation,
    MemberDescriptor,
    ParameterDirection,
    ParameterInfo,
    Repeated,
    RuleAction,
)
from fakecheck.domain.ports import DummyFactoryPort

__all__ = [
    # Exceptions
    "FakeCheckError",
    "ConfigurationError",
    "ExpectationError",
    "NotFakeError",
    "UnfakeableTypeError",
    # Value objects
    "Argument",
    "ParameterDirection",
    "ParameterInfo",
    "MemberDescriptor",
    "Invocation",
    "Repeated",
    # Rules
    "CallSpecification",
    "RuleAction",
    "BehaviorRule",
    # Ports
    "DummyFactoryPort",
]
