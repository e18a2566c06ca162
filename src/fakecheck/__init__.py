"""fakecheck - call interception, matching and verification for test fakes."""

__version__ = "0.1.0"

from fakecheck.application.scope import FakeScope
from fakecheck.domain.exceptions import (
    ConfigurationError,
    ExpectationError,
    FakeCheckError,
    NotFakeError,
    UnfakeableTypeError,
)
from fakecheck.domain.model import (
    ANY,
    CompletedAwaitable,
    FakeOptions,
    Out,
    Ref,
    Repeated,
    same_sequence_as,
    that,
)
from fakecheck.infrastructure.interception import is_fake, manager_of
from fakecheck.presentation.api.dsl import call_to

__all__ = [
    "ANY",
    "CompletedAwaitable",
    "ConfigurationError",
    "ExpectationError",
    "FakeCheckError",
    "FakeOptions",
    "FakeScope",
    "NotFakeError",
    "Out",
    "Ref",
    "Repeated",
    "UnfakeableTypeError",
    "__version__",
    "call_to",
    "is_fake",
    "manager_of",
    "same_sequence_as",
    "that",
]
