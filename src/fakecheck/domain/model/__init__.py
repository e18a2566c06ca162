"""Domain model: value objects of the interception engine."""

from fakecheck.domain.model.action import RuleAction
from fakecheck.domain.model.argument import Argument, rebuild_call
from fakecheck.domain.model.awaitable import CompletedAwaitable
from fakecheck.domain.model.boxes import Out, Ref
from fakecheck.domain.model.configuration import FakeOptions
from fakecheck.domain.model.constraint import (
    ANY,
    CONSTRAINT_TYPES,
    ArgumentConstraint,
    ExactValue,
    Predicate,
    SequenceEquals,
    Wildcard,
    same_sequence_as,
    that,
)
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.invocation import Invocation
from fakecheck.domain.model.member import MemberDescriptor
from fakecheck.domain.model.naming import format_type, runtime_type
from fakecheck.domain.model.outcome import DispatchOutcome, VerificationResult
from fakecheck.domain.model.parameter import ParameterInfo, ParameterKind
from fakecheck.domain.model.repeated import Repeated
from fakecheck.domain.model.rule import BehaviorRule
from fakecheck.domain.model.specification import CallSpecification

__all__ = [
    # Enums
    "ParameterDirection",
    "ParameterKind",
    # Value objects
    "Argument",
    "ParameterInfo",
    "MemberDescriptor",
    "Invocation",
    "Repeated",
    "FakeOptions",
    # Constraints
    "ArgumentConstraint",
    "CONSTRAINT_TYPES",
    "ExactValue",
    "Predicate",
    "Wildcard",
    "SequenceEquals",
    "ANY",
    "that",
    "same_sequence_as",
    # Rules
    "CallSpecification",
    "RuleAction",
    "BehaviorRule",
    # Results
    "DispatchOutcome",
    "VerificationResult",
    # Call-site helpers
    "Ref",
    "Out",
    "CompletedAwaitable",
    "rebuild_call",
    "format_type",
    "runtime_type",
]
