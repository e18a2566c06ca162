"""Fluent API (DSL) for configuring and verifying fakes.

Entry point for rule registration and call verification.

Example:
    repo = fake_scope.fake(Repository)
    call_to(repo.load).with_args("id-1").returns(user)
    service.run()
    call_to(repo.save).with_args(ANY).must_have_happened(Repeated.exactly(1))
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from fakecheck.application.matching.generics import close_from_constraints
from fakecheck.application.matching.normalize import any_arguments, normalize_constraints
from fakecheck.domain.exceptions import ConfigurationError, NotFakeError
from fakecheck.domain.model.action import RuleAction
from fakecheck.domain.model.repeated import Repeated
from fakecheck.infrastructure.interception import BoundFakeMethod

if TYPE_CHECKING:
    from collections.abc import Callable

    from fakecheck.application.fake_manager import FakeManager
    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.domain.model.outcome import VerificationResult


def call_to(method: object) -> CallConfiguration:
    """Start configuring or verifying calls to a fake's method.

    Args:
        method: Bound method of a fake, optionally with explicit type
            arguments (``fake.convert[int]``)

    Returns:
        CallConfiguration matching any arguments until with_args() is used

    Raises:
        NotFakeError: method does not belong to a fake
    """
    if not isinstance(method, BoundFakeMethod):
        raise NotFakeError(type(method))
    return CallConfiguration(_manager=method.manager, _member=method.member)


@dataclass(frozen=True, slots=True)
class CallConfiguration:
    """Immutable builder for one call specification.

    Chaining steps (with_args, invokes, ...) return new builders. Terminal
    steps register a rule (returns, raises, ...) and give its
    registration index, or verify the call log (must_have_happened, ...).
    """

    _manager: FakeManager
    _member: MemberDescriptor
    _constraints: tuple[ArgumentConstraint, ...] | None = None
    _callbacks: tuple[Callable[..., object], ...] = ()
    _out_and_ref_values: tuple[object, ...] | None = None

    # -------------------------------------------------------------------------
    # Chaining
    # -------------------------------------------------------------------------

    def with_args(self, *args: object, **kwargs: object) -> CallConfiguration:
        """Constrain the arguments, written like the call itself.

        Plain values match by equality; ANY, that(...) and
        same_sequence_as(...) are used as they are. Values following the
        positional parameters are matched against *args.

        Raises:
            ConfigurationError: Arguments do not fit the signature
        """
        constraints = normalize_constraints(self._member, args, kwargs)
        return replace(self, _constraints=constraints)

    def with_any_args(self) -> CallConfiguration:
        """Match every call of the member."""
        return replace(self, _constraints=any_arguments(self._member))

    def invokes(self, callback: Callable[..., object]) -> CallConfiguration:
        """Add a side effect, called with the call's arguments before returning."""
        if not callable(callback):
            raise ConfigurationError(self._member.qualified_name, "callback must be callable")
        return replace(self, _callbacks=(*self._callbacks, callback))

    def assigns_out_and_ref_parameters(self, *values: object) -> CallConfiguration:
        """Values written back to the Ref/Out parameters, in declaration order."""
        return replace(self, _out_and_ref_values=tuple(values))

    # -------------------------------------------------------------------------
    # Rule registration
    # -------------------------------------------------------------------------

    def returns(self, value: object) -> int:
        """Register a rule returning a fixed value.

        Returns:
            registration_index of the rule
        """
        return self._register(returns=value)

    def returns_lazily(self, factory: Callable[..., object]) -> int:
        """Register a rule returning ``factory(*args, **kwargs)`` of each call."""
        return self._register(returns_lazily=factory)

    def raises(self, exception: BaseException | type[BaseException]) -> int:
        """Register a rule raising an exception (a class is instantiated without arguments)."""
        if isinstance(exception, type) and issubclass(exception, BaseException):
            exception = exception()
        return self._register(raises=exception)

    def does_nothing(self) -> int:
        """Register a rule returning None, overriding earlier rules."""
        return self._register()

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def verify(self, repeated: Repeated | None = None) -> VerificationResult:
        """Count matching recorded calls without raising."""
        constraints = self._resolved_constraints()
        member = close_from_constraints(self._member, constraints)
        return self._manager.verify(member, constraints, repeated)

    def must_have_happened(self, repeated: Repeated | None = None) -> None:
        """Assert matching calls were recorded (default: at least once).

        Raises:
            ExpectationError: Count not satisfied; message is the diagnostic
        """
        self.verify(repeated).raise_if_failed()

    def must_not_have_happened(self) -> None:
        """Assert no matching call was recorded."""
        self.must_have_happened(Repeated.never())

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolved_constraints(self) -> tuple[ArgumentConstraint, ...]:
        if self._constraints is None:
            return any_arguments(self._member)
        return self._constraints

    def _register(self, **action_fields: object) -> int:
        action = RuleAction(
            callbacks=self._callbacks,
            out_and_ref_values=self._out_and_ref_values,
            **action_fields,  # type: ignore[arg-type]
        )
        constraints = self._resolved_constraints()
        member = close_from_constraints(self._member, constraints)
        return self._manager.register_rule(member, constraints, action)
