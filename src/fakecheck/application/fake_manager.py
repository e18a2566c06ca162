"""Fake manager: per-instance state and the engine's entry points.

One FakeManager sits behind every fake. The interception layer funnels
method calls into dispatch() and attribute access into the property
methods; configuration and verification surfaces use register_rule()
and verify().
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fakecheck.application.dispatch.dispatcher import Dispatcher
from fakecheck.application.dispatch.rule_book import RuleBook
from fakecheck.application.matching.argument_matcher import ArgumentMatcher
from fakecheck.application.matching.generics import close_for_call
from fakecheck.application.properties.property_store import PropertyStore
from fakecheck.application.recording.call_recorder import CallRecorder
from fakecheck.application.verification.assertion_engine import AssertionEngine
from fakecheck.domain.exceptions import ConfigurationError
from fakecheck.domain.model.configuration import FakeOptions
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.repeated import Repeated
from fakecheck.domain.model.specification import CallSpecification

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from fakecheck.application.dispatch.defaults import DefaultValueProvider
    from fakecheck.domain.model.action import RuleAction
    from fakecheck.domain.model.argument import Argument
    from fakecheck.domain.model.constraint import ArgumentConstraint
    from fakecheck.domain.model.invocation import Invocation
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.domain.model.outcome import DispatchOutcome, VerificationResult
    from fakecheck.domain.model.rule import BehaviorRule

logger = logging.getLogger(__name__)


class FakeManager:
    """State and entry points of one fake instance.

    Contracts:
        - One re-entrant lock per instance, held for exactly one dispatch,
          property access, registration or verification
        - Rules only answer calls dispatched after their registration
        - Instances never share state or locks

    Attributes:
        instance_id: Identity of the fake within its scope (>= 1)
        declaring_type: Rendered name of the faked type
        options: Creation options
    """

    __slots__ = (
        "_assertions",
        "_dispatcher",
        "_lock",
        "_members",
        "_properties",
        "_recorder",
        "_rules",
        "_store",
        "_defaults",
        "declaring_type",
        "instance_id",
        "options",
    )

    def __init__(
        self,
        instance_id: int,
        declaring_type: str,
        members: Mapping[str, MemberDescriptor],
        defaults: DefaultValueProvider,
        *,
        properties: Mapping[str, MemberDescriptor] | None = None,
        options: FakeOptions | None = None,
    ) -> None:
        """Initialize manager.

        Args:
            instance_id: Identity within the owning scope (>= 1)
            declaring_type: Rendered name of the faked type
            members: Interceptable methods by name
            defaults: Source of fallback values
            properties: Property and indexer descriptors by name
            options: Creation options (defaults if None)
        """
        if not declaring_type:
            raise ValueError("declaring_type must not be empty")

        self.instance_id = instance_id
        self.declaring_type = declaring_type
        self.options = options or FakeOptions()
        self._members = dict(members)
        self._properties = dict(properties or {})
        self._defaults = defaults
        self._lock = threading.RLock()

        self._recorder = CallRecorder(instance_id)
        self._store = PropertyStore()
        self._rules = RuleBook()
        matcher = ArgumentMatcher()
        self._dispatcher = Dispatcher(
            self._rules,
            self._recorder,
            matcher,
            defaults,
            wrap_coroutines=self.options.wrap_coroutines,
        )
        self._assertions = AssertionEngine(self._recorder, matcher)

    @property
    def display_name(self) -> str:
        """Name used by reporters."""
        return self.options.name or f"{self.declaring_type} #{self.instance_id}"

    def member(self, name: str) -> MemberDescriptor:
        """Interceptable method by name.

        Raises:
            ConfigurationError: No such method on the faked type
        """
        try:
            return self._members[name]
        except KeyError:
            raise ConfigurationError(
                f"{self.declaring_type}.{name}", "not an interceptable method of the fake"
            ) from None

    def property_descriptor(self, name: str) -> MemberDescriptor:
        """Property (or indexer) descriptor by name.

        Raises:
            ConfigurationError: No such property on the faked type
        """
        try:
            return self._properties[name]
        except KeyError:
            raise ConfigurationError(
                f"{self.declaring_type}.{name}", "not a property of the fake"
            ) from None

    # -------------------------------------------------------------------------
    # Configuration surface
    # -------------------------------------------------------------------------

    def register_rule(
        self,
        member: MemberDescriptor,
        constraints: Sequence[ArgumentConstraint],
        action: RuleAction,
    ) -> int:
        """Register a behavior rule.

        Args:
            member: Member the rule answers, type arguments possibly open
            constraints: One constraint per declared parameter
            action: What the rule does

        Returns:
            registration_index of the new rule

        Raises:
            ConfigurationError: Unknown member, wrong constraint count, or
                out_and_ref_values not matching the REF/OUT parameters
        """
        self._check_member(member)
        specification = CallSpecification(member=member, constraints=tuple(constraints))

        if action.out_and_ref_values is not None:
            expected = sum(1 for p in member.parameters if p.direction is not ParameterDirection.IN)
            if len(action.out_and_ref_values) != expected:
                raise ConfigurationError(
                    member.qualified_name,
                    f"expected {expected} out/ref value(s), got {len(action.out_and_ref_values)}",
                )

        with self._lock:
            rule = self._rules.register(specification, action)
        logger.debug(
            "Registered rule #%d for %s on fake #%d",
            rule.registration_index,
            member.qualified_name,
            self.instance_id,
        )
        return rule.registration_index

    def rules(self) -> tuple[BehaviorRule, ...]:
        """Registered rules, oldest first."""
        with self._lock:
            return self._rules.rules()

    # -------------------------------------------------------------------------
    # Interception hook
    # -------------------------------------------------------------------------

    def dispatch(self, member: MemberDescriptor, arguments: Sequence[Argument]) -> DispatchOutcome:
        """Answer one intercepted call.

        Args:
            member: Called member; open type arguments are inferred
            arguments: One Argument per declared parameter

        Returns:
            Return value and REF/OUT write-backs for the call site

        Raises:
            BaseException: Whatever the winning rule is configured to raise
        """
        bound = tuple(arguments)
        closed = close_for_call(member, bound)
        with self._lock:
            return self._dispatcher.dispatch(closed, bound)

    def get_property(self, descriptor: MemberDescriptor, index: tuple[object, ...] = ()) -> object:
        """Read a property cell, materializing a default on first read."""
        with self._lock:
            return self._store.get(
                descriptor,
                index,
                lambda: self._defaults.value_for(descriptor.return_type),
            )

    def set_property(self, descriptor: MemberDescriptor, index: tuple[object, ...], value: object) -> None:
        """Overwrite a property cell."""
        with self._lock:
            self._store.set(descriptor, index, value)

    # -------------------------------------------------------------------------
    # Verification surface
    # -------------------------------------------------------------------------

    def verify(
        self,
        member: MemberDescriptor,
        constraints: Sequence[ArgumentConstraint],
        repeated: Repeated | None = None,
    ) -> VerificationResult:
        """Verify recorded calls.

        Args:
            member: Expected member, type arguments possibly open
            constraints: One constraint per declared parameter
            repeated: Accepted count (default: at least once)

        Returns:
            Passed or failed result with diagnostic

        Raises:
            ConfigurationError: Unknown member or wrong constraint count
        """
        self._check_member(member)
        specification = CallSpecification(member=member, constraints=tuple(constraints))
        with self._lock:
            return self._assertions.verify(specification, repeated or Repeated.at_least_once())

    def assert_called(
        self,
        member: MemberDescriptor,
        constraints: Sequence[ArgumentConstraint],
        repeated: Repeated | None = None,
    ) -> None:
        """Verify recorded calls, raising on failure.

        Raises:
            ExpectationError: Count not satisfied; message is the diagnostic
        """
        self.verify(member, constraints, repeated).raise_if_failed()

    def calls(self) -> tuple[Invocation, ...]:
        """Snapshot of the call log."""
        with self._lock:
            return self._recorder.query()

    def _check_member(self, member: MemberDescriptor) -> None:
        known = self._members.get(member.name)
        if known is None or not known.same_definition(member):
            raise ConfigurationError(member.qualified_name, "not an interceptable method of the fake")
