"""Dispatcher: answers one intercepted call.

Flow:
    candidate rules (newest first) -> first match -> action
    no match -> default value
    either way -> invocation appended to the call log
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

from fakecheck.application.matching.generics import substitute_type_arguments
from fakecheck.domain.model.argument import rebuild_call
from fakecheck.domain.model.awaitable import CompletedAwaitable
from fakecheck.domain.model.constraint import ExactValue
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.outcome import DispatchOutcome

if TYPE_CHECKING:
    from fakecheck.application.dispatch.defaults import DefaultValueProvider
    from fakecheck.application.dispatch.rule_book import RuleBook
    from fakecheck.application.matching.argument_matcher import ArgumentMatcher
    from fakecheck.application.recording.call_recorder import CallRecorder
    from fakecheck.domain.model.argument import Argument
    from fakecheck.domain.model.member import MemberDescriptor
    from fakecheck.domain.model.rule import BehaviorRule

logger = logging.getLogger(__name__)


class Dispatcher:
    """Selects and applies the rule that answers a call.

    Contracts:
        - Newest matching rule wins; registration order is the only tie-break
        - Unmatched calls get the default value, never an error
        - A raising rule propagates its exception unchanged, with no write-back
        - Every call is recorded, including raising ones, numbered by when it
          started

    Not locked itself; the owning FakeManager holds the instance lock
    for the whole dispatch.
    """

    __slots__ = ("_defaults", "_matcher", "_recorder", "_rules", "_wrap_coroutines")

    def __init__(
        self,
        rules: RuleBook,
        recorder: CallRecorder,
        matcher: ArgumentMatcher,
        defaults: DefaultValueProvider,
        *,
        wrap_coroutines: bool = True,
    ) -> None:
        """Initialize dispatcher.

        Args:
            rules: Rules of the fake instance
            recorder: Call log of the fake instance
            matcher: Argument matcher
            defaults: Source of fallback values
            wrap_coroutines: Return completed awaitables from async members
        """
        self._rules = rules
        self._recorder = recorder
        self._matcher = matcher
        self._defaults = defaults
        self._wrap_coroutines = wrap_coroutines

    def dispatch(self, member: MemberDescriptor, arguments: tuple[Argument, ...]) -> DispatchOutcome:
        """Answer a call.

        Args:
            member: Called member, type arguments closed
            arguments: One Argument per parameter, values at call time

        Returns:
            Return value and REF/OUT write-backs

        Raises:
            BaseException: Whatever the winning rule is configured to raise
        """
        sequence_number = self._recorder.reserve()
        rule = self.select(member, arguments)
        try:
            if rule is None:
                logger.debug("No rule for %s, using default", member.qualified_name)
                outcome = DispatchOutcome(value=self._finish(member, self._default_for(member)))
            else:
                logger.debug("Rule #%d answers %s", rule.registration_index, member.qualified_name)
                outcome = self._apply(rule, member, arguments)
        except BaseException as exc:
            self._recorder.record(member, arguments, raised=exc, sequence_number=sequence_number)
            raise
        self._recorder.record(
            member, arguments, return_value=outcome.value, sequence_number=sequence_number
        )
        return outcome

    def select(self, member: MemberDescriptor, arguments: tuple[Argument, ...]) -> BehaviorRule | None:
        """Newest rule matching the call, None if none does."""
        for rule in self._rules.newest_first():
            if self._matcher.matches_call(rule.specification, member, arguments):
                return rule
        return None

    def _apply(
        self,
        rule: BehaviorRule,
        member: MemberDescriptor,
        arguments: tuple[Argument, ...],
    ) -> DispatchOutcome:
        action = rule.action
        args, kwargs = rebuild_call(member, arguments)

        for callback in action.callbacks:
            callback(*args, **kwargs)

        if action.raises is not None:
            raise action.raises

        if action.returns_lazily is not None:
            value = action.returns_lazily(*args, **kwargs)
        else:
            value = action.returns

        return DispatchOutcome(
            value=self._finish(member, value),
            written_back=self._write_back(rule, member),
            rule_index=rule.registration_index,
        )

    def _write_back(self, rule: BehaviorRule, member: MemberDescriptor) -> tuple[tuple[int, object], ...]:
        """Values for REF/OUT slots after a match.

        Explicit out_and_ref_values win; otherwise every REF/OUT parameter
        configured with an exact value gets that value back.
        """
        slots = [
            index
            for index, parameter in enumerate(member.parameters)
            if parameter.direction is not ParameterDirection.IN
        ]
        configured = rule.action.out_and_ref_values
        if configured is not None:
            return tuple(zip(slots, configured, strict=True))

        written: list[tuple[int, object]] = []
        for index in slots:
            match rule.specification.constraints[index]:
                case ExactValue(value=value):
                    written.append((index, value))
        return tuple(written)

    def _default_for(self, member: MemberDescriptor) -> object:
        return_type = substitute_type_arguments(member.return_type, member)
        return self._defaults.value_for(return_type)

    def _finish(self, member: MemberDescriptor, value: object) -> object:
        """Wrap results of async members in an already-completed awaitable."""
        if member.is_coroutine and self._wrap_coroutines and not inspect.isawaitable(value):
            return CompletedAwaitable(value)
        return value
