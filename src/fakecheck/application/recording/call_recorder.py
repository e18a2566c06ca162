"""Call recorder: append-only log of one fake instance's calls."""

from __future__ import annotations

import bisect
import itertools
from typing import TYPE_CHECKING

from fakecheck.domain.model.invocation import Invocation

if TYPE_CHECKING:
    from fakecheck.domain.model.argument import Argument
    from fakecheck.domain.model.member import MemberDescriptor


def _sequence_key(invocation: Invocation) -> int:
    return invocation.sequence_number


class CallRecorder:
    """Ordered, append-only call log for one fake instance.

    Contracts:
        - Sequence numbers (1, 2, 3, ...) follow the order calls started:
          reserve() takes one when a call starts, record() stores it when
          the call finishes
        - A call made from inside another call (a rule callback calling
          the same fake) is numbered after the outer call
        - Recorded invocations are never reordered or removed
        - query() returns an immutable snapshot ordered by sequence number

    Not locked itself; the owning FakeManager serializes access.
    """

    __slots__ = ("_calls", "_instance_id", "_sequence")

    def __init__(self, instance_id: int) -> None:
        """Initialize an empty log.

        Args:
            instance_id: Fake instance the log belongs to (>= 1)
        """
        if instance_id < 1:
            raise ValueError(f"instance_id must be >= 1, got {instance_id}")
        self._instance_id = instance_id
        self._calls: list[Invocation] = []
        self._sequence = itertools.count(1)

    @property
    def instance_id(self) -> int:
        """Fake instance the log belongs to."""
        return self._instance_id

    def reserve(self) -> int:
        """Take the sequence number of a call that is starting."""
        return next(self._sequence)

    def record(
        self,
        member: MemberDescriptor,
        arguments: tuple[Argument, ...],
        return_value: object = None,
        raised: BaseException | None = None,
        sequence_number: int | None = None,
    ) -> Invocation:
        """Store one finished invocation.

        Args:
            member: Called member, type arguments closed
            arguments: Bound arguments, values at call time
            return_value: Value returned to the caller
            raised: Exception propagated instead, if any
            sequence_number: Number from reserve(); None = next number

        Returns:
            The recorded Invocation
        """
        invocation = Invocation(
            instance_id=self._instance_id,
            member=member,
            arguments=arguments,
            return_value=return_value,
            sequence_number=self.reserve() if sequence_number is None else sequence_number,
            raised=raised,
        )
        bisect.insort(self._calls, invocation, key=_sequence_key)
        return invocation

    def query(self) -> tuple[Invocation, ...]:
        """Snapshot of all invocations in sequence order."""
        return tuple(self._calls)

    def __len__(self) -> int:
        return len(self._calls)
