"""Tests for application/recording/call_recorder.py."""

import pytest

from fakecheck.application.recording.call_recorder import CallRecorder
from tests.factories import make_arguments, make_member


class TestCallRecorder:
    """Tests for CallRecorder."""

    def test_sequence_numbers_increase(self) -> None:
        """Each record gets the next sequence number."""
        recorder = CallRecorder(instance_id=1)
        member = make_member()
        first = recorder.record(member, make_arguments(member, 1))
        second = recorder.record(member, make_arguments(member, 2))
        assert (first.sequence_number, second.sequence_number) == (1, 2)

    def test_query_is_snapshot(self) -> None:
        """Later records do not change an earlier snapshot."""
        recorder = CallRecorder(instance_id=1)
        member = make_member()
        recorder.record(member, make_arguments(member, 1))
        snapshot = recorder.query()
        recorder.record(member, make_arguments(member, 2))
        assert len(snapshot) == 1
        assert len(recorder) == 2

    def test_keeps_return_value_and_exception(self) -> None:
        """Outcome of the call is stored on the invocation."""
        recorder = CallRecorder(instance_id=3)
        member = make_member()
        error = ValueError("boom")
        invocation = recorder.record(member, make_arguments(member, 1), raised=error)
        assert invocation.raised is error
        assert invocation.instance_id == 3

    def test_instance_id_must_be_positive(self) -> None:
        """instance_id starts at 1."""
        with pytest.raises(ValueError, match="instance_id"):
            CallRecorder(instance_id=0)


class TestReservedNumbers:
    """Tests for numbers taken when a call starts."""

    def test_log_ordered_by_reserved_number(self) -> None:
        """A call finishing later but starting first comes first."""
        recorder = CallRecorder(instance_id=1)
        member = make_member()
        outer = recorder.reserve()
        inner = recorder.reserve()
        recorder.record(member, make_arguments(member, 2), sequence_number=inner)
        recorder.record(member, make_arguments(member, 1), sequence_number=outer)

        assert [call.sequence_number for call in recorder.query()] == [1, 2]
        assert [call.arguments[0].value for call in recorder.query()] == [1, 2]

    def test_record_without_reservation_takes_next(self) -> None:
        recorder = CallRecorder(instance_id=1)
        member = make_member()
        recorder.reserve()
        assert recorder.record(member, make_arguments(member, 1)).sequence_number == 2
