"""Call matching end to end: configure, call, verify through real fakes."""

from collections.abc import Callable
from typing import Annotated, Protocol

import pytest

from fakecheck import (
    ANY,
    ExpectationError,
    FakeScope,
    Out,
    Ref,
    call_to,
    same_sequence_as,
)


class ITypeWithParameterArray(Protocol):
    def method_with_parameter_array(self, arg: str, *args: str) -> None: ...


class IFoo(Protocol):
    def bar(self, baz: int) -> None: ...


class IGenericFoo(Protocol):
    def bar[T1, T2](self, baz1: T1, baz2: T2) -> None: ...


class Pair[T1, T2]:
    pass


class Box[T]:
    pass


class IGenericBarFoo(Protocol):
    def bar[T](self, baz: T) -> None: ...


class IDictionary[K, V](Protocol):
    def try_get_value(self, key: K, value: Out[V]) -> bool: ...


class IHaveInterestingParameters(Protocol):
    def check_your_references(self, ref_string: Ref[str]) -> bool: ...


class ITooHaveInterestingParameters(Protocol):
    def validate(self, value: Annotated[str, Out]) -> bool: ...


MODULE = IFoo.__module__


def failure_message(verification: Callable[[], None]) -> str:
    """Message of the ExpectationError raised by a verification."""
    with pytest.raises(ExpectationError) as exc_info:
        verification()
    return str(exc_info.value)


class TestParameterArrays:
    """Calls to a method with *args."""

    @pytest.fixture
    def fake(self, fake_scope: FakeScope) -> ITypeWithParameterArray:
        fake = fake_scope.fake(ITypeWithParameterArray)
        fake.method_with_parameter_array("foo", "bar", "baz")
        return fake

    def test_matched_by_values(self, fake: ITypeWithParameterArray) -> None:
        call_to(fake.method_with_parameter_array).with_args("foo", "bar", "baz").must_have_happened()

    def test_matched_by_constraints(self, fake: ITypeWithParameterArray) -> None:
        call_to(fake.method_with_parameter_array).with_args(ANY, ANY, ANY).must_have_happened()

    def test_matched_mixing_constraints_and_values(self, fake: ITypeWithParameterArray) -> None:
        call_to(fake.method_with_parameter_array).with_args(ANY, "bar", ANY).must_have_happened()

    def test_matched_as_one_sequence(self, fake: ITypeWithParameterArray) -> None:
        call_to(fake.method_with_parameter_array).with_args(
            "foo", same_sequence_as(["bar", "baz"])
        ).must_have_happened()

    def test_other_elements_not_matched(self, fake: ITypeWithParameterArray) -> None:
        call_to(fake.method_with_parameter_array).with_args("foo", "bar").must_not_have_happened()


class TestFailureDiagnostics:
    """Exact failure messages of unmatched verifications."""

    def test_non_generic_calls_listed(self, fake_scope: FakeScope) -> None:
        fake = fake_scope.fake(IFoo)
        fake.bar(1)
        fake.bar(2)

        message = failure_message(call_to(fake.bar).with_args(3).must_have_happened)

        assert message == (
            "\n"
            "\n"
            "  Assertion failed for the following call:\n"
            f"    {MODULE}.IFoo.bar(3)\n"
            "  Expected to find it at least once but found it #0 times among the calls:\n"
            f"    1: {MODULE}.IFoo.bar(baz=1)\n"
            f"    2: {MODULE}.IFoo.bar(baz=2)\n"
            "\n"
        )

    def test_generic_calls_listed(self, fake_scope: FakeScope) -> None:
        fake = fake_scope.fake(IGenericFoo)
        fake.bar(1, 2.0)
        fake.bar(Pair[bool, int](), 3)

        message = failure_message(call_to(fake.bar[str, str]).with_args(ANY, ANY).must_have_happened)

        assert message == (
            "\n"
            "\n"
            "  Assertion failed for the following call:\n"
            f"    {MODULE}.IGenericFoo.bar[str, str](<Ignored>, <Ignored>)\n"
            "  Expected to find it at least once but found it #0 times among the calls:\n"
            f"    1: {MODULE}.IGenericFoo.bar[int, float](baz1=1, baz2=2.0)\n"
            f"    2: {MODULE}.IGenericFoo.bar[{MODULE}.Pair[bool, int], int]"
            f"(baz1={MODULE}.Pair[bool, int], baz2=3)\n"
            "\n"
        )

    def test_no_non_generic_calls(self, fake_scope: FakeScope) -> None:
        fake = fake_scope.fake(IFoo)

        message = failure_message(call_to(fake.bar).with_args(ANY).must_have_happened)

        assert message == (
            "\n"
            "\n"
            "  Assertion failed for the following call:\n"
            f"    {MODULE}.IFoo.bar(<Ignored>)\n"
            "  Expected to find it at least once but no calls were made to the fake object.\n"
            "\n"
        )

    def test_no_generic_calls(self, fake_scope: FakeScope) -> None:
        fake = fake_scope.fake(IGenericBarFoo)

        message = failure_message(call_to(fake.bar[Box[str]]).with_args(ANY).must_have_happened)

        assert message == (
            "\n"
            "\n"
            "  Assertion failed for the following call:\n"
            f"    {MODULE}.IGenericBarFoo.bar[{MODULE}.Box[str]](<Ignored>)\n"
            "  Expected to find it at least once but no calls were made to the fake object.\n"
            "\n"
        )

    def test_out_parameter_placeholder(self, fake_scope: FakeScope) -> None:
        subject = fake_scope.fake(IDictionary[str, str])

        message = failure_message(
            call_to(subject.try_get_value).with_args("any key", Out()).must_have_happened
        )

        assert message == (
            "\n"
            "\n"
            "  Assertion failed for the following call:\n"
            f'    {MODULE}.IDictionary[str, str].try_get_value("any key", <out parameter>)\n'
            "  Expected to find it at least once but no calls were made to the fake object.\n"
            "\n"
        )


class TestOutParameter:
    """Rules on a method with an Out parameter."""

    @pytest.fixture
    def subject(self, fake_scope: FakeScope) -> IDictionary[str, str]:
        subject = fake_scope.fake(IDictionary[str, str])
        call_to(subject.try_get_value).with_args("any key", Out("a constraint string")).returns(True)
        return subject

    def test_matches_regardless_of_out_value(self, subject: IDictionary[str, str]) -> None:
        assert subject.try_get_value("any key", Out("a different string")) is True

    def test_assigns_configured_value(self, subject: IDictionary[str, str]) -> None:
        out = Out("a different string")
        subject.try_get_value("any key", out)
        assert out.value == "a constraint string"


class TestRefParameter:
    """Rules on a method with a Ref parameter."""

    @pytest.fixture
    def subject(self, fake_scope: FakeScope) -> IHaveInterestingParameters:
        subject = fake_scope.fake(IHaveInterestingParameters)
        call_to(subject.check_your_references).with_args(Ref("a constraint string")).returns(True)
        return subject

    def test_matches_equal_value(self, subject: IHaveInterestingParameters) -> None:
        assert subject.check_your_references(Ref("a constraint string")) is True

    def test_other_value_not_matched(self, subject: IHaveInterestingParameters) -> None:
        assert subject.check_your_references(Ref("a different string")) is False

    def test_assigns_configured_value(self, subject: IHaveInterestingParameters) -> None:
        ref = Ref("a constraint string")
        subject.check_your_references(ref)
        assert ref.value == "a constraint string"


class TestOutMetadata:
    """An Out marker in Annotated metadata leaves an ordinary parameter."""

    @pytest.fixture
    def subject(self, fake_scope: FakeScope) -> ITooHaveInterestingParameters:
        subject = fake_scope.fake(ITooHaveInterestingParameters)
        call_to(subject.validate).with_args("a constraint string").returns(True)
        return subject

    def test_matches_equal_value(self, subject: ITooHaveInterestingParameters) -> None:
        assert subject.validate("a constraint string") is True

    def test_other_value_not_matched(self, subject: ITooHaveInterestingParameters) -> None:
        assert subject.validate("a different string") is False
