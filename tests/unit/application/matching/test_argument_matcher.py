"""Tests for application/matching/argument_matcher.py."""

import pytest

from fakecheck.application.matching.argument_matcher import ArgumentMatcher
from fakecheck.domain.model.constraint import (
    ANY,
    ExactValue,
    Predicate,
    SequenceEquals,
    that,
)
from fakecheck.domain.model.direction import ParameterDirection
from fakecheck.domain.model.parameter import ParameterKind
from tests.factories import make_arguments, make_member, make_parameter, make_specification


@pytest.fixture
def matcher() -> ArgumentMatcher:
    return ArgumentMatcher()


def _raise(value: object) -> bool:
    raise RuntimeError("predicate failure")


class TestMatchesValue:
    """Tests for single constraint evaluation."""

    def test_wildcard_matches_anything(self, matcher: ArgumentMatcher) -> None:
        """Wildcard accepts every value, None included."""
        assert matcher.matches_value(ANY, None)
        assert matcher.matches_value(ANY, object())

    def test_exact_value_uses_equality(self, matcher: ArgumentMatcher) -> None:
        """ExactValue compares with ==."""
        assert matcher.matches_value(ExactValue([1, 2]), [1, 2])
        assert not matcher.matches_value(ExactValue(1), 2)

    def test_predicate_truthiness(self, matcher: ArgumentMatcher) -> None:
        """The predicate's truth value decides."""
        assert matcher.matches_value(that(lambda v: v > 2), 3)
        assert not matcher.matches_value(that(lambda v: v > 2), 1)

    def test_raising_predicate_is_no_match(self, matcher: ArgumentMatcher) -> None:
        """A predicate that raises counts as no match."""
        assert not matcher.matches_value(Predicate(test=_raise), 1)

    def test_sequence_equals_same_count_and_order(self, matcher: ArgumentMatcher) -> None:
        """SequenceEquals requires identical count and order."""
        constraint = SequenceEquals(("bar", "baz"))
        assert matcher.matches_value(constraint, ("bar", "baz"))
        assert not matcher.matches_value(constraint, ("baz", "bar"))
        assert not matcher.matches_value(constraint, ("bar",))
        assert not matcher.matches_value(constraint, ("bar", "baz", "qux"))

    def test_sequence_equals_nested_constraints(self, matcher: ArgumentMatcher) -> None:
        """Elements may be constraints themselves."""
        constraint = SequenceEquals((ANY, "bar", that(lambda v: v.startswith("b"))))
        assert matcher.matches_value(constraint, ("foo", "bar", "baz"))
        assert not matcher.matches_value(constraint, ("foo", "bar", "qux"))

    def test_sequence_equals_rejects_non_sequence(self, matcher: ArgumentMatcher) -> None:
        """A scalar never matches a sequence constraint."""
        assert not matcher.matches_value(SequenceEquals(("a",)), "a")


class TestMatchesCall:
    """Tests for whole-call matching."""

    def test_member_must_be_equal(self, matcher: ArgumentMatcher) -> None:
        """A different member never matches."""
        spec = make_specification(make_member(name="bar"), ANY)
        other = make_member(name="qux")
        assert not matcher.matches_call(spec, other, make_arguments(other, 1))

    def test_out_constraint_never_evaluated(self, matcher: ArgumentMatcher) -> None:
        """OUT parameters are skipped, whatever their constraint says."""
        member = make_member(
            name="try_get_value",
            parameters=(
                make_parameter("key", str),
                make_parameter("value", str, direction=ParameterDirection.OUT),
            ),
        )
        spec = make_specification(member, ExactValue("any key"), ExactValue("a constraint string"))
        arguments = make_arguments(member, "any key", "a different string")
        assert matcher.matches_call(spec, member, arguments)

    def test_ref_compares_value_at_call_time(self, matcher: ArgumentMatcher) -> None:
        """REF parameters are matched like IN parameters."""
        member = make_member(
            parameters=(make_parameter("ref_string", str, direction=ParameterDirection.REF),)
        )
        spec = make_specification(member, ExactValue("a constraint string"))
        assert matcher.matches_call(spec, member, make_arguments(member, "a constraint string"))
        assert not matcher.matches_call(spec, member, make_arguments(member, "a different string"))

    def test_generic_type_arguments_must_be_identical(self, matcher: ArgumentMatcher) -> None:
        """bar[int] never matches bar[bool], subclass or not."""
        generic = make_member(generic_parameters=("T",))
        spec = make_specification(generic.with_generic_arguments((int,)), ANY)
        called = generic.with_generic_arguments((bool,))
        assert not matcher.matches_call(spec, called, make_arguments(called, True))

    def test_open_type_arguments_resolved_against_call(self, matcher: ArgumentMatcher) -> None:
        """An open specification matches every instantiation."""
        generic = make_member(generic_parameters=("T",))
        spec = make_specification(generic, ANY)
        called = generic.with_generic_arguments((str,))
        assert matcher.matches_call(spec, called, make_arguments(called, "x"))

    def test_variadic_parameter(self, matcher: ArgumentMatcher) -> None:
        """*args arrives as one tuple argument."""
        member = make_member(
            parameters=(
                make_parameter("arg", str),
                make_parameter("args", str, kind=ParameterKind.VARIADIC),
            )
        )
        spec = make_specification(member, ExactValue("foo"), SequenceEquals(("bar", "baz")))
        assert matcher.matches_call(spec, member, make_arguments(member, "foo", ("bar", "baz")))
