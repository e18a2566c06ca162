"""Tests for application/matching/normalize.py."""

import pytest

from fakecheck.application.matching.normalize import (
    any_arguments,
    as_constraint,
    normalize_constraints,
)
from fakecheck.domain.exceptions import ConfigurationError
from fakecheck.domain.model.boxes import Out, Ref
from fakecheck.domain.model.constraint import (
    ANY,
    ExactValue,
    SequenceEquals,
    Wildcard,
    same_sequence_as,
    that,
)
from fakecheck.domain.model.parameter import ParameterKind
from tests.factories import make_member, make_parameter

PARAMS_MEMBER = make_member(
    name="method_with_parameter_array",
    parameters=(
        make_parameter("arg", str),
        make_parameter("args", str, kind=ParameterKind.VARIADIC),
    ),
)


class TestAsConstraint:
    """Tests for as_constraint."""

    def test_constraints_pass_through(self) -> None:
        """Constraints are used as they are."""
        assert as_constraint(ANY) is ANY

    def test_plain_value_is_exact(self) -> None:
        """Plain values match by equality."""
        assert as_constraint(3) == ExactValue(3)

    def test_boxes_unwrap(self) -> None:
        """Ref and Out configure the value they hold."""
        assert as_constraint(Ref("x")) == ExactValue("x")
        assert as_constraint(Out("y")) == ExactValue("y")

    def test_empty_out_is_wildcard(self) -> None:
        """An empty Out configures nothing."""
        assert as_constraint(Out()) == Wildcard()


class TestNormalizeConstraints:
    """Tests for normalize_constraints."""

    def test_positional_and_keyword(self) -> None:
        """Keywords bind by parameter name."""
        member = make_member(parameters=(make_parameter("a"), make_parameter("b")))
        assert normalize_constraints(member, (1,), {"b": 2}) == (ExactValue(1), ExactValue(2))

    def test_expanded_variadic_values(self) -> None:
        """Trailing values fold into SequenceEquals."""
        constraints = normalize_constraints(PARAMS_MEMBER, ("foo", "bar", "baz"), {})
        assert constraints == (ExactValue("foo"), SequenceEquals(("bar", "baz")))

    def test_expanded_variadic_mixed_with_constraints(self) -> None:
        """Wildcards and values mix inside the sequence."""
        constraints = normalize_constraints(PARAMS_MEMBER, (ANY, ANY, "bar", ANY), {})
        assert constraints == (ANY, SequenceEquals((ANY, "bar", ANY)))

    def test_aggregate_sequence_constraint(self) -> None:
        """A single SequenceEquals applies to the whole tuple."""
        constraints = normalize_constraints(
            PARAMS_MEMBER, ("foo", same_sequence_as(["bar", "baz"])), {}
        )
        assert constraints == (ExactValue("foo"), SequenceEquals(("bar", "baz")))

    def test_single_wildcard_applies_to_whole_tuple(self) -> None:
        """ANY after the positionals matches any number of *args."""
        constraints = normalize_constraints(PARAMS_MEMBER, ("foo", ANY), {})
        assert constraints == (ExactValue("foo"), ANY)

    def test_single_predicate_applies_to_whole_tuple(self) -> None:
        """A predicate receives the aggregated tuple."""
        predicate = that(lambda args: len(args) == 2)
        assert normalize_constraints(PARAMS_MEMBER, ("foo", predicate), {})[1] is predicate

    def test_single_tuple_value_is_aggregate(self) -> None:
        """A tuple value is the whole *args tuple."""
        constraints = normalize_constraints(PARAMS_MEMBER, ("foo", ("bar", "baz")), {})
        assert constraints[1] == ExactValue(("bar", "baz"))

    def test_single_scalar_is_one_element(self) -> None:
        """A single scalar value is a one-element *args."""
        constraints = normalize_constraints(PARAMS_MEMBER, ("foo", "bar"), {})
        assert constraints[1] == SequenceEquals(("bar",))

    def test_no_variadic_values_means_empty(self) -> None:
        """Omitted *args values match only an empty tuple."""
        assert normalize_constraints(PARAMS_MEMBER, ("foo",), {})[1] == SequenceEquals(())

    def test_variadic_keywords(self) -> None:
        """Unknown keywords go to **kwargs as one dict."""
        member = make_member(
            parameters=(
                make_parameter("a"),
                make_parameter("options", kind=ParameterKind.VARIADIC_KEYWORD),
            )
        )
        constraints = normalize_constraints(member, (1,), {"x": 2})
        assert constraints == (ExactValue(1), ExactValue({"x": 2}))

    def test_too_many_positionals_raise(self) -> None:
        """Extra positionals without *args are rejected."""
        with pytest.raises(ConfigurationError, match="positional"):
            normalize_constraints(make_member(), (1, 2), {})

    def test_unknown_keyword_raises(self) -> None:
        """Keywords must name a parameter."""
        with pytest.raises(ConfigurationError, match="unexpected keyword"):
            normalize_constraints(make_member(), (), {"nope": 1})

    def test_duplicate_raises(self) -> None:
        """A parameter gets one constraint."""
        with pytest.raises(ConfigurationError, match="multiple"):
            normalize_constraints(make_member(), (1,), {"baz": 2})

    def test_missing_raises(self) -> None:
        """Every parameter needs a constraint."""
        with pytest.raises(ConfigurationError, match="no constraint"):
            normalize_constraints(make_member(), (), {})

    def test_any_arguments(self) -> None:
        """any_arguments gives one wildcard per parameter."""
        assert any_arguments(PARAMS_MEMBER) == (Wildcard(), Wildcard())
