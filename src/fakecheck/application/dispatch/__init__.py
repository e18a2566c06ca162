"""Rule bookkeeping and dispatch."""

from fakecheck.application.dispatch.defaults import DefaultValueProvider, zero_value
from fakecheck.application.dispatch.dispatcher import Dispatcher
from fakecheck.application.dispatch.rule_book import RuleBook

__all__ = ["DefaultValueProvider", "Dispatcher", "RuleBook", "zero_value"]
