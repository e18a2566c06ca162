"""Fluent API for configuring and verifying fakes.

Public exports:
    call_to: Entry point for the fluent DSL
    CallConfiguration: Rule and verification builder
"""

from fakecheck.presentation.api.dsl import CallConfiguration, call_to

__all__ = [
    "CallConfiguration",
    "call_to",
]
