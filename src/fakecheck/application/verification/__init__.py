"""Call verification and diagnostics."""

from fakecheck.application.verification.assertion_engine import AssertionEngine
from fakecheck.application.verification.diagnostics import (
    build_diagnostic,
    format_invocation,
    format_member,
    format_specification,
    format_value,
)

__all__ = [
    "AssertionEngine",
    "build_diagnostic",
    "format_invocation",
    "format_member",
    "format_specification",
    "format_value",
]
