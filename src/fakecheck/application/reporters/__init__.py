"""Reporters for the call logs of fakes.

PlainTextReporter uses stdlib only; ConsoleReporter renders with rich.
"""

from fakecheck.application.reporters.console import ConsoleConfig, ConsoleReporter
from fakecheck.application.reporters.plain_text import PlainTextReporter
from fakecheck.application.reporters.protocol import ReporterProtocol

__all__ = [
    "ReporterProtocol",
    "PlainTextReporter",
    "ConsoleConfig",
    "ConsoleReporter",
]
