"""Application layer of the interception engine.

Components:
- matching: argument constraints, generic resolution, configuration normalization
- recording: per-instance call log
- properties: per-instance property cells
- dispatch: rule book, dispatcher, default values
- verification: assertion engine and diagnostics
- reporters: call-log output (PlainText, rich Console)
- fake_manager: per-instance facade
- scope: fake factory and owner
"""

from fakecheck.application.dispatch import DefaultValueProvider, Dispatcher, RuleBook
from fakecheck.application.fake_manager import FakeManager
from fakecheck.application.matching import ArgumentMatcher, normalize_constraints
from fakecheck.application.properties import PropertyStore
from fakecheck.application.recording import CallRecorder
from fakecheck.application.reporters import (
    ConsoleConfig,
    ConsoleReporter,
    PlainTextReporter,
    ReporterProtocol,
)
from fakecheck.application.scope import FakeScope
from fakecheck.application.verification import AssertionEngine, build_diagnostic

__all__ = [
    # Matching
    "ArgumentMatcher",
    "normalize_constraints",
    # State
    "CallRecorder",
    "PropertyStore",
    # Dispatch
    "RuleBook",
    "Dispatcher",
    "DefaultValueProvider",
    # Verification
    "AssertionEngine",
    "build_diagnostic",
    # Reporters
    "ReporterProtocol",
    "PlainTextReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    # Facades
    "FakeManager",
    "FakeScope",
]
