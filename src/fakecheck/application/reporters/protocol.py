"""Reporter protocol: what the pytest plugin needs from a call-log reporter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fakecheck.application.fake_manager import FakeManager


class ReporterProtocol(Protocol):
    """Renders the call log of one fake.

    Implemented by PlainTextReporter and ConsoleReporter. Reporters only
    read manager.calls() and manager.display_name; they never dispatch.
    """

    def report(self, manager: FakeManager) -> str:
        """Call log of the fake behind ``manager``, ready to print."""
        ...
