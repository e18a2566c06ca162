"""Plain text reporter.

Stdlib-only reporter for simple text output, used in pytest reports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fakecheck.application.verification.diagnostics import format_invocation, format_value

if TYPE_CHECKING:
    from fakecheck.application.fake_manager import FakeManager
    from fakecheck.domain.model.invocation import Invocation


class PlainTextReporter:
    """Numbered call log of one fake.

    Example output:
        Calls to pkg.Repository #1 (2):
          1: pkg.Repository.load(key="a") -> <None>
          2: pkg.Repository.save(item=7) raised ValueError: full
    """

    def __init__(self, show_results: bool = True) -> None:
        """Initialize reporter.

        Args:
            show_results: Append return values and raised exceptions.
        """
        self._show_results = show_results

    def report(self, manager: FakeManager) -> str:
        """Render the call log of a fake."""
        calls = manager.calls()
        lines = [f"Calls to {manager.display_name} ({len(calls)}):"]
        if not calls:
            lines.append("  (no calls)")
        for call in calls:
            lines.append(f"  {call.sequence_number}: {self._render(call)}")
        return "\n".join(lines) + "\n"

    def _render(self, call: Invocation) -> str:
        text = format_invocation(call)
        if not self._show_results:
            return text
        if call.raised is not None:
            return f"{text} raised {type(call.raised).__name__}: {call.raised}"
        return f"{text} -> {format_value(call.return_value)}"
