"""Console reporter: call log -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fakecheck.application.verification.diagnostics import (
    format_member,
    format_value,
)

if TYPE_CHECKING:
    from fakecheck.application.fake_manager import FakeManager
    from fakecheck.domain.model.invocation import Invocation


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    All fields have defaults. Immutable.

    Attributes:
        max_calls: Max calls to display. None = unlimited.
        show_results: Show return value / raised exception column.
        width: Console width in characters.
    """

    max_calls: int | None = None
    show_results: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_calls is not None and self.max_calls < 0:
            raise ValueError(f"max_calls must be >= 0, got {self.max_calls}")
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs the call log as a rich table.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, manager: FakeManager) -> str:
        """Format the call log of a fake as rich formatted string.

        Args:
            manager: Manager of the fake to report on.

        Returns:
            Formatted string with colors and a table.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        calls = manager.calls()
        shown = calls if self._config.max_calls is None else calls[: self._config.max_calls]

        console.print()
        console.rule(f"[bold]{escape(manager.display_name)}[/bold]")
        console.print(f"[bold]Calls:[/bold] {len(calls)}")

        if shown:
            console.print(self._table(shown))
        if len(shown) < len(calls):
            console.print(f"[dim]... {len(calls) - len(shown)} more call(s)[/dim]", highlight=False)

        return output.getvalue()

    def _table(self, calls: tuple[Invocation, ...]) -> Table:
        """Build the call table."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Member", style="cyan")
        table.add_column("Arguments")
        if self._config.show_results:
            table.add_column("Result")

        for call in calls:
            arguments = ", ".join(
                f"{parameter.name}={format_value(argument.value)}"
                for parameter, argument in zip(call.member.parameters, call.arguments, strict=True)
            )
            row = [str(call.sequence_number), escape(format_member(call.member)), escape(arguments)]
            if self._config.show_results:
                row.append(self._result(call))
            table.add_row(*row)
        return table

    def _result(self, call: Invocation) -> str:
        if call.raised is not None:
            return f"[red]{escape(type(call.raised).__name__)}: {escape(str(call.raised))}[/red]"
        return escape(format_value(call.return_value))
