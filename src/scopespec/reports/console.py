"""Documentation-format console reporter."""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from scopespec.testing.runner import ExampleStatus

if TYPE_CHECKING:
    from scopespec.testing.runner import ExecutionResult, SpecRun
    from scopespec.testing.tree import Example


_STYLES: dict[ExampleStatus, str] = {
    ExampleStatus.PASSED: "green",
    ExampleStatus.FAILED: "red",
    ExampleStatus.ERRORED: "red",
    ExampleStatus.SKIPPED: "yellow",
    ExampleStatus.XFAILED: "yellow",
}


class ConsoleReporter:
    """Prints nested scope descriptions with one line per example.

    Verbosity below zero prints only the summary; above zero adds tracebacks
    for errored examples.
    """

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        self.console = console or Console()
        self.verbosity = verbosity
        self._printed_path: list[str] = []
        self._problems: list[ExecutionResult] = []

    def on_no_examples_found(self) -> None:
        self.console.print("[yellow]No examples found.[/yellow]")

    def on_collection_complete(self, examples: list[Example]) -> None:
        self._printed_path = []
        self._problems = []
        if self.verbosity > 0:
            self.console.print(f"Collected {len(examples)} example(s)")

    def on_example_complete(self, result: ExecutionResult) -> None:
        if result.status in {ExampleStatus.FAILED, ExampleStatus.ERRORED}:
            self._problems.append(result)
        if self.verbosity < 0:
            return

        scope_path = result.description_path[:-1]
        common = 0
        for printed, current in zip(self._printed_path, scope_path):
            if printed != current:
                break
            common += 1
        for depth, description in enumerate(scope_path[common:], start=common):
            self.console.print("  " * depth + escape(description))
        self._printed_path = list(scope_path)

        indent = "  " * len(scope_path)
        style = _STYLES.get(result.status, "white")
        line = escape(result.description)
        if result.status == ExampleStatus.FAILED:
            line += f" (FAILED - {len(self._problems)})"
        elif result.status == ExampleStatus.ERRORED:
            line += f" (ERROR - {len(self._problems)})"
        elif result.status in {ExampleStatus.SKIPPED, ExampleStatus.XFAILED}:
            line += f" ({result.status.value.upper()}: {escape(result.message or '')})"
        self.console.print(f"{indent}[{style}]{line}[/{style}]")

    def on_run_complete(self, spec_run: SpecRun) -> None:
        if self._problems:
            self.console.print()
            self.console.print("[bold]Failures:[/bold]")
            for number, result in enumerate(self._problems, start=1):
                self.console.print()
                self.console.print(f"  {number}) {escape(result.full_description)}")
                for line in (result.message or "").splitlines():
                    self.console.print(f"     [red]{escape(line)}[/red]")
                if self.verbosity > 0 and result.error is not None:
                    formatted = "".join(traceback.format_exception(result.error))
                    self.console.print(escape(formatted), style="dim")

        self.console.print()
        parts = [
            f"{spec_run.total} example{'s' if spec_run.total != 1 else ''}",
            f"{spec_run.failed} failure{'s' if spec_run.failed != 1 else ''}",
        ]
        if spec_run.errors:
            parts.append(f"{spec_run.errors} error{'s' if spec_run.errors != 1 else ''}")
        if spec_run.skipped:
            parts.append(f"{spec_run.skipped} skipped")
        if spec_run.xfailed:
            parts.append(f"{spec_run.xfailed} pending")
        style = "green" if spec_run.ok else "red"
        self.console.print(f"[{style}]{', '.join(parts)}[/{style}]")
        self.console.print(f"Finished in {spec_run.duration_ms / 1000:.3f} seconds")

    def on_run_stopped_early(self, failure_count: int) -> None:
        self.console.print(
            f"[yellow]Stopping after {failure_count} failure(s) (maxfail reached)[/yellow]"
        )
