"""JSON reporter: writes the run's results as one JSON document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from scopespec.testing.runner import ExecutionResult, SpecRun
    from scopespec.testing.tree import Example


class JsonReporter:
    """Dumps :class:`~scopespec.testing.runner.SpecRun` with pydantic.

    Args:
        output_path: File to write. When omitted the document goes to the console.
        indent: JSON indentation.
    """

    def __init__(
        self,
        output_path: str | Path | None = None,
        indent: int | None = 2,
        console: Console | None = None,
    ) -> None:
        self.output_path = Path(output_path) if output_path else None
        self.indent = indent
        self.console = console or Console()

    def on_no_examples_found(self) -> None:
        pass

    def on_collection_complete(self, examples: list[Example]) -> None:
        pass

    def on_example_complete(self, result: ExecutionResult) -> None:
        pass

    def on_run_complete(self, spec_run: SpecRun) -> None:
        document = spec_run.model_dump_json(indent=self.indent)
        if self.output_path is None:
            self.console.print_json(document)
            return
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(document + "\n", encoding="utf-8")

    def on_run_stopped_early(self, failure_count: int) -> None:
        pass
