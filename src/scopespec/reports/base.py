"""Base reporter protocol for spec run output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from scopespec.testing.runner import ExecutionResult, SpecRun
    from scopespec.testing.tree import Example


class Reporter(Protocol):
    """Protocol defining the interface for run reporters.

    The runner is sequential, so hooks are plain methods called in order:
    collection, one call per finished example, then the run summary.
    """

    def on_no_examples_found(self) -> None:
        """Called when the run has nothing to execute."""
        ...

    def on_collection_complete(self, examples: list[Example]) -> None:
        """Called once the examples to run are known."""
        ...

    def on_example_complete(self, result: ExecutionResult) -> None:
        """Called after each example completes."""
        ...

    def on_run_complete(self, spec_run: SpecRun) -> None:
        """Called after all examples complete."""
        ...

    def on_run_stopped_early(self, failure_count: int) -> None:
        """Called when the run stops early due to the maxfail limit."""
        ...
