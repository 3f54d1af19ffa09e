"""Shared fixtures for unit tests."""

import pytest

from scopespec.testing import SpecTree, reset_default_tree


class RecordingReporter:
    """Reporter that records every hook call for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def on_no_examples_found(self) -> None:
        self.calls.append(("no_examples", None))

    def on_collection_complete(self, examples) -> None:
        self.calls.append(("collected", len(examples)))

    def on_example_complete(self, result) -> None:
        self.calls.append(("example", result.status.value))

    def on_run_complete(self, spec_run) -> None:
        self.calls.append(("run", spec_run.total))

    def on_run_stopped_early(self, failure_count: int) -> None:
        self.calls.append(("stopped", failure_count))


@pytest.fixture
def tree() -> SpecTree:
    """An empty tree for explicit register_* calls."""
    return SpecTree()


@pytest.fixture
def default_tree() -> SpecTree:
    """A fresh default tree for DSL declarations outside a declaration context."""
    return reset_default_tree()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()
