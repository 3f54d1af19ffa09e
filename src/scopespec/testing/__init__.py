"""Nested-scope spec declaration and execution.

Provides the scope tree, per-example binding environments, the DSL and the
sequential runner.
"""

from .discovery import collect
from .dsl import (
    after,
    before,
    context,
    describe,
    get_default_tree,
    it,
    let,
    let_eager,
    reset_default_tree,
    subject,
    xit,
)
from .environment import Environment, ExampleBindings
from .runner import ExampleState, ExampleStatus, ExecutionResult, Runner, SpecRun
from .tags import tag
from .tree import Binding, Example, ScopeNode, SpecTree


__all__ = [
    # Tree
    "SpecTree",
    "ScopeNode",
    "Binding",
    "Example",
    "Environment",
    "ExampleBindings",
    # DSL
    "describe",
    "context",
    "it",
    "xit",
    "let",
    "let_eager",
    "subject",
    "before",
    "after",
    "tag",
    "get_default_tree",
    "reset_default_tree",
    # Execution
    "collect",
    "Runner",
    "SpecRun",
    "ExecutionResult",
    "ExampleState",
    "ExampleStatus",
]
