from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from scopespec.testing.environment import ExampleBindings
    from scopespec.testing.tree import Example, ScopeNode, SpecTree


DECLARATION_CONTEXT: ContextVar[DeclarationContext | None] = ContextVar(
    "declaration_context", default=None
)
EXAMPLE_CONTEXT: ContextVar[ExampleContext | None] = ContextVar("example_context", default=None)


@dataclass(frozen=True, slots=True)
class DeclarationContext:
    """Where DSL calls register while a spec file is being loaded.

    Attributes
    ----------
    tree
        Tree receiving registrations.
    scope
        Innermost open scope, or ``None`` at the top level of the file.
    """

    tree: SpecTree
    scope: ScopeNode | None = None


@dataclass(slots=True)
class ExampleContext:
    """Execution context for the example currently running.

    Attributes
    ----------
    example
        The example being executed.
    bindings
        Its fresh per-example binding cache.
    matcher_descriptions
        Descriptions of every matcher evaluated so far, used to name
        one-liner examples that were declared without a description.
    """

    example: Example
    bindings: ExampleBindings
    matcher_descriptions: list[str] = field(default_factory=list)


@contextmanager
def declaration_scope(ctx: DeclarationContext) -> Iterator[None]:
    token = DECLARATION_CONTEXT.set(ctx)
    try:
        yield
    finally:
        DECLARATION_CONTEXT.reset(token)


@contextmanager
def example_context_scope(ctx: ExampleContext) -> Iterator[None]:
    token = EXAMPLE_CONTEXT.set(ctx)
    try:
        yield
    finally:
        EXAMPLE_CONTEXT.reset(token)
