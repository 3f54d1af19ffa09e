from .context import (
    DECLARATION_CONTEXT,
    EXAMPLE_CONTEXT,
    DeclarationContext,
    ExampleContext,
    declaration_scope,
    example_context_scope,
)

__all__ = [
    "DeclarationContext",
    "ExampleContext",
    "DECLARATION_CONTEXT",
    "EXAMPLE_CONTEXT",
    "declaration_scope",
    "example_context_scope",
]
