"""Error types raised while declaring and running specs."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class ScopeSpecError(Exception):
    """Base class for every error raised by scopespec itself."""


class StructureError(ScopeSpecError):
    """Raised when the scope tree is declared incorrectly (developer error)."""


class DuplicateBindingError(StructureError):
    """Raised when a name is bound twice in the same scope."""

    def __init__(self, name: str, scope_path: Sequence[str]) -> None:
        self.name = name
        self.scope_path = tuple(scope_path)
        where = " > ".join(self.scope_path) or "<root>"
        super().__init__(f"Binding '{name}' is already defined in scope '{where}'")


class SpecLoadError(StructureError):
    """Raised when a spec file cannot be imported."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not load spec file {path}: {type(cause).__name__}: {cause}")


class UnresolvedBindingError(ScopeSpecError, AttributeError):
    """Raised when an example references a name no scope in its chain binds.

    Also an ``AttributeError`` so that ``hasattr(ex, name)`` and
    ``getattr(ex, name, default)`` work on example bindings.
    """

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(sorted(available))
        message = f"No binding named '{name}' in scope chain"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class CircularBindingError(ScopeSpecError):
    """Raised when a binding thunk (transitively) references itself."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(f"Circular binding reference: {' -> '.join(self.cycle)}")


class AssertionFailure(AssertionError):
    """An expectation did not hold."""

    def __init__(self, message: str, *, matcher_description: str | None = None) -> None:
        self.matcher_description = matcher_description
        super().__init__(message)


class UnhandledException(ScopeSpecError):
    """Wraps a non-assertion exception raised by a hook or an example body.

    The original exception is available as ``original`` and ``__cause__``.
    """

    def __init__(self, original: BaseException, phase: str) -> None:
        self.original = original
        self.phase = phase
        name = type(original).__name__
        detail = str(original)
        message = f"{name} raised in {phase}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.__cause__ = original


class StateTransitionError(ScopeSpecError):
    """Raised on an illegal example state transition."""


__all__ = [
    "AssertionFailure",
    "CircularBindingError",
    "DuplicateBindingError",
    "ScopeSpecError",
    "SpecLoadError",
    "StateTransitionError",
    "StructureError",
    "UnhandledException",
    "UnresolvedBindingError",
]
