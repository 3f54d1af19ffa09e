"""Base matcher classes, match results and the ``expect`` entry point."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from scopespec.context import EXAMPLE_CONTEXT
from scopespec.errors import AssertionFailure, StructureError

logger = logging.getLogger(__name__)


def _truncate(value: Any, max_len: int = 60) -> str:
    """Truncate a repr string if too long."""
    s = repr(value)
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."


class MatchResult(BaseModel):
    """Result of evaluating a matcher against an actual value.

    Attributes:
    ----------
    matcher_name : str
        Name of the matcher that was evaluated
    description : str
        Human readable form, e.g. ``eq 200``
    passed : bool
        Whether the actual value matched
    failure_message : str
        Message used when a positive expectation does not hold
    negated_failure_message : str
        Message used when a negative expectation does not hold
    """

    matcher_name: str
    description: str
    passed: bool
    failure_message: str
    negated_failure_message: str

    def __bool__(self) -> bool:
        return self.passed


class Matcher(ABC):
    """Base class for matchers.

    The ``name`` attribute is automatically set to the class name, but can be
    overridden by defining it explicitly as a class variable.

    Subclasses implement :meth:`matches` and :meth:`describe`; the default
    failure messages are built from those two.
    """

    name: str

    def __init_subclass__(cls, **kwargs):
        """Auto-generate name from class name if not provided."""
        super().__init_subclass__(**kwargs)
        if "name" not in cls.__dict__:
            cls.name = cls.__name__

    @abstractmethod
    def matches(self, actual: Any) -> bool:
        """Return whether ``actual`` satisfies the matcher."""

    @abstractmethod
    def describe(self) -> str:
        """Short description without the leading ``is expected to``."""

    def failure_message(self, actual: Any) -> str:
        return f"expected {_truncate(actual)} to {self.describe()}"

    def negated_failure_message(self, actual: Any) -> str:
        return f"expected {_truncate(actual)} not to {self.describe()}"

    def evaluate(self, actual: Any) -> MatchResult:
        passed = bool(self.matches(actual))
        return MatchResult(
            matcher_name=self.name,
            description=self.describe(),
            passed=passed,
            failure_message=self.failure_message(actual),
            negated_failure_message=self.negated_failure_message(actual),
        )

    def __repr__(self) -> str:
        return f"<{self.name}: {self.describe()}>"


class Expectation:
    """Wraps an actual value; ``to``/``not_to`` raise on mismatch."""

    def __init__(self, actual: Any) -> None:
        self.actual = actual

    def to(self, matcher: Matcher, message: str | None = None) -> MatchResult:
        return self._check(matcher, negate=False, message=message)

    def not_to(self, matcher: Matcher, message: str | None = None) -> MatchResult:
        return self._check(matcher, negate=True, message=message)

    to_not = not_to

    def _check(self, matcher: Matcher, *, negate: bool, message: str | None) -> MatchResult:
        if not isinstance(matcher, Matcher):
            msg = f"expect(...).to needs a Matcher, got {type(matcher).__name__}"
            raise TypeError(msg)

        result = matcher.evaluate(self.actual)
        description = f"{'not ' if negate else ''}{result.description}"

        ctx = EXAMPLE_CONTEXT.get()
        if ctx is not None:
            ctx.matcher_descriptions.append(description)

        ok = result.passed != negate
        if not ok:
            failure = result.negated_failure_message if negate else result.failure_message
            logger.debug("Expectation failed: %s", failure)
            raise AssertionFailure(message or failure, matcher_description=description)
        return result


def expect(actual: Any) -> Expectation:
    """Start an expectation on ``actual``."""
    return Expectation(actual)


def is_expected() -> Expectation:
    """Start an expectation on the running example's ``subject``."""
    ctx = EXAMPLE_CONTEXT.get()
    if ctx is None:
        msg = "is_expected() can only be used while an example is running"
        raise StructureError(msg)
    return Expectation(ctx.bindings.fetch("subject"))


__all__ = ["Expectation", "MatchResult", "Matcher", "expect", "is_expected"]
