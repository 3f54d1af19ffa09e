"""General purpose matchers."""

from __future__ import annotations

import re
from collections.abc import Callable, Sized
from typing import Any

from scopespec.expectations.base import Matcher, _truncate


class Eq(Matcher):
    name = "eq"

    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def matches(self, actual: Any) -> bool:
        return actual == self.expected

    def describe(self) -> str:
        return f"eq {_truncate(self.expected)}"

    def failure_message(self, actual: Any) -> str:
        return f"expected: {self.expected!r}\n     got: {actual!r}"


class Equal(Matcher):
    """Identity, not equality."""

    name = "equal"

    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def matches(self, actual: Any) -> bool:
        return actual is self.expected

    def describe(self) -> str:
        return f"equal {_truncate(self.expected)}"


class BeTruthy(Matcher):
    def matches(self, actual: Any) -> bool:
        return bool(actual)

    def describe(self) -> str:
        return "be truthy"


class BeFalsy(Matcher):
    def matches(self, actual: Any) -> bool:
        return not actual

    def describe(self) -> str:
        return "be falsy"


class BeNone(Matcher):
    def matches(self, actual: Any) -> bool:
        return actual is None

    def describe(self) -> str:
        return "be None"


class BeEmpty(Matcher):
    def matches(self, actual: Any) -> bool:
        return len(actual) == 0

    def describe(self) -> str:
        return "be empty"


class Include(Matcher):
    def __init__(self, *items: Any) -> None:
        if not items:
            msg = "include() needs at least one item"
            raise ValueError(msg)
        self.items = items

    def matches(self, actual: Any) -> bool:
        return all(item in actual for item in self.items)

    def describe(self) -> str:
        return "include " + ", ".join(_truncate(item) for item in self.items)


class StartWith(Matcher):
    def __init__(self, prefix: Any) -> None:
        self.prefix = prefix

    def matches(self, actual: Any) -> bool:
        return actual[: len(self.prefix)] == self.prefix

    def describe(self) -> str:
        return f"start with {_truncate(self.prefix)}"


class EndWith(Matcher):
    def __init__(self, suffix: Any) -> None:
        self.suffix = suffix

    def matches(self, actual: Any) -> bool:
        if len(self.suffix) == 0:
            return True
        return actual[-len(self.suffix) :] == self.suffix

    def describe(self) -> str:
        return f"end with {_truncate(self.suffix)}"


class Match(Matcher):
    """``re.search`` against a string."""

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def matches(self, actual: Any) -> bool:
        return isinstance(actual, str) and self.pattern.search(actual) is not None

    def describe(self) -> str:
        return f"match /{self.pattern.pattern}/"


class HaveLength(Matcher):
    def __init__(self, expected: int) -> None:
        self.expected = expected

    def matches(self, actual: Any) -> bool:
        return isinstance(actual, Sized) and len(actual) == self.expected

    def describe(self) -> str:
        return f"have length {self.expected}"

    def failure_message(self, actual: Any) -> str:
        got = len(actual) if isinstance(actual, Sized) else "no length"
        return f"expected {_truncate(actual)} to have length {self.expected}, got {got}"


class BeA(Matcher):
    def __init__(self, expected_type: type | tuple[type, ...]) -> None:
        self.expected_type = expected_type

    def matches(self, actual: Any) -> bool:
        return isinstance(actual, self.expected_type)

    def describe(self) -> str:
        if isinstance(self.expected_type, tuple):
            names = " or ".join(t.__name__ for t in self.expected_type)
        else:
            names = self.expected_type.__name__
        return f"be a {names}"


class BePredicate(Matcher):
    """``be_("persisted")`` checks ``actual.persisted`` or ``actual.is_persisted``.

    Callables found under either name are called without arguments.
    """

    def __init__(self, predicate: str) -> None:
        self.predicate = predicate

    def _lookup(self, actual: Any) -> Any:
        for attr in (self.predicate, f"is_{self.predicate}"):
            if hasattr(actual, attr):
                value = getattr(actual, attr)
                return value() if callable(value) else value
        msg = f"{type(actual).__name__} has no predicate '{self.predicate}'"
        raise AttributeError(msg)

    def matches(self, actual: Any) -> bool:
        return bool(self._lookup(actual))

    def describe(self) -> str:
        return f"be {self.predicate}"


class Satisfy(Matcher):
    def __init__(self, predicate: Callable[[Any], Any], description: str | None = None) -> None:
        self.predicate = predicate
        self.description = description or getattr(predicate, "__name__", "predicate")

    def matches(self, actual: Any) -> bool:
        return bool(self.predicate(actual))

    def describe(self) -> str:
        return f"satisfy {self.description}"


class RaiseError(Matcher):
    """Calls the actual value and checks what it raises."""

    def __init__(
        self,
        expected: type[BaseException] = Exception,
        match: str | None = None,
    ) -> None:
        self.expected = expected
        self.match = re.compile(match) if match else None
        self.raised: BaseException | None = None

    def matches(self, actual: Any) -> bool:
        if not callable(actual):
            msg = "raise_error expects a callable, e.g. expect(lambda: fn()).to(raise_error(...))"
            raise TypeError(msg)
        self.raised = None
        try:
            actual()
        except self.expected as exc:
            self.raised = exc
            if self.match is not None:
                return self.match.search(str(exc)) is not None
            return True
        except Exception as exc:
            self.raised = exc
            return False
        return False

    def describe(self) -> str:
        text = f"raise {self.expected.__name__}"
        if self.match is not None:
            text += f" matching /{self.match.pattern}/"
        return text

    def failure_message(self, actual: Any) -> str:
        if self.raised is None:
            return f"expected {self.describe()} but nothing was raised"
        return f"expected {self.describe()}, got {type(self.raised).__name__}: {self.raised}"

    def negated_failure_message(self, actual: Any) -> str:
        return f"expected not to {self.describe()}, got {type(self.raised).__name__}: {self.raised}"


def eq(expected: Any) -> Eq:
    return Eq(expected)


def equal(expected: Any) -> Equal:
    return Equal(expected)


def be_truthy() -> BeTruthy:
    return BeTruthy()


def be_falsy() -> BeFalsy:
    return BeFalsy()


def be_none() -> BeNone:
    return BeNone()


be_nil = be_none


def be_empty() -> BeEmpty:
    return BeEmpty()


def include(*items: Any) -> Include:
    return Include(*items)


def start_with(prefix: Any) -> StartWith:
    return StartWith(prefix)


def end_with(suffix: Any) -> EndWith:
    return EndWith(suffix)


def match(pattern: str | re.Pattern[str]) -> Match:
    return Match(pattern)


def have_length(expected: int) -> HaveLength:
    return HaveLength(expected)


def be_a(expected_type: type | tuple[type, ...]) -> BeA:
    return BeA(expected_type)


def be_(predicate: str) -> BePredicate:
    return BePredicate(predicate)


def satisfy(predicate: Callable[[Any], Any], description: str | None = None) -> Satisfy:
    return Satisfy(predicate, description)


def raise_error(expected: type[BaseException] = Exception, match: str | None = None) -> RaiseError:
    return RaiseError(expected, match)
