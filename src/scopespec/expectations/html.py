"""Matchers over HTML bodies.

Selectors are single compound selectors: an optional tag name followed by
any number of ``#id`` and ``.class`` parts (``div.result``, ``#result_3``,
``.result.active``). Combinators and attribute selectors are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any

from scopespec.expectations.base import Matcher

_PART = re.compile(r"([#.]?)([A-Za-z0-9_-]+)")


@dataclass(frozen=True)
class Selector:
    tag: str | None = None
    id: str | None = None
    classes: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, text: str) -> Selector:
        text = text.strip()
        parts = list(_PART.finditer(text))
        if not parts or "".join(p.group(0) for p in parts) != text:
            msg = f"Unsupported selector: {text!r}"
            raise ValueError(msg)

        tag: str | None = None
        element_id: str | None = None
        classes: set[str] = set()
        for index, part in enumerate(parts):
            prefix, name = part.groups()
            if prefix == "#":
                element_id = name
            elif prefix == ".":
                classes.add(name)
            elif index == 0:
                tag = name.lower()
            else:
                msg = f"Unsupported selector: {text!r}"
                raise ValueError(msg)
        return cls(tag=tag, id=element_id, classes=frozenset(classes))

    def matches(self, tag: str, attrs: dict[str, str]) -> bool:
        if self.tag is not None and tag != self.tag:
            return False
        if self.id is not None and attrs.get("id") != self.id:
            return False
        return self.classes <= set(attrs.get("class", "").split())


class _SelectorCounter(HTMLParser):
    def __init__(self, selector: Selector) -> None:
        super().__init__(convert_charrefs=True)
        self.selector = selector
        self.count = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.selector.matches(tag, {k: v or "" for k, v in attrs}):
            self.count += 1


def count_selector(html: str, selector: str | Selector) -> int:
    """Number of elements in ``html`` matching ``selector``."""
    if isinstance(selector, str):
        selector = Selector.parse(selector)
    parser = _SelectorCounter(selector)
    parser.feed(html)
    parser.close()
    return parser.count


def response_body(response: Any) -> str:
    if isinstance(response, str):
        return response
    if isinstance(response, bytes):
        return response.decode()
    body = getattr(response, "body", None)
    if body is None:
        body = getattr(response, "text", None)
    if body is None:
        msg = f"{type(response).__name__} has no body or text"
        raise TypeError(msg)
    return body.decode() if isinstance(body, bytes) else str(body)


class HaveSelector(Matcher):
    """Element presence, or an exact element count when ``count`` is given."""

    name = "have_selector"

    def __init__(self, selector: str, count: int | None = None) -> None:
        self.selector_text = selector
        self.selector = Selector.parse(selector)
        self.count = count
        self.found: int | None = None

    def matches(self, actual: Any) -> bool:
        self.found = count_selector(response_body(actual), self.selector)
        if self.count is None:
            return self.found > 0
        return self.found == self.count

    def describe(self) -> str:
        text = f"have selector {self.selector_text!r}"
        if self.count is not None:
            text += f" {self.count} time{'s' if self.count != 1 else ''}"
        return text

    def failure_message(self, actual: Any) -> str:
        return f"expected body to {self.describe()}, found {self.found}"

    def negated_failure_message(self, actual: Any) -> str:
        return f"expected body not to {self.describe()}, found {self.found}"


def have_selector(selector: str, count: int | None = None) -> HaveSelector:
    return HaveSelector(selector, count=count)
