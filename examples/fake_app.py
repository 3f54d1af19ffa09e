"""A tiny in-memory widget app for the example specs to exercise."""

from __future__ import annotations

import html
import itertools
import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Widget:
    name: str | None
    feature: str | None = None
    id: int | None = None

    @property
    def persisted(self) -> bool:
        return self.id is not None


@dataclass
class Response:
    status: int
    content_type: str
    body: str = ""
    assigns: dict[str, Any] = field(default_factory=dict)


class WidgetStore:
    def __init__(self) -> None:
        self._rows: dict[int, Widget] = {}
        self._ids = itertools.count(1)

    def create(self, **attrs: Any) -> Widget:
        widget = Widget(**attrs)
        if not widget.name:
            return widget
        widget.id = next(self._ids)
        self._rows[widget.id] = widget
        return widget

    def all(self) -> list[Widget]:
        return list(self._rows.values())

    def search(self, query: str) -> list[Widget]:
        return [w for w in self._rows.values() if w.name and query in w.name]


def _render(fmt: str, template: str, payload: Any) -> tuple[str, str]:
    if fmt == "json":
        return "application/json", json.dumps(payload)
    return "text/html; charset=utf-8", f"<!-- {template} -->"


def index(store: WidgetStore, fmt: str = "html") -> Response:
    widgets = store.all()
    content_type, body = _render(fmt, "index", [w.__dict__ for w in widgets])
    return Response(200, content_type, body, {"widgets": widgets, "template": "index"})


def create(store: WidgetStore, params: dict[str, Any], fmt: str = "html") -> Response:
    widget = store.create(**params)
    if widget.persisted:
        content_type, body = _render(fmt, "show", widget.__dict__)
        return Response(201, content_type, body, {"widget": widget, "template": "show"})
    content_type, body = _render(fmt, "new", {"errors": {"name": ["can't be blank"]}})
    return Response(422, content_type, body, {"widget": widget, "template": "new"})


def _search_page(results: list[Widget]) -> str:
    items = "".join(
        f'<li class="result" id="result_{w.id}">{html.escape(w.name or "")}</li>' for w in results
    )
    return f"<html><body><ul class=\"results\">{items}</ul></body></html>"


def search(store: WidgetStore, query: str, fmt: str = "html") -> Response:
    results = store.search(query)
    content_type, body = _render(fmt, "search", {"results": [w.__dict__ for w in results]})
    if fmt == "html":
        body = _search_page(results)
    return Response(200, content_type, body, {"results": results})
