"""Matchers for response-shaped objects.

The objects under test are opaque; these matchers only duck-type the common
shapes. The status is read from ``status_code`` or ``status`` (attribute or
mapping key); the content type from ``content_type`` or from a
``Content-Type`` entry in ``headers`` (case-insensitive).
"""

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from scopespec.expectations.base import Matcher

_MISSING = object()

STATUS_CLASSES: dict[str, range] = {
    "informational": range(100, 200),
    "success": range(200, 300),
    "successful": range(200, 300),
    "redirect": range(300, 400),
    "missing": range(404, 405),
    "client_error": range(400, 500),
    "error": range(500, 600),
    "server_error": range(500, 600),
}


def _get(obj: Any, *names: str) -> Any:
    for name in names:
        if isinstance(obj, Mapping) and name in obj:
            return obj[name]
        value = getattr(obj, name, _MISSING)
        if value is not _MISSING:
            return value
    return _MISSING


def response_status(response: Any) -> int:
    if isinstance(response, int):
        return response
    status = _get(response, "status_code", "status")
    if status is _MISSING:
        msg = f"{type(response).__name__} has no status_code or status"
        raise TypeError(msg)
    if isinstance(status, str):
        # "200 OK" style status lines
        return int(status.split()[0])
    return int(status)


def response_content_type(response: Any) -> str | None:
    if isinstance(response, str):
        return response
    value = _get(response, "content_type")
    if value is not _MISSING and value is not None:
        return str(value)
    headers = _get(response, "headers")
    if headers is _MISSING or headers is None:
        return None
    for key, header_value in dict(headers).items():
        if str(key).lower() == "content-type":
            return str(header_value)
    return None


def media_type(content_type: str) -> str:
    """``text/html; charset=utf-8`` -> ``text/html``."""
    return content_type.split(";", 1)[0].strip().lower()


class HaveHttpStatus(Matcher):
    """Exact code, named status (``ok``, ``unprocessable_entity``) or class."""

    name = "have_http_status"

    def __init__(self, expected: int | str | HTTPStatus) -> None:
        self.expected = expected
        self._actual_status: int | None = None
        if isinstance(expected, str):
            key = expected.lower()
            if key in STATUS_CLASSES:
                self._accepted = STATUS_CLASSES[key]
            else:
                try:
                    code = HTTPStatus[key.upper()].value
                except KeyError:
                    msg = f"Unknown HTTP status name: {expected!r}"
                    raise ValueError(msg) from None
                self._accepted = range(code, code + 1)
        else:
            code = int(expected)
            self._accepted = range(code, code + 1)

    def matches(self, actual: Any) -> bool:
        self._actual_status = response_status(actual)
        return self._actual_status in self._accepted

    def describe(self) -> str:
        expected = self.expected.value if isinstance(self.expected, HTTPStatus) else self.expected
        return f"have http status {expected!r}"

    def failure_message(self, actual: Any) -> str:
        return f"expected the response to {self.describe()}, got {self._actual_status}"

    def negated_failure_message(self, actual: Any) -> str:
        return f"expected the response not to {self.describe()}, got {self._actual_status}"


class HaveContentType(Matcher):
    """Compares media types only; parameters such as ``charset`` are ignored."""

    name = "have_content_type"

    def __init__(self, expected: str) -> None:
        self.expected = media_type(expected)
        self._actual_type: str | None = None

    def matches(self, actual: Any) -> bool:
        content_type = response_content_type(actual)
        self._actual_type = media_type(content_type) if content_type else None
        return self._actual_type == self.expected

    def describe(self) -> str:
        return f"have content type {self.expected!r}"

    def failure_message(self, actual: Any) -> str:
        return f"expected the response to {self.describe()}, got {self._actual_type!r}"


def have_http_status(expected: int | str | HTTPStatus) -> HaveHttpStatus:
    return HaveHttpStatus(expected)


def have_content_type(expected: str) -> HaveContentType:
    return HaveContentType(expected)
