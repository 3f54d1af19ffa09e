"""Tagging utilities for examples and scopes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TagData:
    """Tag metadata attached to example bodies or scopes."""

    tags: set[str] = field(default_factory=set)
    skip_reason: str | None = None
    xfail_reason: str | None = None
    xfail_strict: bool = True

    @classmethod
    def from_names(cls, names: Iterable[str]) -> TagData:
        data = cls()
        for name in names:
            if name:
                data.tags.add(str(name))
        return data


def _ensure_tag_data(target: Any) -> TagData:
    data: TagData | None = getattr(target, "__scopespec_tags__", None)
    if data is None:
        data = TagData()
        target.__scopespec_tags__ = data
    return data


def _copy_tag_data(data: TagData | None) -> TagData:
    if data is None:
        return TagData()
    return TagData(
        tags=set(data.tags),
        skip_reason=data.skip_reason,
        xfail_reason=data.xfail_reason,
        xfail_strict=data.xfail_strict,
    )


def get_tag_data(target: Any) -> TagData:
    """Return a copy of tag metadata for the target."""
    return _copy_tag_data(getattr(target, "__scopespec_tags__", None))


def merge_tag_data(*datas: TagData | None) -> TagData:
    """Merge tag metadata, later entries overriding earlier ones."""
    merged = TagData()
    for data in datas:
        if not data:
            continue
        merged.tags.update(data.tags)
        if data.skip_reason is not None:
            merged.skip_reason = data.skip_reason
        if data.xfail_reason is not None:
            merged.xfail_reason = data.xfail_reason
            merged.xfail_strict = data.xfail_strict
    return merged


class TagDecorator:
    """Primary entry-point for tagging example bodies.

    Tags are free-form labels, read back by setup callbacks through
    ``example.metadata`` and used by the CLI for filtering::

        @it("destroys half the bars")
        @tag("skip_before")
        def _(ex): ...
    """

    def __call__(self, *names: str) -> Callable[[Any], Any]:
        def decorator(target: Any) -> Any:
            data = _ensure_tag_data(target)
            for name in names:
                if not name:
                    continue
                data.tags.add(str(name))
            return target

        return decorator

    def skip(self, *, reason: str | None = None) -> Callable[[Any], Any]:
        def decorator(target: Any) -> Any:
            data = _ensure_tag_data(target)
            data.skip_reason = reason or "skipped via tag"
            data.tags.add("skip")
            return target

        return decorator

    def pending(
        self,
        *,
        reason: str | None = None,
        strict: bool = True,
    ) -> Callable[[Any], Any]:
        """Mark an example as expected to fail.

        Args:
            reason: Shown in the report.
            strict: When True, an example that passes anyway is reported failed.
        """

        def decorator(target: Any) -> Any:
            data = _ensure_tag_data(target)
            data.xfail_reason = reason or "pending"
            data.xfail_strict = strict
            data.tags.add("pending")
            return target

        return decorator

    xfail = pending


tag = TagDecorator()

__all__ = ["TagData", "get_tag_data", "merge_tag_data", "tag"]
