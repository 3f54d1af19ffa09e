"""scopespec - nested-scope expectation framework."""

from .expectations import (
    be_,
    be_a,
    be_empty,
    be_falsy,
    be_nil,
    be_none,
    be_truthy,
    end_with,
    eq,
    equal,
    expect,
    have_content_type,
    have_http_status,
    have_length,
    have_selector,
    include,
    is_expected,
    match,
    raise_error,
    satisfy,
    start_with,
)
from .testing import (
    Runner,
    SpecTree,
    after,
    before,
    collect,
    context,
    describe,
    it,
    let,
    let_eager,
    subject,
    tag,
    xit,
)
from .version import __version__


__all__ = [
    # Declaration
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
    # Execution
    "SpecTree",
    "Runner",
    "collect",
    # Expectations
    "expect",
    "is_expected",
    "eq",
    "equal",
    "be_",
    "be_a",
    "be_empty",
    "be_falsy",
    "be_nil",
    "be_none",
    "be_truthy",
    "end_with",
    "have_length",
    "include",
    "match",
    "raise_error",
    "satisfy",
    "start_with",
    "have_content_type",
    "have_http_status",
    "have_selector",
]
