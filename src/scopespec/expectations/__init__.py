"""Expectations and matchers used inside example bodies."""

from .base import Expectation, MatchResult, Matcher, expect, is_expected
from .basic import (
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
    have_length,
    include,
    match,
    raise_error,
    satisfy,
    start_with,
)
from .html import have_selector
from .http import have_content_type, have_http_status

__all__ = [
    # Entry points
    "expect",
    "is_expected",
    "Expectation",
    "Matcher",
    "MatchResult",
    # General matchers
    "be_",
    "be_a",
    "be_empty",
    "be_falsy",
    "be_nil",
    "be_none",
    "be_truthy",
    "end_with",
    "eq",
    "equal",
    "have_length",
    "include",
    "match",
    "raise_error",
    "satisfy",
    "start_with",
    # Response matchers
    "have_content_type",
    "have_http_status",
    "have_selector",
]
