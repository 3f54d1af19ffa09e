"""Reporting module for spec run output."""

from scopespec.reports.base import Reporter
from scopespec.reports.console import ConsoleReporter
from scopespec.reports.json_report import JsonReporter
from scopespec.reports.registry import (
    clear_reporter_registry,
    get_reporter_registry,
    register_builtin,
    reporter,
    resolve_reporter,
    resolve_reporters,
)


register_builtin(ConsoleReporter)
register_builtin(JsonReporter)

__all__ = [
    "ConsoleReporter",
    "JsonReporter",
    "Reporter",
    "clear_reporter_registry",
    "get_reporter_registry",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
