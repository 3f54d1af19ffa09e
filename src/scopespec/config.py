"""Project configuration loaded from ``[tool.scopespec]`` in ``pyproject.toml``.

Example::

    [tool.scopespec]
    spec_paths = ["spec"]
    exclude_tags = ["slow"]
    maxfail = 5
    addopts = ["-v"]
    reporters = ["ConsoleReporter", "JsonReporter"]

    [tool.scopespec.reporter_options.JsonReporter]
    output_path = ".scopespec/results.json"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"
TOOL_SECTION = "scopespec"


class ConfigError(ValueError):
    """Raised when ``[tool.scopespec]`` holds a value of the wrong shape."""


@dataclass(frozen=True)
class SpecConfig:
    spec_paths: list[str] = field(default_factory=lambda: ["."])
    include_tags: list[str] = field(default_factory=list)
    exclude_tags: list[str] = field(default_factory=list)
    keyword: str | None = None
    maxfail: int | None = None
    verbosity: int = 0
    addopts: list[str] = field(default_factory=list)
    reporters: list[str] = field(default_factory=list)
    reporter_options: dict[str, dict[str, Any]] = field(default_factory=dict)
    source: Path | None = None


DEFAULT_CONFIG = SpecConfig()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) to the nearest ``pyproject.toml``."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    return None


def _str_list(data: dict[str, Any], key: str) -> list[str] | None:
    if key not in data:
        return None
    value = data[key]
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"[tool.{TOOL_SECTION}] {key} must be a string or a list of strings"
        raise ConfigError(msg)
    return list(value)


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"[tool.{TOOL_SECTION}] {key} must be an integer"
        raise ConfigError(msg)
    return value


def parse_config(data: dict[str, Any], source: Path | None = None) -> SpecConfig:
    """Build a :class:`SpecConfig` from the ``[tool.scopespec]`` table."""
    unknown = set(data) - {
        "spec_paths",
        "include_tags",
        "exclude_tags",
        "keyword",
        "maxfail",
        "verbosity",
        "addopts",
        "reporters",
        "reporter_options",
    }
    if unknown:
        logger.warning("Ignoring unknown [tool.%s] keys: %s", TOOL_SECTION, ", ".join(sorted(unknown)))

    config = DEFAULT_CONFIG
    updates: dict[str, Any] = {"source": source}
    for key in ("spec_paths", "include_tags", "exclude_tags", "addopts", "reporters"):
        values = _str_list(data, key)
        if values is not None:
            updates[key] = values

    keyword = data.get("keyword")
    if keyword is not None and not isinstance(keyword, str):
        msg = f"[tool.{TOOL_SECTION}] keyword must be a string"
        raise ConfigError(msg)
    updates["keyword"] = keyword

    maxfail = _optional_int(data, "maxfail")
    updates["maxfail"] = maxfail if maxfail and maxfail > 0 else None
    verbosity = _optional_int(data, "verbosity")
    if verbosity is not None:
        updates["verbosity"] = verbosity

    options = data.get("reporter_options", {})
    if not isinstance(options, dict) or not all(isinstance(v, dict) for v in options.values()):
        msg = f"[tool.{TOOL_SECTION}] reporter_options must map reporter names to tables"
        raise ConfigError(msg)
    updates["reporter_options"] = {name: dict(opts) for name, opts in options.items()}

    return replace(config, **updates)


def load_config(start: Path | None = None) -> SpecConfig:
    """Load configuration from the nearest ``pyproject.toml``.

    Returns :data:`DEFAULT_CONFIG` when no file or no ``[tool.scopespec]``
    table is found.
    """
    path = find_pyproject(start)
    if path is None:
        logger.debug("No %s found, using defaults", PYPROJECT)
        return DEFAULT_CONFIG

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get(TOOL_SECTION)
    if section is None:
        return DEFAULT_CONFIG
    logger.debug("Loaded [tool.%s] from %s", TOOL_SECTION, path)
    return parse_config(section, source=path)


__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "SpecConfig",
    "find_pyproject",
    "load_config",
    "parse_config",
]
