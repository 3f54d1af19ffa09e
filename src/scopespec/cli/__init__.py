"""CLI module for the scopespec runner."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
import tomllib
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from scopespec.config import ConfigError, SpecConfig, load_config
from scopespec.errors import StructureError
from scopespec.reports import ConsoleReporter, Reporter, resolve_reporters
from scopespec.testing import Example, Runner, collect


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the scopespec CLI."""
    console = Console()
    try:
        config = load_config()
    except (ConfigError, tomllib.TOMLDecodeError) as exc:
        console.print(f"[red]Invalid configuration: {escape(str(exc))}[/red]")
        raise SystemExit(2) from exc

    parser = _build_parser()
    raw = list(sys.argv[1:] if argv is None else argv)
    if config.addopts and raw[:1] == ["run"]:
        raw = ["run", *config.addopts, *raw[1:]]
    args = parser.parse_args(raw)

    if args.command == "run":
        _configure_logging(args.log_level)
        raise SystemExit(_run_specs(args, config, console))

    parser.print_help()
    raise SystemExit(0)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scopespec", description="Nested-scope spec runner")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run spec files")
    run_parser.add_argument("paths", nargs="*", help="Spec files or directories")
    run_parser.add_argument(
        "-k", "--keyword", help="Filter examples by keyword expression over their full description"
    )
    run_parser.add_argument(
        "-t", "--tag", dest="include_tags", action="append", help="Run examples with given tag"
    )
    run_parser.add_argument(
        "--skip-tag",
        dest="exclude_tags",
        action="append",
        help="Skip examples that match this tag",
    )
    run_parser.add_argument("--maxfail", type=int, help="Stop after this many failures")
    run_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first failed example (same as --maxfail 1)",
    )
    run_parser.add_argument(
        "-r",
        "--reporter",
        dest="reporters",
        action="append",
        help="Reporter name or import path (repeatable)",
    )
    run_parser.add_argument("-q", "--quiet", action="count", default=0, help="Reduce CLI output")
    run_parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase CLI output"
    )
    run_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for scopespec's own logging (default: WARNING)",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s %(name)s: %(message)s")


def _resolve_paths(args: argparse.Namespace, config: SpecConfig) -> list[Path]:
    if args.paths:
        return [Path(p) for p in args.paths]
    base = config.source.parent if config.source else Path.cwd()
    return [base / p for p in config.spec_paths]


def _resolve_tags(args: argparse.Namespace, config: SpecConfig) -> tuple[list[str], list[str]]:
    include = list(config.include_tags)
    exclude = list(config.exclude_tags)
    if args.include_tags:
        include.extend(args.include_tags)
    if args.exclude_tags:
        exclude.extend(args.exclude_tags)
    return include, exclude


def _resolve_keyword(args: argparse.Namespace, config: SpecConfig) -> str | None:
    return args.keyword or config.keyword


def _resolve_maxfail(args: argparse.Namespace, config: SpecConfig) -> int | None:
    if args.fail_fast:
        return 1
    if args.maxfail is not None:
        return args.maxfail if args.maxfail > 0 else None
    return config.maxfail


def _resolve_verbosity(args: argparse.Namespace, config: SpecConfig) -> int:
    return config.verbosity + args.verbose - args.quiet


def _resolve_reporters(
    args: argparse.Namespace,
    config: SpecConfig,
    verbosity: int,
    console: Console | None = None,
) -> list[Reporter]:
    """CLI reporters override config reporters; the console reporter is the default."""
    names = list(args.reporters or config.reporters or ["ConsoleReporter"])
    options = {name: dict(opts) for name, opts in config.reporter_options.items()}
    console_options = options.setdefault("ConsoleReporter", {})
    console_options.setdefault("verbosity", verbosity)
    if console is not None:
        console_options.setdefault("console", console)
    reporters = resolve_reporters(names, options)
    if not any(isinstance(r, ConsoleReporter) for r in reporters):
        reporters.insert(0, ConsoleReporter(console=console, verbosity=min(verbosity, -1)))
    return reporters


def _filter_examples(
    examples: list[Example],
    include_tags: Sequence[str],
    exclude_tags: Sequence[str],
    keyword: str | None,
) -> list[Example]:
    filtered = examples

    if include_tags:
        include = set(include_tags)
        filtered = [ex for ex in filtered if ex.tag_data.tags & include]

    if exclude_tags:
        exclude = set(exclude_tags)
        filtered = [ex for ex in filtered if not (ex.tag_data.tags & exclude)]

    if keyword:
        matches = _description_matcher(keyword)
        filtered = [ex for ex in filtered if matches(ex)]

    return filtered


def _description_matcher(keyword: str) -> Callable[[Example], bool]:
    """Case-insensitive ``-k`` match over an example's full description."""
    matcher = KeywordMatcher(keyword.lower())
    return lambda example: matcher.match(example.full_description.lower())


def _run_specs(args: argparse.Namespace, config: SpecConfig, console: Console) -> int:
    paths = _resolve_paths(args, config)
    include_tags, exclude_tags = _resolve_tags(args, config)
    keyword = _resolve_keyword(args, config)
    maxfail = _resolve_maxfail(args, config)
    verbosity = _resolve_verbosity(args, config)

    try:
        reporters = _resolve_reporters(args, config, verbosity, console)
    except (ValueError, TypeError, ImportError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 2

    try:
        tree = collect(paths)
        examples = _filter_examples(tree.examples(), include_tags, exclude_tags, keyword)
    except (StructureError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 2

    runner = Runner(maxfail=maxfail, reporters=reporters)
    try:
        spec_run = runner.run(tree, examples)
    except StructureError as exc:
        console.print(f"[red]Declaration error during run: {escape(str(exc))}[/red]")
        return 2

    return 0 if spec_run.ok else 1


class KeywordMatcher:
    """Evaluate pytest-style -k expressions."""

    def __init__(self, expression: str) -> None:
        self.tokens = shlex.split(expression)
        self.index = 0
        self.func = self._parse_or()
        if self._peek() is not None:
            msg = "Invalid keyword expression"
            raise ValueError(msg)

    def match(self, text: str) -> bool:
        return self.func(text)

    def _parse_or(self) -> Callable[[str], bool]:
        left = self._parse_and()
        while self._peek_word("or"):
            self._advance()
            right = self._parse_and()
            prev = left
            left = lambda text, prev=prev, right=right: prev(text) or right(text)
        return left

    def _parse_and(self) -> Callable[[str], bool]:
        left = self._parse_not()
        while self._peek_word("and"):
            self._advance()
            right = self._parse_not()
            prev = left
            left = lambda text, prev=prev, right=right: prev(text) and right(text)
        return left

    def _parse_not(self) -> Callable[[str], bool]:
        if self._peek_word("not"):
            self._advance()
            operand = self._parse_not()
            return lambda text, operand=operand: not operand(text)
        return self._parse_term()

    def _parse_term(self) -> Callable[[str], bool]:
        token = self._peek()
        if token is None:
            msg = "Unexpected end of keyword expression"
            raise ValueError(msg)
        if token == "(":
            self._advance()
            expr = self._parse_or()
            if not self._peek_word(")"):
                msg = "Unmatched '(' in keyword expression"
                raise ValueError(msg)
            self._advance()
            return expr
        if token == ")":
            msg = "Unexpected ')' in keyword expression"
            raise ValueError(msg)
        self._advance()
        literal = token
        return lambda text, literal=literal: literal in text

    def _peek(self) -> str | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def _peek_word(self, word: str) -> bool:
        token = self._peek()
        return token is not None and token.lower() == word

    def _advance(self) -> None:
        self.index += 1


__all__ = ["KeywordMatcher", "main"]
