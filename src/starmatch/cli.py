"""Command line interface for the starmatch pattern matcher."""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence

from . import __version__, io
from .engine.matcher import cross_check, evaluate_cases, matches
from .engine.models import Engine, MatchOptions, MatchReport
from .engine.tabular import build_table, render_table
from .engine.tokens import describe_atoms, ensure_tokens

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def _parse_symbol(value: str) -> str:
    """Parse a reserved pattern symbol, ensuring it is a single character."""
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"expected a single character, got {value!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="starmatch", description="Whole-text pattern matching CLI")
    parser.add_argument("-V", "--version", action="version", version=f"starmatch {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    sub = parser.add_subparsers(dest="command", required=True)

    def add_symbol_options(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--wildcard", type=_parse_symbol)
        cmd.add_argument("--repeat", type=_parse_symbol)

    match = sub.add_parser("match", help="match one text against one pattern")
    match.add_argument("--text", required=True)
    match.add_argument("--pattern", required=True)
    match.add_argument("--engine", choices=[e.value for e in Engine], default=Engine.AUTO.value)
    match.add_argument("--cross-check", action="store_true", default=False)
    match.add_argument("--format", choices=["text", "json"], default="text")
    add_symbol_options(match)

    check = sub.add_parser("check", help="evaluate a file of match cases")
    check.add_argument("--cases", required=True)
    check.add_argument("--engine", choices=[e.value for e in Engine])
    check.add_argument("--cross-check", dest="cross_check", action="store_true", default=None)
    check.add_argument("--options", help="JSON file with engine/wildcard/repeat/cross_check")
    check.add_argument("--format", choices=["text", "json"], default="text")
    check.add_argument("--out", default="-")
    add_symbol_options(check)

    table = sub.add_parser("table", help="print the dynamic programming table")
    table.add_argument("--text", required=True)
    table.add_argument("--pattern", required=True)
    add_symbol_options(table)
    return parser


def _resolve_options(args: argparse.Namespace) -> MatchOptions:
    """Merge an optional options file with explicit command line flags."""
    base = io.load_options(args.options) if getattr(args, "options", None) else MatchOptions()
    overrides: dict[str, object] = {}
    if getattr(args, "engine", None) is not None:
        overrides["engine"] = Engine(args.engine)
    if getattr(args, "wildcard", None) is not None:
        overrides["wildcard"] = args.wildcard
    if getattr(args, "repeat", None) is not None:
        overrides["repeat"] = args.repeat
    if getattr(args, "cross_check", None):
        overrides["cross_check"] = True
    return dataclasses.replace(base, **overrides)


def _command_match(args: argparse.Namespace) -> int:
    options = _resolve_options(args)
    tokens = ensure_tokens(args.pattern, wildcard=options.wildcard, repeat=options.repeat)
    if options.cross_check:
        verdict = cross_check(args.text, tokens)
    else:
        verdict = matches(args.text, tokens, engine=options.engine)
    if args.format == "json":
        atoms = describe_atoms(tokens, options.wildcard, options.repeat)
        io.write_json(
            {"text": args.text, "pattern": args.pattern, "atoms": atoms, "matched": verdict}, "-"
        )
    else:
        io.write_text("MATCH\n" if verdict else "NO MATCH\n", "-")
    return EXIT_OK if verdict else EXIT_MISMATCH


def _format_report(report: MatchReport) -> str:
    if report.error is not None:
        status = "ERROR"
        detail = report.error
    else:
        status = "PASS" if report.passed else "FAIL"
        detail = "match" if report.matched else "no match"
        if report.case.expected is not None and not report.passed:
            detail += f" (expected {'match' if report.case.expected else 'no match'})"
    return f"{status}\t{report.case.text!r}\t{report.case.pattern!r}\t{detail}"


def _command_check(args: argparse.Namespace) -> int:
    options = _resolve_options(args)
    cases = io.read_cases(args.cases)
    reports = evaluate_cases(cases, options)
    failed = sum(1 for report in reports if not report.passed)
    if args.format == "json":
        payload = {
            "engine": options.engine.value,
            "cross_check": options.cross_check,
            "total": len(reports),
            "failed": failed,
            "results": [report.to_json() for report in reports],
        }
        io.write_json(payload, args.out)
    else:
        lines = [_format_report(report) for report in reports]
        lines.append(f"{len(reports) - failed} of {len(reports)} cases passed")
        io.write_text("\n".join(lines) + "\n", args.out)
    return EXIT_OK if failed == 0 else EXIT_MISMATCH


def _command_table(args: argparse.Namespace) -> int:
    options = _resolve_options(args)
    tokens = ensure_tokens(args.pattern, wildcard=options.wildcard, repeat=options.repeat)
    grid = build_table(args.text, tokens)
    atoms = " ".join(describe_atoms(tokens, options.wildcard, options.repeat))
    io.write_text(f"ATOMS: {atoms}\n" + render_table(args.text, tokens, grid) + "\n", "-")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    commands = {
        "match": _command_match,
        "check": _command_check,
        "table": _command_table,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.error(f"unknown command {args.command}")
        return EXIT_ERROR
    try:
        return handler(args)
    except (ValueError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
