"""Command-line interface for jsonkit."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from .engine import DiffEngine
from .exceptions import DocumentLoadError, InvalidInputError, MaxDepthExceededError
from .loader import load_document
from .models import Change, ChangeKind, DiffConfig, LogLevel, ValidatorConfig
from .schema import SchemaValidator
from .utils import format_value

_MARKERS = {
    ChangeKind.ADDED: "+",
    ChangeKind.REMOVED: "-",
    ChangeKind.MODIFIED: "~",
}


def _one_line(value) -> str:
    return " ".join(format_value(value).split())


def _log_level(args: argparse.Namespace) -> LogLevel:
    return LogLevel.DEBUG if args.verbose else LogLevel.WARN


def format_change(change: Change, indent: int = 0) -> list[str]:
    """Render a change and its children as indented text lines."""
    marker = _MARKERS.get(change.kind, " ")
    label = change.path or "(root)"
    pad = "  " * indent

    if change.kind == ChangeKind.ADDED:
        lines = [f"{pad}{marker} {label}: {_one_line(change.new_value)}"]
    elif change.kind == ChangeKind.REMOVED:
        lines = [f"{pad}{marker} {label}: {_one_line(change.old_value)}"]
    elif change.children:
        lines = [f"{pad}{marker} {label}"]
    else:
        lines = [
            f"{pad}{marker} {label}: {_one_line(change.old_value)} -> {_one_line(change.new_value)}"
        ]

    for child in change.children or []:
        lines.extend(format_change(child, indent + 1))
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonkit",
        description="Diff JSON documents and validate them against schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsonkit diff old.json new.json
  jsonkit diff old.json new.json --ignore '$..updatedAt' --json
  jsonkit validate data.json schema.yaml
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparsers.add_parser("diff", help="Compare two documents")
    diff_parser.add_argument("old", help="Path to the baseline JSON/YAML document")
    diff_parser.add_argument("new", help="Path to the JSON/YAML document to compare")
    diff_parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="JSONPath-style pattern of changes to drop (repeatable)"
    )
    diff_parser.add_argument("--json", action="store_true", help="Print the full JSON report")

    validate_parser = subparsers.add_parser("validate", help="Validate a document against a schema")
    validate_parser.add_argument("data", help="Path to the JSON/YAML document")
    validate_parser.add_argument("schema", help="Path to the JSON/YAML schema")
    validate_parser.add_argument(
        "--strict-integers",
        action="store_true",
        help="Reject fractional numbers for type 'integer'"
    )
    validate_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    return parser


def run_diff(args: argparse.Namespace) -> int:
    old = load_document(args.old)
    new = load_document(args.new)

    engine = DiffEngine(DiffConfig(ignore_paths=args.ignore, log_level=_log_level(args)))
    report = engine.report(old, new)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    elif report.is_identical:
        print("No differences")
    else:
        for change in report.changes:
            for line in format_change(change):
                print(line)
        summary = report.summary
        print(f"\n{summary.total} changes: {summary.added} added, "
              f"{summary.removed} removed, {summary.modified} modified")

    return 0 if report.is_identical else 1


def run_validate(args: argparse.Namespace) -> int:
    data = load_document(args.data)
    schema = load_document(args.schema)

    validator = SchemaValidator(ValidatorConfig(
        strict_integers=args.strict_integers,
        log_level=_log_level(args)
    ))
    result = validator.validate(data, schema)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    elif result.valid:
        print("Valid")
    else:
        for error in result.errors:
            keyword = f" [{error.schema_path}]" if error.schema_path else ""
            print(f"{error.path}: {error.message}{keyword}")
        print(f"\n{len(result.errors)} errors")

    return 0 if result.valid else 1


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.command == "diff":
            return run_diff(args)
        return run_validate(args)
    except DocumentLoadError as e:
        detail = f" ({e.reason})" if e.reason else ""
        print(f"Error: {e.message}{detail}", file=sys.stderr)
        return 2
    except (InvalidInputError, MaxDepthExceededError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
