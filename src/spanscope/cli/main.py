"""Command line interface for spanscope."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import cast

from ..renderers import Verbosity
from .commands import run_show, run_traces


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spanscope",
        description="Explore span exports written by spanscope.serializers.export_spans.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    traces_parser = subparsers.add_parser("traces", help="List the traces in one or more exports")
    traces_parser.add_argument("span_files", type=Path, nargs="+", help="JSON Lines span exports")
    traces_parser.add_argument("--json", action="store_true", help="Emit one JSON array")

    show_parser = subparsers.add_parser(
        "show", help="Render span trees, stitching traces across exports"
    )
    show_parser.add_argument("span_files", type=Path, nargs="+", help="JSON Lines span exports")
    show_parser.add_argument("--trace-id", type=int, default=None, help="Only this trace")
    show_parser.add_argument(
        "--operation", default=None, help="Only traces containing a span with this operation"
    )
    show_parser.add_argument(
        "--failed-only", action="store_true", help="Only traces containing a failed span"
    )
    show_parser.add_argument(
        "--verbosity",
        choices=["minimal", "standard", "full"],
        default="standard",
        help="Detail shown per span",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "traces":
        return run_traces(args.span_files, as_json=args.json)
    return run_show(
        args.span_files,
        cast(Verbosity, args.verbosity),
        trace_id=args.trace_id,
        operation=args.operation,
        failed_only=args.failed_only,
    )


if __name__ == "__main__":
    raise SystemExit(main())
