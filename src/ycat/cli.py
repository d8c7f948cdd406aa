from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to TOML/YAML/JSON config file")
    parser.add_argument("--images", help="Image root directory (scanned recursively)")
    parser.add_argument("--labels", help="YOLO label root directory (scanned recursively)")
    parser.add_argument(
        "--image-ext",
        action="append",
        default=None,
        help="Allowed image extension, case-sensitive (repeatable)",
    )
    parser.add_argument(
        "--label-ext",
        action="append",
        default=None,
        help="Allowed label extension, case-sensitive (repeatable)",
    )
    parser.add_argument(
        "--policy",
        choices=["enumeration", "sorted"],
        help="Pairing order for stems with several images or labels",
    )
    parser.add_argument("--workers", type=int, help="Threads used to classify stems")
    parser.add_argument("--class-map", help="Class names file (YAML names: or one name per line)")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ycat",
        description="Reconcile YOLO image and label directory trees",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser("report", help="Build the catalog and write a JSON dataset report")
    _add_source_args(report)
    report.add_argument("--report", help="Output report JSON path")

    pairs = subparsers.add_parser("pairs", help="List image/label pairs by outcome")
    _add_source_args(pairs)
    pairs.add_argument(
        "--status",
        choices=["matched", "partial", "unmatched"],
        default="matched",
        help="Outcome to list",
    )
    pairs.add_argument("--json", action="store_true", help="Emit JSON instead of tab-separated rows")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    repo_root = Path.cwd()

    if args.command == "report":
        from ycat.commands.catalog import run_report

        return run_report(args, repo_root)
    if args.command == "pairs":
        from ycat.commands.catalog import run_pairs

        return run_pairs(args, repo_root)

    parser.print_help(sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
