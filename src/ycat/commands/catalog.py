from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from ycat.catalog import ProjectCatalog
from ycat.config import ProjectConfig, load_class_map, load_project_config
from ycat.monitoring import configure_logging

_STATUS_ACCESSORS = {
    "matched": "matched_pairs",
    "partial": "partially_matched_pairs",
    "unmatched": "unmatched_pairs",
}


def _printable(text: str | None) -> str:
    """Render path text for stdout; undecodable bytes become \\xNN escapes."""
    if not text:
        return "-"
    return os.fsencode(text).decode("utf-8", "backslashreplace")


def _cli_overrides(args: Any) -> dict[str, Any]:
    overrides: dict[str, Any] = {"source": {}, "pairing": {}, "monitoring": {}}
    if args.images:
        overrides["source"]["images"] = args.images
    if args.labels:
        overrides["source"]["labels"] = args.labels
    if args.image_ext:
        overrides["source"]["image_extensions"] = list(args.image_ext)
    if args.label_ext:
        overrides["source"]["label_extensions"] = list(args.label_ext)
    if args.policy:
        overrides["pairing"]["policy"] = args.policy
    if args.workers is not None:
        overrides["pairing"]["workers"] = args.workers
    if args.log_level:
        overrides["monitoring"]["log_level"] = args.log_level
    if args.json_logs:
        overrides["monitoring"]["json_logs"] = True
    if getattr(args, "report", None):
        overrides["report_path"] = args.report
    return overrides


def _load(args: Any, repo_root: Path) -> ProjectConfig:
    config = load_project_config(
        repo_root=repo_root,
        config_path=args.config,
        cli_overrides=_cli_overrides(args),
    )
    configure_logging(config.monitoring.log_level, config.monitoring.json_logs)
    if getattr(args, "class_map", None):
        config.export.class_map = load_class_map(args.class_map)
    logging.getLogger("ycat.commands").debug(
        "project config loaded", extra={"context": config.as_log_context()}
    )
    return config


def run_report(args: Any, repo_root: Path) -> int:
    try:
        config = _load(args, repo_root)
        catalog = ProjectCatalog.from_config(config)

        report_path = catalog.write_report(
            config.report_path,
            metadata={
                "project_name": config.export.project_name,
                "class_map": {str(k): v for k, v in config.export.class_map.items()},
            },
        )

        status = catalog.health()
        payload = {
            "report_path": str(report_path),
            "status": status,
            "counts": catalog.counts(),
        }
        print(json.dumps(payload, ensure_ascii=True, indent=2))
        return 0 if status == "pass" else 1
    except Exception as exc:
        print(f"report command failed: {exc}", file=sys.stderr)
        return 2


def run_pairs(args: Any, repo_root: Path) -> int:
    try:
        config = _load(args, repo_root)
        catalog = ProjectCatalog.from_config(config)

        pairs = getattr(catalog, _STATUS_ACCESSORS[args.status])()
        if args.json:
            print(json.dumps([pair.to_dict() for pair in pairs], ensure_ascii=True, indent=2))
            return 0

        for index, pair in enumerate(pairs):
            line = "\t".join(
                [str(index), _printable(pair.name), _printable(pair.image_path), _printable(pair.label_path)]
            )
            if pair.message:
                line += f"\t{pair.message}"
            print(line)
        return 0
    except Exception as exc:
        print(f"pairs command failed: {exc}", file=sys.stderr)
        return 2
