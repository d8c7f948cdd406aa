from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dynaconf import Dynaconf

from ycat.catalog.errors import ConfigError
from ycat.catalog.pairing import PAIRING_POLICIES
from ycat.config.defaults import DEFAULT_CONFIG
from ycat.config.models import (
    ExportConfig,
    FolderPathsConfig,
    MonitoringConfig,
    PairingConfig,
    ProjectConfig,
    SourcePathsConfig,
)

CONFIG_FILE_NAMES = (
    "ycat.toml",
    "ycat.yaml",
    "ycat.yml",
    "ycat.json",
    "config.yaml",
    "config.yml",
)


def _lower_keys(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_lower_keys(item) for item in obj]
    return obj


def _merge_dict(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
    return base


def _load_settings(config_paths: list[Path]) -> dict[str, Any]:
    """Config files in order, then ``YCAT_*`` environment variables."""
    settings = Dynaconf(
        envvar_prefix="YCAT",
        settings_files=[str(path) for path in config_paths],
        merge_enabled=True,
        environments=False,
        load_dotenv=True,
    )
    return _lower_keys(settings.as_dict())


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _coerce_str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value or []]


def _coerce_class_map(raw: Any) -> dict[int, str]:
    if isinstance(raw, list):
        return {idx: str(name) for idx, name in enumerate(raw)}
    out: dict[int, str] = {}
    for key, name in (raw or {}).items():
        try:
            out[int(key)] = str(name)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"class_map keys must be integers, got {key!r}") from exc
    return dict(sorted(out.items()))


def _resolve_repo_relative(path_value: str | None, repo_root: Path) -> str | None:
    if not path_value:
        return path_value
    p = Path(path_value)
    if p.is_absolute():
        return str(p)
    return str((repo_root / p).resolve())


def _normalize(data: dict[str, Any], repo_root: Path) -> ProjectConfig:
    source_data = data.get("source", {})
    pairing_data = data.get("pairing", {})
    export_data = data.get("export", {})
    folder_data = export_data.get("folder_paths", {})
    monitoring_data = data.get("monitoring", {})

    policy = str(pairing_data.get("policy", "enumeration")).lower()
    if policy not in PAIRING_POLICIES:
        raise ConfigError(
            f"pairing.policy must be one of {', '.join(PAIRING_POLICIES)}, got {policy!r}"
        )
    workers = int(pairing_data.get("workers", 1))
    if workers < 1:
        raise ConfigError(f"pairing.workers must be >= 1, got {workers}")

    return ProjectConfig(
        source=SourcePathsConfig(
            images=_resolve_repo_relative(str(source_data.get("images", "images")), repo_root),
            labels=_resolve_repo_relative(str(source_data.get("labels", "labels")), repo_root),
            image_extensions=_coerce_str_list(source_data.get("image_extensions", [])),
            label_extensions=_coerce_str_list(source_data.get("label_extensions", [])),
        ),
        pairing=PairingConfig(policy=policy, workers=workers),
        export=ExportConfig(
            project_name=str(export_data.get("project_name", "ycat")),
            output_path=_resolve_repo_relative(
                str(export_data.get("output_path", "output")),
                repo_root,
            ),
            folder_paths=FolderPathsConfig(
                train=str(folder_data.get("train", "train")),
                validation=str(folder_data.get("validation", "validation")),
                test=str(folder_data.get("test", "test")),
            ),
            class_map=_coerce_class_map(export_data.get("class_map", {})),
        ),
        monitoring=MonitoringConfig(
            json_logs=_coerce_bool(monitoring_data.get("json_logs", False)),
            log_level=str(monitoring_data.get("log_level", "INFO")).upper(),
        ),
        report_path=_resolve_repo_relative(
            str(data.get("report_path", "reports/catalog.json")),
            repo_root,
        ),
    )


def _default_config_copy() -> dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CONFIG))


def load_project_config(
    repo_root: Path,
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ProjectConfig:
    config_paths: list[Path] = []
    if config_path:
        explicit = Path(config_path)
        if not explicit.exists():
            raise FileNotFoundError(f"Config file not found: {explicit}")
        config_paths.append(explicit)
    else:
        for name in CONFIG_FILE_NAMES:
            candidate = repo_root / name
            if candidate.exists():
                config_paths.append(candidate)

    merged = _default_config_copy()

    _merge_dict(merged, _load_settings(config_paths))

    if cli_overrides:
        _merge_dict(merged, _lower_keys(cli_overrides))

    return _normalize(merged, repo_root)


def project_config_to_dict(config: ProjectConfig) -> dict[str, Any]:
    return asdict(config)
