from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SourcePathsConfig:
    images: str = "images"
    labels: str = "labels"
    image_extensions: list[str] = field(
        default_factory=lambda: ["jpg", "jpeg", "png", "JPG", "JPEG", "PNG"]
    )
    label_extensions: list[str] = field(default_factory=lambda: ["txt"])


@dataclass
class PairingConfig:
    policy: str = "enumeration"
    workers: int = 1


@dataclass
class FolderPathsConfig:
    train: str = "train"
    validation: str = "validation"
    test: str = "test"


@dataclass
class ExportConfig:
    project_name: str = "ycat"
    output_path: str = "output"
    folder_paths: FolderPathsConfig = field(default_factory=FolderPathsConfig)
    class_map: dict[int, str] = field(default_factory=dict)


@dataclass
class MonitoringConfig:
    json_logs: bool = False
    log_level: str = "INFO"


@dataclass
class ProjectConfig:
    source: SourcePathsConfig = field(default_factory=SourcePathsConfig)
    pairing: PairingConfig = field(default_factory=PairingConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    report_path: str = "reports/catalog.json"

    def as_log_context(self) -> dict[str, Any]:
        return {
            "images": self.source.images,
            "labels": self.source.labels,
            "pairing_policy": self.pairing.policy,
            "workers": self.pairing.workers,
            "classes": len(self.export.class_map),
        }
