from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

MATCHED = "matched"
PARTIALLY_MATCHED = "partially_matched"
UNMATCHED = "unmatched"

STATUS_SEVERITY: dict[str, str | None] = {
    MATCHED: None,
    PARTIALLY_MATCHED: "warning",
    UNMATCHED: "error",
}


@dataclass(frozen=True)
class PathKey:
    """A discovered file tagged with its filename stem."""

    path: Path
    key: str


@dataclass(frozen=True)
class ScanWarning:
    path: str
    message: str


@dataclass(frozen=True)
class ImageLabelPair:
    """Record handed to the viewer and the dataset report."""

    name: str
    image_path: str | None = None
    label_path: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "image_path": self.image_path,
            "label_path": self.label_path,
            "message": self.message,
        }


@dataclass(frozen=True)
class PairOutcome:
    """Classified result of one outer-join slot for a stem."""

    status: str
    pair: ImageLabelPair
    code: str | None = None
    image: PathKey | None = None
    label: PathKey | None = None

    @property
    def severity(self) -> str | None:
        return STATUS_SEVERITY[self.status]

    @property
    def is_matched(self) -> bool:
        return self.status == MATCHED

    def to_dict(self) -> dict[str, Any]:
        payload = {"status": self.status, "severity": self.severity, "code": self.code}
        payload.update(self.pair.to_dict())
        return payload
