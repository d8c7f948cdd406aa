from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from ycat.catalog.errors import ConfigError
from ycat.catalog.indexer import scan
from ycat.catalog.pairing import (
    PAIRING_POLICIES,
    POLICY_ENUMERATION,
    classify,
    group_by_stem,
    pair_slots,
)
from ycat.catalog.stems import build_stems
from ycat.types import (
    MATCHED,
    PARTIALLY_MATCHED,
    UNMATCHED,
    ImageLabelPair,
    PairOutcome,
    PathKey,
    ScanWarning,
)

if TYPE_CHECKING:
    from ycat.config.models import ProjectConfig

_LOGGER = logging.getLogger("ycat.catalog")


def _classify_stem(
    stem: str,
    images: list[PathKey],
    labels: list[PathKey],
    policy: str,
) -> tuple[PairOutcome, ...]:
    return tuple(classify(stem, slot) for slot in pair_slots(stem, images, labels, policy))


@dataclass(frozen=True)
class ProjectCatalog:
    """Load-time snapshot of every image/label pairing outcome in a dataset.

    Stems are sorted and each stem's outcomes keep their join-slot order, so
    the accessors return the same sequence on every call. The catalog is never
    mutated; rebuild it to pick up changes on disk.
    """

    stems: tuple[str, ...]
    outcomes: Mapping[str, tuple[PairOutcome, ...]]
    warnings: tuple[ScanWarning, ...] = ()
    image_root: str = ""
    label_root: str = ""
    pairing_policy: str = POLICY_ENUMERATION
    _matched: tuple[ImageLabelPair, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "outcomes", MappingProxyType(dict(self.outcomes)))
        object.__setattr__(self, "_matched", tuple(self._pairs_with_status(MATCHED)))

    @classmethod
    def build(
        cls,
        image_root: str | Path,
        label_root: str | Path,
        image_extensions: Iterable[str],
        label_extensions: Iterable[str],
        pairing_policy: str = POLICY_ENUMERATION,
        workers: int = 1,
    ) -> "ProjectCatalog":
        if pairing_policy not in PAIRING_POLICIES:
            raise ConfigError(f"Unknown pairing policy: {pairing_policy}")
        if workers < 1:
            raise ConfigError("workers must be >= 1")

        images = scan(image_root, image_extensions)
        labels = scan(label_root, label_extensions)

        stems = build_stems(images.keys, labels.keys)
        images_by_stem = group_by_stem(images.keys)
        labels_by_stem = group_by_stem(labels.keys)

        def _run(stem: str) -> tuple[PairOutcome, ...]:
            return _classify_stem(
                stem,
                images_by_stem.get(stem, []),
                labels_by_stem.get(stem, []),
                pairing_policy,
            )

        if workers > 1 and len(stems) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(_run, stems))
        else:
            results = [_run(stem) for stem in stems]

        catalog = cls(
            stems=tuple(stems),
            outcomes=dict(zip(stems, results)),
            warnings=tuple(images.warnings) + tuple(labels.warnings),
            image_root=str(image_root),
            label_root=str(label_root),
            pairing_policy=pairing_policy,
        )
        counts = catalog.counts()
        _LOGGER.info(
            "catalog built stems=%d matched=%d partially_matched=%d unmatched=%d scan_warnings=%d",
            counts["stems"],
            counts["matched"],
            counts["partially_matched"],
            counts["unmatched"],
            counts["scan_warnings"],
        )
        return catalog

    @classmethod
    def from_config(cls, config: "ProjectConfig") -> "ProjectCatalog":
        return cls.build(
            image_root=config.source.images,
            label_root=config.source.labels,
            image_extensions=config.source.image_extensions,
            label_extensions=config.source.label_extensions,
            pairing_policy=config.pairing.policy,
            workers=config.pairing.workers,
        )

    def _iter_outcomes(self):
        for stem in self.stems:
            yield from self.outcomes[stem]

    def _pairs_with_status(self, status: str) -> list[ImageLabelPair]:
        return [outcome.pair for outcome in self._iter_outcomes() if outcome.status == status]

    def matched_pairs(self) -> list[ImageLabelPair]:
        return list(self._matched)

    def partially_matched_pairs(self) -> list[ImageLabelPair]:
        return self._pairs_with_status(PARTIALLY_MATCHED)

    def unmatched_pairs(self) -> list[ImageLabelPair]:
        return self._pairs_with_status(UNMATCHED)

    def outcomes_for(self, stem: str) -> tuple[PairOutcome, ...]:
        return self.outcomes.get(stem, ())

    def pair_at_index(self, index: int) -> ImageLabelPair | None:
        if 0 <= index < len(self._matched):
            return self._matched[index]
        return None

    def counts(self) -> dict[str, int]:
        counts = {
            "stems": len(self.stems),
            "images": 0,
            "labels": 0,
            MATCHED: 0,
            PARTIALLY_MATCHED: 0,
            UNMATCHED: 0,
            "scan_warnings": len(self.warnings),
        }
        for outcome in self._iter_outcomes():
            counts[outcome.status] += 1
            if outcome.image is not None:
                counts["images"] += 1
            if outcome.label is not None:
                counts["labels"] += 1
        return counts

    def health(self) -> str:
        counts = self.counts()
        return "pass" if counts[UNMATCHED] == 0 and counts[PARTIALLY_MATCHED] == 0 else "fail"

    def to_dict(self) -> dict[str, Any]:
        counts = self.counts()
        return {
            "status": self.health(),
            "image_root": self.image_root,
            "label_root": self.label_root,
            "pairing_policy": self.pairing_policy,
            "counts": counts,
            "stems": list(self.stems),
            "pairs": {
                stem: [outcome.to_dict() for outcome in self.outcomes[stem]]
                for stem in self.stems
            },
            "scan_warnings": [asdict(warning) for warning in self.warnings],
        }

    def write_report(self, path: str | Path, metadata: dict[str, Any] | None = None) -> Path:
        report_path = Path(path)
        report = self.to_dict()
        if metadata:
            report.update(metadata)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        # ensure_ascii escapes surrogate-decoded paths
        report_path.write_text(json.dumps(report, ensure_ascii=True, indent=2), encoding="utf-8")
        _LOGGER.info("catalog report written path=%s", report_path)
        return report_path
