from __future__ import annotations

import logging
from itertools import zip_longest
from typing import Iterable, Optional, Tuple

from ycat.catalog.errors import ConfigError
from ycat.types import (
    MATCHED,
    PARTIALLY_MATCHED,
    UNMATCHED,
    ImageLabelPair,
    PairOutcome,
    PathKey,
)

_LOGGER = logging.getLogger("ycat.pairing")

POLICY_ENUMERATION = "enumeration"
POLICY_SORTED = "sorted"
PAIRING_POLICIES = (POLICY_ENUMERATION, POLICY_SORTED)

LABEL_MISSING = "Label file is missing."
IMAGE_MISSING = "Image file is missing."
BOTH_MISSING = "Both image and label files are missing."

Slot = Tuple[Optional[PathKey], Optional[PathKey]]


def group_by_stem(keys: Iterable[PathKey]) -> dict[str, list[PathKey]]:
    grouped: dict[str, list[PathKey]] = {}
    for item in keys:
        grouped.setdefault(item.key, []).append(item)
    return grouped


def _ordered(keys: list[PathKey], policy: str) -> list[PathKey]:
    if policy == POLICY_ENUMERATION:
        return keys
    if policy == POLICY_SORTED:
        return sorted(keys, key=lambda item: str(item.path))
    raise ConfigError(f"Unknown pairing policy: {policy}")


def pair_slots(
    stem: str,
    image_keys: Iterable[PathKey],
    label_keys: Iterable[PathKey],
    policy: str = POLICY_ENUMERATION,
) -> list[Slot]:
    """Positional outer join of the images and labels sharing ``stem``.

    Slot i holds the i-th image and the i-th label; the shorter side is padded
    with None. Under the ``enumeration`` policy the pairing follows scan order,
    so two images and two labels with one stem pair by position only.
    """
    images = _ordered([item for item in image_keys if item.key == stem], policy)
    labels = _ordered([item for item in label_keys if item.key == stem], policy)

    if len(images) > 1 or len(labels) > 1:
        _LOGGER.warning(
            "duplicate stem=%s images=%d labels=%d policy=%s",
            stem,
            len(images),
            len(labels),
            policy,
        )

    return list(zip_longest(images, labels))


def path_text(path) -> str | None:
    """Path as text, or None when it cannot be represented as UTF-8."""
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return text


def classify(stem: str, slot: Slot) -> PairOutcome:
    image, label = slot

    if image is not None and label is not None:
        image_path = path_text(image.path)
        label_path = path_text(label.path)
        if image_path is not None and label_path is not None:
            return PairOutcome(
                status=MATCHED,
                pair=ImageLabelPair(name=stem, image_path=image_path, label_path=label_path),
                image=image,
                label=label,
            )
        # A shared slot with one undecodable path only warns, unlike a short list.
        if image_path is not None:
            return PairOutcome(
                status=PARTIALLY_MATCHED,
                pair=ImageLabelPair(name=stem, image_path=image_path, message=LABEL_MISSING),
                code="label_path_undecodable",
                image=image,
                label=label,
            )
        if label_path is not None:
            return PairOutcome(
                status=PARTIALLY_MATCHED,
                pair=ImageLabelPair(name=stem, label_path=label_path, message=IMAGE_MISSING),
                code="image_path_undecodable",
                image=image,
                label=label,
            )
        return PairOutcome(
            status=UNMATCHED,
            pair=ImageLabelPair(name=stem, message=BOTH_MISSING),
            code="both_paths_undecodable",
            image=image,
            label=label,
        )

    if image is not None:
        return PairOutcome(
            status=UNMATCHED,
            pair=ImageLabelPair(name=stem, image_path=str(image.path), message=LABEL_MISSING),
            code="missing_label",
            image=image,
        )

    if label is not None:
        return PairOutcome(
            status=UNMATCHED,
            pair=ImageLabelPair(name=stem, label_path=str(label.path), message=IMAGE_MISSING),
            code="missing_image",
            label=label,
        )

    raise ValueError(f"Empty pairing slot for stem {stem!r}")
