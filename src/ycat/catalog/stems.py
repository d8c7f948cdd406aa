from __future__ import annotations

from typing import Iterable

from ycat.types import PathKey


def build_stems(image_keys: Iterable[PathKey], label_keys: Iterable[PathKey]) -> list[str]:
    """Sorted, deduplicated union of stems seen in either index."""
    stems = {item.key for item in image_keys}
    stems.update(item.key for item in label_keys)
    return sorted(stems)
