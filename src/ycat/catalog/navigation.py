from __future__ import annotations

from typing import Sequence

from ycat.types import ImageLabelPair


class PairCursor:
    """Wrap-around index over a cached ``matched_pairs()`` sequence."""

    def __init__(self, pairs: Sequence[ImageLabelPair], index: int = 0) -> None:
        self._pairs = tuple(pairs)
        self._index = 0
        self.seek(index)

    def __len__(self) -> int:
        return len(self._pairs)

    @property
    def index(self) -> int:
        return self._index

    def current(self) -> ImageLabelPair | None:
        if not self._pairs:
            return None
        return self._pairs[self._index]

    def seek(self, index: int) -> ImageLabelPair | None:
        if self._pairs:
            self._index = index % len(self._pairs)
        return self.current()

    def next(self) -> ImageLabelPair | None:
        return self.seek(self._index + 1)

    def previous(self) -> ImageLabelPair | None:
        return self.seek(self._index - 1)

    def position_label(self) -> str:
        if not self._pairs:
            return "0/0"
        return f"{self._index + 1}/{len(self._pairs)}"
