from __future__ import annotations

import unittest

from ycat.catalog.navigation import PairCursor
from ycat.types import ImageLabelPair


def _pairs(*names: str) -> list[ImageLabelPair]:
    return [ImageLabelPair(name=n, image_path=f"{n}.jpg", label_path=f"{n}.txt") for n in names]


class PairCursorTests(unittest.TestCase):
    def test_next_wraps_to_start(self) -> None:
        cursor = PairCursor(_pairs("a", "b", "c"))

        self.assertEqual(cursor.current().name, "a")
        self.assertEqual(cursor.next().name, "b")
        self.assertEqual(cursor.next().name, "c")
        self.assertEqual(cursor.next().name, "a")
        self.assertEqual(cursor.position_label(), "1/3")

    def test_previous_wraps_to_end(self) -> None:
        cursor = PairCursor(_pairs("a", "b", "c"))

        self.assertEqual(cursor.previous().name, "c")
        self.assertEqual(cursor.index, 2)
        self.assertEqual(cursor.position_label(), "3/3")

    def test_seek_normalizes_index(self) -> None:
        cursor = PairCursor(_pairs("a", "b"), index=5)

        self.assertEqual(cursor.index, 1)
        self.assertEqual(cursor.seek(-2).name, "a")

    def test_empty_cursor_is_inert(self) -> None:
        cursor = PairCursor([])

        self.assertEqual(len(cursor), 0)
        self.assertIsNone(cursor.current())
        self.assertIsNone(cursor.next())
        self.assertIsNone(cursor.previous())
        self.assertEqual(cursor.position_label(), "0/0")


if __name__ == "__main__":
    unittest.main()
