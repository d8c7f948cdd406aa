from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ycat.catalog import indexer
from ycat.catalog.errors import CatalogLoadError
from ycat.catalog.indexer import normalize_extensions, scan


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


class PathIndexerTests(unittest.TestCase):
    def test_recursive_scan_filters_by_extension(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            keep_1 = _touch(root / "one.jpg")
            keep_2 = _touch(root / "a" / "b" / "two.png")
            _touch(root / "a" / "notes.txt")
            _touch(root / "README")

            result = scan(root, {"jpg", "png"})

            self.assertEqual(
                sorted((str(item.path), item.key) for item in result.keys),
                sorted([(str(keep_1), "one"), (str(keep_2), "two")]),
            )
            self.assertEqual(result.warnings, [])

    def test_extension_match_is_case_sensitive(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _touch(root / "upper.JPG")
            lower = _touch(root / "lower.jpg")

            result = scan(root, ["jpg"])

            self.assertEqual([item.path for item in result.keys], [lower])

    def test_leading_dot_in_allow_list_is_accepted(self) -> None:
        self.assertEqual(normalize_extensions([".txt", "jpg", " ", "."]), {"txt", "jpg"})

    def test_stem_strips_only_last_extension(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _touch(root / "frame.0001.txt")

            result = scan(root, ["txt"])

            self.assertEqual([item.key for item in result.keys], ["frame.0001"])

    def test_duplicate_stems_in_subdirectories_are_distinct_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _touch(root / "a" / "fox.txt")
            _touch(root / "b" / "fox.txt")

            result = scan(root, ["txt"])

            self.assertEqual([item.key for item in result.keys], ["fox", "fox"])
            self.assertEqual(len({item.path for item in result.keys}), 2)

    def test_directory_with_allowed_extension_is_not_emitted(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "ghost.txt").mkdir()

            result = scan(root, ["txt"])

            self.assertEqual(result.keys, [])

    def test_missing_root_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(CatalogLoadError):
                scan(Path(tmpdir) / "nope", ["txt"])

    def test_file_root_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            file_root = _touch(Path(tmpdir) / "file.txt")
            with self.assertRaises(CatalogLoadError):
                scan(file_root, ["txt"])

    def test_unreadable_root_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.object(indexer, "_iter_entries", side_effect=PermissionError("denied")):
                with self.assertRaises(CatalogLoadError):
                    scan(Path(tmpdir), ["txt"])

    def test_unreadable_subdirectory_is_skipped_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            keep = _touch(root / "ok" / "a.txt")
            _touch(root / "locked" / "b.txt")
            locked = root / "locked"

            original = indexer._iter_entries

            def fake_iter(directory: Path):
                if Path(directory) == locked:
                    raise PermissionError(13, "Permission denied", str(directory))
                return original(directory)

            with mock.patch.object(indexer, "_iter_entries", side_effect=fake_iter):
                with self.assertLogs("ycat.indexer", level="WARNING"):
                    result = scan(root, ["txt"])

            self.assertEqual([item.path for item in result.keys], [keep])
            self.assertEqual(len(result.warnings), 1)
            self.assertEqual(result.warnings[0].path, str(locked))


if __name__ == "__main__":
    unittest.main()
