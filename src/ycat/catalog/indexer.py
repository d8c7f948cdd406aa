from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ycat.catalog.errors import CatalogLoadError
from ycat.types import PathKey, ScanWarning

_LOGGER = logging.getLogger("ycat.indexer")


@dataclass
class IndexResult:
    keys: list[PathKey] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)


def normalize_extensions(extensions: Iterable[str]) -> set[str]:
    """Strip a leading dot; matching stays case-sensitive."""
    out: set[str] = set()
    for ext in extensions:
        value = str(ext).strip()
        if value.startswith("."):
            value = value[1:]
        if value:
            out.add(value)
    return out


def _iter_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return list(it)


def _extension(path: Path) -> str | None:
    suffix = path.suffix
    if not suffix:
        return None
    return suffix[1:]


def _record_warning(result: IndexResult, path: Path, exc: OSError) -> None:
    _LOGGER.warning("skipping unreadable path=%s error=%s", path, exc)
    result.warnings.append(ScanWarning(path=str(path), message=str(exc)))


def _visit(entries: list[os.DirEntry], allowed: set[str], result: IndexResult) -> None:
    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file()
        except OSError as exc:
            _record_warning(result, path, exc)
            continue

        if is_dir:
            try:
                children = _iter_entries(path)
            except OSError as exc:
                _record_warning(result, path, exc)
                continue
            _visit(children, allowed, result)
        elif is_file and _extension(path) in allowed:
            result.keys.append(PathKey(path=path, key=path.stem))


def scan(root: str | Path, allowed_extensions: Iterable[str]) -> IndexResult:
    """Recursively collect files under ``root`` whose extension is allowed.

    Keys come back in directory enumeration order, which is not stable across
    filesystems. A missing or unreadable root raises ``CatalogLoadError``;
    unreadable subdirectories are skipped and recorded as warnings.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise CatalogLoadError(f"Directory not found: {root_path}")

    try:
        entries = _iter_entries(root_path)
    except OSError as exc:
        raise CatalogLoadError(f"Unable to read directory {root_path}: {exc}") from exc

    result = IndexResult()
    _visit(entries, normalize_extensions(allowed_extensions), result)

    _LOGGER.debug(
        "indexed root=%s files=%d warnings=%d",
        root_path,
        len(result.keys),
        len(result.warnings),
    )
    return result
