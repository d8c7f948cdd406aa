from __future__ import annotations

from pathlib import Path

import yaml

from ycat.catalog.errors import ConfigError


def _from_names(names) -> dict[int, str]:
    if isinstance(names, list):
        return {idx: str(name) for idx, name in enumerate(names)}
    if isinstance(names, dict):
        out: dict[int, str] = {}
        for key, name in names.items():
            try:
                out[int(key)] = str(name)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"Class index must be an integer, got {key!r}") from exc
        return dict(sorted(out.items()))
    raise ConfigError("Class map must be a list of names or an index-to-name mapping")


def load_class_map(path: str | Path) -> dict[int, str]:
    """Read the class-index-to-name map used for the viewer legend.

    Accepts a dataset YAML (``names:`` as a list or mapping, or a bare
    mapping) or a plain names file with one class per line.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Class map not found: {p}")

    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        loaded = yaml.safe_load(text) or {}
        if isinstance(loaded, dict) and "names" in loaded:
            return _from_names(loaded["names"])
        return _from_names(loaded)

    names: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        names.append(line)
    return _from_names(names)
