from ycat.catalog.errors import CatalogLoadError, ConfigError
from ycat.catalog.indexer import IndexResult, scan
from ycat.catalog.navigation import PairCursor
from ycat.catalog.pairing import classify, pair_slots
from ycat.catalog.project import ProjectCatalog
from ycat.catalog.stems import build_stems

__all__ = [
    "CatalogLoadError",
    "ConfigError",
    "IndexResult",
    "PairCursor",
    "ProjectCatalog",
    "build_stems",
    "classify",
    "pair_slots",
    "scan",
]
