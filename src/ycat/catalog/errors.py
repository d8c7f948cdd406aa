class CatalogLoadError(RuntimeError):
    """Raised when an image or label root cannot be read at project load."""


class ConfigError(ValueError):
    """Raised when project configuration values are invalid."""
