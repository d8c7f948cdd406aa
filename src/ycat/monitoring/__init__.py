from ycat.monitoring.logging import ContextFormatter, JsonFormatter, configure_logging

__all__ = ["ContextFormatter", "JsonFormatter", "configure_logging"]
