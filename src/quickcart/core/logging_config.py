import logging
import sys

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(level: str = LOG_LEVEL, namespaces=None) -> logging.Logger:
    """
    Attaches a stdout handler to the 'quickcart' logger.

    Modules use logging.getLogger(__name__), so every logger below
    'quickcart' inherits this handler and level unless set explicitly.
    Calling this more than once does not stack handlers.
    """
    app_logger = logging.getLogger("quickcart")
    app_logger.setLevel(getattr(logging, level, logging.INFO))

    if any(getattr(h, "_quickcart_console", False) for h in app_logger.handlers):
        return app_logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler._quickcart_console = True

    allowed = LOG_NAMESPACES if namespaces is None else namespaces
    if allowed:
        console_handler.addFilter(NamespaceFilter(allowed))

    app_logger.addHandler(console_handler)
    return app_logger


# Per-namespace overrides. The report pipeline is chatty at DEBUG (one
# line per stage), so keep it at INFO unless asked for.
# logging.getLogger("quickcart.features.reports").setLevel(logging.DEBUG)
