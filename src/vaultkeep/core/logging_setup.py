# Core Module - Structured Logging
#
# structlog is wired through the stdlib logging module so that uvicorn,
# the service modules (structlog.get_logger) and the infrastructure modules
# (logging.getLogger) all end up on the same handler.

import logging
import sys
from typing import Optional

import structlog

_configured = False


def configure_logging(level: str = "INFO", json_output: bool = False, force: bool = False) -> None:
    """
    Configure structlog + stdlib logging once per process.

    Args:
        level: Root log level name (DEBUG, INFO, ...)
        json_output: JSON lines when True, human-readable console otherwise
        force: Reconfigure even if already configured
    """
    global _configured
    if _configured and not force:
        return

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))  # structlog handles formatting

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if getattr(existing, "_vaultkeep", False):
            root_logger.removeHandler(existing)
    handler._vaultkeep = True
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    _configured = True


def get_logger(name: Optional[str] = None):
    """Return a structlog bound logger."""
    return structlog.get_logger(name)
