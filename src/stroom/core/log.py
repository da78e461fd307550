import logging
import sys

import structlog

from ..config import apply_logging_level, get_config

# --- Structlog Configuration ---

_HANDLER_NAME = "stroom_fallback_handler"


def _configure_structlog():
    """Configures structlog to produce JSON-formatted logs via stdlib."""
    if structlog.is_configured():
        return

    # This is a fallback configuration. Users should configure logging themselves.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    # Use a dedicated name to avoid interfering with user's handlers
    handler.set_name(_HANDLER_NAME)

    root_logger = logging.getLogger()
    # Avoid adding duplicate handlers
    if _HANDLER_NAME not in [h.get_name() for h in root_logger.handlers]:
        root_logger.addHandler(handler)

    apply_logging_level(get_config())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


_structlog_configured = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Returns a structlog logger for the given name, integrated with the
    standard library's logging system.

    The first call installs a JSON configuration unless the application has
    already configured structlog.
    """
    global _structlog_configured
    if not _structlog_configured:
        _configure_structlog()
        _structlog_configured = True
    return structlog.get_logger(name)
