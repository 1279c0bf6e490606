"""
logging.py — Application-Wide Logging Configuration

Purpose:
- Configure a standardized logging format for every administrative command.
- Keep command output and reset progress logs consistent.

Goals:
- Simple console logging, INFO by default.
- Uniform formatting: timestamp | level | module | message
"""

import logging

# -----------------------------------------------------------------------------
# Log Format
# -----------------------------------------------------------------------------

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# -----------------------------------------------------------------------------
# Root Logger Initialization
# -----------------------------------------------------------------------------

def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging settings.

    Parameters:
        level (str): "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"

    Behavior:
    - Sets logging format globally.
    - Should be called ONCE, at command startup.
    - Calling again (e.g. from tests) replaces the previous handlers.
    """

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )

    logging.getLogger(__name__).debug("Logging initialized with level %s", level)

# -----------------------------------------------------------------------------
# Logger Access Helper
# -----------------------------------------------------------------------------

def get_logger(name: str) -> logging.Logger:
    """
    Return a logger instance to be used in any module.

    In any module:
        from app.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("something happened")
    """
    return logging.getLogger(name)
