"""
Logging setup for the storefront.

Every module gets its logger from here so the root handler is installed
exactly once:

    from vegefood.logging import get_logger
    logger = get_logger(__name__)

Values typed by shoppers (emails, coupon codes) go through
sanitize_string_for_logging before they reach a log line.
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Serverless platforms timestamp lines themselves
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(LOG_FORMAT_SIMPLE if os.environ.get("VERCEL") == "1" else LOG_FORMAT)
    )
    root.addHandler(handler)

    # One line per catalog request is noise
    logging.getLogger("httpx").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Make shopper input safe to log on one line.

    Line breaks and tabs are escaped, NUL bytes dropped, and the result is
    cut to `max_length` characters with a trailing "...". Empty input
    logs as "N/A".
    """
    if not value:
        return "N/A"
    safe_value = (
        str(value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."
