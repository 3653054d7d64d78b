"""
Logging configuration for ranklist.

All modules log through `logging.getLogger(__name__)`, so everything lands
under the `ranklist` logger tree configured here.
"""

import logging
import sys
from typing import List, Optional


ROOT_LOGGER = "ranklist"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Optional[str]) -> int:
    if level is None:
        from ranklist.config.settings import get_settings
        level = get_settings().log_level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ranklist logger tree.

    Handlers installed by an earlier call are replaced, so the API lifespan
    and the CLI can both call this safely.

    Args:
        level: Level name (LOG_LEVEL setting if None)
        format_string: Record format (DEFAULT_FORMAT if None)
        log_file: Also append records to this file

    Returns:
        The `ranklist` logger
    """
    numeric_level = _resolve_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    ranklist_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(ranklist_logger.handlers):
        ranklist_logger.removeHandler(handler)
        handler.close()

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        ranklist_logger.addHandler(handler)
    ranklist_logger.setLevel(numeric_level)

    return ranklist_logger
