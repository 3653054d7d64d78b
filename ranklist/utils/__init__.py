"""
Utility module for ranklist.

Provides text helpers, logging configuration, and validation.
"""

from ranklist.utils.text import slugify, display_name, ensure_unique_id
from ranklist.utils.logger_config import setup_logging
from ranklist.utils.validation import validate_list_id, validate_item_ids

__all__ = [
    "slugify",
    "display_name",
    "ensure_unique_id",
    "setup_logging",
    "validate_list_id",
    "validate_item_ids",
]
