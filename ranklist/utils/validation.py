"""
Input validation utilities for ranklist.

Provides validation functions for common inputs.
"""

import re
from typing import List, Tuple, Sequence


def validate_list_id(list_id: str) -> Tuple[bool, str]:
    """
    Validate a list identifier.

    List ids name files inside the assets directory, so only letters,
    digits, '-' and '_' are accepted.

    Args:
        list_id: List identifier

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not list_id:
        return False, "List ID is empty"

    if len(list_id) > 128:
        return False, "List ID must be at most 128 characters"

    if not re.match(r'^[a-zA-Z0-9][a-zA-Z0-9_-]*$', list_id):
        return False, "List ID can only contain letters, numbers, '-' and '_'"

    return True, ""


def validate_item_ids(item_ids: Sequence[str]) -> Tuple[bool, str]:
    """
    Validate an ordered item id sequence.

    An empty sequence is valid; every id must be non-empty and unique.

    Args:
        item_ids: Item identifiers

    Returns:
        Tuple of (is_valid, error_message)
    """
    duplicates: List[str] = []
    seen = set()
    for item_id in item_ids:
        if not item_id:
            return False, "Item ID is empty"
        if item_id in seen and item_id not in duplicates:
            duplicates.append(item_id)
        seen.add(item_id)

    if duplicates:
        return False, f"Duplicate item IDs: {', '.join(duplicates)}"

    return True, ""
