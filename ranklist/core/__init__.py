"""
Core module for ranklist.

Provides constants, item descriptors and the persisted state records.
"""

from ranklist.core.items import ListInfo, ListItem, LoadedList
from ranklist.core.state import (
    AppState,
    ListState,
    DimensionMismatchError,
    derive_match_totals,
    uniform_abilities,
    validate_win_matrix,
    zero_matrix,
)

__all__ = [
    # Items
    "ListInfo",
    "ListItem",
    "LoadedList",
    # State
    "AppState",
    "ListState",
    "DimensionMismatchError",
    "derive_match_totals",
    "uniform_abilities",
    "validate_win_matrix",
    "zero_matrix",
]
