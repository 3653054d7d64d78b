"""
Data module for ranklist.

Loads list definitions from the assets directory.
"""

from ranklist.data.loader import (
    ListDirectorySource,
    DataError,
    ListNotFoundError,
    ListParseError,
)

__all__ = [
    "ListDirectorySource",
    "DataError",
    "ListNotFoundError",
    "ListParseError",
]
