"""
List definitions loaded from an assets directory.

Layout:
    <root>/index.json           JSON array of list ids
    <root>/lists/<list_id>.json JSON array of item labels

Item ids are derived from labels (slugified, de-duplicated) so they stay
stable when a list file is edited or reordered.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from ranklist.core.items import ListInfo, ListItem, LoadedList
from ranklist.utils.text import slugify, display_name, ensure_unique_id
from ranklist.utils.validation import validate_list_id

logger = logging.getLogger(__name__)


class DataError(Exception):
    """Base error for list loading failures."""
    pass


class ListNotFoundError(DataError):
    """Raised when a list id has no definition."""

    def __init__(self, list_id: str):
        self.list_id = list_id
        super().__init__(f"List not found: {list_id}")


class ListParseError(DataError):
    """Raised when a list definition is malformed."""
    pass


class ListDirectorySource:
    """
    Item source reading list definitions from local JSON files.

    Example:
        >>> source = ListDirectorySource("assets")
        >>> [info.id for info in source.available_lists()]
        ['fruits', 'stone_fruit']
        >>> source.load_list("fruits").items[0]
        ListItem(id='green-apple', label='Green Apple')
    """

    INDEX_FILE = "index.json"
    LISTS_DIR = "lists"

    def __init__(self, root: Union[str, Path]):
        """
        Initialize the source.

        Args:
            root: Assets directory
        """
        self.root = Path(root)

    def _read_json(self, path: Path, what: str) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ListParseError(f"Invalid JSON in {what}: {e}") from e

    def available_lists(self) -> List[ListInfo]:
        """
        Lists named in the index file.

        Returns:
            ListInfo per id, in index order

        Raises:
            ListNotFoundError: If the index file is missing
            ListParseError: If the index is not a JSON array of strings
        """
        path = self.root / self.INDEX_FILE
        if not path.exists():
            raise ListNotFoundError(self.INDEX_FILE)

        ids = self._read_json(path, "list index")
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            raise ListParseError("List index must be a JSON array of strings")

        return [ListInfo(id=list_id, label=display_name(list_id)) for list_id in ids]

    def load_list(self, list_id: str) -> LoadedList:
        """
        Load one list and derive item ids.

        Args:
            list_id: List identifier

        Returns:
            LoadedList with items in file order

        Raises:
            ListNotFoundError: If the list has no file (or the id is invalid)
            ListParseError: If the file is malformed, empty or has empty labels
        """
        is_valid, _ = validate_list_id(list_id)
        if not is_valid:
            raise ListNotFoundError(list_id)

        path = self.root / self.LISTS_DIR / f"{list_id}.json"
        if not path.exists():
            raise ListNotFoundError(list_id)

        raw_items = self._read_json(path, f"list '{list_id}'")
        if not isinstance(raw_items, list) or not all(isinstance(i, str) for i in raw_items):
            raise ListParseError(f"List '{list_id}' must be a JSON array of strings")

        if not raw_items:
            raise ListParseError(f"List '{list_id}' does not contain any items")

        seen = set()
        items = []
        for index, label in enumerate(raw_items):
            trimmed = label.strip()
            if not trimmed:
                raise ListParseError(f"Item {index} in list '{list_id}' is empty")

            candidate = slugify(trimmed) or f"item-{index}"
            items.append(ListItem(id=ensure_unique_id(seen, candidate), label=trimmed))

        logger.info(f"Loaded list '{list_id}' with {len(items)} items")

        return LoadedList(
            info=ListInfo(id=list_id, label=display_name(list_id)),
            items=items,
        )
