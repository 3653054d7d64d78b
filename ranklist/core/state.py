"""
Persisted state for ranklist.

Provides the per-list record (item ids, win matrix, abilities, match totals)
and the process-wide application state holding every list record plus the
currently selected list.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Sequence


WinMatrix = List[List[int]]


class DimensionMismatchError(ValueError):
    """Raised when a win matrix does not line up with the ability vector."""
    pass


def zero_matrix(size: int) -> WinMatrix:
    """Create a square matrix of zeros."""
    return [[0] * size for _ in range(size)]


def validate_win_matrix(win_matrix: Sequence[Sequence[int]], size: int = None) -> int:
    """
    Check that a win matrix is square (and optionally of a given size).

    Args:
        win_matrix: Matrix to check
        size: Expected dimension, or None to accept any square matrix

    Returns:
        The matrix dimension

    Raises:
        DimensionMismatchError: If the matrix is not square or has the wrong size
    """
    n = len(win_matrix)
    for row in win_matrix:
        if len(row) != n:
            raise DimensionMismatchError(
                f"Win matrix is not square: row of length {len(row)} in {n}x{n} matrix"
            )
    if size is not None and n != size:
        raise DimensionMismatchError(
            f"Win matrix has dimension {n}, expected {size}"
        )
    return n


def derive_match_totals(win_matrix: Sequence[Sequence[int]]) -> List[int]:
    """
    Compute comparisons played per item.

    total_i = Σⱼ m[i][j] + Σⱼ m[j][i]  (j ≠ i)
    """
    n = len(win_matrix)
    totals = []
    for i in range(n):
        played = 0
        for j in range(n):
            if i == j:
                continue
            played += win_matrix[i][j] + win_matrix[j][i]
        totals.append(played)
    return totals


def uniform_abilities(size: int) -> List[float]:
    """Uniform ability prior summing to 1."""
    if size <= 0:
        return []
    return [1.0 / size] * size


@dataclass
class ListState:
    """
    Persisted record for one list.

    Attributes:
        item_ids: Item identifiers in positional order
        win_matrix: m[i][j] = times item i beat item j
        abilities: Strength per item, same order as item_ids
        match_totals: Cached comparisons played per item (derivable)
    """
    item_ids: List[str] = field(default_factory=list)
    win_matrix: WinMatrix = field(default_factory=list)
    abilities: List[float] = field(default_factory=list)
    match_totals: List[int] = field(default_factory=list)

    @classmethod
    def empty(cls, item_ids: Sequence[str]) -> 'ListState':
        """Fresh state with no history and a uniform prior."""
        size = len(item_ids)
        return cls(
            item_ids=list(item_ids),
            win_matrix=zero_matrix(size),
            abilities=uniform_abilities(size),
            match_totals=[0] * size,
        )

    @property
    def size(self) -> int:
        """Number of items."""
        return len(self.item_ids)

    def index_of(self, item_id: str) -> Optional[int]:
        """Position of an item id, or None."""
        try:
            return self.item_ids.index(item_id)
        except ValueError:
            return None

    def wins(self, i: int) -> int:
        """Total wins recorded for item i."""
        return sum(self.win_matrix[i])

    def copy(self) -> 'ListState':
        """Deep copy of the record."""
        return ListState(
            item_ids=list(self.item_ids),
            win_matrix=[list(row) for row in self.win_matrix],
            abilities=list(self.abilities),
            match_totals=list(self.match_totals),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "item_ids": list(self.item_ids),
            "win_matrix": [list(row) for row in self.win_matrix],
            "abilities": list(self.abilities),
            "match_totals": list(self.match_totals),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ListState':
        """
        Create from dictionary.

        Self-comparisons on the diagonal are discarded.

        Raises:
            TypeError, ValueError: If the stored shape is malformed
        """
        if not isinstance(data, dict):
            raise TypeError(f"List state must be an object, got {type(data).__name__}")

        item_ids = [str(item_id) for item_id in data.get("item_ids", [])]
        win_matrix = [[int(cell) for cell in row] for row in data.get("win_matrix", [])]
        if any(cell < 0 for row in win_matrix for cell in row):
            raise ValueError("Win matrix cells must be non-negative")
        validate_win_matrix(win_matrix)
        for i, row in enumerate(win_matrix):
            row[i] = 0

        abilities = [float(value) for value in data.get("abilities", [])]
        match_totals = data.get("match_totals")
        if match_totals is None:
            match_totals = derive_match_totals(win_matrix)
        else:
            match_totals = [int(value) for value in match_totals]

        return cls(
            item_ids=item_ids,
            win_matrix=win_matrix,
            abilities=abilities,
            match_totals=match_totals,
        )


@dataclass
class AppState:
    """
    Process-wide application state.

    Loaded once at startup, mutated in memory and flushed after every change.
    """
    selected_list_id: Optional[str] = None
    lists: Dict[str, ListState] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "selected_list_id": self.selected_list_id,
            "lists": {
                list_id: state.to_dict()
                for list_id, state in self.lists.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppState':
        """
        Create from dictionary.

        Raises:
            TypeError, ValueError: If the stored shape is malformed
        """
        if not isinstance(data, dict):
            raise TypeError(f"App state must be an object, got {type(data).__name__}")

        selected = data.get("selected_list_id")
        lists = data.get("lists") or {}
        if not isinstance(lists, dict):
            raise TypeError("App state 'lists' must be an object")

        return cls(
            selected_list_id=str(selected) if selected is not None else None,
            lists={
                str(list_id): ListState.from_dict(entry)
                for list_id, entry in lists.items()
            },
        )
