"""
Reconciliation of persisted list state with a freshly loaded item sequence.

History follows item identifiers, not positions: when items are added,
removed or reordered, surviving abilities and win-matrix cells are moved to
the new positions of their ids, new items start without history and
removed items are dropped.
"""

import logging
from typing import Dict, Optional, Sequence

from ranklist.core.constants import MIN_ABILITY
from ranklist.core.state import (
    ListState,
    derive_match_totals,
    uniform_abilities,
)
from ranklist.utils.validation import validate_item_ids

logger = logging.getLogger(__name__)


def _check_item_ids(item_ids: Sequence[str]) -> None:
    is_valid, error = validate_item_ids(item_ids)
    if not is_valid:
        raise ValueError(error)


def _is_aligned(state: ListState, item_ids: Sequence[str]) -> bool:
    """Same ids in the same order and a matrix of matching dimensions."""
    n = len(item_ids)
    if list(state.item_ids) != list(item_ids):
        return False
    if len(state.win_matrix) != n:
        return False
    return all(len(row) == n for row in state.win_matrix)


def align(existing: Optional[ListState], current_item_ids: Sequence[str]) -> ListState:
    """
    Align persisted state with the current item sequence.

    Cases:
    1. No existing state: fresh zero state with a uniform prior
    2. Same ids, same order: copy with match totals recomputed
    3. Anything else: rebuild, remapping history by item id

    The function never mutates `existing` and is idempotent:
    align(align(s, ids), ids) == align(s, ids).

    Args:
        existing: Previously persisted state, if any
        current_item_ids: Item ids in their current positional order

    Returns:
        ListState sized and ordered for current_item_ids

    Raises:
        ValueError: If current_item_ids contains duplicates
    """
    _check_item_ids(current_item_ids)
    n = len(current_item_ids)

    if existing is None:
        return ListState.empty(current_item_ids)

    if _is_aligned(existing, current_item_ids):
        aligned = existing.copy()
        if len(aligned.abilities) != n:
            aligned.abilities = _resize_abilities(aligned.abilities, n)
        aligned.match_totals = derive_match_totals(aligned.win_matrix)
        return aligned

    # Explicit mapping table from id to old position
    old_index: Dict[str, int] = {
        item_id: index for index, item_id in enumerate(existing.item_ids)
    }
    old_size = len(existing.win_matrix)

    rebuilt = ListState.empty(current_item_ids)
    survivors = 0
    for new_i, item_id in enumerate(current_item_ids):
        old_i = old_index.get(item_id)
        if old_i is None:
            continue
        survivors += 1

        if old_i < len(existing.abilities):
            value = existing.abilities[old_i]
            rebuilt.abilities[new_i] = value if value >= MIN_ABILITY else MIN_ABILITY

        for new_j, other_id in enumerate(current_item_ids):
            if new_j == new_i:
                continue
            old_j = old_index.get(other_id)
            if old_j is None or old_i >= old_size or old_j >= len(existing.win_matrix[old_i]):
                continue
            rebuilt.win_matrix[new_i][new_j] = existing.win_matrix[old_i][old_j]

    rebuilt.match_totals = derive_match_totals(rebuilt.win_matrix)

    logger.debug(
        f"Reconciled list state: {len(existing.item_ids)} -> {n} items, "
        f"{survivors} kept, {n - survivors} new, "
        f"{len(existing.item_ids) - survivors} dropped"
    )
    return rebuilt


def _resize_abilities(abilities: Sequence[float], n: int) -> list:
    """Pad with the uniform prior or truncate to n entries."""
    fill = uniform_abilities(n)
    resized = [value if value >= MIN_ABILITY else MIN_ABILITY for value in abilities[:n]]
    resized.extend(fill[len(resized):])
    return resized


def record_outcome(state: ListState, winner: int, loser: int) -> ListState:
    """
    Record one comparison result.

    Args:
        state: Current list state
        winner: Index of the preferred item
        loser: Index of the other item

    Returns:
        New ListState with m[winner][loser] incremented and totals refreshed

    Raises:
        ValueError: If the indices are equal or out of range
    """
    if winner == loser:
        raise ValueError("An item cannot be compared against itself")
    for index in (winner, loser):
        if not 0 <= index < state.size:
            raise ValueError(f"Item index {index} out of range for {state.size} items")

    updated = state.copy()
    updated.win_matrix[winner][loser] += 1
    updated.match_totals = derive_match_totals(updated.win_matrix)
    return updated
