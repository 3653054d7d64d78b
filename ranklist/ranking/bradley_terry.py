"""
Bradley-Terry model for pairwise preference ranking.

The Bradley-Terry model assigns a strength (ability) aᵢ to each item,
where the probability that item i is preferred over item j is:

P(i > j) = aᵢ / (aᵢ + aⱼ)

Abilities are estimated from a win-count matrix with the
Minorization-Maximization (MM) algorithm and kept normalized so that
Σ aᵢ = 1 after every fitting pass.
"""

import math
from typing import List, Optional, Sequence

import numpy as np

from ranklist.config.params import EngineParams
from ranklist.core.constants import MIN_ABILITY
from ranklist.core.state import validate_win_matrix, DimensionMismatchError


def _at_least(value: float, floor: float) -> float:
    """Clamp a scalar from below; NaN maps to the floor."""
    return value if value >= floor else floor


def normalize(values: Sequence[float], floor: float = MIN_ABILITY) -> np.ndarray:
    """
    Normalize floor-clamped values to sum to 1.

    If the clamped sum is numerically negligible every entry is reset to
    a uniform 1/n, so the vector never collapses to all-zero.

    Args:
        values: Non-negative values
        floor: Lower bound applied before summing

    Returns:
        Normalized values
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr.copy()

    clamped = np.fmax(arr, floor)
    total = float(np.sum(clamped))
    if total <= np.finfo(float).eps or not math.isfinite(total):
        return np.full(arr.size, 1.0 / arr.size)
    return clamped / total


class RankingEngine:
    """
    Bradley-Terry strength model over a fixed list of items.

    Uses the MM algorithm to refine abilities from a win matrix:
    aᵢ^(t+1) = Wᵢ / Σⱼ (nᵢⱼ / (aᵢ^(t) + aⱼ^(t)))

    where Wᵢ is the number of wins of item i and nᵢⱼ is the number of
    comparisons between i and j in either direction.

    Example:
        >>> engine = RankingEngine.create(3)
        >>> engine.fit([[0, 3, 0], [0, 0, 0], [0, 0, 0]], iterations=10)
        >>> engine.ranking()[0]
        0
    """

    def __init__(
        self,
        abilities: Sequence[float] = (),
        params: Optional[EngineParams] = None
    ):
        """
        Initialize the engine.

        Args:
            abilities: Initial ability vector (floor-clamped)
            params: Engine parameters (defaults if None)
        """
        self.params = params or EngineParams()
        self._abilities = np.fmax(
            np.asarray(list(abilities), dtype=float),
            self.params.min_ability
        ) if len(abilities) else np.zeros(0)

    @classmethod
    def create(cls, count: int, params: Optional[EngineParams] = None) -> 'RankingEngine':
        """
        Create a model with a uniform prior.

        Args:
            count: Number of items
            params: Engine parameters

        Returns:
            RankingEngine with equal abilities summing to 1
        """
        if count <= 0:
            return cls((), params)
        return cls([1.0 / count] * count, params)

    @classmethod
    def from_abilities(
        cls,
        values: Sequence[float],
        params: Optional[EngineParams] = None
    ) -> 'RankingEngine':
        """Adopt an existing ability vector; empty input gives a zero-item model."""
        if not len(values):
            return cls.create(0, params)
        return cls(values, params)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def size(self) -> int:
        """Number of items held by the model."""
        return int(self._abilities.size)

    @property
    def abilities(self) -> List[float]:
        """Copy of the ability vector."""
        return self._abilities.tolist()

    def ability(self, index: int) -> float:
        """Raw ability of one item."""
        return float(self._abilities[index])

    def to_list(self) -> List[float]:
        """Ability vector for persistence."""
        return self._abilities.tolist()

    def ranking(self) -> List[int]:
        """
        Item indices from strongest to weakest.

        Ties keep positional order.
        """
        values = self._abilities
        return sorted(range(self.size), key=lambda i: (-values[i], i))

    # =========================================================================
    # Dimension management
    # =========================================================================

    def ensure_length(self, n: int) -> None:
        """
        Grow or truncate the ability vector to exactly n entries.

        New entries start at 1/n. The vector is renormalized when non-empty.

        Args:
            n: Required number of items
        """
        current = self.size
        if current < n:
            fill = 1.0 / n if n > 0 else 1.0
            self._abilities = np.concatenate(
                [self._abilities, np.full(n - current, fill)]
            )
        elif current > n:
            self._abilities = self._abilities[:n].copy()

        if self.size:
            self._abilities = normalize(self._abilities, self.params.min_ability)

    # =========================================================================
    # Model
    # =========================================================================

    def expected_outcome(self, i: int, j: int) -> float:
        """
        Predicted probability that item i beats item j.

        P(i > j) = aᵢ / (aᵢ + aⱼ)

        Args:
            i: First item index
            j: Second item index

        Returns:
            Win probability for item i (0.5 for an empty model)
        """
        if self.size == 0:
            return 0.5
        floor = self.params.min_ability
        a_i = _at_least(float(self._abilities[i]), floor)
        a_j = _at_least(float(self._abilities[j]), floor)
        return a_i / (a_i + a_j)

    def fit(self, win_matrix: Sequence[Sequence[int]], iterations: int) -> None:
        """
        Run a fixed number of MM fitting passes.

        Self-comparisons on the diagonal are ignored.
        Items without a single recorded win keep their ability for the pass.
        Every update within a pass reads the abilities of the previous pass,
        and the vector is renormalized after each pass.

        Convergence is not checked; callers choose the iteration budget.

        Args:
            win_matrix: Square matrix, m[i][j] = times i beat j
            iterations: Number of passes

        Raises:
            DimensionMismatchError: If the matrix does not match the ability count
        """
        n = validate_win_matrix(win_matrix)
        if n == 0 or iterations <= 0:
            return
        if n != self.size:
            raise DimensionMismatchError(
                f"Win matrix has dimension {n} but the model holds {self.size} "
                f"abilities; call ensure_length() first"
            )

        floor = self.params.min_ability
        wins = np.array(win_matrix, dtype=float)
        np.fill_diagonal(wins, 0.0)
        totals = wins + wins.T
        win_counts = wins.sum(axis=1)

        abilities = self._abilities.copy()
        for _ in range(iterations):
            updated = abilities.copy()

            for i in range(n):
                if win_counts[i] <= np.finfo(float).eps:
                    continue

                # Opponents with at least one comparison in either direction
                opponents = totals[i] > 0
                opponents[i] = False
                if not opponents.any():
                    continue

                denom = float(np.sum(
                    totals[i, opponents] / (abilities[i] + abilities[opponents] + floor)
                ))
                if denom > 0:
                    updated[i] = max(win_counts[i] / denom, floor)

            abilities = normalize(updated, floor)

        self._abilities = abilities

    # =========================================================================
    # Scores
    # =========================================================================

    def log_score(self, index: int) -> float:
        """Natural log of an item's ability (0.0 for unknown items)."""
        if 0 <= index < self.size:
            return math.log(_at_least(float(self._abilities[index]), self.params.min_ability))
        return 0.0

    def display_rating(self, index: int) -> float:
        """
        Human-presentable rating of an item.

        rating = base + scale × ln(aᵢ × n)

        Multiplying by the item count keeps an average item at the base
        rating regardless of list size.

        Args:
            index: Item index (unknown items count as ability 1.0)

        Returns:
            Non-negative display rating
        """
        if 0 <= index < self.size:
            ability = float(self._abilities[index])
        else:
            ability = 1.0
        ability = _at_least(ability, self.params.min_ability)
        count = max(self.size, 1)
        rating = self.params.display_base + self.params.display_scale * math.log(ability * count)
        return max(rating, 0.0)

    def __repr__(self) -> str:
        return f"RankingEngine(size={self.size})"
