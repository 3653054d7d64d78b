"""
Matchup selection for pairwise comparisons.

Implements a two-stage weighted sampler that favors informative pairs:
1. First pick: mild bias toward strong items, strong bias toward items
   whose comparisons are few or concentrated on few opponents
2. Second pick: prefer never-compared opponents of similar ability and
   discourage repeating the previous matchup

A uniform sampler is provided as a lower-complexity variant.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from ranklist.config.params import SamplerParams
from ranklist.core.constants import SAMPLER_INFORMATIVE, SAMPLER_UNIFORM
from ranklist.core.state import (
    DimensionMismatchError,
    derive_match_totals,
    validate_win_matrix,
)


@dataclass(frozen=True)
class Matchup:
    """A proposed pair of distinct item indices to compare next."""
    left_index: int
    right_index: int

    def __post_init__(self):
        if self.left_index == self.right_index:
            raise ValueError(f"Matchup needs two distinct items, got {self.left_index} twice")

    def involves(self, i: int, j: int) -> bool:
        """Whether this matchup is the unordered pair {i, j}."""
        return {self.left_index, self.right_index} == {i, j}

    def other(self, index: int) -> int:
        """The opponent of one side of the matchup."""
        if index == self.left_index:
            return self.right_index
        if index == self.right_index:
            return self.left_index
        raise ValueError(f"Item {index} is not part of {self}")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {"left_index": self.left_index, "right_index": self.right_index}


def _sample_index(
    weights: Sequence[float],
    rng: np.random.Generator,
    min_weight: float
) -> Optional[int]:
    """
    Draw one index with probability proportional to its weight.

    Returns None when there are no weights or none is positive and finite.
    """
    if not weights:
        return None
    if all(not math.isfinite(w) or w <= 0.0 for w in weights):
        return None

    sanitized = np.array([
        w if math.isfinite(w) and w > 0.0 else min_weight
        for w in weights
    ])
    probabilities = sanitized / sanitized.sum()
    return int(rng.choice(len(probabilities), p=probabilities))


def _confidence(total_matches: int, total_opponents: int, z: float) -> float:
    """
    Wilson-style confidence that an item is well measured.

    The interval half-width z·√(0.25/m) shrinks with more comparisons and is
    scaled by how much of the opponent pool is still uncovered.
    """
    if total_matches < 1 or total_opponents <= 1:
        return 0.0
    variance_component = math.sqrt(0.25 / total_matches)
    coverage = math.sqrt(
        max(total_opponents - total_matches, 0) / (total_opponents - 1)
    )
    interval = z * variance_component * coverage
    return min(max(1.0 - interval, 0.0), 1.0) ** 2


def sample_matchup(
    abilities: Sequence[float],
    win_matrix: Sequence[Sequence[int]],
    match_totals: Optional[Sequence[int]] = None,
    previous: Optional[Matchup] = None,
    rng: Optional[np.random.Generator] = None,
    params: Optional[SamplerParams] = None
) -> Optional[Matchup]:
    """
    Select the next pair of items to compare.

    First pick weight:
        wᵢ = (aᵢ / Σa)^p × (1 - confidenceᵢ)

    Second pick weight for candidate j:
        wⱼ = aⱼ × e^(-α|a_left - aⱼ|) / (1 + nⱼ) × (penalty if repeat)

    Args:
        abilities: Ability per item
        win_matrix: Square matrix, m[i][j] = times i beat j
        match_totals: Cached comparisons per item (derived when missing)
        previous: Last matchup shown, discouraged from repeating
        rng: Randomness source (fresh generator if None)
        params: Sampler parameters (defaults if None)

    Returns:
        Matchup, or None if fewer than two items or sampling degenerates

    Raises:
        DimensionMismatchError: If abilities and matrix sizes differ
    """
    params = params or SamplerParams()
    count = validate_win_matrix(win_matrix)
    if len(abilities) != count:
        raise DimensionMismatchError(
            f"{len(abilities)} abilities for a {count}x{count} win matrix"
        )
    if count < 2:
        return None

    rng = rng if rng is not None else np.random.default_rng()
    eps = params.min_weight

    if match_totals is None or len(match_totals) != count:
        match_totals = derive_match_totals(win_matrix)

    # Step 1: first pick, biased toward strong and under-measured items
    total_ability = max(sum(abilities), eps)
    total_opponents = count - 1
    first_weights: List[float] = []
    for i in range(count):
        ability_bias = (max(abilities[i], eps) / total_ability) ** params.top_bias_power
        confidence = _confidence(int(match_totals[i]), total_opponents, params.wilson_z)
        uncertainty = max(1.0 - confidence, eps)
        first_weights.append(max(ability_bias * uncertainty, eps))

    left = _sample_index(first_weights, rng, eps)
    if left is None:
        return None

    # Step 2: opponents never compared against `left` take precedence
    comparisons = {
        j: win_matrix[left][j] + win_matrix[j][left]
        for j in range(count) if j != left
    }
    fresh = [j for j, played in comparisons.items() if played == 0]
    candidates = fresh if fresh else list(comparisons)
    if not candidates:
        return None

    second_weights: List[float] = []
    for j in candidates:
        proximity_bias = math.exp(-params.proximity_alpha * abs(abilities[left] - abilities[j]))
        freshness_bias = 1.0 / (1.0 + comparisons[j])
        ability_bias = max(abilities[j], eps)

        weight = ability_bias * proximity_bias * freshness_bias
        if previous is not None and previous.involves(left, j):
            weight *= params.recent_pair_penalty
        second_weights.append(max(weight, eps))

    picked = _sample_index(second_weights, rng, eps)
    if picked is None:
        right = candidates[int(rng.integers(len(candidates)))]
    else:
        right = candidates[picked]

    return Matchup(left_index=left, right_index=right)


def sample_uniform_matchup(
    count: int,
    previous: Optional[Matchup] = None,
    rng: Optional[np.random.Generator] = None
) -> Optional[Matchup]:
    """
    Select a uniformly random pair, ignoring abilities and history.

    The previous pair is never repeated when at least three items exist.

    Args:
        count: Number of items
        previous: Last matchup shown
        rng: Randomness source (fresh generator if None)

    Returns:
        Matchup, or None if fewer than two items
    """
    if count < 2:
        return None

    rng = rng if rng is not None else np.random.default_rng()

    pairs = [(i, j) for i in range(count) for j in range(i + 1, count)]
    if previous is not None and count >= 3:
        pairs = [pair for pair in pairs if not previous.involves(*pair)]

    left, right = pairs[int(rng.integers(len(pairs)))]
    if rng.random() < 0.5:
        left, right = right, left
    return Matchup(left_index=left, right_index=right)


def next_matchup(
    strategy: str,
    abilities: Sequence[float],
    win_matrix: Sequence[Sequence[int]],
    match_totals: Optional[Sequence[int]] = None,
    previous: Optional[Matchup] = None,
    rng: Optional[np.random.Generator] = None,
    params: Optional[SamplerParams] = None
) -> Optional[Matchup]:
    """
    Dispatch to the sampler named by `strategy`.

    Raises:
        ValueError: If the strategy is unknown
    """
    if strategy == SAMPLER_INFORMATIVE:
        return sample_matchup(abilities, win_matrix, match_totals, previous, rng, params)
    if strategy == SAMPLER_UNIFORM:
        return sample_uniform_matchup(len(win_matrix), previous, rng)
    raise ValueError(f"Unknown sampler strategy: {strategy}")
