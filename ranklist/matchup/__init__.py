"""
Matchup module for ranklist.

Selects which two items to compare next.
"""

from ranklist.matchup.sampler import (
    Matchup,
    sample_matchup,
    sample_uniform_matchup,
    next_matchup,
)

__all__ = [
    "Matchup",
    "sample_matchup",
    "sample_uniform_matchup",
    "next_matchup",
]
