"""
Ranking module for ranklist.

Implements the Bradley-Terry strength model fitted with the MM algorithm.
"""

from ranklist.ranking.bradley_terry import RankingEngine, normalize

__all__ = [
    "RankingEngine",
    "normalize",
]
