"""
ranklist - Pairwise Comparison Ranking

Rank the items of a list by repeated "which of these two is better?"
decisions. Preferences accumulate in a win matrix, a Bradley-Terry model
turns them into abilities, and an informative sampler picks the next pair.

Key Features:
- Bradley-Terry abilities fitted by minorization-maximization
- Top-biased, closeness-aware, repeat-avoiding matchup sampling
- History reconciliation when a list's items change
- JSON state persistence with safe fallback
- REST API for list sessions
"""

__version__ = "0.1.0"
__author__ = "ranklist Team"

from ranklist.core.items import ListInfo, ListItem, LoadedList
from ranklist.core.state import AppState, ListState
from ranklist.ranking.bradley_terry import RankingEngine
from ranklist.matchup.sampler import Matchup, sample_matchup, sample_uniform_matchup
from ranklist.state.reconciler import align, record_outcome
from ranklist.workflow import RankingWorkflow, ListSession, Standing

__all__ = [
    # Core
    "ListInfo",
    "ListItem",
    "LoadedList",
    "AppState",
    "ListState",
    # Ranking
    "RankingEngine",
    # Matchups
    "Matchup",
    "sample_matchup",
    "sample_uniform_matchup",
    # History
    "align",
    "record_outcome",
    # Workflow
    "RankingWorkflow",
    "ListSession",
    "Standing",
]
