"""
Ranking workflow for pairwise comparison sessions.

This module orchestrates the full comparison loop:
1. Open list: load items, reconcile stored history, fit abilities
2. Present matchup: sample the next informative pair
3. Record choice: increment one win-matrix cell, re-fit, resample
4. Persist: flush the application state after every change

State is explicit: the workflow owns the loaded application state and
the open list sessions, and every core call receives its inputs directly.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Any, TYPE_CHECKING

import numpy as np

from ranklist.config.params import EngineParams, SamplerParams
from ranklist.config.settings import Settings, get_settings
from ranklist.core.items import ListInfo, ListItem
from ranklist.core.state import AppState, ListState
from ranklist.matchup.sampler import Matchup, next_matchup
from ranklist.ranking.bradley_terry import RankingEngine
from ranklist.state.reconciler import align, record_outcome
from ranklist.storage.gateway import StateGateway

if TYPE_CHECKING:
    from ranklist.data.loader import ListDirectorySource

logger = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a list has not been opened in this workflow."""

    def __init__(self, list_id: str):
        self.list_id = list_id
        super().__init__(f"List is not open: {list_id}")


class InvalidChoiceError(ValueError):
    """Raised when a choice does not resolve the current matchup."""
    pass


@dataclass
class Standing:
    """One row of the ranked view of a list."""
    rank: int
    item: ListItem
    ability: float
    rating: float
    log_score: float
    matches: int
    wins: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "rank": self.rank,
            "item": self.item.to_dict(),
            "ability": self.ability,
            "rating": self.rating,
            "log_score": self.log_score,
            "matches": self.matches,
            "wins": self.wins,
        }


@dataclass
class ListSession:
    """An open list: items, reconciled state, fitted model and current matchup."""
    list_id: str
    info: ListInfo
    items: List[ListItem]
    state: ListState
    engine: RankingEngine
    matchup: Optional[Matchup] = None
    comparisons: int = 0

    def item_index(self, item_id: str) -> Optional[int]:
        """Position of an item id, or None."""
        return self.state.index_of(item_id)

    def matchup_items(self) -> Optional[Tuple[ListItem, ListItem]]:
        """Items of the current matchup as (left, right), or None when idle."""
        if self.matchup is None:
            return None
        return self.items[self.matchup.left_index], self.items[self.matchup.right_index]


class RankingWorkflow:
    """
    Complete workflow for ranking lists by pairwise preference.

    Example:
        >>> workflow = RankingWorkflow(
        ...     source=ListDirectorySource("assets"),
        ...     gateway=StateGateway(JsonFileBlobStore(".ranklist"))
        ... )
        >>> session = workflow.open_list("fruits")
        >>> left, right = session.matchup_items()
        >>> workflow.record_choice("fruits", session.matchup.left_index)
        >>> for standing in workflow.standings("fruits"):
        ...     print(standing.rank, standing.item.label, round(standing.rating))
    """

    def __init__(
        self,
        source: 'ListDirectorySource',
        gateway: StateGateway,
        settings: Optional[Settings] = None,
        engine_params: Optional[EngineParams] = None,
        sampler_params: Optional[SamplerParams] = None
    ):
        """
        Initialize the workflow and load persisted state.

        Args:
            source: Item source providing list definitions
            gateway: Persistence gateway for the application state
            settings: Settings (global settings if None)
            engine_params: Strength model parameters
            sampler_params: Matchup sampler parameters
        """
        self.source = source
        self.gateway = gateway
        self.settings = settings or get_settings()
        self.engine_params = engine_params or EngineParams()
        self.sampler_params = sampler_params or SamplerParams()

        self.app_state: AppState = gateway.load()
        self._sessions: Dict[str, ListSession] = {}

    @property
    def selected_list_id(self) -> Optional[str]:
        """Most recently opened list."""
        return self.app_state.selected_list_id

    def available_lists(self) -> List[ListInfo]:
        """Lists offered by the item source."""
        return self.source.available_lists()

    def session(self, list_id: str) -> ListSession:
        """
        Get an open list session.

        Raises:
            SessionNotFoundError: If the list has not been opened
        """
        session = self._sessions.get(list_id)
        if session is None:
            raise SessionNotFoundError(list_id)
        return session

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open_list(
        self,
        list_id: str,
        rng: Optional[np.random.Generator] = None
    ) -> ListSession:
        """
        Open (or reopen) a list.

        Loads the items, reconciles the stored history against them, runs
        the initial fitting budget and samples a first matchup.

        Args:
            list_id: List identifier
            rng: Randomness source for sampling

        Returns:
            ListSession for the list

        Raises:
            DataError: If the item source cannot provide the list
        """
        loaded = self.source.load_list(list_id)
        state = align(self.app_state.lists.get(list_id), loaded.item_ids)

        engine = RankingEngine.from_abilities(state.abilities, self.engine_params)
        engine.ensure_length(state.size)
        engine.fit(state.win_matrix, self.settings.initial_fit_iterations)
        state.abilities = engine.to_list()

        session = ListSession(
            list_id=list_id,
            info=loaded.info,
            items=list(loaded.items),
            state=state,
            engine=engine,
        )
        session.matchup = self._sample(session, previous=None, rng=rng)
        self._sessions[list_id] = session

        self.app_state.selected_list_id = list_id
        self.app_state.lists[list_id] = state
        self._persist()

        logger.info(
            f"Opened list '{list_id}': {state.size} items, "
            f"{sum(state.match_totals) // 2} recorded comparisons"
        )
        return session

    def open_selected(self, rng: Optional[np.random.Generator] = None) -> Optional[ListSession]:
        """Reopen the list selected in a previous run, if any."""
        if self.selected_list_id is None:
            return None
        return self.open_list(self.selected_list_id, rng=rng)

    # =========================================================================
    # Comparisons
    # =========================================================================

    def record_choice(
        self,
        list_id: str,
        winner_index: int,
        rng: Optional[np.random.Generator] = None
    ) -> ListSession:
        """
        Resolve the current matchup in favor of one item.

        Args:
            list_id: List identifier
            winner_index: Index of the preferred item (must be in the matchup)
            rng: Randomness source for the next matchup

        Returns:
            Updated ListSession with a fresh matchup

        Raises:
            SessionNotFoundError: If the list is not open
            InvalidChoiceError: If there is no matchup or the winner is not in it
        """
        session = self.session(list_id)
        matchup = session.matchup
        if matchup is None:
            raise InvalidChoiceError(f"List '{list_id}' has no pending matchup")
        if winner_index not in (matchup.left_index, matchup.right_index):
            raise InvalidChoiceError(
                f"Item {winner_index} is not part of the current matchup "
                f"({matchup.left_index} vs {matchup.right_index})"
            )
        loser_index = matchup.other(winner_index)

        state = record_outcome(session.state, winner_index, loser_index)
        session.engine.ensure_length(state.size)
        session.engine.fit(state.win_matrix, self.settings.update_fit_iterations)
        state.abilities = session.engine.to_list()

        session.state = state
        session.comparisons += 1
        session.matchup = self._sample(session, previous=matchup, rng=rng)

        self.app_state.lists[list_id] = state
        self._persist()

        logger.debug(
            f"Recorded '{session.items[winner_index].id}' over "
            f"'{session.items[loser_index].id}' in list '{list_id}'"
        )
        return session

    def record_choice_by_id(
        self,
        list_id: str,
        winner_id: str,
        rng: Optional[np.random.Generator] = None
    ) -> ListSession:
        """
        Resolve the current matchup in favor of the item with this id.

        Raises:
            SessionNotFoundError: If the list is not open
            InvalidChoiceError: If the id is unknown or not in the matchup
        """
        session = self.session(list_id)
        winner_index = session.item_index(winner_id)
        if winner_index is None:
            raise InvalidChoiceError(f"Unknown item in list '{list_id}': {winner_id}")
        return self.record_choice(list_id, winner_index, rng=rng)

    def skip(
        self,
        list_id: str,
        rng: Optional[np.random.Generator] = None
    ) -> ListSession:
        """Replace the current matchup without recording a result."""
        session = self.session(list_id)
        session.matchup = self._sample(session, previous=session.matchup, rng=rng)
        return session

    # =========================================================================
    # Results
    # =========================================================================

    def standings(self, list_id: str) -> List[Standing]:
        """
        Ranked view of an open list, strongest first.

        Raises:
            SessionNotFoundError: If the list is not open
        """
        session = self.session(list_id)
        engine = session.engine
        state = session.state

        standings = []
        for rank, index in enumerate(engine.ranking(), start=1):
            standings.append(Standing(
                rank=rank,
                item=session.items[index],
                ability=engine.ability(index),
                rating=engine.display_rating(index),
                log_score=engine.log_score(index),
                matches=state.match_totals[index],
                wins=state.wins(index),
            ))
        return standings

    # =========================================================================
    # Internals
    # =========================================================================

    def _sample(
        self,
        session: ListSession,
        previous: Optional[Matchup],
        rng: Optional[np.random.Generator]
    ) -> Optional[Matchup]:
        state = session.state
        matchup = next_matchup(
            self.settings.sampler_strategy,
            session.engine.abilities,
            state.win_matrix,
            state.match_totals,
            previous,
            rng,
            self.sampler_params,
        )
        if matchup is None:
            logger.debug(f"No matchup available for list '{session.list_id}'")
        return matchup

    def _persist(self) -> None:
        # Failures are logged by the gateway; the session keeps running
        self.gateway.save(self.app_state)
