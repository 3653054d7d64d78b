"""
List comparison API endpoints.

Lets a client:
1. Discover the available lists
2. Open a list and receive its first matchup
3. Submit a choice for the current matchup and receive the next one
4. Read the current standings
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ranklist.api.dependencies import get_workflow
from ranklist.api.schemas import (
    ChoiceRequest,
    ErrorResponse,
    ItemSchema,
    ListInfoSchema,
    ListsResponse,
    MatchupResponse,
    MatchupSchema,
    SessionResponse,
    StandingSchema,
    StandingsResponse,
)
from ranklist.data.loader import DataError, ListNotFoundError, ListParseError
from ranklist.workflow import (
    InvalidChoiceError,
    ListSession,
    RankingWorkflow,
    SessionNotFoundError,
)


router = APIRouter(prefix="/lists", tags=["lists"])


def _matchup_schema(session: ListSession) -> Optional[MatchupSchema]:
    pair = session.matchup_items()
    if pair is None:
        return None
    left, right = pair
    return MatchupSchema(
        **session.matchup.to_dict(),
        left=ItemSchema(**left.to_dict()),
        right=ItemSchema(**right.to_dict()),
    )


def _standing_schemas(workflow: RankingWorkflow, list_id: str) -> List[StandingSchema]:
    return [
        StandingSchema(**standing.to_dict())
        for standing in workflow.standings(list_id)
    ]


def _session_response(workflow: RankingWorkflow, session: ListSession) -> SessionResponse:
    return SessionResponse(
        list_id=session.list_id,
        label=session.info.label,
        items=[ItemSchema(**item.to_dict()) for item in session.items],
        matchup=_matchup_schema(session),
        standings=_standing_schemas(workflow, session.list_id),
        comparisons=session.comparisons,
    )


def _open_session(workflow: RankingWorkflow, list_id: str) -> ListSession:
    try:
        return workflow.session(list_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "",
    response_model=ListsResponse,
    summary="List available lists",
)
async def list_lists(workflow: RankingWorkflow = Depends(get_workflow)):
    """Lists offered by the assets directory, plus the selected list."""
    try:
        infos = workflow.available_lists()
    except DataError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return ListsResponse(
        lists=[ListInfoSchema(**info.to_dict()) for info in infos],
        selected_list_id=workflow.selected_list_id,
    )


@router.post(
    "/{list_id}/open",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Open a list",
    description="Load a list, reconcile its stored history and sample a first matchup."
)
async def open_list(list_id: str, workflow: RankingWorkflow = Depends(get_workflow)):
    """Open (or reopen) a list."""
    try:
        session = workflow.open_list(list_id)
    except ListNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ListParseError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return _session_response(workflow, session)


@router.get(
    "/{list_id}/matchup",
    response_model=MatchupResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get the current matchup",
)
async def get_matchup(list_id: str, workflow: RankingWorkflow = Depends(get_workflow)):
    """Current matchup of an open list; null when fewer than two items exist."""
    session = _open_session(workflow, list_id)
    return MatchupResponse(list_id=list_id, matchup=_matchup_schema(session))


@router.post(
    "/{list_id}/choices",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    summary="Submit a choice",
    description="Record the preferred item of the current matchup and sample the next one."
)
async def submit_choice(
    list_id: str,
    choice: ChoiceRequest,
    workflow: RankingWorkflow = Depends(get_workflow)
):
    """Record a choice for the current matchup."""
    _open_session(workflow, list_id)
    try:
        session = workflow.record_choice_by_id(list_id, choice.winner_id)
    except InvalidChoiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return _session_response(workflow, session)


@router.post(
    "/{list_id}/skip",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Skip the current matchup",
)
async def skip_matchup(list_id: str, workflow: RankingWorkflow = Depends(get_workflow)):
    """Replace the current matchup without recording a result."""
    _open_session(workflow, list_id)
    session = workflow.skip(list_id)
    return _session_response(workflow, session)


@router.get(
    "/{list_id}/standings",
    response_model=StandingsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get standings",
)
async def get_standings(list_id: str, workflow: RankingWorkflow = Depends(get_workflow)):
    """Items of an open list ordered by ability."""
    _open_session(workflow, list_id)
    return StandingsResponse(
        list_id=list_id,
        standings=_standing_schemas(workflow, list_id),
    )
