"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# =============================================================================
# List Schemas
# =============================================================================

class ListInfoSchema(BaseModel):
    """An available list."""
    id: str
    label: str


class ListsResponse(BaseModel):
    """Available lists and the currently selected list."""
    lists: List[ListInfoSchema]
    selected_list_id: Optional[str] = None


class ItemSchema(BaseModel):
    """A rankable item."""
    id: str
    label: str


# =============================================================================
# Matchup Schemas
# =============================================================================

class MatchupSchema(BaseModel):
    """A pair of items to compare."""
    left_index: int
    right_index: int
    left: ItemSchema
    right: ItemSchema


class MatchupResponse(BaseModel):
    """Current matchup of a list (null when nothing can be shown)."""
    list_id: str
    matchup: Optional[MatchupSchema] = None


class ChoiceRequest(BaseModel):
    """Resolve the current matchup."""
    winner_id: str = Field(..., description="Id of the preferred item")


# =============================================================================
# Standings Schemas
# =============================================================================

class StandingSchema(BaseModel):
    """One row of the ranked list."""
    rank: int
    item: ItemSchema
    ability: float
    rating: float
    log_score: float
    matches: int
    wins: int


class StandingsResponse(BaseModel):
    """Ranked view of a list."""
    list_id: str
    standings: List[StandingSchema]


class SessionResponse(BaseModel):
    """Full view of an open list."""
    list_id: str
    label: str
    items: List[ItemSchema]
    matchup: Optional[MatchupSchema] = None
    standings: List[StandingSchema]
    comparisons: int = Field(0, description="Choices recorded since the list was opened")


# =============================================================================
# Common Schemas
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    storage_writable: bool
    timestamp: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None
    code: str
