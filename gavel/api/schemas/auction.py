"""Pydantic schemas for the Auction API."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


# === Enums ===

class RoleSchema(str, Enum):
    """Playing roles."""
    BAT = "BAT"
    WK = "WK"
    AR = "AR"
    BOWL = "BOWL"


class LotStatusSchema(str, Enum):
    """Lot lifecycle status."""
    PENDING = "pending"
    ACTIVE = "active"
    SOLD = "sold"
    UNSOLD = "unsold"


class AuctionPhaseSchema(str, Enum):
    """Auction phase."""
    ACTIVE = "ACTIVE"
    SETTLING = "SETTLING"
    COMPLETE = "COMPLETE"


# === Request Schemas ===

class CreateSessionRequest(BaseModel):
    """Request to create a new auction session."""
    user_team_id: Optional[str] = Field(
        None,
        description="Franchise controlled by the user (omit for an all-AI auction)"
    )
    seed: Optional[int] = Field(None, description="Random seed for a reproducible run")
    auto_run: bool = Field(True, description="Drive the clock from a background tick loop")
    num_sets_per_role: int = Field(10, ge=1, le=40, description="Generated sets per role")
    players_per_set: int = Field(6, ge=1, le=20, description="Generated players per set")
    catalog: Optional[dict[str, list[dict[str, Any]]]] = Field(
        None,
        description="Raw grouped player records keyed by set (replaces the generated catalog)"
    )


class TickRequest(BaseModel):
    """Request to advance the auction clock manually."""
    elapsed_ms: int = Field(..., gt=0, le=60_000, description="Milliseconds to advance")


# === Response Schemas ===

class LotResponse(BaseModel):
    """An athlete on (or off) the block."""
    lot_id: int
    name: str
    role: RoleSchema
    nationality: str
    is_overseas: bool
    batting: int
    bowling: int
    fielding: int
    set_key: str
    base_price: int
    status: LotStatusSchema
    sold_price: Optional[int] = None
    buyer_id: Optional[str] = None


class LogEntryResponse(BaseModel):
    """A resolved lot in the auction log."""
    lot_name: str
    buyer_id: Optional[str] = None
    price: int
    timestamp: str


class AuctionStateResponse(BaseModel):
    """Auction state response."""
    phase: AuctionPhaseSchema
    current_lot: Optional[LotResponse] = None
    current_price: int
    leader_id: Optional[str] = None
    user_team_id: Optional[str] = None
    lot_number: int
    catalog_size: int
    remaining_count: int
    sold_count: int
    unsold_count: int
    time_remaining_ms: int
    settle_remaining_ms: int
    paused: bool
    is_complete: bool
    log: list[LogEntryResponse]


class SessionResponse(BaseModel):
    """Auction session response."""
    session_id: str
    auto_run: bool
    is_running: bool
    error: Optional[str] = None
    state: AuctionStateResponse


class TeamSummaryResponse(BaseModel):
    """Squad composition and spend for one franchise."""
    team_id: str
    name: str
    is_user: bool
    role_counts: dict[RoleSchema, int]
    overseas_count: int
    total_spent: int
    roster_size: int
    purse_remaining: int
    roster: list[LotResponse]


class TeamsResponse(BaseModel):
    """Team summaries for a session."""
    session_id: str
    teams: list[TeamSummaryResponse]


class FranchiseResponse(BaseModel):
    """A default franchise."""
    team_id: str
    name: str
    city: str
    primary_color: str
    secondary_color: str
    personality: str
