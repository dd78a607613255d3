"""Pydantic schemas for API request/response models."""

from gavel.api.schemas.auction import (
    AuctionPhaseSchema,
    AuctionStateResponse,
    CreateSessionRequest,
    FranchiseResponse,
    LogEntryResponse,
    LotResponse,
    LotStatusSchema,
    RoleSchema,
    SessionResponse,
    TeamSummaryResponse,
    TeamsResponse,
    TickRequest,
)

__all__ = [
    # Enums
    "AuctionPhaseSchema",
    "LotStatusSchema",
    "RoleSchema",
    # Requests
    "CreateSessionRequest",
    "TickRequest",
    # Responses
    "AuctionStateResponse",
    "FranchiseResponse",
    "LogEntryResponse",
    "LotResponse",
    "SessionResponse",
    "TeamSummaryResponse",
    "TeamsResponse",
]
