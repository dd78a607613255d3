"""Live auction state machine."""

from gavel.core.auction.engine import (
    AuctionEngine,
    AuctionInvariantError,
    TeamSummary,
    is_complete,
    team_summary,
)

__all__ = [
    "AuctionEngine",
    "AuctionInvariantError",
    "TeamSummary",
    "is_complete",
    "team_summary",
]
