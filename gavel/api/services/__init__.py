"""API services for auction session management."""

from gavel.api.services.auction_service import (
    AuctionSession,
    AuctionSessionManager,
    auction_session_manager,
)

__all__ = ["AuctionSession", "AuctionSessionManager", "auction_session_manager"]
