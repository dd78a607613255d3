"""Event system for the auction."""

from gavel.events.bus import EventBus
from gavel.events.types import (
    AuctionCompleteEvent,
    AuctionEvent,
    BidPlacedEvent,
    LotOpenedEvent,
    LotSoldEvent,
    LotUnsoldEvent,
)

__all__ = [
    "AuctionCompleteEvent",
    "AuctionEvent",
    "BidPlacedEvent",
    "EventBus",
    "LotOpenedEvent",
    "LotSoldEvent",
    "LotUnsoldEvent",
]
