"""Event types for the auction."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gavel.core.models.lot import Lot


@dataclass
class AuctionEvent:
    """Base class for all auction events."""

    timestamp: datetime = field(default_factory=datetime.now)

    # Progress at time of event
    lot_number: int = 0
    catalog_size: int = 0


@dataclass
class LotOpenedEvent(AuctionEvent):
    """Fired when a lot goes on the block."""

    lot: "Lot" = None


@dataclass
class BidPlacedEvent(AuctionEvent):
    """Fired when a bid is accepted (human or AI)."""

    lot: "Lot" = None
    team_id: str = ""
    amount: int = 0
    is_user: bool = False


@dataclass
class LotSoldEvent(AuctionEvent):
    """Fired when the countdown expires with a leader."""

    lot: "Lot" = None
    buyer_id: str = ""
    price: int = 0


@dataclass
class LotUnsoldEvent(AuctionEvent):
    """Fired when the countdown expires with no bids."""

    lot: "Lot" = None


@dataclass
class AuctionCompleteEvent(AuctionEvent):
    """Fired when every lot has been classified."""

    sold_count: int = 0
    unsold_count: int = 0
    total_spent: int = 0
