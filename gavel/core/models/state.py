"""Auction state - the single value threaded through every transition."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from gavel.core.enums import AuctionPhase
from gavel.core.models.lot import Lot
from gavel.core.models.participant import Participant


@dataclass(frozen=True)
class AuctionLogEntry:
    """One resolution in the auction log."""
    lot_name: str
    buyer_id: Optional[str]  # None if unsold
    price: int
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_sale(self) -> bool:
        return self.buyer_id is not None

    def to_dict(self) -> dict:
        return {
            "lot_name": self.lot_name,
            "buyer_id": self.buyer_id,
            "price": self.price,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class AuctionState:
    """
    Complete state of one auction run.

    Transitions never mutate a state; they return a new one built with
    dataclasses.replace, so callers can keep old states for history.

    Flow:
    1. ACTIVE: current_lot on the block, countdown running
    2. Countdown expires with a leader -> lot sold, SETTLING
    3. Countdown expires without a leader -> lot unsold, next lot ACTIVE
    4. Queue exhausted -> COMPLETE
    """
    phase: AuctionPhase
    current_lot: Optional[Lot]
    current_price: int
    leader_id: Optional[str]
    participants: tuple[Participant, ...]
    queue: tuple[Lot, ...] = ()
    sold: tuple[Lot, ...] = ()
    unsold: tuple[Lot, ...] = ()
    log: tuple[AuctionLogEntry, ...] = ()
    user_team_id: Optional[str] = None
    catalog_size: int = 0

    # Clocks (milliseconds)
    time_remaining_ms: int = 0
    settle_remaining_ms: int = 0
    ai_poll_elapsed_ms: int = 0
    paused: bool = False

    @property
    def is_complete(self) -> bool:
        return self.phase == AuctionPhase.COMPLETE

    @property
    def active_lot(self) -> Optional[Lot]:
        """The lot under bidding, or None while settling or complete."""
        if self.phase == AuctionPhase.ACTIVE:
            return self.current_lot
        return None

    @property
    def resolved_count(self) -> int:
        return len(self.sold) + len(self.unsold)

    @property
    def lot_number(self) -> int:
        """1-based position of the current lot in the catalog."""
        if self.phase == AuctionPhase.ACTIVE:
            return self.resolved_count + 1
        return self.resolved_count

    def participant(self, team_id: str) -> Optional[Participant]:
        """Get a participant by team ID."""
        for participant in self.participants:
            if participant.team_id == team_id:
                return participant
        return None

    @property
    def user_participant(self) -> Optional[Participant]:
        if self.user_team_id is None:
            return None
        return self.participant(self.user_team_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "phase": self.phase.name,
            "current_lot": self.current_lot.to_dict() if self.current_lot else None,
            "current_price": self.current_price,
            "leader_id": self.leader_id,
            "user_team_id": self.user_team_id,
            "lot_number": self.lot_number,
            "catalog_size": self.catalog_size,
            "remaining_count": len(self.queue),
            "sold_count": len(self.sold),
            "unsold_count": len(self.unsold),
            "time_remaining_ms": self.time_remaining_ms,
            "settle_remaining_ms": self.settle_remaining_ms,
            "paused": self.paused,
            "is_complete": self.is_complete,
            "log": [entry.to_dict() for entry in self.log],
        }
