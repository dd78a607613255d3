"""In-memory auction log for accumulating lot results."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from gavel.core.enums import Role
from gavel.events import (
    AuctionCompleteEvent,
    BidPlacedEvent,
    EventBus,
    LotSoldEvent,
    LotUnsoldEvent,
)


@dataclass
class LogEntry:
    """Single entry in the auction log."""

    timestamp: datetime
    lot_number: int
    event_type: str  # "SOLD", "UNSOLD"
    lot_name: str
    role: Role
    set_key: str
    base_price: int
    buyer_id: Optional[str] = None
    price: int = 0
    is_overseas: bool = False
    bid_count: int = 0  # Bids placed on this lot before it resolved

    @property
    def premium(self) -> int:
        """How far above base price the lot went."""
        if self.buyer_id is None:
            return 0
        return self.price - self.base_price


@dataclass
class TeamResult:
    """Accumulated auction results for one franchise."""

    team_id: str
    players: list[str] = field(default_factory=list)
    total_spent: int = 0
    overseas_count: int = 0
    bids_placed: int = 0
    role_counts: dict[Role, int] = field(default_factory=lambda: {role: 0 for role in Role})

    @property
    def roster_size(self) -> int:
        return len(self.players)

    @property
    def average_price(self) -> float:
        if not self.players:
            return 0.0
        return self.total_spent / len(self.players)


class AuctionLog:
    """
    In-memory accumulator for auction events.

    Subscribes to EventBus for automatic logging of lot results.
    Can be used to generate per-team result tables and markdown output.
    """

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []
        self.team_results: dict[str, TeamResult] = {}
        self.is_complete: bool = False
        self._current_bid_count: int = 0

    def connect_to_event_bus(self, event_bus: EventBus) -> None:
        """Subscribe to events from an event bus."""
        event_bus.subscribe(BidPlacedEvent, self._handle_bid)
        event_bus.subscribe(LotSoldEvent, self._handle_sold)
        event_bus.subscribe(LotUnsoldEvent, self._handle_unsold)
        event_bus.subscribe(AuctionCompleteEvent, self._handle_complete)

    def _get_or_create_team_result(self, team_id: str) -> TeamResult:
        """Get or create team result entry."""
        if team_id not in self.team_results:
            self.team_results[team_id] = TeamResult(team_id=team_id)
        return self.team_results[team_id]

    def _handle_bid(self, event: BidPlacedEvent) -> None:
        self._current_bid_count += 1
        self._get_or_create_team_result(event.team_id).bids_placed += 1

    def _handle_sold(self, event: LotSoldEvent) -> None:
        lot = event.lot
        self.entries.append(LogEntry(
            timestamp=event.timestamp,
            lot_number=event.lot_number,
            event_type="SOLD",
            lot_name=lot.name,
            role=lot.role,
            set_key=lot.set_key,
            base_price=lot.base_price,
            buyer_id=event.buyer_id,
            price=event.price,
            is_overseas=lot.is_overseas,
            bid_count=self._current_bid_count,
        ))
        self._current_bid_count = 0

        result = self._get_or_create_team_result(event.buyer_id)
        result.players.append(lot.name)
        result.total_spent += event.price
        result.role_counts[lot.role] += 1
        if lot.is_overseas:
            result.overseas_count += 1

    def _handle_unsold(self, event: LotUnsoldEvent) -> None:
        lot = event.lot
        self.entries.append(LogEntry(
            timestamp=event.timestamp,
            lot_number=event.lot_number,
            event_type="UNSOLD",
            lot_name=lot.name,
            role=lot.role,
            set_key=lot.set_key,
            base_price=lot.base_price,
            is_overseas=lot.is_overseas,
        ))
        self._current_bid_count = 0

    def _handle_complete(self, event: AuctionCompleteEvent) -> None:
        self.is_complete = True

    @property
    def sold_entries(self) -> list[LogEntry]:
        return [e for e in self.entries if e.event_type == "SOLD"]

    @property
    def unsold_entries(self) -> list[LogEntry]:
        return [e for e in self.entries if e.event_type == "UNSOLD"]

    @property
    def total_spent(self) -> int:
        return sum(e.price for e in self.sold_entries)

    def get_team_result(self, team_id: str) -> TeamResult:
        """Get results for a team (empty if it bought nothing)."""
        return self.team_results.get(team_id, TeamResult(team_id=team_id))

    def get_entries_by_set(self) -> dict[str, list[LogEntry]]:
        """Group entries by originating set, in auction order."""
        by_set: dict[str, list[LogEntry]] = {}
        for entry in self.entries:
            by_set.setdefault(entry.set_key, []).append(entry)
        return by_set

    def top_buys(self, limit: int = 5) -> list[LogEntry]:
        """Most expensive sales, highest first."""
        return sorted(self.sold_entries, key=lambda e: e.price, reverse=True)[:limit]
