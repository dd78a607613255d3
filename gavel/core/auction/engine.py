"""
Auction Engine - the lot-by-lot state machine.

Implements a live ascending auction where:
- One lot is on the block at a time, with a countdown
- AI franchises raise on a coarse polling cadence, the human at will
- Any accepted bid restarts the countdown
- Countdown expiry sells to the leader, or marks the lot unsold
- A short settle pause follows each sale before the next lot opens

Every transition takes an AuctionState and returns a new one. Time and
randomness come from outside (elapsed milliseconds passed to tick, an
injected random.Random), so a fixed seed replays a run exactly.
"""

import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from gavel.core.ai.bidding_ai import can_bid, interested_bidders
from gavel.core.ai.needs import has_overseas_slot
from gavel.core.ai.personality import Personality
from gavel.core.config import AuctionConfig, get_config
from gavel.core.enums import AuctionPhase, Role
from gavel.core.ladder import next_price
from gavel.core.models.lot import Lot
from gavel.core.models.participant import Participant, TeamDescriptor
from gavel.core.models.state import AuctionLogEntry, AuctionState
from gavel.core.registry import initialize_participants
from gavel.events import (
    AuctionCompleteEvent,
    AuctionEvent,
    BidPlacedEvent,
    EventBus,
    LotOpenedEvent,
    LotSoldEvent,
    LotUnsoldEvent,
)

logger = logging.getLogger(__name__)


class AuctionInvariantError(Exception):
    """Raised when a sale would break a purse or squad invariant."""
    pass


@dataclass
class TeamSummary:
    """Squad composition and spend for one franchise."""
    team_id: str
    role_counts: dict[Role, int] = field(default_factory=dict)
    overseas_count: int = 0
    total_spent: int = 0
    roster_size: int = 0
    purse_remaining: int = 0

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "role_counts": {role.value: count for role, count in self.role_counts.items()},
            "overseas_count": self.overseas_count,
            "total_spent": self.total_spent,
            "roster_size": self.roster_size,
            "purse_remaining": self.purse_remaining,
        }


def team_summary(participant: Participant) -> TeamSummary:
    """Get team stats summary."""
    return TeamSummary(
        team_id=participant.team_id,
        role_counts=participant.role_counts(),
        overseas_count=participant.overseas_count,
        total_spent=participant.total_spent,
        roster_size=participant.roster_size,
        purse_remaining=participant.purse,
    )


def is_complete(state: AuctionState) -> bool:
    """Check if every lot has been classified."""
    return state.phase == AuctionPhase.COMPLETE


class AuctionEngine:
    """
    Drives one auction run.

    The engine holds the fixed inputs (catalog, franchises, rules,
    personalities) and the injected collaborators (random source, clock,
    event bus). The evolving state is passed in and returned.
    """

    def __init__(
        self,
        lots: Sequence[Lot],
        teams: Sequence[TeamDescriptor],
        config: Optional[AuctionConfig] = None,
        rng: Optional[random.Random] = None,
        personalities: Optional[Mapping[str, Personality]] = None,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.lots = tuple(lots)
        self.teams = tuple(teams)
        self.config = config or get_config()
        self.rng = rng if rng is not None else random.Random()
        self.personalities = dict(personalities or {})
        self.event_bus = event_bus
        self._clock = clock

    # === Setup ===

    def initialize(self, user_team_id: Optional[str]) -> AuctionState:
        """
        Create the opening state with the first lot on the block.

        Args:
            user_team_id: The human's franchise, or None for an all-AI run

        Raises:
            ValueError: If user_team_id is not one of the franchises
        """
        participants = initialize_participants(self.teams, user_team_id, self.config.initial_purse)

        state = AuctionState(
            phase=AuctionPhase.ACTIVE,
            current_lot=None,
            current_price=0,
            leader_id=None,
            participants=tuple(participants),
            queue=self.lots,
            user_team_id=user_team_id,
            catalog_size=len(self.lots),
        )
        logger.info(
            f"Auction initialized: {len(self.lots)} lots, {len(participants)} teams, "
            f"user team {user_team_id or 'none'}"
        )
        return self._open_next_lot(state)

    # === Transitions ===

    def tick(self, state: AuctionState, elapsed_ms: int) -> AuctionState:
        """
        Advance the clocks by elapsed_ms.

        While a lot is active, AI polls falling due in this tick run first;
        the first accepted AI bid resets the countdown and ends the tick.
        Otherwise the countdown runs down and, at zero, the lot resolves.
        While settling, the settle delay runs down and the next lot opens.
        """
        if state.paused or state.is_complete or elapsed_ms <= 0:
            return state

        if state.phase == AuctionPhase.SETTLING:
            remaining = state.settle_remaining_ms - elapsed_ms
            if remaining > 0:
                return replace(state, settle_remaining_ms=remaining)
            return self._open_next_lot(state)

        poll_elapsed = state.ai_poll_elapsed_ms + elapsed_ms
        polls_due = poll_elapsed // self.config.ai_poll_interval_ms
        state = replace(state, ai_poll_elapsed_ms=poll_elapsed % self.config.ai_poll_interval_ms)

        for _ in range(polls_due):
            if self.rng.random() >= self.config.ai_poll_chance:
                continue
            polled = self.poll_ai(state)
            if polled is not state:
                return polled

        remaining = state.time_remaining_ms - elapsed_ms
        if remaining > 0:
            return replace(state, time_remaining_ms=remaining)
        return self._expire(replace(state, time_remaining_ms=0))

    def poll_ai(self, state: AuctionState) -> AuctionState:
        """
        Give the AI franchises one chance to raise.

        The first team in the shuffled list of interested bidders takes the
        lead; the others get no bid this poll.
        """
        lot = state.active_lot
        if lot is None or state.paused:
            return state

        bidders = interested_bidders(
            state.participants,
            lot,
            state.current_price,
            state.leader_id,
            exclude_id=state.user_team_id,
            rng=self.rng,
            config=self.config,
            personalities=self.personalities,
        )
        if not bidders:
            return state

        bidder = bidders[0]
        return self._apply_bid(state, bidder.team_id, bidder.bid_amount)

    def submit_human_bid(self, state: AuctionState) -> AuctionState:
        """
        Raise to the next ladder price on behalf of the human.

        Returns the same state unchanged if the bid is not allowed.
        """
        lot = state.active_lot
        user = state.user_participant
        rejection = None

        if lot is None:
            rejection = "no active lot"
        elif state.paused:
            rejection = "auction paused"
        elif user is None:
            rejection = "no user team"
        elif state.leader_id == user.team_id:
            rejection = "already leading"
        elif not can_bid(user, state.current_price, self.config, lot=lot):
            rejection = "not eligible"

        if rejection is None:
            amount = next_price(state.current_price, self.config.bid_increments)
            if amount > user.purse:
                rejection = "insufficient purse"
            else:
                return self._apply_bid(state, user.team_id, amount, is_user=True)

        logger.debug(f"Human bid ignored: {rejection}")
        return state

    def submit_pass(self, state: AuctionState) -> AuctionState:
        """Pass on the current lot. The countdown resolves it as usual."""
        return state

    def pause(self, state: AuctionState) -> AuctionState:
        """Freeze the countdown and AI polling."""
        if state.paused or state.is_complete:
            return state
        return replace(state, paused=True)

    def resume(self, state: AuctionState) -> AuctionState:
        """Resume from a pause without altering elapsed time."""
        if not state.paused:
            return state
        return replace(state, paused=False)

    def is_complete(self, state: AuctionState) -> bool:
        return is_complete(state)

    def run_to_completion(
        self,
        state: AuctionState,
        step_ms: int = 100,
        max_steps: Optional[int] = None,
    ) -> AuctionState:
        """
        Drive tick with a fixed step until the auction is complete.

        Raises:
            RuntimeError: If max_steps ticks pass without completing
        """
        state = self.resume(state)
        steps = 0
        while not state.is_complete:
            if max_steps is not None and steps >= max_steps:
                raise RuntimeError(f"Auction not complete after {max_steps} ticks")
            state = self.tick(state, step_ms)
            steps += 1
        return state

    # === Internals ===

    def _apply_bid(
        self,
        state: AuctionState,
        team_id: str,
        amount: int,
        is_user: bool = False,
    ) -> AuctionState:
        """Record an accepted bid and restart the countdown."""
        if amount <= state.current_price:
            raise ValueError(f"Bid {amount} does not exceed current price {state.current_price}")

        state = replace(
            state,
            current_price=amount,
            leader_id=team_id,
            time_remaining_ms=self.config.bid_window_ms,
        )
        logger.debug(f"{team_id} bids {amount} for {state.current_lot.name}")
        self._emit(state, BidPlacedEvent(
            lot=state.current_lot,
            team_id=team_id,
            amount=amount,
            is_user=is_user,
        ))
        return state

    def _expire(self, state: AuctionState) -> AuctionState:
        if state.leader_id is not None:
            return self._resolve_sold(state)
        return self._resolve_unsold(state)

    def _sale_violation(self, buyer: Optional[Participant], lot: Lot, price: int) -> Optional[str]:
        """Check a pending sale against purse and squad invariants."""
        if buyer is None:
            return "buyer is not a participant"
        if price > buyer.purse:
            return f"price {price} exceeds purse {buyer.purse}"
        if buyer.roster_size >= self.config.max_roster_size:
            return f"squad already at {self.config.max_roster_size}"
        if lot.is_overseas and not has_overseas_slot(buyer, self.config):
            return f"overseas cap of {self.config.max_overseas} reached"
        return None

    def _resolve_sold(self, state: AuctionState) -> AuctionState:
        """Handle lot sold to the current leader."""
        lot = state.current_lot
        price = state.current_price
        buyer = state.participant(state.leader_id)

        violation = self._sale_violation(buyer, lot, price)
        if violation:
            message = f"Rejected sale of {lot.name} to {state.leader_id}: {violation}"
            if self.config.strict_invariants:
                raise AuctionInvariantError(message)
            logger.error(message)
            return self._resolve_unsold(replace(state, leader_id=None))

        sold_lot = lot.mark_sold(buyer.team_id, price)
        participants = tuple(
            p.acquire(sold_lot, price) if p.team_id == buyer.team_id else p
            for p in state.participants
        )

        state = replace(
            state,
            phase=AuctionPhase.SETTLING,
            current_lot=sold_lot,
            participants=participants,
            sold=state.sold + (sold_lot,),
            log=state.log + (AuctionLogEntry(lot.name, buyer.team_id, price, self._clock()),),
            time_remaining_ms=0,
            settle_remaining_ms=self.config.settle_delay_ms,
        )
        logger.info(f"SOLD: {lot.name} to {buyer.team_id} for {price}")
        self._emit(state, LotSoldEvent(lot=sold_lot, buyer_id=buyer.team_id, price=price))

        if self.config.settle_delay_ms <= 0:
            return self._open_next_lot(state)
        return state

    def _resolve_unsold(self, state: AuctionState) -> AuctionState:
        """Handle lot unsold - no settle delay."""
        unsold_lot = state.current_lot.mark_unsold()

        state = replace(
            state,
            current_lot=unsold_lot,
            unsold=state.unsold + (unsold_lot,),
            log=state.log + (AuctionLogEntry(unsold_lot.name, None, 0, self._clock()),),
            time_remaining_ms=0,
        )
        logger.info(f"UNSOLD: {unsold_lot.name}")
        self._emit(state, LotUnsoldEvent(lot=unsold_lot), lot_number=state.resolved_count)

        return self._open_next_lot(state)

    def _open_next_lot(self, state: AuctionState) -> AuctionState:
        """Move to next lot, or complete the auction if none remain."""
        if not state.queue:
            state = replace(
                state,
                phase=AuctionPhase.COMPLETE,
                current_lot=None,
                current_price=0,
                leader_id=None,
                time_remaining_ms=0,
                settle_remaining_ms=0,
                ai_poll_elapsed_ms=0,
            )
            total_spent = sum(lot.sold_price or 0 for lot in state.sold)
            logger.info(
                f"Auction complete: {len(state.sold)} sold, {len(state.unsold)} unsold, "
                f"{total_spent} spent"
            )
            self._emit(state, AuctionCompleteEvent(
                sold_count=len(state.sold),
                unsold_count=len(state.unsold),
                total_spent=total_spent,
            ))
            return state

        lot = state.queue[0].activate()
        state = replace(
            state,
            phase=AuctionPhase.ACTIVE,
            current_lot=lot,
            queue=state.queue[1:],
            current_price=lot.base_price,
            leader_id=None,
            time_remaining_ms=self.config.bid_window_ms,
            settle_remaining_ms=0,
            ai_poll_elapsed_ms=0,
        )
        self._emit(state, LotOpenedEvent(lot=lot))
        return state

    def _emit(self, state: AuctionState, event: AuctionEvent, lot_number: Optional[int] = None) -> None:
        if self.event_bus is None:
            return
        event.lot_number = state.lot_number if lot_number is None else lot_number
        event.catalog_size = state.catalog_size
        self.event_bus.emit(event)
