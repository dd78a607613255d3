"""
AI Bidding Strategy.

Decides, for each computer-controlled franchise that is not already
leading, whether to raise the paddle on the current lot.

Decision flow:
1. Eligibility gates (leading, squad full, overseas cap, role full)
2. Role urgency from the squad needs
3. Maximum willingness to pay from value, purse per open slot,
   urgency and personality, capped by the purse minus the reserve
4. Next ladder price vs maximum; bid probability falls off as the
   price approaches the maximum
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from gavel.core.ai.needs import has_overseas_slot, minimum_reserve, role_urgency
from gavel.core.ai.personality import (
    Personality,
    get_personality_profile,
    personality_for_team,
)
from gavel.core.ai.valuation import calculate_lot_value
from gavel.core.config import AuctionConfig, get_config
from gavel.core.ladder import next_price
from gavel.core.models.lot import Lot
from gavel.core.models.participant import Participant

logger = logging.getLogger(__name__)

URGENCY_PROBABILITY_WEIGHT = 0.3


@dataclass(frozen=True)
class BidDecision:
    """Outcome of one AI bidding decision."""
    will_bid: bool
    bid_amount: int = 0
    max_bid: int = 0
    urgency: float = 0.0
    probability: float = 0.0
    reason: str = ""


@dataclass(frozen=True)
class InterestedBidder:
    """A franchise that wants to raise on the current lot."""
    team_id: str
    bid_amount: int


def can_bid(
    participant: Participant,
    current_price: int,
    config: Optional[AuctionConfig] = None,
    lot: Optional[Lot] = None,
) -> bool:
    """
    Check if a team has a free slot and enough purse above its reserve.

    When a lot is given, an overseas lot also needs a free overseas slot.
    """
    config = config or get_config()
    slots_remaining = config.max_roster_size - participant.roster_size
    available_purse = participant.purse - minimum_reserve(participant, config)

    if lot is not None and lot.is_overseas and not has_overseas_slot(participant, config):
        return False
    return slots_remaining > 0 and available_purse > current_price


def ineligibility_reason(
    participant: Participant,
    lot: Lot,
    leader_id: Optional[str],
    config: Optional[AuctionConfig] = None,
) -> Optional[str]:
    """Return why a team cannot bid on this lot at all, or None if it can."""
    config = config or get_config()

    if leader_id == participant.team_id:
        return "already_leading"
    if participant.roster_size >= config.max_roster_size:
        return "squad_full"
    if lot.is_overseas and not has_overseas_slot(participant, config):
        return "overseas_cap"

    needed, _ = role_urgency(participant, lot.role, config)
    if not needed and participant.roster_size >= config.min_roster_size:
        return "role_full"
    return None


def calculate_max_bid(
    participant: Participant,
    lot: Lot,
    personality: Personality = Personality.BALANCED,
    config: Optional[AuctionConfig] = None,
) -> int:
    """
    Calculate the maximum a team would pay for a lot.

    Never below the lot's base price; the caller's ladder check decides
    whether that floor is actually reachable.
    """
    config = config or get_config()
    profile = get_personality_profile(personality)
    _, urgency = role_urgency(participant, lot.role, config)

    lot_value = calculate_lot_value(lot)
    slots_left = max(1, config.max_roster_size - participant.roster_size)
    per_slot_budget = participant.purse / slots_left

    max_bid = (lot_value / 100) * per_slot_budget * (1 + urgency)
    max_bid *= profile.max_bid_multiplier

    # Keep enough back to fill the minimum squad
    reserve = minimum_reserve(participant, config)
    max_bid = min(max_bid, participant.purse - reserve)

    max_bid = max(max_bid, lot.base_price)

    return math.floor(max_bid)


def decide(
    participant: Participant,
    lot: Lot,
    current_price: int,
    leader_id: Optional[str],
    rng: Optional[random.Random] = None,
    config: Optional[AuctionConfig] = None,
    personality: Personality = Personality.BALANCED,
) -> BidDecision:
    """
    Decide if an AI team should raise on the current lot.

    Args:
        participant: The deciding team
        lot: Lot on the block
        current_price: Standing bid
        leader_id: Team holding the standing bid, if any
        rng: Random source for the bid draw (injected for reproducibility)
        config: Auction rules
        personality: The team's bidding personality

    Returns:
        BidDecision with will_bid and, when bidding, the next ladder price
    """
    config = config or get_config()
    rng = rng if rng is not None else random.Random()

    reason = ineligibility_reason(participant, lot, leader_id, config)
    if reason:
        return BidDecision(will_bid=False, reason=reason)

    _, urgency = role_urgency(participant, lot.role, config)
    max_bid = calculate_max_bid(participant, lot, personality, config)
    candidate = next_price(current_price, config.bid_increments)

    if candidate > max_bid:
        return BidDecision(will_bid=False, max_bid=max_bid, urgency=urgency, reason="over_max")

    # Less likely to bid the closer the price gets to the maximum
    bid_ratio = candidate / max_bid
    probability = 1 - bid_ratio ** 2
    probability += get_personality_profile(personality).probability_shift
    probability += urgency * URGENCY_PROBABILITY_WEIGHT

    will_bid = rng.random() < probability

    return BidDecision(
        will_bid=will_bid,
        bid_amount=candidate if will_bid else 0,
        max_bid=max_bid,
        urgency=urgency,
        probability=probability,
        reason="bid" if will_bid else "hesitated",
    )


def interested_bidders(
    participants: Sequence[Participant],
    lot: Lot,
    current_price: int,
    leader_id: Optional[str],
    exclude_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
    config: Optional[AuctionConfig] = None,
    personalities: Optional[Mapping[str, Personality]] = None,
) -> list[InterestedBidder]:
    """
    Get all AI teams that want to raise, in random order.

    The excluded team (the human) bids manually and is skipped.
    """
    config = config or get_config()
    rng = rng if rng is not None else random.Random()

    interested = []
    for participant in participants:
        if participant.team_id == exclude_id:
            continue

        decision = decide(
            participant,
            lot,
            current_price,
            leader_id,
            rng=rng,
            config=config,
            personality=personality_for_team(participant.team_id, personalities),
        )
        if decision.will_bid:
            interested.append(InterestedBidder(participant.team_id, decision.bid_amount))

    # Shuffle to randomize who bids first
    rng.shuffle(interested)

    if interested:
        logger.debug(
            f"{len(interested)} teams interested in {lot.name} at {current_price}: "
            f"{', '.join(b.team_id for b in interested)}"
        )
    return interested
