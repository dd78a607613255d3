"""
AI Systems for computer-controlled franchises.

Provides:
- Lot valuation (calculate_lot_value)
- Squad needs (calculate_team_needs)
- Bidding personalities (Personality)
- Bid decisions (decide, interested_bidders)
"""

from gavel.core.ai.bidding_ai import (
    BidDecision,
    InterestedBidder,
    calculate_max_bid,
    can_bid,
    decide,
    ineligibility_reason,
    interested_bidders,
)
from gavel.core.ai.needs import (
    TeamNeeds,
    calculate_team_needs,
    minimum_reserve,
    role_urgency,
)
from gavel.core.ai.personality import (
    PERSONALITY_PROFILES,
    Personality,
    PersonalityProfile,
    get_personality_profile,
    personality_for_team,
)
from gavel.core.ai.valuation import ROLE_SKILL_WEIGHTS, SkillWeights, calculate_lot_value

__all__ = [
    # Bidding
    "BidDecision",
    "InterestedBidder",
    "calculate_max_bid",
    "can_bid",
    "decide",
    "ineligibility_reason",
    "interested_bidders",
    # Needs
    "TeamNeeds",
    "calculate_team_needs",
    "minimum_reserve",
    "role_urgency",
    # Personality
    "PERSONALITY_PROFILES",
    "Personality",
    "PersonalityProfile",
    "get_personality_profile",
    "personality_for_team",
    # Valuation
    "ROLE_SKILL_WEIGHTS",
    "SkillWeights",
    "calculate_lot_value",
]
