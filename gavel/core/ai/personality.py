"""
Bidder Personality System.

Each AI franchise bids with a personality that scales how much it is
willing to pay and how eagerly it raises the paddle.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union


class Personality(Enum):
    """AI bidding temperaments."""
    AGGRESSIVE = "aggressive"      # Pays over the odds, bids often
    BALANCED = "balanced"          # Market rates (default)
    CONSERVATIVE = "conservative"  # Holds the purse back


@dataclass(frozen=True)
class PersonalityProfile:
    """How a personality adjusts valuation and bid probability."""
    personality: Personality
    max_bid_multiplier: float
    probability_shift: float


PERSONALITY_PROFILES: dict[Personality, PersonalityProfile] = {
    Personality.AGGRESSIVE: PersonalityProfile(
        personality=Personality.AGGRESSIVE,
        max_bid_multiplier=1.3,
        probability_shift=0.2,
    ),
    Personality.BALANCED: PersonalityProfile(
        personality=Personality.BALANCED,
        max_bid_multiplier=1.0,
        probability_shift=0.0,
    ),
    Personality.CONSERVATIVE: PersonalityProfile(
        personality=Personality.CONSERVATIVE,
        max_bid_multiplier=0.75,
        probability_shift=-0.1,
    ),
}


def get_personality_profile(personality: Personality) -> PersonalityProfile:
    """Get the profile for a personality."""
    return PERSONALITY_PROFILES.get(personality, PERSONALITY_PROFILES[Personality.BALANCED])


def personality_for_team(
    team_id: str,
    assignments: Optional[Mapping[str, Union[Personality, str]]] = None,
) -> Personality:
    """
    Look up a team's personality, defaulting to BALANCED when unassigned.

    Assignments may use the enum or its string value ("aggressive").

    Raises:
        ValueError: If an assigned value is not a known personality
    """
    if not assignments or assignments.get(team_id) is None:
        return Personality.BALANCED
    return Personality(assignments[team_id])
