"""
Squad Needs Calculator.

Derives what a franchise still has to buy from what is already on its
roster. Everything here is recomputed from the roster on every call.
"""

from dataclasses import dataclass, field
from typing import Optional

from gavel.core.config import AuctionConfig, get_config
from gavel.core.enums import Role
from gavel.core.models.participant import Participant

# Urgency for a role whose minimum is met but which still has room
TOP_UP_URGENCY = 0.3


@dataclass
class TeamNeeds:
    """Remaining squad gaps for one franchise."""
    category_gaps: dict[Role, int] = field(default_factory=dict)
    overseas_remaining: int = 0
    total_gap: int = 0  # Players short of the minimum squad; can be negative

    @property
    def effective_total_gap(self) -> int:
        return max(0, self.total_gap)

    def gap(self, role: Role) -> int:
        return self.category_gaps.get(role, 0)

    def to_dict(self) -> dict:
        return {
            "category_gaps": {role.value: gap for role, gap in self.category_gaps.items()},
            "overseas_remaining": self.overseas_remaining,
            "total_gap": self.total_gap,
        }


def calculate_team_needs(participant: Participant, config: Optional[AuctionConfig] = None) -> TeamNeeds:
    """Calculate remaining needs for a team."""
    config = config or get_config()
    counts = participant.role_counts()

    return TeamNeeds(
        category_gaps={
            role: max(0, config.requirement(role).min - counts[role])
            for role in Role
        },
        overseas_remaining=config.max_overseas - participant.overseas_count,
        total_gap=config.min_roster_size - participant.roster_size,
    )


def role_urgency(
    participant: Participant,
    role: Role,
    config: Optional[AuctionConfig] = None,
) -> tuple[bool, float]:
    """
    How badly a team needs another player of this role.

    Returns:
        (needed, urgency) where urgency is 1 - count/min below the minimum,
        0.3 between minimum and maximum, and 0 once the role is full
    """
    config = config or get_config()
    current = participant.role_count(role)
    req = config.requirement(role)

    if current < req.min:
        return True, 1 - (current / req.min)
    if current < req.max:
        return True, TOP_UP_URGENCY
    return False, 0.0


def minimum_reserve(participant: Participant, config: Optional[AuctionConfig] = None) -> int:
    """Purse that must be held back to still reach the minimum squad size."""
    config = config or get_config()
    open_minimum_slots = config.min_roster_size - participant.roster_size - 1
    return max(0, open_minimum_slots) * config.min_increment_unit


def has_overseas_slot(participant: Participant, config: Optional[AuctionConfig] = None) -> bool:
    config = config or get_config()
    return participant.overseas_count < config.max_overseas
