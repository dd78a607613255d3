"""Valuation Model - how good a lot is for its role, on a 0-100 scale."""

from dataclasses import dataclass

from gavel.core.enums import Role
from gavel.core.models.lot import Lot


@dataclass(frozen=True)
class SkillWeights:
    """Weights applied to the three skill ratings. Sum to 1.0."""
    batting: float
    bowling: float
    fielding: float


ROLE_SKILL_WEIGHTS: dict[Role, SkillWeights] = {
    Role.BAT: SkillWeights(batting=0.7, bowling=0.1, fielding=0.2),
    Role.WK: SkillWeights(batting=0.5, bowling=0.1, fielding=0.4),   # Keeping counts as fielding
    Role.AR: SkillWeights(batting=0.4, bowling=0.4, fielding=0.2),
    Role.BOWL: SkillWeights(batting=0.1, bowling=0.7, fielding=0.2),
}


def calculate_lot_value(lot: Lot) -> float:
    """Weighted skill score for the lot's role."""
    w = ROLE_SKILL_WEIGHTS[lot.role]
    return lot.batting * w.batting + lot.bowling * w.bowling + lot.fielding * w.fielding
