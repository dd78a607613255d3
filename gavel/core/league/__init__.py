"""League structure: default franchises and their bidding personalities."""

from gavel.core.league.teams import (
    ALL_TEAM_IDS,
    DEFAULT_PERSONALITIES,
    FRANCHISES,
    FranchiseData,
    default_team_descriptors,
    get_franchise,
    is_valid_team_id,
)

__all__ = [
    "ALL_TEAM_IDS",
    "DEFAULT_PERSONALITIES",
    "FRANCHISES",
    "FranchiseData",
    "default_team_descriptors",
    "get_franchise",
    "is_valid_team_id",
]
