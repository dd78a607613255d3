"""
Franchise League Data.

This module contains the default league structure:
- 10 franchises
- Team metadata (names, cities, colors)
- Default AI bidding personality per franchise
"""

from dataclasses import dataclass

from gavel.core.ai.personality import Personality
from gavel.core.models.participant import TeamDescriptor


@dataclass(frozen=True)
class FranchiseData:
    """
    Static data for a franchise.

    This is the "template" data - immutable information about each team.
    """
    team_id: str  # "CHE"
    name: str  # "Chennai Super Kings"
    city: str  # "Chennai"
    primary_color: str  # Hex color
    secondary_color: str
    default_personality: Personality = Personality.BALANCED

    def to_descriptor(self) -> TeamDescriptor:
        """Build the auction-facing descriptor, colors passed through as branding."""
        return TeamDescriptor(
            team_id=self.team_id,
            name=self.name,
            branding={
                "city": self.city,
                "primary_color": self.primary_color,
                "secondary_color": self.secondary_color,
            },
        )


# =============================================================================
# Default Franchises (10 Teams)
# =============================================================================

FRANCHISES: dict[str, FranchiseData] = {
    "CHE": FranchiseData(
        team_id="CHE",
        name="Chennai Super Kings",
        city="Chennai",
        primary_color="#FDB913",
        secondary_color="#0081E9",
        default_personality=Personality.CONSERVATIVE,
    ),
    "MUM": FranchiseData(
        team_id="MUM",
        name="Mumbai Indians",
        city="Mumbai",
        primary_color="#004BA0",
        secondary_color="#D1AB3E",
        default_personality=Personality.AGGRESSIVE,
    ),
    "KOL": FranchiseData(
        team_id="KOL",
        name="Kolkata Knight Riders",
        city="Kolkata",
        primary_color="#3A225D",
        secondary_color="#B3A123",
        default_personality=Personality.BALANCED,
    ),
    "BLR": FranchiseData(
        team_id="BLR",
        name="Royal Challengers Bengaluru",
        city="Bengaluru",
        primary_color="#EC1C24",
        secondary_color="#2B2A29",
        default_personality=Personality.AGGRESSIVE,
    ),
    "HYD": FranchiseData(
        team_id="HYD",
        name="Sunrisers Hyderabad",
        city="Hyderabad",
        primary_color="#FF822A",
        secondary_color="#000000",
        default_personality=Personality.BALANCED,
    ),
    "DEL": FranchiseData(
        team_id="DEL",
        name="Delhi Capitals",
        city="Delhi",
        primary_color="#17479E",
        secondary_color="#EF1B23",
        default_personality=Personality.AGGRESSIVE,
    ),
    "RAJ": FranchiseData(
        team_id="RAJ",
        name="Rajasthan Royals",
        city="Jaipur",
        primary_color="#EA1A85",
        secondary_color="#254AA5",
        default_personality=Personality.CONSERVATIVE,
    ),
    "PUN": FranchiseData(
        team_id="PUN",
        name="Punjab Kings",
        city="Mohali",
        primary_color="#DD1F2D",
        secondary_color="#A7A9AC",
        default_personality=Personality.AGGRESSIVE,
    ),
    "LKN": FranchiseData(
        team_id="LKN",
        name="Lucknow Super Giants",
        city="Lucknow",
        primary_color="#A72056",
        secondary_color="#FFCC00",
        default_personality=Personality.BALANCED,
    ),
    "GUJ": FranchiseData(
        team_id="GUJ",
        name="Gujarat Titans",
        city="Ahmedabad",
        primary_color="#1B2133",
        secondary_color="#DBBE6E",
        default_personality=Personality.CONSERVATIVE,
    ),
}

ALL_TEAM_IDS: list[str] = list(FRANCHISES.keys())

DEFAULT_PERSONALITIES: dict[str, Personality] = {
    team_id: data.default_personality for team_id, data in FRANCHISES.items()
}


# =============================================================================
# Helper Functions
# =============================================================================

def default_team_descriptors() -> list[TeamDescriptor]:
    """Get descriptors for every default franchise, in league order."""
    return [data.to_descriptor() for data in FRANCHISES.values()]


def get_franchise(team_id: str) -> FranchiseData:
    """
    Look up a franchise by ID.

    Raises:
        KeyError: If no franchise has this ID
    """
    return FRANCHISES[team_id.strip().upper()]


def is_valid_team_id(team_id: str) -> bool:
    return team_id.strip().upper() in FRANCHISES
