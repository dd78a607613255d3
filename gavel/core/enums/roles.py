"""Player role definitions for franchise cricket auctions."""

from enum import Enum


class Role(Enum):
    """The four mutually exclusive playing roles a lot can carry."""

    BAT = "BAT"  # Batter
    WK = "WK"  # Wicketkeeper
    AR = "AR"  # All-rounder
    BOWL = "BOWL"  # Bowler

    @property
    def label(self) -> str:
        """Get the display label for this role."""
        labels = {
            Role.BAT: "Batter",
            Role.WK: "Wicketkeeper",
            Role.AR: "All-Rounder",
            Role.BOWL: "Bowler",
        }
        return labels[self]

    @property
    def precedence(self) -> int:
        """Order used when two sets share the same set number."""
        return ROLE_ORDER.index(self)

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role code, raising ValueError for unknown codes."""
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown role: {value!r}") from None


# Batting sets go first, then keepers, all-rounders and bowlers
ROLE_ORDER = [Role.BAT, Role.WK, Role.AR, Role.BOWL]
