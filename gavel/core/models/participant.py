"""Participant model - one franchise competing in the auction."""

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from gavel.core.enums import Role
from gavel.core.models.lot import Lot


@dataclass(frozen=True)
class TeamDescriptor:
    """
    Static data for a franchise.

    Branding (colors, logos) is carried along untouched; the auction core
    never reads it.
    """
    team_id: str  # "CHE"
    name: str  # "Chennai Super Kings"
    branding: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Participant:
    """
    A franchise's auction state: purse and acquired roster.

    Replaced, never mutated, when a lot is sold to it.
    """
    team_id: str
    name: str
    purse: int
    roster: tuple[Lot, ...] = ()
    is_user: bool = False
    branding: Mapping[str, Any] = field(default_factory=dict)

    @property
    def roster_size(self) -> int:
        return len(self.roster)

    @property
    def overseas_count(self) -> int:
        return sum(1 for lot in self.roster if lot.is_overseas)

    @property
    def total_spent(self) -> int:
        return sum(lot.sold_price or 0 for lot in self.roster)

    def role_count(self, role: Role) -> int:
        """Count players of a role on the roster."""
        return sum(1 for lot in self.roster if lot.role == role)

    def role_counts(self) -> dict[Role, int]:
        """Count players of every role, including empty ones."""
        counts = {role: 0 for role in Role}
        for lot in self.roster:
            counts[lot.role] += 1
        return counts

    def acquire(self, lot: Lot, price: int) -> "Participant":
        """Return a copy with the purse debited and the lot on the roster."""
        return replace(self, purse=self.purse - price, roster=self.roster + (lot,))

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "team_id": self.team_id,
            "name": self.name,
            "purse": self.purse,
            "is_user": self.is_user,
            "roster": [lot.to_dict() for lot in self.roster],
            "branding": dict(self.branding),
        }
