"""Lot model - one athlete on the auction block."""

from dataclasses import dataclass, replace
from typing import Optional

from gavel.core.enums import LotStatus, Role


@dataclass(frozen=True)
class Lot:
    """
    A single auctionable athlete.

    Lots are immutable; every status change returns a new Lot. The base
    price is fixed when the catalog is built, and the sale price and buyer
    can only be stamped once.
    """
    lot_id: int  # Position in the catalog
    name: str
    role: Role
    nationality: str
    batting: int
    bowling: int
    fielding: int
    set_key: str  # e.g. "BAT3"
    base_price: int
    is_overseas: bool = False

    status: LotStatus = LotStatus.PENDING
    sold_price: Optional[int] = None
    buyer_id: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.status.is_resolved

    def activate(self) -> "Lot":
        """Put the lot on the block."""
        if self.status != LotStatus.PENDING:
            raise ValueError(f"Cannot activate {self.name} in {self.status.value} status")
        return replace(self, status=LotStatus.ACTIVE)

    def mark_sold(self, buyer_id: str, price: int) -> "Lot":
        """Stamp the sale price and buyer."""
        if self.is_resolved:
            raise ValueError(f"{self.name} already resolved as {self.status.value}")
        return replace(self, status=LotStatus.SOLD, sold_price=price, buyer_id=buyer_id)

    def mark_unsold(self) -> "Lot":
        """Classify the lot as unsold."""
        if self.is_resolved:
            raise ValueError(f"{self.name} already resolved as {self.status.value}")
        return replace(self, status=LotStatus.UNSOLD)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "lot_id": self.lot_id,
            "name": self.name,
            "role": self.role.value,
            "nationality": self.nationality,
            "is_overseas": self.is_overseas,
            "batting": self.batting,
            "bowling": self.bowling,
            "fielding": self.fielding,
            "set_key": self.set_key,
            "base_price": self.base_price,
            "status": self.status.value,
            "sold_price": self.sold_price,
            "buyer_id": self.buyer_id,
        }
