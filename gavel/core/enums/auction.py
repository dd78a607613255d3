"""Auction lifecycle enumerations."""

from enum import Enum, auto


class LotStatus(Enum):
    """
    Lifecycle of a single lot.

    A lot is created PENDING, becomes ACTIVE when it is dequeued, and then
    resolves to exactly one of SOLD or UNSOLD.
    """

    PENDING = "pending"
    ACTIVE = "active"
    SOLD = "sold"
    UNSOLD = "unsold"

    @property
    def is_resolved(self) -> bool:
        """Check if the lot has been classified."""
        return self in (LotStatus.SOLD, LotStatus.UNSOLD)


class AuctionPhase(Enum):
    """Phases of the lot-by-lot state machine."""

    ACTIVE = auto()  # Lot on the block, countdown running
    SETTLING = auto()  # Brief pause after a sale
    COMPLETE = auto()  # Every lot classified
