"""Core auction models."""

from gavel.core.models.lot import Lot
from gavel.core.models.participant import Participant, TeamDescriptor
from gavel.core.models.state import AuctionLogEntry, AuctionState

__all__ = [
    "AuctionLogEntry",
    "AuctionState",
    "Lot",
    "Participant",
    "TeamDescriptor",
]
