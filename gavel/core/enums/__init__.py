"""Auction enumerations."""

from gavel.core.enums.auction import AuctionPhase, LotStatus
from gavel.core.enums.roles import ROLE_ORDER, Role

__all__ = [
    "AuctionPhase",
    "LotStatus",
    "ROLE_ORDER",
    "Role",
]
