"""Bid Ladder - the legal step from one price to the next."""

from typing import Optional, Sequence

from gavel.core.config import DEFAULT_BID_INCREMENTS

BidSchedule = Sequence[tuple[float, int]]


def bid_increment(current: int, schedule: Optional[BidSchedule] = None) -> int:
    """
    Get the increment that applies at the current price.

    The schedule is a list of (exclusive upper threshold, increment) pairs;
    the first threshold strictly above the price wins.
    """
    schedule = schedule or DEFAULT_BID_INCREMENTS
    for threshold, increment in schedule:
        if current < threshold:
            return increment
    # Schedules end with an unbounded threshold, so this is a fallback only
    return schedule[-1][1]


def next_price(current: int, schedule: Optional[BidSchedule] = None) -> int:
    """Get the next legal bid above the current price."""
    return current + bid_increment(current, schedule)
