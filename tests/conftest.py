"""Shared pytest fixtures for Gavel tests."""

import random
from dataclasses import replace

import pytest

from gavel.core.config import AuctionConfig, set_config
from gavel.core.enums import LotStatus, Role
from gavel.core.models import Lot, Participant, TeamDescriptor
from gavel.events import EventBus


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_global_config():
    """Make every test read a fresh global configuration."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def config() -> AuctionConfig:
    """Default rules with explicit timing, independent of the environment."""
    return AuctionConfig(
        initial_purse=12000,
        bid_window_ms=5000,
        settle_delay_ms=2000,
        ai_poll_interval_ms=800,
        ai_poll_chance=0.3,
        strict_invariants=True,
    )


@pytest.fixture
def quiet_config(config) -> AuctionConfig:
    """Rules with AI polling switched off, for human-only scenarios."""
    return replace(config, ai_poll_chance=0.0)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


# =============================================================================
# Lot Fixtures
# =============================================================================


@pytest.fixture
def make_lot():
    """Factory for lots; sold lots get a buyer and price stamped."""

    def _make_lot(
        name: str = "Test Player",
        role: Role = Role.BAT,
        batting: int = 70,
        bowling: int = 30,
        fielding: int = 60,
        base_price: int = 50,
        is_overseas: bool = False,
        lot_id: int = 0,
        set_key: str = "BAT1",
        sold_to: str = None,
        sold_price: int = 50,
    ) -> Lot:
        lot = Lot(
            lot_id=lot_id,
            name=name,
            role=role,
            nationality="Australia" if is_overseas else "India",
            batting=batting,
            bowling=bowling,
            fielding=fielding,
            set_key=set_key,
            base_price=base_price,
            is_overseas=is_overseas,
        )
        if sold_to:
            lot = replace(lot, status=LotStatus.SOLD, buyer_id=sold_to, sold_price=sold_price)
        return lot

    return _make_lot


@pytest.fixture
def make_roster(make_lot):
    """Factory for rosters of sold lots: {role: count}, with some overseas."""

    def _make_roster(counts: dict, team_id: str = "CHE", overseas: int = 0) -> tuple:
        roster = []
        for role, count in counts.items():
            for _ in range(count):
                roster.append(make_lot(
                    name=f"{role.value} Player {len(roster)}",
                    role=role,
                    lot_id=len(roster),
                    is_overseas=len(roster) < overseas,
                    sold_to=team_id,
                ))
        return tuple(roster)

    return _make_roster


@pytest.fixture
def star_batter(make_lot) -> Lot:
    """A top-tier marquee batter."""
    return make_lot(name="Star Batter", batting=90, bowling=20, fielding=80, base_price=200)


# =============================================================================
# Team Fixtures
# =============================================================================


@pytest.fixture
def teams() -> list[TeamDescriptor]:
    """Three franchises."""
    return [
        TeamDescriptor("CHE", "Chennai Super Kings", {"primary_color": "#FDB913"}),
        TeamDescriptor("MUM", "Mumbai Indians", {"primary_color": "#004BA0"}),
        TeamDescriptor("KOL", "Kolkata Knight Riders", {"primary_color": "#3A225D"}),
    ]


@pytest.fixture
def fresh_participant() -> Participant:
    """An empty-roster participant with a full purse."""
    return Participant(team_id="MUM", name="Mumbai Indians", purse=12000)


@pytest.fixture
def full_participant(make_roster) -> Participant:
    """A participant already at the maximum squad size."""
    roster = make_roster({Role.BAT: 6, Role.WK: 3, Role.AR: 9, Role.BOWL: 7}, team_id="KOL")
    return Participant(team_id="KOL", name="Kolkata Knight Riders", purse=5000, roster=roster)


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def raw_catalog() -> dict[str, list[dict]]:
    """Small grouped catalog with marquee and later sets, out of order."""
    return {
        "BAT3": [
            {"name": "Late Batter", "role": "BAT", "batting": 60, "bowling": 10, "fielding": 50},
        ],
        "BOWL2": [
            {"name": "Marquee Bowler", "role": "BOWL", "nationality": "England",
             "batting": 20, "bowling": 88, "fielding": 60},
        ],
        "WK1": [
            {"name": "Marquee Keeper", "role": "WK", "batting": 75, "bowling": 5, "fielding": 85},
        ],
        "BAT1": [
            {"name": "Marquee Batter", "role": "BAT", "batting": 92, "bowling": 15, "fielding": 70},
            {"name": "Second Batter", "role": "BAT", "nationality": "Australia",
             "batting": 85, "bowling": 25, "fielding": 65},
        ],
        "AR1": [
            {"name": "Marquee All-Rounder", "role": "AR", "batting": 70, "bowling": 72, "fielding": 75},
        ],
    }
