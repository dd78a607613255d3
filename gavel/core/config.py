"""
Auction configuration.

Collects every tunable rule of the auction (purse, squad composition,
price tiers, bid ladder, timing) in one place. Timing and strictness
settings can be overridden via environment variables.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Optional

from gavel.core.enums import Role


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass(frozen=True)
class RoleRequirement:
    """Minimum and maximum number of players of one role in a squad."""
    min: int
    max: int


# Role requirements (min/max)
DEFAULT_SQUAD_REQUIREMENTS: dict[Role, RoleRequirement] = {
    Role.BAT: RoleRequirement(min=4, max=6),
    Role.WK: RoleRequirement(min=2, max=3),
    Role.AR: RoleRequirement(min=3, max=5),
    Role.BOWL: RoleRequirement(min=5, max=7),
}

# Base price tiers in lakhs, band 1 (marquee) first
DEFAULT_PRICE_TIERS: tuple[int, ...] = (200, 150, 100, 75, 50)

# (exclusive upper threshold, increment) in lakhs
DEFAULT_BID_INCREMENTS: tuple[tuple[float, int], ...] = (
    (100, 5),         # Up to 1 Cr: 5L increment
    (200, 10),        # 1-2 Cr: 10L increment
    (math.inf, 25),   # 2 Cr+: 25L increment
)


@dataclass
class AuctionConfig:
    """All tunable parameters for an auction run."""

    # === PURSE ===
    initial_purse: int = field(default_factory=lambda: _env_int("GAVEL_INITIAL_PURSE", 12000))  # 120 Cr

    # === SQUAD CONSTRAINTS ===
    min_roster_size: int = 18
    max_roster_size: int = 25
    max_overseas: int = 8
    home_nationality: str = "India"
    squad_requirements: dict[Role, RoleRequirement] = field(
        default_factory=lambda: dict(DEFAULT_SQUAD_REQUIREMENTS)
    )
    min_increment_unit: int = 50  # Cheapest possible signing, held back per open slot

    # === CATALOG PRICING ===
    price_tiers: tuple[int, ...] = DEFAULT_PRICE_TIERS
    marquee_set_limit: int = 2  # Sets numbered at or below this go first

    # === BIDDING ===
    bid_increments: tuple[tuple[float, int], ...] = DEFAULT_BID_INCREMENTS

    # === TIMING (milliseconds) ===
    bid_window_ms: int = field(default_factory=lambda: _env_int("GAVEL_BID_WINDOW_MS", 5000))
    settle_delay_ms: int = field(default_factory=lambda: _env_int("GAVEL_SETTLE_DELAY_MS", 2000))
    ai_poll_interval_ms: int = field(default_factory=lambda: _env_int("GAVEL_AI_POLL_INTERVAL_MS", 800))
    ai_poll_chance: float = field(default_factory=lambda: _env_float("GAVEL_AI_POLL_CHANCE", 0.3))

    # Raise on sale invariant violations instead of rejecting the sale
    strict_invariants: bool = field(
        default_factory=lambda: os.getenv("GAVEL_STRICT_INVARIANTS", "true").lower() == "true"
    )

    @classmethod
    def from_env(cls) -> "AuctionConfig":
        """Create config from environment variables."""
        return cls()

    def requirement(self, role: Role) -> RoleRequirement:
        """Get the squad requirement for a role."""
        return self.squad_requirements[role]

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        if self.initial_purse <= 0:
            errors.append("initial_purse must be positive")
        if self.min_roster_size > self.max_roster_size:
            errors.append("min_roster_size cannot exceed max_roster_size")
        if self.max_overseas < 0:
            errors.append("max_overseas cannot be negative")
        missing = [role.value for role in Role if role not in self.squad_requirements]
        if missing:
            errors.append(f"squad_requirements missing roles: {', '.join(missing)}")
        for role, req in self.squad_requirements.items():
            if req.min < 0 or req.min > req.max:
                errors.append(f"invalid requirement for {role.value}: {req.min}-{req.max}")
        if len(self.price_tiers) != 5:
            errors.append("price_tiers must have exactly 5 entries")
        elif list(self.price_tiers) != sorted(self.price_tiers, reverse=True):
            errors.append("price_tiers must be ordered from highest to lowest")
        if not self.bid_increments or self.bid_increments[-1][0] != math.inf:
            errors.append("bid_increments must end with an unbounded threshold")
        if any(increment <= 0 for _, increment in self.bid_increments):
            errors.append("bid increments must be positive")
        if self.bid_window_ms <= 0:
            errors.append("bid_window_ms must be positive")
        if self.settle_delay_ms < 0:
            errors.append("settle_delay_ms cannot be negative")
        if self.ai_poll_interval_ms <= 0:
            errors.append("ai_poll_interval_ms must be positive")
        return errors


# Singleton config instance
_config: Optional[AuctionConfig] = None


def get_config() -> AuctionConfig:
    """Get the global auction configuration."""
    global _config
    if _config is None:
        _config = AuctionConfig.from_env()
    return _config


def set_config(config: Optional[AuctionConfig]) -> None:
    """
    Replace the global configuration.

    Passing None resets it so the next get_config() re-reads the environment.
    """
    global _config
    _config = config
