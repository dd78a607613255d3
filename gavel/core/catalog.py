"""
Catalog Builder.

Turns raw grouped player records into the ordered list of lots that will
go under the hammer, assigning each set its base price.

Set keys combine a role code and a set number ("BAT1", "BOWL12").
Auction order:
- Marquee sets (set number <= 2) first
- Then ascending by set number
- Ties broken by role: BAT, WK, AR, BOWL

Base price: each role's sets are split into 5 equal bands by set number,
band 1 gets the top price tier and band 5 the lowest.
"""

import math
import re
from typing import Any, Mapping, Optional, Sequence

from gavel.core.config import AuctionConfig, get_config
from gavel.core.enums import Role
from gavel.core.models.lot import Lot

SKILL_FIELDS = ("batting", "bowling", "fielding")

_SET_KEY_PATTERN = re.compile(r"^\s*([A-Za-z]+)\s*(\d+)\s*$")

RawRecord = Mapping[str, Any]
RawCatalog = Mapping[str, Sequence[RawRecord]]


class CatalogValidationError(ValueError):
    """Raised when catalog records are malformed. Lists every problem found."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        preview = "; ".join(errors[:5])
        more = f" (+{len(errors) - 5} more)" if len(errors) > 5 else ""
        super().__init__(f"Invalid catalog: {preview}{more}")


def parse_set_key(set_key: str) -> tuple[int, Role]:
    """
    Split a set key into its set number and role.

    Raises:
        ValueError: If the key is not <ROLE><NUMBER> or the role is unknown
    """
    match = _SET_KEY_PATTERN.match(set_key)
    if not match:
        raise ValueError(f"Malformed set key: {set_key!r}")
    role = Role.parse(match.group(1))
    return int(match.group(2)), role


def count_sets_per_role(set_keys: Sequence[str]) -> dict[Role, int]:
    """Count how many sets each role has."""
    counts = {role: 0 for role in Role}
    for key in set_keys:
        _, role = parse_set_key(key)
        counts[role] += 1
    return counts


def price_band(set_number: int, total_sets: int, bands: int = 5) -> int:
    """Get the 1-based price band of a set within its role."""
    band_size = max(1, math.ceil(total_sets / bands))
    band = math.ceil(set_number / band_size)
    return min(bands, max(1, band))


def base_price_for_set(
    set_key: str,
    sets_per_role: Mapping[Role, int],
    config: Optional[AuctionConfig] = None,
) -> int:
    """Determine the base price every player in a set starts at."""
    config = config or get_config()
    set_number, role = parse_set_key(set_key)
    tiers = config.price_tiers
    band = price_band(set_number, sets_per_role.get(role, 0), bands=len(tiers))
    return tiers[band - 1]


def auction_order_key(set_key: str, config: Optional[AuctionConfig] = None) -> tuple[int, int, int]:
    """Sort key placing marquee sets first, then by set number, then role."""
    config = config or get_config()
    set_number, role = parse_set_key(set_key)
    is_marquee = set_number <= config.marquee_set_limit
    return (0 if is_marquee else 1, set_number, role.precedence)


def _validate_record(location: str, record: RawRecord, set_key: str, set_role: Optional[Role]) -> list[str]:
    errors = []
    if not isinstance(record, Mapping):
        return [f"{location}: record is not a mapping"]

    if not str(record.get("name") or "").strip():
        errors.append(f"{location}: missing name")

    try:
        role = Role.parse(record.get("role"))
    except ValueError:
        errors.append(f"{location}: unknown role {record.get('role')!r}")
    else:
        if set_role is not None and role != set_role:
            errors.append(f"{location}: role {role.value} does not match set {set_key}")

    for skill in SKILL_FIELDS:
        if skill not in record or record[skill] is None:
            errors.append(f"{location}: missing skill {skill!r}")
            continue
        value = record[skill]
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"{location}: skill {skill!r} must be an integer, got {value!r}")
        elif not 0 <= value <= 100:
            errors.append(f"{location}: skill {skill!r} out of range (0-100): {value}")
    return errors


def validate_catalog(records: RawCatalog) -> list[str]:
    """
    Validate raw catalog records.

    Returns:
        List of problems, each prefixed with the offending set key and
        record index. Empty if the catalog is valid.
    """
    if not isinstance(records, Mapping):
        return [f"catalog must be a mapping of set key to records, got {type(records).__name__}"]

    errors = []
    for set_key, set_records in records.items():
        if not isinstance(set_key, str):
            errors.append(f"{set_key!r}: set key must be a string")
            continue
        if isinstance(set_records, (str, bytes)) or not isinstance(set_records, Sequence):
            errors.append(f"{set_key}: records must be a list")
            continue

        set_role = None
        try:
            _, set_role = parse_set_key(set_key)
        except ValueError as e:
            errors.append(f"{set_key}: {e}")
        for index, record in enumerate(set_records):
            errors.extend(_validate_record(f"{set_key}[{index}]", record, set_key, set_role))
    return errors


def build_catalog(records: RawCatalog, config: Optional[AuctionConfig] = None) -> list[Lot]:
    """
    Build the ordered, priced lot list.

    Args:
        records: Mapping of set key -> raw player records
        config: Auction rules (price tiers, marquee limit, home nationality)

    Returns:
        Lots in auction order, every record exactly once

    Raises:
        CatalogValidationError: If any record or set key is malformed
    """
    config = config or get_config()

    errors = validate_catalog(records)
    if errors:
        raise CatalogValidationError(errors)

    sets_per_role = count_sets_per_role(list(records.keys()))
    ordered_sets = sorted(records.keys(), key=lambda key: auction_order_key(key, config))

    lots = []
    for set_key in ordered_sets:
        base_price = base_price_for_set(set_key, sets_per_role, config)
        for record in records[set_key]:
            nationality = str(record.get("nationality") or config.home_nationality)
            lots.append(Lot(
                lot_id=len(lots),
                name=str(record["name"]).strip(),
                role=Role.parse(record["role"]),
                nationality=nationality,
                batting=record["batting"],
                bowling=record["bowling"],
                fielding=record["fielding"],
                set_key=set_key,
                base_price=base_price,
                is_overseas=nationality != config.home_nationality,
            ))

    return lots
