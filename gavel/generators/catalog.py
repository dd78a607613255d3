"""Catalog generation - raw grouped player records for demos and tests."""

import random
from typing import Optional

from gavel.core.enums import ROLE_ORDER, Role

# Sample names for generation
FIRST_NAMES = [
    "Rohit", "Virat", "Shubman", "Rishabh", "Sanju", "Ishan", "Hardik",
    "Ravindra", "Axar", "Jasprit", "Mohammed", "Arshdeep", "Kuldeep",
    "Yuzvendra", "Shreyas", "Suryakumar", "Rinku", "Tilak", "Ruturaj",
    "Yashasvi", "Abhishek", "Washington", "Shivam", "Avesh", "Harshit",
    "Prasidh", "Umran", "Mayank", "Dhruv", "Jitesh", "Nitish", "Varun",
]

OVERSEAS_FIRST_NAMES = [
    "Jos", "Travis", "Pat", "Mitchell", "Glenn", "David", "Quinton",
    "Heinrich", "Kagiso", "Anrich", "Rashid", "Trent", "Kane", "Devon",
    "Liam", "Sam", "Jofra", "Phil", "Nicholas", "Andre", "Sunil", "Wanindu",
]

LAST_NAMES = [
    "Sharma", "Kumar", "Singh", "Patel", "Yadav", "Iyer", "Pandya", "Gill",
    "Jadeja", "Chahar", "Thakur", "Khan", "Gaikwad", "Jaiswal", "Reddy",
    "Samson", "Kishan", "Pant", "Bumrah", "Siraj", "Rana", "Krishna",
]

OVERSEAS_LAST_NAMES = [
    "Buttler", "Head", "Cummins", "Starc", "Maxwell", "Warner", "de Kock",
    "Klaasen", "Rabada", "Nortje", "Boult", "Williamson", "Conway",
    "Livingstone", "Curran", "Archer", "Salt", "Pooran", "Russell",
    "Narine", "Hasaranga", "Marsh",
]

HOME_NATIONALITY = "India"

OVERSEAS_NATIONALITIES = [
    "Australia", "England", "South Africa", "New Zealand", "West Indies",
    "Afghanistan", "Sri Lanka", "Bangladesh",
]

# Skill templates per role: (mean, std) for batting, bowling, fielding
ROLE_TEMPLATES: dict[Role, dict[str, tuple[float, float]]] = {
    Role.BAT: {"batting": (72, 10), "bowling": (25, 10), "fielding": (65, 10)},
    Role.WK: {"batting": (65, 10), "bowling": (10, 5), "fielding": (75, 8)},
    Role.AR: {"batting": (58, 10), "bowling": (58, 10), "fielding": (65, 10)},
    Role.BOWL: {"batting": (22, 10), "bowling": (72, 10), "fielding": (60, 10)},
}

DEFAULT_OVERSEAS_CHANCE = 0.3


def _generate_name(rng: random.Random, overseas: bool) -> str:
    if overseas:
        return f"{rng.choice(OVERSEAS_FIRST_NAMES)} {rng.choice(OVERSEAS_LAST_NAMES)}"
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def generate_player_record(
    role: Role,
    quality_mod: float = 0.0,
    rng: Optional[random.Random] = None,
    overseas_chance: float = DEFAULT_OVERSEAS_CHANCE,
) -> dict:
    """
    Generate a random raw player record for a role.

    Args:
        role: Role to generate
        quality_mod: Shift applied to every skill mean (-20 to +20)
        rng: Random source (injected for reproducibility)
        overseas_chance: Probability the player is not a home player

    Returns:
        Raw record with name, role, nationality and skill integers 0-100
    """
    rng = rng if rng is not None else random.Random()

    overseas = rng.random() < overseas_chance
    record = {
        "name": _generate_name(rng, overseas),
        "role": role.value,
        "nationality": rng.choice(OVERSEAS_NATIONALITIES) if overseas else HOME_NATIONALITY,
    }
    for skill, (mean, std) in ROLE_TEMPLATES[role].items():
        value = int(rng.gauss(mean + quality_mod, std))
        record[skill] = max(0, min(100, value))
    return record


def generate_catalog_records(
    sets_per_role: int = 10,
    players_per_set: int = 6,
    rng: Optional[random.Random] = None,
    overseas_chance: float = DEFAULT_OVERSEAS_CHANCE,
) -> dict[str, list[dict]]:
    """
    Generate a full grouped catalog.

    Earlier sets are stronger: quality falls off linearly from set 1 to
    the last set, so marquee sets hold the best players.

    Returns:
        Mapping of set key ("BAT1", "BOWL7", ...) -> raw records
    """
    rng = rng if rng is not None else random.Random()

    records: dict[str, list[dict]] = {}
    for role in ROLE_ORDER:
        for set_number in range(1, sets_per_role + 1):
            # +15 for set 1 down to -15 for the last set
            if sets_per_role > 1:
                quality_mod = 15 - 30 * (set_number - 1) / (sets_per_role - 1)
            else:
                quality_mod = 15.0
            records[f"{role.value}{set_number}"] = [
                generate_player_record(role, quality_mod, rng, overseas_chance)
                for _ in range(players_per_set)
            ]
    return records
