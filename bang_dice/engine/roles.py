"""Role definitions and role assignment for the Bang! dice game."""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidPlayerCount

MIN_PLAYERS = 4
MAX_PLAYERS = 8


class Role(Enum):
    """Roles a player can be dealt."""
    SHERIFF = "sheriff"
    DEPUTY = "deputy"
    OUTLAW = "outlaw"
    RENEGADE = "renegade"


class Faction(Enum):
    """Factions that can win the game."""
    LAW = "law"
    OUTLAWS = "outlaws"
    RENEGADE = "renegade"


@dataclass(frozen=True)
class RoleInfo:
    """Static information about a role."""

    name: str
    faction: Faction
    max_life: int
    description: str = ""

    def __str__(self) -> str:
        return self.name


ROLES = {
    Role.SHERIFF: RoleInfo(
        name="Sheriff",
        faction=Faction.LAW,
        max_life=10,
        description="Known to everyone. Survive until every Outlaw and the Renegade are dead."
    ),
    Role.DEPUTY: RoleInfo(
        name="Deputy",
        faction=Faction.LAW,
        max_life=8,
        description="Protect the Sheriff and help eliminate the Outlaws and the Renegade."
    ),
    Role.OUTLAW: RoleInfo(
        name="Outlaw",
        faction=Faction.OUTLAWS,
        max_life=8,
        description="Kill the Sheriff."
    ),
    Role.RENEGADE: RoleInfo(
        name="Renegade",
        faction=Faction.RENEGADE,
        max_life=8,
        description="Be the last one standing, Sheriff included."
    ),
}

FACTION_NAMES = {
    Faction.LAW: "Law",
    Faction.OUTLAWS: "Outlaws",
    Faction.RENEGADE: "Renegade",
}

# Dealt in this order, truncated to the player count, then shuffled.
ROLE_TEMPLATE: tuple[Role, ...] = (
    Role.SHERIFF,
    Role.OUTLAW,
    Role.OUTLAW,
    Role.RENEGADE,
    Role.DEPUTY,
    Role.OUTLAW,
    Role.DEPUTY,
    Role.RENEGADE,
)


def role_name(role: Role) -> str:
    """Get the display name of a role."""
    return ROLES[role].name


def faction_name(faction: Faction) -> str:
    """Get the display name of a faction."""
    return FACTION_NAMES[faction]


def max_life_for(role: Role) -> int:
    """Starting (and maximum) life for a role."""
    return ROLES[role].max_life


def is_bad_guy(role: Role) -> bool:
    """Outlaws and the Renegade are the ones the Sheriff must eliminate."""
    return role in (Role.OUTLAW, Role.RENEGADE)


def validate_player_count(count: object) -> int:
    """Check that a player count is supported.

    Args:
        count: The requested number of players.

    Returns:
        The count, unchanged.

    Raises:
        InvalidPlayerCount: If count is not an integer between 4 and 8.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidPlayerCount(count, MIN_PLAYERS, MAX_PLAYERS)
    if count < MIN_PLAYERS or count > MAX_PLAYERS:
        raise InvalidPlayerCount(count, MIN_PLAYERS, MAX_PLAYERS)
    return count


def build_role_deck(count: int, rng: Optional[random.Random] = None) -> list[Role]:
    """Build the shuffled role deck for a game.

    The deck is the first `count` entries of ROLE_TEMPLATE, shuffled. Smaller
    games therefore always drop the tail of the template.

    Args:
        count: Number of players (4-8).
        rng: Random source. Defaults to the module-level generator.

    Returns:
        One role per seat, in seating order.
    """
    validate_player_count(count)
    deck = list(ROLE_TEMPLATE[:count])
    (rng or random).shuffle(deck)
    return deck
