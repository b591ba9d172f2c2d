"""Game engine - roles, dice, turn resolution and the game controller."""

from .roles import Role, Faction, ROLES, build_role_deck
from .errors import (
    GameError,
    GameInvariantError,
    InvalidHoldSelection,
    InvalidPlayerCount,
    InvalidTargetSelection,
)
from .dice import DiceFace, DicePool, DiceView
from .player import Player
from .phases import TurnPhase, TurnState
from .game import Game, GameConfig, request_player_count

__all__ = [
    "Role",
    "Faction",
    "ROLES",
    "build_role_deck",
    "GameError",
    "GameInvariantError",
    "InvalidHoldSelection",
    "InvalidPlayerCount",
    "InvalidTargetSelection",
    "DiceFace",
    "DicePool",
    "DiceView",
    "Player",
    "TurnPhase",
    "TurnState",
    "Game",
    "GameConfig",
    "request_player_count",
]
