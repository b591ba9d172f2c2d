"""Turn phase definitions and transitions."""

from dataclasses import dataclass
from enum import Enum, auto

REROLLS_PER_TURN = 2  # On top of the first roll


class TurnPhase(Enum):
    """Phases of a single player's turn."""
    ROLLING = auto()            # First roll plus up to two rerolls
    EFFECT_RESOLUTION = auto()  # Shots, beer, gatling
    TURN_COMPLETE = auto()      # Nothing left to do


@dataclass
class TurnState:
    """Current state within a turn."""
    turn_number: int
    player_name: str
    phase: TurnPhase = TurnPhase.ROLLING
    rolls_remaining: int = REROLLS_PER_TURN
    rolls_made: int = 0

    @property
    def phase_name(self) -> str:
        """Get a human-readable phase name with turn number."""
        return f"turn_{self.turn_number}_{self.phase.name.lower()}"

    def start_resolution(self) -> None:
        """Rolling is over, resolve the dice."""
        self.rolls_remaining = 0
        self.phase = TurnPhase.EFFECT_RESOLUTION

    def complete(self) -> None:
        """End the turn."""
        self.rolls_remaining = 0
        self.phase = TurnPhase.TURN_COMPLETE
