"""Event channel that routes game events to observers."""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol

from pydantic import BaseModel

if TYPE_CHECKING:
    from ..engine.player import Player


class EventKind(Enum):
    """Kinds of things that happen during a game."""
    SETUP = "setup"
    TURN_START = "turn_start"
    ROLL = "roll"
    HOLD = "hold"
    ARROW = "arrow"
    ARROW_ATTACK = "arrow_attack"
    DYNAMITE = "dynamite"
    SHOT = "shot"
    DAMAGE = "damage"
    HEAL = "heal"
    GATLING = "gatling"
    DEATH = "death"
    INVALID_SELECTION = "invalid_selection"
    GAME_OVER = "game_over"


class GameEvent(BaseModel):
    """A single event."""
    kind: EventKind
    message: str
    turn: int = 0
    player: Optional[str] = None  # Player the event is about, if any


class GameObserver(Protocol):
    """Anything that wants to hear about the game as it unfolds."""

    def render_event(self, event: GameEvent) -> None:
        ...

    def render_player_status(self, player: "Player") -> None:
        ...


class EventChannel:
    """Broadcasts events to subscribed observers and keeps the history."""

    def __init__(self):
        self.events: list[GameEvent] = []
        self._observers: list[GameObserver] = []

    def subscribe(self, observer: GameObserver) -> None:
        """Register an observer. Subscribing twice has no effect."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: GameObserver) -> None:
        """Stop sending events to an observer."""
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(
        self,
        kind: EventKind,
        message: str,
        turn: int = 0,
        player: Optional["Player"] = None,
    ) -> GameEvent:
        """Record an event and pass it to every observer.

        Args:
            kind: What happened.
            message: Human-readable description.
            turn: Turn number the event belongs to (0 for setup).
            player: The player the event is about, if any.

        Returns:
            The recorded event.
        """
        event = GameEvent(
            kind=kind,
            message=message,
            turn=turn,
            player=player.name if player is not None else None,
        )
        self.events.append(event)
        for observer in self._observers:
            observer.render_event(event)
        return event

    def player_status(self, player: "Player") -> None:
        """Send a player's current status to every observer."""
        for observer in self._observers:
            observer.render_player_status(player)

    def get_events(
        self,
        kind: Optional[EventKind] = None,
        turn: Optional[int] = None,
    ) -> list[GameEvent]:
        """Get events, optionally filtered by kind and turn."""
        return [
            e for e in self.events
            if (kind is None or e.kind == kind) and (turn is None or e.turn == turn)
        ]

    def clear(self) -> None:
        """Forget the event history."""
        self.events.clear()
