"""Prints game events to the terminal with rich."""

from typing import Optional

from rich.console import Console

from ..engine.player import Player
from ..engine.roles import Role
from .channels import EventKind, GameEvent

EVENT_STYLES = {
    EventKind.SETUP: "bold",
    EventKind.TURN_START: "bold cyan",
    EventKind.ROLL: "white",
    EventKind.HOLD: "dim",
    EventKind.ARROW: "yellow",
    EventKind.ARROW_ATTACK: "bold yellow",
    EventKind.DYNAMITE: "bold red",
    EventKind.SHOT: "magenta",
    EventKind.DAMAGE: "red",
    EventKind.HEAL: "green",
    EventKind.GATLING: "bold magenta",
    EventKind.DEATH: "bold red",
    EventKind.INVALID_SELECTION: "red",
    EventKind.GAME_OVER: "bold green",
}


class ConsoleRenderer:
    """Game observer that writes to a rich console.

    Roles stay hidden while a player is alive, except the Sheriff's, unless
    `reveal_roles` is set.
    """

    def __init__(self, console: Optional[Console] = None, reveal_roles: bool = False):
        self.console = console or Console()
        self.reveal_roles = reveal_roles

    def render_event(self, event: GameEvent) -> None:
        style = EVENT_STYLES.get(event.kind, "white")
        if event.kind == EventKind.TURN_START:
            self.console.rule(f"[{style}]Turn {event.turn}: {event.player}[/{style}]")
            return
        self.console.print(f"[{style}]{event.message}[/{style}]")

    def render_player_status(self, player: Player) -> None:
        reveal = self.reveal_roles or player.role == Role.SHERIFF or not player.alive
        line = player.status_line(reveal_role=reveal)
        if player.alive:
            self.console.print(f"  {line}")
        else:
            self.console.print(f"  [dim strike]{line}[/dim strike]")
