"""Markdown logger for game events."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from ..engine.roles import Faction, faction_name, role_name
from .channels import EventKind, GameEvent

if TYPE_CHECKING:
    from ..engine.player import Player

GAME_FILE = "game_state.md"


class MarkdownLogger:
    """Writes game events to a markdown file, one directory per game."""

    def __init__(self, base_dir: str = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for game logs.
        """
        self.base_dir = Path(base_dir)
        self.game_dir: Optional[Path] = None
        self.game_id: Optional[str] = None

    @property
    def game_file(self) -> Optional[Path]:
        if self.game_dir is None:
            return None
        return self.game_dir / GAME_FILE

    def start_game(self, game_id: Optional[str] = None) -> Path:
        """Start logging a new game.

        Args:
            game_id: Optional game identifier. If not provided, uses timestamp.

        Returns:
            Path to the game directory.
        """
        if game_id is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
            game_id = f"game_{timestamp}"

        self.game_id = game_id
        self.game_dir = self.base_dir / game_id
        self.game_dir.mkdir(parents=True, exist_ok=True)

        self._write_game_header()

        return self.game_dir

    def _write_game_header(self) -> None:
        with open(self.game_file, "w") as f:
            f.write(f"# Bang! Dice Game - {self.game_id}\n\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write("---\n\n")

    def _append(self, text: str) -> None:
        if self.game_file is None:
            return
        with open(self.game_file, "a") as f:
            f.write(text)

    def log_setup(self, players: list["Player"]) -> None:
        """Log the seating and the roles dealt.

        Args:
            players: Players in seating order.
        """
        lines = [
            "## Players\n\n",
            "| Seat | Player | Role (Hidden) | Life |\n",
            "|------|--------|---------------|------|\n",
        ]
        for seat, p in enumerate(players, start=1):
            lines.append(f"| {seat} | {p.name} | {role_name(p.role)} | {p.max_life} |\n")
        lines.append("\n---\n\n")
        self._append("".join(lines))

    def render_event(self, event: GameEvent) -> None:
        """Append an event to the game file."""
        if event.kind == EventKind.TURN_START:
            self._append(f"## Turn {event.turn} - {event.player}\n\n")
        elif event.kind == EventKind.DEATH:
            self._append(f"\n### Death\n\n{event.message}\n\n")
        elif event.kind == EventKind.GAME_OVER:
            self._append(f"**{event.message}**\n\n")
        else:
            self._append(f"- {event.message}\n")

    def render_player_status(self, player: "Player") -> None:
        """Append a status line for a player."""
        state = "" if player.alive else " *(dead)*"
        self._append(
            f"  - `{player.name}` {player.life}/{player.max_life} life, "
            f"{player.arrows} arrows{state}\n"
        )

    def log_game_end(self, winner: Optional[Faction], players: list["Player"]) -> None:
        """Log the game ending.

        Args:
            winner: Winning faction.
            players: All players with roles revealed.
        """
        if self.game_file is None:
            return
        with open(self.game_file, "a") as f:
            f.write("\n---\n\n")
            f.write("# GAME OVER\n\n")
            if winner is not None:
                f.write(f"## Winner: {faction_name(winner).upper()}\n\n")

            f.write("## Survivors\n\n")
            survivors = [p for p in players if p.alive]
            if survivors:
                for p in survivors:
                    f.write(f"- {p.name} ({role_name(p.role)})\n")
            else:
                f.write("*No survivors*\n")

            f.write("\n## All Players\n\n")
            f.write("| Player | Role | Life | Survived |\n")
            f.write("|--------|------|------|----------|\n")
            for p in players:
                survived = "Yes" if p.alive else "No"
                f.write(f"| {p.name} | {role_name(p.role)} | {p.life}/{p.max_life} | {survived} |\n")

            f.write(f"\n\nEnded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
