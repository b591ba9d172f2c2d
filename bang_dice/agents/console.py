"""Hot-seat console controller: every decision is typed in by a human."""

from typing import Optional

from rich.console import Console
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from ..engine.dice import DiceFace, DiceView, face_name
from ..engine.player import Player
from .controller import PlayerController


def parse_hold_selection(text: str) -> set[int]:
    """Turn "1 3, 5" into zero-based dice indices {0, 2, 4}.

    Raises:
        ValueError: If a token is not a number.
    """
    tokens = text.replace(",", " ").split()
    return {int(token) - 1 for token in tokens}


class ConsoleController(PlayerController):
    """Asks the players at the keyboard for every decision."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def collect_player_count(self) -> int:
        return IntPrompt.ask(
            "[cyan]How many players are participating?[/cyan]",
            console=self.console,
        )

    def show_dice(self, view: DiceView) -> None:
        """Print the dice as a numbered table."""
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", style="cyan")
        table.add_column("Face", style="green")
        table.add_column("Held", style="yellow")

        for index, (name, held) in enumerate(zip(view.names, view.held)):
            if index in view.forced:
                status = "[red]locked[/red]"
            else:
                status = "yes" if held else ""
            table.add_row(str(index + 1), name, status)

        self.console.print(table)

    def choose_holds(self, player: Player, view: DiceView) -> set[int]:
        self.show_dice(view)
        self.console.print(
            f"[dim]{player.name}: {view.rolls_remaining} roll(s) left. "
            f"Dynamites are held automatically.[/dim]"
        )
        default = " ".join(str(i + 1) for i in sorted(view.held_indices - view.forced))

        while True:
            answer = Prompt.ask(
                "Select dice to hold (numbers separated by spaces, blank for none)",
                default=default,
                console=self.console,
            )
            try:
                return parse_hold_selection(answer)
            except ValueError:
                self.console.print("[red]Please enter dice numbers, e.g. 1 3 5.[/red]")

    def choose_target(self, shooter: Player, candidates: list[Player], face: DiceFace) -> Player:
        self.console.print(f"[bold]{shooter.name}[/bold] fires a {face_name(face)}:")
        for index, candidate in enumerate(candidates, start=1):
            self.console.print(
                f"  {index}. {candidate.name} ({candidate.life}/{candidate.max_life})"
            )

        choice = IntPrompt.ask(
            "Choose a target",
            choices=[str(i) for i in range(1, len(candidates) + 1)],
            console=self.console,
        )
        return candidates[choice - 1]
