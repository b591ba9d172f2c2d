"""Main entry point for Bang! dice."""

import os
import random
import sys
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .agents.console import ConsoleController
from .communication.channels import EventChannel
from .communication.console_renderer import ConsoleRenderer
from .communication.markdown_logger import MarkdownLogger
from .engine.errors import InvalidPlayerCount
from .engine.game import Game, GameConfig, request_player_count
from .engine.roles import Faction, Role, faction_name, role_name, validate_player_count


# Load environment variables
load_dotenv()

console = Console()

DEFAULT_CONFIG_PATH = "config/game.yaml"


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load game configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        console.print(f"[red]Config file not found: {config_path}[/red]")
        sys.exit(1)

    with open(path) as f:
        return yaml.safe_load(f) or {}


def build_game_config(config_data: dict, player_count: int) -> GameConfig:
    """Create the game config from file data and environment overrides."""
    game_data = config_data.get("game") or {}
    # An empty override (as copied from .env.example) means unset
    seed = os.getenv("BANG_DICE_SEED") or game_data.get("seed")
    return GameConfig(
        player_count=player_count,
        player_names=list(config_data.get("players") or []),
        seed=int(seed) if seed is not None else None,
    )


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold yellow]BANG! THE DICE GAME[/bold yellow]\n"
        "[dim]Sheriff, Deputies, Outlaws and a Renegade[/dim]",
        border_style="yellow",
    ))
    console.print()


def display_players(game: Game, reveal_roles: bool = False):
    """Display the table."""
    table = Table(title="Players", show_header=True, header_style="bold magenta")
    table.add_column("Seat", style="cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Role", style="red")
    table.add_column("Life", style="green")

    for seat, player in enumerate(game.players, start=1):
        if reveal_roles or player.role == Role.SHERIFF:
            role = role_name(player.role)
        else:
            role = "[dim]hidden[/dim]"
        table.add_row(str(seat), player.name, role, f"{player.life}/{player.max_life}")

    console.print(table)
    console.print()


def display_results(game: Game, winner: Faction):
    """Display game results."""
    console.print()

    colors = {
        Faction.LAW: "green",
        Faction.OUTLAWS: "red",
        Faction.RENEGADE: "magenta",
    }
    color = colors[winner]
    console.print(Panel(
        f"[bold {color}]{faction_name(winner).upper()} WIN![/bold {color}]",
        border_style=color,
    ))

    console.print()

    # Final standings
    table = Table(title="Final Standings", show_header=True, header_style="bold")
    table.add_column("Player", style="cyan")
    table.add_column("Role", style="magenta")
    table.add_column("Life", style="blue")
    table.add_column("Status", style="green")

    for player in game.players:
        status = "[green]Survived[/green]" if player.alive else "[red]Dead[/red]"
        table.add_row(
            player.name,
            role_name(player.role),
            f"{player.life}/{player.max_life}",
            status,
        )

    console.print(table)
    console.print()

    # Log location
    if game.logger is not None and game.logger.game_dir:
        console.print(f"[dim]Game log saved to: {game.logger.game_dir}[/dim]")


def main(argv: Optional[list[str]] = None):
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv
    display_welcome()

    # Load configuration
    config_path = argv[0] if argv else os.getenv("BANG_DICE_CONFIG") or DEFAULT_CONFIG_PATH
    console.print(f"[dim]Loading config from: {config_path}[/dim]")
    config_data = load_config(config_path)

    display_data = config_data.get("display") or {}
    reveal_roles = bool(display_data.get("reveal_roles", False))

    channel = EventChannel()
    channel.subscribe(ConsoleRenderer(console, reveal_roles=reveal_roles))
    controller = ConsoleController(console)

    # Player count from the file, else ask
    player_count = (config_data.get("game") or {}).get("player_count")
    if player_count is not None:
        try:
            validate_player_count(player_count)
        except InvalidPlayerCount as e:
            console.print(f"[red]{e}[/red]")
            player_count = None
    if player_count is None:
        player_count = request_player_count(controller, channel)

    try:
        game_config = build_game_config(config_data, player_count)
    except ValueError as e:
        console.print(f"[red]Invalid seed: {e}[/red]")
        sys.exit(1)

    logging_data = config_data.get("logging") or {}
    logger = None
    if logging_data.get("enabled", True):
        base_dir = os.getenv("BANG_DICE_LOG_DIR") or logging_data.get("base_dir", "games")
        logger = MarkdownLogger(base_dir=base_dir)

    game = Game(
        config=game_config,
        controller=controller,
        channel=channel,
        logger=logger,
        rng=random.Random(game_config.seed),
    )

    console.print(f"[cyan]Setting up {game_config.player_count} players...[/cyan]")
    game.setup_players()
    display_players(game, reveal_roles=reveal_roles)

    # Confirm start
    console.print("[yellow]Press Enter to start the game...[/yellow]")
    input()

    try:
        winner = game.run()
        display_results(game, winner)
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user.[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"\n[red]Error during game: {e}[/red]")
        raise


def run():
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run()
