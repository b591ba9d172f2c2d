"""Main game engine for Bang! dice."""

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Optional, Sequence

from ..communication.channels import EventChannel, EventKind
from ..communication.markdown_logger import MarkdownLogger
from .arrows import ArrowPool
from .errors import GameInvariantError, InvalidPlayerCount
from .phases import TurnState
from .player import Player
from .roles import (
    Faction,
    Role,
    build_role_deck,
    is_bad_guy,
    role_name,
    validate_player_count,
)
from .turn import TurnEngine

if TYPE_CHECKING:
    from ..agents.controller import PlayerController

GAME_OVER_MESSAGES = {
    Faction.LAW: "Game over! The Law wins!",
    Faction.OUTLAWS: "Game over! Outlaws win!",
    Faction.RENEGADE: "Game over! Renegade wins!",
}


@dataclass
class GameConfig:
    """Configuration for a game."""
    player_count: int = 4
    player_names: list[str] = field(default_factory=list)
    seed: Optional[int] = None

    def name_for(self, seat: int) -> str:
        """Name of the player in a seat, falling back to "Player N"."""
        if seat < len(self.player_names) and self.player_names[seat]:
            return self.player_names[seat]
        return f"Player {seat + 1}"


def request_player_count(
    controller: "PlayerController",
    channel: Optional[EventChannel] = None,
) -> int:
    """Ask the controller for a player count until it gives a valid one.

    Args:
        controller: Where the answer comes from.
        channel: Optional channel that hears about rejected answers.

    Returns:
        A player count between 4 and 8.
    """
    while True:
        count = controller.collect_player_count()
        try:
            return validate_player_count(count)
        except InvalidPlayerCount as e:
            if channel is not None:
                channel.emit(EventKind.INVALID_SELECTION, str(e))


class Game:
    """The Bang! dice game controller.

    Owns the players, the arrow pile, the turn pointer and the finished flag.
    Decisions come from the controller; everything that happens is
    broadcast on the event channel.
    """

    def __init__(
        self,
        config: GameConfig,
        controller: "PlayerController",
        channel: Optional[EventChannel] = None,
        logger: Optional[MarkdownLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the game.

        Args:
            config: Game configuration.
            controller: Source of hold and target decisions.
            channel: Event channel. A private one is created if not given.
            logger: Optional markdown logger.
            rng: Random source for roles and dice. Seeded from config if not given.
        """
        validate_player_count(config.player_count)
        self.config = config
        self.controller = controller
        self.channel = channel or EventChannel()
        self.logger = logger
        if logger is not None:
            self.channel.subscribe(logger)
        self.rng = rng or random.Random(config.seed)

        self.arrow_pool = ArrowPool()
        self.players: list[Player] = []
        self.current_index = -1
        self.turn_number = 0
        self.finished = False
        self.winner: Optional[Faction] = None

    def setup_players(self, roles: Optional[Sequence[Role]] = None) -> None:
        """Deal roles and seat the players.

        The Sheriff takes the first turn.

        Args:
            roles: Roles in seating order. Dealt from the role deck if not given.
        """
        count = self.config.player_count
        if roles is None:
            roles = build_role_deck(count, self.rng)
        roles = list(roles)

        if len(roles) != count:
            raise ValueError(
                f"Role count ({len(roles)}) doesn't match "
                f"player count ({count})"
            )
        if roles.count(Role.SHERIFF) != 1:
            raise GameInvariantError(
                f"A game needs exactly one Sheriff, got {roles.count(Role.SHERIFF)}"
            )

        self.players = [
            Player(name=self.config.name_for(seat), role=role)
            for seat, role in enumerate(roles)
        ]
        self.arrow_pool.refill()
        self.turn_number = 0
        self.finished = False
        self.winner = None
        self.current_index = self.sheriff_index

        if self.logger is not None:
            self.logger.start_game()
            self.logger.log_setup(self.players)

        self.emit(
            EventKind.SETUP,
            f"{count} players at the table. {self.sheriff.name} is the Sheriff.",
        )

    def emit(self, kind: EventKind, message: str, player: Optional[Player] = None) -> None:
        """Broadcast an event stamped with the current turn number."""
        self.channel.emit(kind, message, self.turn_number, player)

    @property
    def alive_players(self) -> list[Player]:
        """Get all alive players."""
        return [p for p in self.players if p.alive]

    @property
    def sheriff_index(self) -> int:
        for index, player in enumerate(self.players):
            if player.role == Role.SHERIFF:
                return index
        raise GameInvariantError("No Sheriff at the table")

    @property
    def sheriff(self) -> Player:
        return self.players[self.sheriff_index]

    @property
    def current_player(self) -> Player:
        if not 0 <= self.current_index < len(self.players):
            raise GameInvariantError("Players have not been set up")
        return self.players[self.current_index]

    def next_alive_index(self, start: int, step: int = 1) -> int:
        """Index of the next living player from `start`, wrapping around.

        Args:
            start: Seat to start from (not itself considered first).
            step: 1 to go forward, -1 to go backward.
        """
        size = len(self.players)
        for offset in range(1, size + 1):
            index = (start + step * offset) % size
            if self.players[index].alive:
                return index
        raise GameInvariantError("No living player left to take a turn")

    def advance_turn(self) -> None:
        """Pass the turn to the next living player."""
        if self.finished:
            return
        self.current_index = self.next_alive_index(self.current_index)

    def gain_arrow(self, player: Player) -> None:
        """Move one token from the pile to a player. An empty pile means an attack."""
        player.add_arrow()
        empty = self.arrow_pool.take()
        self.emit(
            EventKind.ARROW,
            f"{player.name} gains an arrow! ({self.arrow_pool.remaining} left)",
            player,
        )
        if empty:
            self.resolve_arrow_attack()

    def resolve_arrow_attack(self) -> None:
        """Everyone loses one life per token held, then the pile is refilled."""
        damage = {p: p.arrows for p in self.players if p.arrows > 0}
        for player in self.players:
            player.discard_arrows()
        self.arrow_pool.refill()
        self.emit(
            EventKind.ARROW_ATTACK,
            "The Indians attack! Everyone loses a life for each arrow they hold.",
        )
        self.apply_damage(damage, cause="arrows")

    def discharge_arrows(self, player: Player) -> int:
        """Return all of a player's tokens to the pile.

        Returns:
            The number of tokens returned.
        """
        returned = player.discard_arrows()
        self.arrow_pool.give_back(returned)
        return returned

    def apply_damage(self, damage: Mapping[Player, int], cause: str) -> list[Player]:
        """Deal damage to several players at once.

        All damage lands before any death is handled, so simultaneous deaths
        are judged on the final state of the table.

        Args:
            damage: Damage per player.
            cause: Short description for the event log.

        Returns:
            Players killed by this damage.
        """
        killed = []
        for player, amount in damage.items():
            if amount <= 0:
                continue
            was_alive = player.alive
            player.receive_damage(amount)
            self.emit(
                EventKind.DAMAGE,
                f"{player.name} takes {amount} damage from {cause} "
                f"({player.life}/{player.max_life})",
                player,
            )
            if was_alive and not player.alive:
                killed.append(player)

        for player in killed:
            self._handle_death(player)
        return killed

    def _handle_death(self, player: Player) -> None:
        self.discharge_arrows(player)
        self.emit(
            EventKind.DEATH,
            f"{player.name} died! They were the {role_name(player.role)}.",
            player,
        )
        self.check_end_game()

    def check_end_game(self) -> Optional[Faction]:
        """Check if the game has ended.

        Sheriff death is checked before the bad guys being wiped out. Once a
        winner is decided it does not change.

        Returns:
            The winning faction, or None if the game goes on.
        """
        if self.finished:
            return self.winner

        alive = self.alive_players
        if not self.sheriff.alive:
            if len(alive) == 1 and alive[0].role == Role.RENEGADE:
                winner = Faction.RENEGADE
            else:
                winner = Faction.OUTLAWS
        elif not any(is_bad_guy(p.role) for p in alive):
            winner = Faction.LAW
        else:
            return None

        self.finished = True
        self.winner = winner
        self.emit(EventKind.GAME_OVER, GAME_OVER_MESSAGES[winner])
        return winner

    def play_turn(self) -> TurnState:
        """Play the current player's turn and report everyone's status."""
        if self.finished:
            raise GameInvariantError("The game is already over")
        player = self.current_player
        if not player.alive:
            raise GameInvariantError(f"{player.name} is dead and cannot take a turn")

        self.turn_number += 1
        state = TurnEngine(self, player).run()

        for p in self.players:
            self.channel.player_status(p)
        return state

    def run(self) -> Faction:
        """Run the complete game.

        Returns:
            The winning faction.
        """
        if not self.players:
            self.setup_players()

        while not self.finished:
            self.play_turn()
            self.advance_turn()

        if self.logger is not None:
            self.logger.log_game_end(self.winner, self.players)

        return self.winner
