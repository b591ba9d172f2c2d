"""A single player's turn: rolling, holding and resolving the dice."""

from typing import TYPE_CHECKING

from ..communication.channels import EventKind
from .dice import DiceFace, DicePool, face_name
from .errors import InvalidHoldSelection
from .phases import REROLLS_PER_TURN, TurnState
from .player import Player
from .targeting import ShotResolver, shots_in_pool

if TYPE_CHECKING:
    from .game import Game

DYNAMITE_THRESHOLD = 3
GATLING_THRESHOLD = 3


class TurnEngine:
    """Runs one player's turn against a fresh dice pool.

    The turn ends as soon as the player is dead or the game is over, whatever
    step it is in.
    """

    def __init__(self, game: "Game", player: Player):
        """Prepare a turn.

        Args:
            game: The game the turn belongs to. Owns players and arrow pile.
            player: The player whose turn it is.
        """
        self.game = game
        self.player = player
        self.pool = DicePool()
        self.state = TurnState(turn_number=game.turn_number, player_name=player.name)

    @property
    def finished(self) -> bool:
        return self.game.finished or not self.player.alive

    def run(self) -> TurnState:
        """Play the whole turn.

        Returns:
            The final turn state.
        """
        self.game.emit(
            EventKind.TURN_START,
            f"Current Player: {self.player.name}",
            self.player,
        )
        self.pool.reset()
        self.state.rolls_remaining = REROLLS_PER_TURN
        self.roll()

        while self.state.rolls_remaining > 0 and not self.finished:
            self.select_holds()
            self.state.rolls_remaining -= 1
            self.roll()

        if self.finished:
            self.state.complete()
            return self.state

        self.state.start_resolution()
        self.resolve_shooting()
        if not self.finished:
            self.resolve_beer()
        if not self.finished:
            self.resolve_gatling()

        self.state.complete()
        return self.state

    def roll(self) -> None:
        """Roll the unheld dice, then take arrows and check for dynamite."""
        rolled = self.pool.roll_unheld(self.game.rng)
        self.state.rolls_made += 1
        self.game.emit(
            EventKind.ROLL,
            f"{self.player.name} rolls: {self.pool.describe()}",
            self.player,
        )

        for index in rolled:
            if self.pool.dice[index].value == DiceFace.ARROW:
                self.game.gain_arrow(self.player)
                if self.finished:
                    return

        self.check_dynamite()

    def check_dynamite(self) -> None:
        """Three or more dynamite: lose a life and stop rolling."""
        if self.pool.count(DiceFace.DYNAMITE) < DYNAMITE_THRESHOLD:
            return
        self.game.emit(
            EventKind.DYNAMITE,
            f"Dynamite explodes! {self.player.name} loses a life!",
            self.player,
        )
        self.state.rolls_remaining = 0
        self.game.apply_damage({self.player: 1}, cause="dynamite")

    def select_holds(self) -> None:
        """Ask the controller which dice to keep for the next roll."""
        while True:
            view = self.pool.view(self.state.rolls_remaining)
            requested = self.game.controller.choose_holds(self.player, view)
            try:
                held = self.pool.set_held(requested or ())
                break
            except InvalidHoldSelection as e:
                self.game.emit(EventKind.INVALID_SELECTION, str(e), self.player)

        kept = ", ".join(face_name(self.pool.dice[i].value) for i in sorted(held))
        self.game.emit(
            EventKind.HOLD,
            f"{self.player.name} holds: {kept or 'nothing'}",
            self.player,
        )

    def resolve_shooting(self) -> None:
        """Pick a target for every shooting die, then deal the damage."""
        shots = shots_in_pool(self.pool)
        if not shots:
            return

        resolver = ShotResolver(
            self.game.players,
            self.game.controller,
            self.game.channel,
            turn=self.game.turn_number,
        )
        damage = resolver.collect(self.player, shots, on_shot=self._announce_shot)
        self.game.apply_damage(damage, cause="shots")

    def _announce_shot(self, target: Player, face: DiceFace) -> None:
        self.game.emit(
            EventKind.SHOT,
            f"{self.player.name} shoots {target.name} ({face_name(face)})",
            target,
        )

    def resolve_beer(self) -> None:
        """Heal one life per Beer, up to max life."""
        beers = self.pool.count(DiceFace.BEER)
        if beers == 0:
            return
        healed = self.player.heal(beers)
        self.game.emit(
            EventKind.HEAL,
            f"{self.player.name} heals for {healed} HP "
            f"({self.player.life}/{self.player.max_life})",
            self.player,
        )

    def resolve_gatling(self) -> None:
        """Three or more Gatlings hit everyone else and clear the shooter's arrows."""
        if self.pool.count(DiceFace.GATLING) < GATLING_THRESHOLD:
            return
        self.game.emit(
            EventKind.GATLING,
            f"Gatling! Everyone except {self.player.name} loses a life. "
            f"{self.player.name} loses all their arrows.",
            self.player,
        )
        targets = {
            p: 1 for p in self.game.players
            if p is not self.player and p.alive
        }
        self.game.apply_damage(targets, cause="the Gatling")
        self.game.discharge_arrows(self.player)
