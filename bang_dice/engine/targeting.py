"""Shooting: who can be hit from where, and collecting the shots of a turn."""

from collections import Counter
from typing import TYPE_CHECKING, Callable, Optional

from ..communication.channels import EventChannel, EventKind
from .dice import DiceFace, DicePool, face_name
from .errors import InvalidTargetSelection
from .player import Player

if TYPE_CHECKING:
    from ..agents.controller import PlayerController

SHOT_DISTANCES = {
    DiceFace.SHOOT_NEAR: 1,
    DiceFace.SHOOT_FAR: 2,
}


def alive_seating(players: list[Player]) -> list[Player]:
    """Living players in seating order. Dead players do not count as seats."""
    return [p for p in players if p.alive]


def candidates_at(players: list[Player], shooter: Player, distance: int) -> list[Player]:
    """Players a shooter can hit at a given distance.

    Distance is counted in seats among the living players, in both
    directions. If the distance wraps back onto the shooter (two players left
    shooting at distance 2) the shot falls back to distance 1.

    Args:
        players: All players in seating order.
        shooter: The player shooting. Must be alive.
        distance: Number of living seats away.

    Returns:
        Distinct candidates, the one ahead of the shooter first.
    """
    seating = alive_seating(players)
    if shooter not in seating or len(seating) < 2:
        return []

    position = seating.index(shooter)
    size = len(seating)
    step = distance % size
    if step == 0:
        step = 1

    candidates: list[Player] = []
    for direction in (1, -1):
        target = seating[(position + direction * step) % size]
        if target is not shooter and target not in candidates:
            candidates.append(target)
    return candidates


def shots_in_pool(pool: DicePool) -> list[DiceFace]:
    """One entry per shooting die: all Shoot-Near dice, then all Shoot-Far dice."""
    return [
        face
        for face in (DiceFace.SHOOT_NEAR, DiceFace.SHOOT_FAR)
        for _ in range(pool.count(face))
    ]


class ShotResolver:
    """Collects the targets of every shooting die rolled in a turn."""

    def __init__(
        self,
        players: list[Player],
        controller: "PlayerController",
        channel: EventChannel,
        turn: int = 0,
    ):
        self.players = players
        self.controller = controller
        self.channel = channel
        self.turn = turn

    def choose(self, shooter: Player, face: DiceFace) -> Optional[Player]:
        """Pick the target for a single shooting die.

        A lone candidate is picked automatically. Otherwise the controller is
        asked until it names one of the candidates.

        Returns:
            The target, or None if nobody is in range.
        """
        candidates = candidates_at(self.players, shooter, SHOT_DISTANCES[face])
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        while True:
            choice = self.controller.choose_target(shooter, list(candidates), face)
            try:
                return self._validate(choice, candidates, face)
            except InvalidTargetSelection as e:
                self.channel.emit(EventKind.INVALID_SELECTION, str(e), self.turn, shooter)

    def _validate(self, choice: object, candidates: list[Player], face: DiceFace) -> Player:
        for candidate in candidates:
            if candidate is choice:
                return candidate
        names = ", ".join(c.name for c in candidates)
        label = getattr(choice, "name", choice)
        raise InvalidTargetSelection(
            f"{label} is not a valid target for {face_name(face)}. Choose one of: {names}"
        )

    def collect(
        self,
        shooter: Player,
        shots: list[DiceFace],
        on_shot: Optional[Callable[[Player, DiceFace], None]] = None,
    ) -> Counter:
        """Choose targets for every shot and tally the damage.

        Damage is only tallied here; the caller applies it once all targets
        are known.

        Args:
            shooter: The player shooting.
            shots: One face per shooting die.
            on_shot: Called with (target, face) after each target is chosen.

        Returns:
            Counter mapping each target to the damage it takes.
        """
        damage: Counter = Counter()
        for face in shots:
            target = self.choose(shooter, face)
            if target is None:
                self.channel.emit(
                    EventKind.SHOT,
                    f"{shooter.name}'s {face_name(face)} has nobody in range.",
                    self.turn,
                    shooter,
                )
                continue
            damage[target] += 1
            if on_shot is not None:
                on_shot(target, face)
        return damage
