"""Decision makers: the interface the engine asks for choices."""

from abc import ABC, abstractmethod
from collections import deque
from typing import Iterable, Optional

from ..engine.dice import DiceFace, DiceView
from ..engine.errors import ScriptExhausted
from ..engine.player import Player


class PlayerController(ABC):
    """Answers the questions the engine asks during a game.

    Every call blocks until an answer is available. The engine validates the
    answers and asks again when one is not allowed.
    """

    @abstractmethod
    def collect_player_count(self) -> int:
        """How many players are participating."""

    @abstractmethod
    def choose_holds(self, player: Player, view: DiceView) -> set[int]:
        """Choose the dice to keep for the next roll.

        Args:
            player: The player rolling.
            view: Current faces, held flags and the dynamite dice that stay
                held regardless.

        Returns:
            Indices (0-4) of the dice to hold.
        """

    @abstractmethod
    def choose_target(self, shooter: Player, candidates: list[Player], face: DiceFace) -> Player:
        """Choose who a single shooting die hits.

        Only called when there is more than one candidate.

        Args:
            shooter: The player shooting.
            candidates: Players in range.
            face: SHOOT_NEAR or SHOOT_FAR.

        Returns:
            One of the candidates.
        """


class ScriptedController(PlayerController):
    """Plays back prepared answers.

    Targets are given by player name. When a queue runs dry the controller
    holds nothing and shoots the first candidate, unless `strict` is set, in
    which case it raises ScriptExhausted.
    """

    def __init__(
        self,
        player_counts: Iterable[int] = (),
        holds: Iterable[Iterable[int]] = (),
        targets: Iterable[str] = (),
        strict: bool = False,
    ):
        self.player_counts = deque(player_counts)
        self.holds = deque(set(h) for h in holds)
        self.targets = deque(targets)
        self.strict = strict
        self.table: list[Player] = []

        # What was asked, for inspection
        self.hold_requests: list[DiceView] = []
        self.target_requests: list[tuple[str, list[str], DiceFace]] = []

    def _next(self, queue: deque, what: str):
        if queue:
            return queue.popleft()
        if self.strict:
            raise ScriptExhausted(f"No scripted {what} left")
        return None

    def collect_player_count(self) -> int:
        count = self._next(self.player_counts, "player count")
        if count is None:
            raise ScriptExhausted("No scripted player count left")
        return count

    def choose_holds(self, player: Player, view: DiceView) -> set[int]:
        self.hold_requests.append(view)
        holds: Optional[set[int]] = self._next(self.holds, "hold selection")
        return holds if holds is not None else set()

    def choose_target(self, shooter: Player, candidates: list[Player], face: DiceFace) -> Player:
        self.target_requests.append((shooter.name, [c.name for c in candidates], face))
        name = self._next(self.targets, "target")
        if name is None:
            return candidates[0]
        # Names outside the candidates are looked up at the table and handed
        # back as-is so the engine gets to reject them.
        for player in list(candidates) + self.table:
            if player.name == name:
                return player
        raise ValueError(f"Unknown player in script: {name}")

    def seat(self, players: list[Player]) -> None:
        """Let scripted target names refer to anyone at the table."""
        self.table = list(players)
