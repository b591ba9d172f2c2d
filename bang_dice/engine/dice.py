"""Dice faces and the five-dice pool rolled each turn."""

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable

from .errors import InvalidHoldSelection

DICE_COUNT = 5


class DiceFace(Enum):
    """Symbols on a Bang! die."""
    NONE = auto()  # Not rolled yet
    ARROW = auto()
    DYNAMITE = auto()
    SHOOT_NEAR = auto()
    SHOOT_FAR = auto()
    BEER = auto()
    GATLING = auto()


FACE_NAMES = {
    DiceFace.NONE: "-",
    DiceFace.ARROW: "Arrow",
    DiceFace.DYNAMITE: "Dynamite",
    DiceFace.SHOOT_NEAR: "Shoot 1",
    DiceFace.SHOOT_FAR: "Shoot 2",
    DiceFace.BEER: "Beer",
    DiceFace.GATLING: "Gatling",
}

FACES: tuple[DiceFace, ...] = (
    DiceFace.ARROW,
    DiceFace.DYNAMITE,
    DiceFace.SHOOT_NEAR,
    DiceFace.SHOOT_FAR,
    DiceFace.BEER,
    DiceFace.GATLING,
)


def face_name(face: DiceFace) -> str:
    """Get the display name of a face."""
    return FACE_NAMES[face]


@dataclass
class Die:
    """A single die."""

    value: DiceFace = DiceFace.NONE
    held: bool = False

    def roll(self, rng: random.Random) -> DiceFace:
        """Roll the die and return the new face."""
        self.value = rng.choice(FACES)
        return self.value


@dataclass(frozen=True)
class DiceView:
    """Snapshot of the pool handed to whoever picks the holds."""

    faces: tuple[DiceFace, ...]
    held: tuple[bool, ...]
    forced: frozenset[int]
    rolls_remaining: int

    @property
    def names(self) -> list[str]:
        """Face names in die order."""
        return [face_name(face) for face in self.faces]

    @property
    def held_indices(self) -> frozenset[int]:
        """Indices currently held, forced ones included."""
        return frozenset(i for i, held in enumerate(self.held) if held)


class DicePool:
    """The five dice a player rolls during a turn.

    Dynamite cannot be rerolled: any die showing it stays held for the rest
    of the turn, whatever hold selection is requested.
    """

    def __init__(self):
        self.dice: list[Die] = []
        self.reset()

    def reset(self) -> None:
        """Replace the pool with fresh, unrolled, unheld dice."""
        self.dice = [Die() for _ in range(DICE_COUNT)]

    def roll_unheld(self, rng: random.Random) -> list[int]:
        """Roll every die that is not held.

        Args:
            rng: Random source; only its `choice` method is used.

        Returns:
            Indices of the dice that were rolled.
        """
        rolled = []
        for index, die in enumerate(self.dice):
            if not die.held:
                die.roll(rng)
                rolled.append(index)
        self._lock_dynamite()
        return rolled

    def _lock_dynamite(self) -> None:
        for die in self.dice:
            if die.value == DiceFace.DYNAMITE:
                die.held = True

    def count(self, face: DiceFace) -> int:
        """Number of dice currently showing a face."""
        return sum(1 for die in self.dice if die.value == face)

    def set_held(self, indices: Iterable[int]) -> frozenset[int]:
        """Hold the given dice for the next roll and release the others.

        Dynamite dice are held whether requested or not.

        Args:
            indices: Indices (0-4) of the dice to hold.

        Returns:
            The indices actually held.

        Raises:
            InvalidHoldSelection: If an index does not name a die.
        """
        requested = set(indices)
        invalid = sorted(
            i for i in requested
            if isinstance(i, bool) or not isinstance(i, int) or not 0 <= i < len(self.dice)
        )
        if invalid:
            raise InvalidHoldSelection(
                f"No such dice: {invalid}. Valid indices are 0-{len(self.dice) - 1}."
            )

        for index, die in enumerate(self.dice):
            die.held = index in requested or die.value == DiceFace.DYNAMITE
        return self.held_indices

    @property
    def faces(self) -> tuple[DiceFace, ...]:
        return tuple(die.value for die in self.dice)

    @property
    def held_indices(self) -> frozenset[int]:
        return frozenset(i for i, die in enumerate(self.dice) if die.held)

    @property
    def forced_held(self) -> frozenset[int]:
        """Indices held because they show Dynamite."""
        return frozenset(
            i for i, die in enumerate(self.dice) if die.value == DiceFace.DYNAMITE
        )

    def view(self, rolls_remaining: int) -> DiceView:
        """Build a read-only snapshot of the pool."""
        return DiceView(
            faces=self.faces,
            held=tuple(die.held for die in self.dice),
            forced=self.forced_held,
            rolls_remaining=rolls_remaining,
        )

    def describe(self) -> str:
        """Faces in die order, held dice marked with an asterisk."""
        return ", ".join(
            f"{face_name(die.value)}{'*' if die.held else ''}" for die in self.dice
        )
