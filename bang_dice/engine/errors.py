"""Exceptions raised by the game engine."""


class GameError(Exception):
    """Base class for all game engine errors."""


class InvalidPlayerCount(GameError, ValueError):
    """Player count outside the supported range."""

    def __init__(self, count: object, minimum: int, maximum: int):
        self.count = count
        super().__init__(
            f"Invalid player count: {count!r}. Please enter a number between {minimum} and {maximum}."
        )


class InvalidSelection(GameError, ValueError):
    """A decision returned by a controller that the rules do not allow."""


class InvalidTargetSelection(InvalidSelection):
    """Chosen target is not among the offered candidates."""


class InvalidHoldSelection(InvalidSelection):
    """Hold selection names a die that does not exist."""


class GameInvariantError(GameError, RuntimeError):
    """Internal state the rules should have made impossible."""


class ScriptExhausted(GameError, LookupError):
    """A scripted controller was asked for more answers than it was given."""
