"""Controllers that make the players' decisions."""

from .controller import PlayerController, ScriptedController
from .console import ConsoleController

__all__ = ["PlayerController", "ScriptedController", "ConsoleController"]
