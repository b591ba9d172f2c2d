"""Shared fixtures."""

import pytest

from bang_dice.agents.controller import ScriptedController
from bang_dice.engine.game import Game, GameConfig

from helpers import FOUR_PLAYERS, Recorder, ScriptedDice


@pytest.fixture
def make_game():
    """Factory for a seated game with scripted dice and a scripted controller.

    The returned game carries a `recorder` observer with every event.
    """

    def _make(roles=FOUR_PLAYERS, faces=(), controller=None, names=None):
        controller = controller or ScriptedController()
        config = GameConfig(player_count=len(roles), player_names=names or [])
        game = Game(config, controller, rng=ScriptedDice(faces))
        recorder = Recorder()
        game.channel.subscribe(recorder)
        game.setup_players(roles)
        controller.seat(game.players)
        game.recorder = recorder
        return game

    return _make
