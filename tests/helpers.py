"""Test doubles shared by the test modules."""

import random
from collections import deque

from bang_dice.engine.dice import DiceFace
from bang_dice.engine.roles import Role

FOUR_PLAYERS = [Role.SHERIFF, Role.OUTLAW, Role.OUTLAW, Role.RENEGADE]
ALL_HELD = {0, 1, 2, 3, 4}

ARROW = DiceFace.ARROW
DYNAMITE = DiceFace.DYNAMITE
NEAR = DiceFace.SHOOT_NEAR
FAR = DiceFace.SHOOT_FAR
BEER = DiceFace.BEER
GATLING = DiceFace.GATLING


class ScriptedDice:
    """Stands in for random.Random: choice() returns queued faces in order."""

    def __init__(self, faces=()):
        self.faces = deque(faces)

    def choice(self, seq):
        assert self.faces, "ran out of scripted faces"
        face = self.faces.popleft()
        assert face in seq
        return face

    def shuffle(self, items):
        pass


class RestrictedDice:
    """Seeded random source that only ever rolls the given faces."""

    def __init__(self, faces, seed=0):
        self.faces = tuple(faces)
        self.random = random.Random(seed)

    def choice(self, seq):
        return self.random.choice(self.faces)

    def shuffle(self, items):
        self.random.shuffle(items)


class Recorder:
    """Observer that keeps everything it is told."""

    def __init__(self):
        self.events = []
        self.statuses = []

    def render_event(self, event):
        self.events.append(event)

    def render_player_status(self, player):
        self.statuses.append((player.name, player.life, player.arrows))

    def kinds(self):
        return [e.kind for e in self.events]


class ArrowLedger:
    """Observer that totals tokens in hands and in the pile at every event."""

    def __init__(self, game):
        self.game = game
        self.totals = []

    def render_event(self, event):
        in_hands = sum(p.arrows for p in self.game.players)
        self.totals.append(in_hands + self.game.arrow_pool.remaining)

    def render_player_status(self, player):
        pass
