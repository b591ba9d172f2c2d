"""Dice pool tests: rolling, holding and the dynamite lock."""

import random

import pytest

from bang_dice.engine.dice import DICE_COUNT, FACES, DiceFace, DicePool, Die, face_name
from bang_dice.engine.errors import InvalidHoldSelection

from helpers import ALL_HELD, ARROW, BEER, DYNAMITE, FAR, GATLING, NEAR, ScriptedDice


def rolled_pool(*faces):
    pool = DicePool()
    pool.roll_unheld(ScriptedDice(faces))
    return pool


# ── Pool basics ─────────────────────────────────────────────────────────────

class TestPool:

    def test_new_pool_has_five_unrolled_unheld_dice(self):
        pool = DicePool()
        assert len(pool.dice) == DICE_COUNT == 5
        assert pool.faces == (DiceFace.NONE,) * 5
        assert pool.held_indices == frozenset()

    def test_reset_replaces_dice(self):
        pool = rolled_pool(DYNAMITE, BEER, BEER, BEER, BEER)
        pool.reset()
        assert pool.faces == (DiceFace.NONE,) * 5
        assert pool.held_indices == frozenset()

    def test_die_rolls_one_of_six_faces(self):
        die = Die()
        seen = set()
        rng = random.Random(0)
        for _ in range(300):
            seen.add(die.roll(rng))
        assert seen == set(FACES)
        assert DiceFace.NONE not in seen

    def test_count(self):
        pool = rolled_pool(BEER, BEER, ARROW, GATLING, BEER)
        assert pool.count(BEER) == 3
        assert pool.count(ARROW) == 1
        assert pool.count(DYNAMITE) == 0


# ── Rolling ─────────────────────────────────────────────────────────────────

class TestRolling:

    def test_first_roll_rolls_every_die(self):
        pool = DicePool()
        rolled = pool.roll_unheld(random.Random(3))
        assert rolled == [0, 1, 2, 3, 4]
        assert all(face in FACES for face in pool.faces)

    def test_held_dice_keep_their_value(self):
        pool = rolled_pool(BEER, ARROW, NEAR, FAR, GATLING)
        pool.set_held({0, 2})
        rolled = pool.roll_unheld(ScriptedDice([GATLING, GATLING, GATLING]))
        assert rolled == [1, 3, 4]
        assert pool.faces == (BEER, GATLING, NEAR, GATLING, GATLING)

    @pytest.mark.parametrize("seed", range(5))
    def test_holding_everything_changes_nothing(self, seed):
        pool = DicePool()
        rng = random.Random(seed)
        pool.roll_unheld(rng)
        before = sorted(face.name for face in pool.faces)
        pool.set_held(ALL_HELD)
        assert pool.roll_unheld(rng) == []
        assert sorted(face.name for face in pool.faces) == before


# ── Holding and dynamite ────────────────────────────────────────────────────

class TestHolding:

    def test_set_held_replaces_previous_selection(self):
        pool = rolled_pool(BEER, BEER, BEER, BEER, BEER)
        pool.set_held({0, 1})
        assert pool.set_held({3}) == frozenset({3})

    def test_dynamite_is_held_as_soon_as_it_is_rolled(self):
        pool = rolled_pool(DYNAMITE, BEER, BEER, ARROW, GATLING)
        assert pool.held_indices == frozenset({0})
        assert pool.forced_held == frozenset({0})

    def test_dynamite_cannot_be_released(self):
        pool = rolled_pool(BEER, DYNAMITE, BEER, DYNAMITE, GATLING)
        assert pool.set_held(set()) == frozenset({1, 3})
        assert pool.set_held({0}) == frozenset({0, 1, 3})

    def test_dynamite_survives_reroll(self):
        pool = rolled_pool(DYNAMITE, BEER, BEER, BEER, BEER)
        pool.set_held(set())
        pool.roll_unheld(ScriptedDice([ARROW, ARROW, ARROW, ARROW]))
        assert pool.faces[0] == DYNAMITE

    def test_view_reports_forced_dice_as_held(self):
        pool = rolled_pool(DYNAMITE, BEER, BEER, BEER, NEAR)
        pool.set_held({4})
        view = pool.view(rolls_remaining=1)
        assert view.forced == frozenset({0})
        assert view.held_indices == frozenset({0, 4})
        assert view.rolls_remaining == 1
        assert view.names == ["Dynamite", "Beer", "Beer", "Beer", "Shoot 1"]

    @pytest.mark.parametrize("indices", [{5}, {-1}, {0, 9}, {"1"}])
    def test_invalid_indices_are_rejected(self, indices):
        pool = rolled_pool(BEER, BEER, BEER, BEER, BEER)
        pool.set_held({2})
        with pytest.raises(InvalidHoldSelection):
            pool.set_held(indices)
        assert pool.held_indices == frozenset({2})

    def test_describe_marks_held_dice(self):
        pool = rolled_pool(DYNAMITE, BEER, ARROW, NEAR, FAR)
        assert pool.describe() == "Dynamite*, Beer, Arrow, Shoot 1, Shoot 2"

    def test_face_names(self):
        assert face_name(GATLING) == "Gatling"
        assert face_name(DiceFace.NONE) == "-"
