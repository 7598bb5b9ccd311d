import random

import pytest

from pocket_quest.actors import Player
from pocket_quest.world_map import TileKind, WorldMap


class ScriptedRng:
    """Stand-in for random.Random that hands back queued values in order."""

    def __init__(self, randoms=(), ints=(), choices=()):
        self.randoms = list(randoms)
        self.ints = list(ints)
        self.choices = list(choices)

    def random(self):
        return self.randoms.pop(0)

    def randint(self, low, high):
        value = self.ints.pop(0)
        assert low <= value <= high, f"{value} outside [{low}, {high}]"
        return value

    def choice(self, seq):
        if self.choices:
            return self.choices.pop(0)
        return seq[0]


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def player():
    return Player()


@pytest.fixture
def small_map():
    """7x5 field: trees around the edge, a tall grass patch, a pond tile and a house tile.

    #######
    #..TT.#
    #..TW.#
    #...H.#
    #######
    """
    G, T, W, H, R, P = (
        TileKind.GRASS,
        TileKind.TALL_GRASS,
        TileKind.WATER,
        TileKind.HOUSE,
        TileKind.TREE,
        TileKind.PATH,
    )
    rows = [
        [R, R, R, R, R, R, R],
        [R, G, P, T, T, G, R],
        [R, G, P, T, W, G, R],
        [R, G, P, G, H, G, R],
        [R, R, R, R, R, R, R],
    ]
    return WorldMap(rows)
