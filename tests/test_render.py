import pytest

pygame = pytest.importorskip("pygame")

from pocket_quest.app import build_key_bindings  # noqa: E402
from pocket_quest.controls import Control, InputState  # noqa: E402
from pocket_quest.render import TILE_STYLES, hp_color  # noqa: E402
from pocket_quest.world_map import TileKind  # noqa: E402


def test_every_tile_kind_has_a_style():
    assert set(TILE_STYLES) == set(TileKind)


@pytest.mark.parametrize(
    "hp, max_hp, expected",
    [
        (34, 34, (67, 196, 76)),
        (17, 34, (240, 190, 70)),
        (7, 34, (240, 190, 70)),
        (6, 34, (225, 79, 79)),
        (0, 34, (225, 79, 79)),
        (0, 0, (225, 79, 79)),
    ],
)
def test_hp_bar_colour_bands(hp, max_hp, expected):
    assert hp_color(hp, max_hp) == expected


def test_arrows_and_wasd_share_controls():
    state = InputState(build_key_bindings())
    state.key_down(pygame.K_a)
    state.key_down(pygame.K_LEFT)
    state.key_up(pygame.K_a)
    assert state.is_held(Control.LEFT)
    state.key_down(pygame.K_3)
    assert state.was_pressed(Control.HEAL)
    state.key_down(pygame.K_F12)
    assert state.first_pressed([Control.RUN, Control.INTERACT]) is None
