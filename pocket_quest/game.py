import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pocket_quest.actors import Npc, Player, spawn_npcs
from pocket_quest.battle import (
    BattleOutcome,
    BattleSession,
    handle_battle_action,
    update_battle,
)
from pocket_quest.config import (
    SETTLE_DELAY_MS,
    TICK_MS,
    VIEW_COLS,
    VIEW_ROWS,
    WELCOME_TEXT,
)
from pocket_quest.controls import BATTLE_CONTROLS, Control, InputState
from pocket_quest.overworld import Dialogue, interact, update_overworld
from pocket_quest.scheduler import EventQueue
from pocket_quest.world_map import TileKind, WorldMap, build_default_map

logger = logging.getLogger(__name__)

BATTLE_SUMMARIES = {
    BattleOutcome.WON: "Battle won! Keep training your Leaflit.",
    BattleOutcome.LOST: "You recovered at town. Stay sharp in tall grass!",
    BattleOutcome.FLED: "You got away safely.",
}


class GameMode(Enum):
    OVERWORLD = "overworld"
    BATTLE = "battle"


# ----------------------------------------------------------------------------
# Read-only frame snapshot for the renderer
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class BattleView:
    player_name: str
    player_level: int
    player_hp: int
    player_max_hp: int
    enemy_name: str
    enemy_level: int
    enemy_hp: int
    enemy_max_hp: int
    message: str
    trainer_battle: bool
    accepts_input: bool


@dataclass(frozen=True)
class NpcView:
    x: int
    y: int
    trainer: bool


@dataclass(frozen=True)
class FrameSnapshot:
    mode: GameMode
    camera: Tuple[int, int]
    tiles: Tuple[Tuple[TileKind, ...], ...]
    player_position: Tuple[int, int]
    npcs: Tuple[NpcView, ...]
    player_level: int
    player_hp: int
    player_max_hp: int
    player_exp: int
    player_badges: int
    dialogue: Optional[str]
    battle: Optional[BattleView]


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def compute_camera(
    player_x: int,
    player_y: int,
    map_width: int,
    map_height: int,
    view_cols: int = VIEW_COLS,
    view_rows: int = VIEW_ROWS,
) -> Tuple[int, int]:
    """Top-left map tile of a viewport centred on the player, kept inside the map."""
    cam_x = clamp(player_x - view_cols // 2, 0, map_width - view_cols)
    cam_y = clamp(player_y - view_rows // 2, 0, map_height - view_rows)
    return cam_x, cam_y


def battle_view(battle: BattleSession) -> BattleView:
    return BattleView(
        player_name=battle.player_name,
        player_level=battle.player_level,
        player_hp=battle.player_hp,
        player_max_hp=battle.player_max_hp,
        enemy_name=battle.enemy_name,
        enemy_level=battle.enemy_level,
        enemy_hp=battle.enemy_hp,
        enemy_max_hp=battle.enemy_max_hp,
        message=battle.message,
        trainer_battle=battle.trainer_battle,
        accepts_input=battle.accepts_input,
    )


# ----------------------------------------------------------------------------
# Game loop
# ----------------------------------------------------------------------------


class Game:
    """Owns the world and the mode flag, and advances everything one tick at a time."""

    def __init__(
        self,
        world_map: Optional[WorldMap] = None,
        player: Optional[Player] = None,
        npcs: Optional[Sequence[Npc]] = None,
        rng: Optional[random.Random] = None,
        view_cols: int = VIEW_COLS,
        view_rows: int = VIEW_ROWS,
    ):
        self.world_map = world_map or build_default_map()
        if view_cols > self.world_map.width or view_rows > self.world_map.height:
            raise ValueError("The viewport cannot be larger than the map.")
        self.player = player or Player()
        self.npcs: List[Npc] = list(spawn_npcs() if npcs is None else npcs)
        self.rng = rng or random.Random()
        self.view_cols = view_cols
        self.view_rows = view_rows

        self.mode = GameMode.OVERWORLD
        self.battle: Optional[BattleSession] = None
        self.dialogue = Dialogue()
        self.events = EventQueue()
        self.input = InputState()
        self.tick_count = 0
        self._pending_exit: Optional[BattleSession] = None

    # Mode transitions ------------------------------------------------------

    def enter_battle(self, battle: BattleSession) -> None:
        self.mode = GameMode.BATTLE
        self.battle = battle
        logger.info("Entering battle with %s (trainer=%s)", battle.enemy_name, battle.trainer_battle)

    def _schedule_exit(self, battle: BattleSession, outcome: BattleOutcome) -> None:
        if self._pending_exit is battle:
            return
        self._pending_exit = battle
        self.events.schedule(SETTLE_DELAY_MS, lambda: self._return_to_overworld(battle, outcome))

    def _return_to_overworld(self, battle: BattleSession, outcome: BattleOutcome) -> None:
        if self.battle is not battle:
            return
        self.mode = GameMode.OVERWORLD
        self.battle = None
        self._pending_exit = None
        self.dialogue.show(BATTLE_SUMMARIES[outcome])
        logger.info("Back to the overworld after %s battle", outcome.value)

    # Ticking ---------------------------------------------------------------

    def start(self) -> None:
        self.dialogue.show(WELCOME_TEXT)

    def tick(self, elapsed_ms: int = TICK_MS) -> None:
        """Advance one frame: due events first, then whichever mode is active."""

        self.tick_count += 1
        self.events.advance(elapsed_ms)

        if self.mode == GameMode.OVERWORLD:
            self._tick_overworld()
        elif self.battle is not None:
            self._tick_battle(self.battle)

        self.input.end_tick()

    def _tick_overworld(self) -> None:
        self.dialogue.tick()

        if self.input.was_pressed(Control.INTERACT):
            battle = interact(self.player, self.npcs, self.dialogue)
            if battle:
                self.enter_battle(battle)
                return

        battle = update_overworld(
            self.world_map,
            self.player,
            self.npcs,
            self.input.held_direction(),
            self.rng,
        )
        if battle:
            self.enter_battle(battle)

    def _tick_battle(self, battle: BattleSession) -> None:
        if battle.accepts_input:
            action = self.input.first_pressed(BATTLE_CONTROLS)
            if action is not None:
                handle_battle_action(battle, self.player, action, self.rng)
                return

        outcome = update_battle(battle, self.player, self.rng)
        if outcome is not None:
            self._schedule_exit(battle, outcome)

    # Rendering -------------------------------------------------------------

    def snapshot(self) -> FrameSnapshot:
        cam_x, cam_y = compute_camera(
            self.player.x,
            self.player.y,
            self.world_map.width,
            self.world_map.height,
            self.view_cols,
            self.view_rows,
        )
        tiles = self.world_map.region(cam_x, cam_y, self.view_cols, self.view_rows)
        return FrameSnapshot(
            mode=self.mode,
            camera=(cam_x, cam_y),
            tiles=tuple(tuple(row) for row in tiles),
            player_position=self.player.position,
            npcs=tuple(NpcView(npc.x, npc.y, npc.trainer) for npc in self.npcs),
            player_level=self.player.level,
            player_hp=self.player.hp,
            player_max_hp=self.player.max_hp,
            player_exp=self.player.exp,
            player_badges=self.player.badges,
            dialogue=self.dialogue.text if self.dialogue.visible else None,
            battle=battle_view(self.battle) if self.battle is not None else None,
        )
