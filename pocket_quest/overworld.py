import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from pocket_quest.actors import Npc, Player
from pocket_quest.battle import BattleSession, start_trainer_battle, start_wild_battle
from pocket_quest.config import (
    DIALOGUE_TICKS,
    ENCOUNTER_CHANCE,
    MOVE_COOLDOWN_TICKS,
    NOBODY_NEARBY_TEXT,
)
from pocket_quest.world_map import WorldMap

logger = logging.getLogger(__name__)


@dataclass
class Dialogue:
    """Overworld text box. Visible while `ticks` is above zero."""

    text: str = ""
    ticks: int = 0

    @property
    def visible(self) -> bool:
        return self.ticks > 0

    def show(self, text: str, ticks: int = DIALOGUE_TICKS) -> None:
        self.text = text
        self.ticks = ticks

    def tick(self) -> None:
        if self.ticks > 0:
            self.ticks -= 1


def npc_at(npcs: Sequence[Npc], x: int, y: int) -> Optional[Npc]:
    for npc in npcs:
        if npc.x == x and npc.y == y:
            return npc
    return None


def encounter_roll(rng) -> bool:
    return rng.random() < ENCOUNTER_CHANCE


def try_move(
    world_map: WorldMap,
    player: Player,
    npcs: Sequence[Npc],
    dx: int,
    dy: int,
    rng,
) -> Optional[BattleSession]:
    """Step the player one tile. Returns a wild battle if the step stirred one up."""

    new_x = player.x + dx
    new_y = player.y + dy
    if world_map.is_blocking(new_x, new_y):
        logger.debug("Move to (%d, %d) blocked by %s", new_x, new_y, world_map.tile_at(new_x, new_y).name)
        return None
    if npc_at(npcs, new_x, new_y):
        logger.debug("Move to (%d, %d) blocked by an NPC", new_x, new_y)
        return None

    player.move_to(new_x, new_y)

    if world_map.is_encounter_tile(new_x, new_y) and encounter_roll(rng):
        return start_wild_battle(player, rng)
    return None


def update_overworld(
    world_map: WorldMap,
    player: Player,
    npcs: Sequence[Npc],
    direction: tuple[int, int],
    rng,
) -> Optional[BattleSession]:
    """Run one tick of overworld movement for the currently held direction."""

    player.step_cooldown = max(0, player.step_cooldown - 1)
    if player.step_cooldown > 0:
        return None

    dx, dy = direction
    if not (dx or dy):
        return None

    # Blocked attempts cost the same cooldown as real steps.
    player.step_cooldown = MOVE_COOLDOWN_TICKS
    return try_move(world_map, player, npcs, dx, dy, rng)


def interact(player: Player, npcs: Sequence[Npc], dialogue: Dialogue) -> Optional[BattleSession]:
    """Talk to the first NPC standing next to the player.

    An unbeaten trainer turns the conversation into a battle, which is returned.
    """

    for npc in npcs:
        if npc.distance_to(player.x, player.y) != 1:
            continue
        dialogue.show(npc.text)
        if npc.trainer and player.badges == 0:
            logger.info("%s challenged the player", npc.name)
            battle = start_trainer_battle(player, npc.name)
            dialogue.show(battle.message)
            return battle
        return None

    dialogue.show(NOBODY_NEARBY_TEXT)
    return None
