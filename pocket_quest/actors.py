import logging
from dataclasses import dataclass
from typing import List

from pocket_quest.config import (
    EXP_PER_LEVEL,
    MAX_HP_PER_LEVEL,
    PARTNER_NAME,
    START_HP,
    START_LEVEL,
    START_POSITION,
)

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------
# Player
# ----------------------------------------------------------------------------


@dataclass
class Player:
    x: int = START_POSITION[0]
    y: int = START_POSITION[1]
    level: int = START_LEVEL
    exp: int = 0
    badges: int = 0
    hp: int = START_HP
    max_hp: int = START_HP
    step_cooldown: int = 0
    name: str = PARTNER_NAME

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def exp_to_next(self) -> int:
        return self.level * EXP_PER_LEVEL

    def is_fainted(self) -> bool:
        return self.hp <= 0

    def move_to(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def apply_damage(self, amount: int) -> int:
        """Lose up to `amount` HP and return what was actually lost."""
        before = self.hp
        self.hp = max(0, min(self.max_hp, self.hp - max(0, amount)))
        return before - self.hp

    def heal(self, amount: int) -> int:
        """Recover up to `amount` HP and return what was actually restored."""
        before = self.hp
        self.hp = min(self.max_hp, max(0, self.hp + max(0, amount)))
        return self.hp - before

    def full_heal(self) -> None:
        self.hp = self.max_hp

    def gain_exp(self, amount: int) -> None:
        self.exp += max(0, amount)

    def level_up_if_needed(self) -> List[str]:
        """Spend banked experience on level ups and return a message for each one."""
        messages: List[str] = []
        while self.exp >= self.exp_to_next:
            self.exp -= self.exp_to_next
            self.level += 1
            self.max_hp += MAX_HP_PER_LEVEL
            self.hp = self.max_hp
            messages.append(f"{self.name} grew to level {self.level}!")
            logger.info("%s reached level %d (max HP %d)", self.name, self.level, self.max_hp)
        return messages

    def award_badge(self) -> None:
        # Only one trainer exists, so winning always means holding at least one badge.
        self.badges = max(self.badges, 1)


# ----------------------------------------------------------------------------
# NPCs
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class Npc:
    x: int
    y: int
    name: str
    text: str
    trainer: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def distance_to(self, x: int, y: int) -> int:
        return abs(self.x - x) + abs(self.y - y)


def spawn_npcs() -> List[Npc]:
    """Return the townsfolk in interaction priority order."""
    return [
        Npc(9, 10, "Trainer Mia", "Trainer Mia: Wild Pyromite appear in tall grass!"),
        Npc(22, 19, "Rival Ken", "Rival Ken: Beat 2 monsters and I'll duel you!", trainer=True),
        Npc(7, 17, "Healer", "Healer: Rest at town often. Potions are expensive!"),
        Npc(25, 26, "Professor Pine", "Professor Pine: Your starter is Leaflit. Raise it well!"),
    ]
