import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from pocket_quest.actors import Player
from pocket_quest.config import (
    ATTACK_HOLD_TICKS,
    ENEMY_DAMAGE_RANGE,
    ENEMY_FAINT_HOLD_TICKS,
    ENEMY_HOLD_TICKS,
    ESCAPE_CHANCE,
    EXP_BASE,
    EXP_PER_ENEMY_LEVEL,
    INTRO_HOLD_TICKS,
    PLAYER_FAINT_HOLD_TICKS,
    POTION_HEAL_RANGE,
    POTION_HOLD_TICKS,
    RESPAWN_POSITION,
    RUN_HOLD_TICKS,
    TRAINER_BASE_HP,
    TRAINER_HP_PER_BADGE,
    TRAINER_MONSTER,
    WILD_HP_RANGE,
    WILD_LEVEL_RANGE,
    WILD_SPECIES,
)
from pocket_quest.controls import Control

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------
# Moves
# ----------------------------------------------------------------------------


@dataclass(frozen=True)
class Move:
    name: str
    min_power: int
    max_power: int

    def __post_init__(self) -> None:
        if self.min_power > self.max_power:
            raise ValueError(f"Move '{self.name}' has min power above max power.")


LEAF_SLASH = Move("Leaf Slash", 5, 9)
VINE_WHIP = Move("Vine Whip", 7, 11)

ACTION_LABELS: Dict[Control, str] = {
    Control.ATTACK_1: f"[1] {LEAF_SLASH.name}",
    Control.ATTACK_2: f"[2] {VINE_WHIP.name}",
    Control.HEAL: "[3] Heal",
    Control.RUN: "[4] Run",
}


# ----------------------------------------------------------------------------
# Battle session
# ----------------------------------------------------------------------------


class BattlePhase(Enum):
    AWAITING_ACTION = "awaiting_action"
    MESSAGE = "message"  # a message is held on screen; input is ignored
    ENEMY_TURN = "enemy_turn"
    RESOLVED = "resolved"


class BattleOutcome(Enum):
    WON = "won"
    FLED = "fled"
    LOST = "lost"


@dataclass
class BattleSession:
    player_name: str
    player_level: int
    player_max_hp: int
    player_hp: int
    enemy_name: str
    enemy_level: int
    enemy_max_hp: int
    enemy_hp: int
    trainer_battle: bool = False
    message: str = "Choose an action."
    message_ticks: int = 0
    phase: BattlePhase = BattlePhase.AWAITING_ACTION
    next_phase: BattlePhase = field(default=BattlePhase.AWAITING_ACTION, repr=False)
    outcome: Optional[BattleOutcome] = None

    @property
    def awaiting_enemy_turn(self) -> bool:
        if self.phase == BattlePhase.MESSAGE:
            return self.next_phase == BattlePhase.ENEMY_TURN
        return self.phase == BattlePhase.ENEMY_TURN

    @property
    def accepts_input(self) -> bool:
        return self.phase == BattlePhase.AWAITING_ACTION

    @property
    def resolved(self) -> bool:
        return self.phase == BattlePhase.RESOLVED

    def hold(self, text: str, ticks: int, then: BattlePhase) -> None:
        """Show `text` for `ticks` ticks, then move on to `then`."""
        self.message = text
        self.message_ticks = max(0, ticks)
        self.next_phase = then
        self.phase = BattlePhase.MESSAGE if self.message_ticks > 0 else then

    def finish(self, outcome: BattleOutcome, text: str, ticks: int) -> None:
        self.outcome = outcome
        self.hold(text, ticks, BattlePhase.RESOLVED)

    def sync_player(self, player: Player) -> None:
        self.player_level = player.level
        self.player_max_hp = player.max_hp
        self.player_hp = player.hp


def _session_for(player: Player, enemy_name: str, enemy_level: int, enemy_hp: int, trainer: bool) -> BattleSession:
    return BattleSession(
        player_name=player.name,
        player_level=player.level,
        player_max_hp=player.max_hp,
        player_hp=player.hp,
        enemy_name=enemy_name,
        enemy_level=enemy_level,
        enemy_max_hp=enemy_hp,
        enemy_hp=enemy_hp,
        trainer_battle=trainer,
    )


def start_wild_battle(player: Player, rng) -> BattleSession:
    enemy_hp = rng.randint(*WILD_HP_RANGE)
    enemy_level = rng.randint(*WILD_LEVEL_RANGE)
    species = rng.choice(WILD_SPECIES)

    battle = _session_for(player, species, enemy_level, enemy_hp, trainer=False)
    battle.hold(f"A wild {species} appeared!", INTRO_HOLD_TICKS, BattlePhase.AWAITING_ACTION)
    logger.info("Wild %s Lv%d appeared (HP %d)", species, enemy_level, enemy_hp)
    return battle


def start_trainer_battle(player: Player, trainer_name: str = "Rival Ken") -> BattleSession:
    enemy_hp = TRAINER_BASE_HP + TRAINER_HP_PER_BADGE * player.badges
    battle = _session_for(player, TRAINER_MONSTER, player.level + 1, enemy_hp, trainer=True)
    battle.hold(f"{trainer_name} challenges you!", INTRO_HOLD_TICKS, BattlePhase.AWAITING_ACTION)
    logger.info("%s sent out %s Lv%d (HP %d)", trainer_name, TRAINER_MONSTER, player.level + 1, enemy_hp)
    return battle


# ----------------------------------------------------------------------------
# Formulas
# ----------------------------------------------------------------------------


def roll_player_damage(move: Move, player_level: int, rng) -> int:
    return rng.randint(move.min_power, move.max_power) + player_level // 2


def roll_enemy_damage(enemy_level: int, rng) -> int:
    return rng.randint(*ENEMY_DAMAGE_RANGE) + enemy_level // 2


def calculate_exp_gain(enemy_level: int) -> int:
    return EXP_BASE + EXP_PER_ENEMY_LEVEL * enemy_level


def resolve_level_up(player: Player) -> list[str]:
    return player.level_up_if_needed()


# ----------------------------------------------------------------------------
# Turn actions
# ----------------------------------------------------------------------------


def player_attack(battle: BattleSession, player: Player, move: Move, rng) -> None:
    damage = roll_player_damage(move, player.level, rng)
    battle.enemy_hp = max(0, battle.enemy_hp - damage)
    logger.debug("%s used %s for %d damage", battle.player_name, move.name, damage)

    if battle.enemy_hp > 0:
        battle.hold(
            f"{battle.player_name} used {move.name}! (-{damage})",
            ATTACK_HOLD_TICKS,
            BattlePhase.ENEMY_TURN,
        )
        return

    exp_gain = calculate_exp_gain(battle.enemy_level)
    player.gain_exp(exp_gain)
    resolve_level_up(player)
    if battle.trainer_battle:
        player.award_badge()
        logger.info("Trainer defeated; badges now %d", player.badges)
    battle.sync_player(player)
    battle.finish(
        BattleOutcome.WON,
        f"{battle.enemy_name} fainted! +{exp_gain} XP",
        ENEMY_FAINT_HOLD_TICKS,
    )


def enemy_turn(battle: BattleSession, player: Player, rng) -> None:
    damage = roll_enemy_damage(battle.enemy_level, rng)
    player.apply_damage(damage)
    battle.sync_player(player)
    logger.debug("%s struck for %d damage", battle.enemy_name, damage)

    if not player.is_fainted():
        battle.hold(
            f"{battle.enemy_name} struck back! (-{damage})",
            ENEMY_HOLD_TICKS,
            BattlePhase.AWAITING_ACTION,
        )
        return

    # The battle screen keeps showing 0 HP; the player is patched up off screen.
    player.full_heal()
    player.move_to(*RESPAWN_POSITION)
    battle.finish(
        BattleOutcome.LOST,
        f"{battle.player_name} fainted! You rushed to the nearest town.",
        PLAYER_FAINT_HOLD_TICKS,
    )


def use_potion(battle: BattleSession, player: Player, rng) -> None:
    amount = rng.randint(*POTION_HEAL_RANGE)
    player.heal(amount)
    battle.sync_player(player)
    battle.hold(f"You used a potion! (+{amount} HP)", POTION_HOLD_TICKS, BattlePhase.ENEMY_TURN)


def attempt_run(battle: BattleSession, rng) -> None:
    if battle.trainer_battle:
        # Refusing does not cost a turn; the player may pick again straight away.
        battle.hold("Can't run from a trainer battle!", RUN_HOLD_TICKS, BattlePhase.AWAITING_ACTION)
        return

    if rng.random() < ESCAPE_CHANCE:
        battle.finish(BattleOutcome.FLED, "You escaped safely.", RUN_HOLD_TICKS)
    else:
        battle.hold("Couldn't escape!", RUN_HOLD_TICKS, BattlePhase.ENEMY_TURN)


def handle_battle_action(battle: BattleSession, player: Player, action: Control, rng) -> bool:
    """Carry out a menu action. Returns False when the action was ignored."""

    if not battle.accepts_input:
        return False
    if action == Control.ATTACK_1:
        player_attack(battle, player, LEAF_SLASH, rng)
    elif action == Control.ATTACK_2:
        player_attack(battle, player, VINE_WHIP, rng)
    elif action == Control.HEAL:
        use_potion(battle, player, rng)
    elif action == Control.RUN:
        attempt_run(battle, rng)
    else:
        return False
    return True


# ----------------------------------------------------------------------------
# Per-tick update
# ----------------------------------------------------------------------------


def update_battle(battle: BattleSession, player: Player, rng) -> Optional[BattleOutcome]:
    """Advance the battle by one tick.

    Returns the outcome on the tick the battle becomes resolved, otherwise None.
    """

    if battle.phase == BattlePhase.MESSAGE:
        battle.message_ticks -= 1
        if battle.message_ticks > 0:
            return None
        battle.message_ticks = 0
        battle.phase = battle.next_phase
        if battle.phase == BattlePhase.RESOLVED:
            logger.info("Battle against %s resolved: %s", battle.enemy_name, battle.outcome.value)
            return battle.outcome
        return None

    if battle.phase == BattlePhase.ENEMY_TURN:
        enemy_turn(battle, player, rng)
    return None
