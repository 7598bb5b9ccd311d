"""Game-wide constants. Tweak these to rebalance the game."""

import logging
import os

# ----------------------------------------------------------------------------
# Timing
# ----------------------------------------------------------------------------

FPS = 60
TICK_MS = 16  # one loop tick, roughly 60 ticks per second
SETTLE_DELAY_MS = 700  # pause after a battle resolves before the overworld returns

DIALOGUE_TICKS = 220
MOVE_COOLDOWN_TICKS = 6

# Battle message holds (in ticks)
ATTACK_HOLD_TICKS = 45
POTION_HOLD_TICKS = 45
RUN_HOLD_TICKS = 45
ENEMY_HOLD_TICKS = 55
ENEMY_FAINT_HOLD_TICKS = 70
PLAYER_FAINT_HOLD_TICKS = 80
INTRO_HOLD_TICKS = DIALOGUE_TICKS

# ----------------------------------------------------------------------------
# Balance
# ----------------------------------------------------------------------------

ENCOUNTER_CHANCE = 0.08
ESCAPE_CHANCE = 0.55

WILD_SPECIES = ("Pyromite", "Aquafi", "Thorncub", "Voltlet")
WILD_LEVEL_RANGE = (2, 5)
WILD_HP_RANGE = (18, 31)

TRAINER_MONSTER = "Rivalmon"
TRAINER_BASE_HP = 24
TRAINER_HP_PER_BADGE = 5

ENEMY_DAMAGE_RANGE = (3, 8)
POTION_HEAL_RANGE = (8, 14)

EXP_BASE = 8
EXP_PER_ENEMY_LEVEL = 3
EXP_PER_LEVEL = 18  # threshold to level up is level * EXP_PER_LEVEL
MAX_HP_PER_LEVEL = 4

# ----------------------------------------------------------------------------
# World
# ----------------------------------------------------------------------------

MAP_WIDTH = 48
MAP_HEIGHT = 36

PARTNER_NAME = "Leaflit"
START_POSITION = (6, 7)
RESPAWN_POSITION = (6, 10)
START_LEVEL = 5
START_HP = 34

WELCOME_TEXT = "Welcome to Pocket Quest! Move with arrows/WASD. Press E near NPCs."
NOBODY_NEARBY_TEXT = "Nobody is close enough to talk."

# ----------------------------------------------------------------------------
# Display
# ----------------------------------------------------------------------------

TILE_SIZE = 32
VIEW_COLS = 22
VIEW_ROWS = 16
WINDOW_WIDTH = VIEW_COLS * TILE_SIZE
WINDOW_HEIGHT = VIEW_ROWS * TILE_SIZE
WINDOW_TITLE = "Pocket Quest"

LOG_LEVEL_ENV = "POCKET_QUEST_LOG_LEVEL"


def log_level_from_env(environ=None) -> int:
    """Return the logging level named by POCKET_QUEST_LOG_LEVEL (WARNING by default)."""
    environ = os.environ if environ is None else environ
    name = str(environ.get(LOG_LEVEL_ENV, "WARNING")).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.WARNING
