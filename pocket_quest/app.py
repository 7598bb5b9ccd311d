import logging
import sys
from typing import Dict

import pygame

from pocket_quest.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH, log_level_from_env
from pocket_quest.controls import Control, InputState
from pocket_quest.game import Game
from pocket_quest.render import Renderer

logger = logging.getLogger(__name__)


def build_key_bindings() -> Dict[int, Control]:
    return {
        pygame.K_LEFT: Control.LEFT,
        pygame.K_a: Control.LEFT,
        pygame.K_RIGHT: Control.RIGHT,
        pygame.K_d: Control.RIGHT,
        pygame.K_UP: Control.UP,
        pygame.K_w: Control.UP,
        pygame.K_DOWN: Control.DOWN,
        pygame.K_s: Control.DOWN,
        pygame.K_e: Control.INTERACT,
        pygame.K_1: Control.ATTACK_1,
        pygame.K_2: Control.ATTACK_2,
        pygame.K_3: Control.HEAL,
        pygame.K_4: Control.RUN,
    }


def pump_events(input_state: InputState) -> bool:
    """Feed pygame key events into the input state. Returns False once the window closes."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            input_state.key_down(event.key)
        elif event.type == pygame.KEYUP:
            input_state.key_up(event.key)
        elif event.type == pygame.WINDOWFOCUSLOST:
            input_state.clear()
    return True


def main() -> None:
    logging.basicConfig(
        level=log_level_from_env(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    pygame.display.set_caption(WINDOW_TITLE)
    clock = pygame.time.Clock()

    game = Game()
    game.input = InputState(build_key_bindings())
    renderer = Renderer(screen)
    game.start()
    logger.info("Pocket Quest started")

    running = True
    while running:
        running = pump_events(game.input)
        if not running:
            break
        game.tick()
        renderer.draw(game.snapshot())
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    sys.exit()
