import math
import random
from typing import Dict, List

import pygame

from pocket_quest.battle import ACTION_LABELS
from pocket_quest.config import TILE_SIZE, WINDOW_HEIGHT, WINDOW_WIDTH
from pocket_quest.game import BattleView, FrameSnapshot, GameMode
from pocket_quest.world_map import TileKind

# ----------------------------------------------------------------------------
# Tile art
# ----------------------------------------------------------------------------

TILE_STYLES: Dict[TileKind, Dict[str, object]] = {
    TileKind.GRASS: {
        "pattern": "meadow",
        "base_color": (96, 202, 96),
        "accent_color": (86, 186, 86),
    },
    TileKind.PATH: {
        "pattern": "path",
        "base_color": (206, 182, 124),
        "accent_color": (186, 164, 111),
    },
    TileKind.TREE: {
        "pattern": "tree",
        "base_color": (40, 128, 70),
        "accent_color": (27, 92, 46),
    },
    TileKind.TALL_GRASS: {
        "pattern": "grass",
        "base_color": (75, 192, 88),
        "accent_colors": [(40, 120, 50), (58, 150, 66), (92, 206, 100)],
    },
    TileKind.WATER: {
        "pattern": "water",
        "base_color": (60, 132, 224),
        "accent_color": (120, 180, 245),
    },
    TileKind.HOUSE: {
        "pattern": "house",
        "base_color": (158, 96, 72),
        "accent_color": (120, 62, 52),
    },
}


def hp_color(hp: int, max_hp: int) -> tuple[int, int, int]:
    ratio = max(0.0, min(1.0, hp / max_hp)) if max_hp else 0.0
    if ratio > 0.5:
        return (67, 196, 76)
    if ratio > 0.2:
        return (240, 190, 70)
    return (225, 79, 79)


def create_patterned_tile_surface(tile: TileKind, style: Dict[str, object], tile_size: int) -> pygame.Surface:
    """Build a textured tile surface for the overworld."""

    surface = pygame.Surface((tile_size, tile_size), pygame.SRCALPHA)
    base_color = style.get("base_color", (200, 200, 200))
    surface.fill(base_color)  # type: ignore[arg-type]

    pattern = style.get("pattern", "solid")
    rng = random.Random(f"{tile.name}-{tile_size}")

    def scatter_pixels(colors: List[tuple[int, int, int]], count: int) -> None:
        for _ in range(count):
            x = rng.randrange(tile_size)
            y = rng.randrange(tile_size)
            surface.set_at((x, y), colors[rng.randrange(len(colors))])

    if pattern == "grass":
        accent_colors = style.get("accent_colors", []) or [(40, 120, 50)]
        scatter_pixels(accent_colors, tile_size * 2)
        for i in range(4):
            pygame.draw.line(
                surface,
                accent_colors[0],
                (4 + i * 7, tile_size),
                (8 + i * 7, tile_size // 2 + 1),
                2,
            )
    elif pattern == "meadow":
        accent = style.get("accent_color", (86, 186, 86))
        pygame.draw.rect(surface, accent, pygame.Rect(0, tile_size * 5 // 8, tile_size, tile_size * 3 // 8))
        scatter_pixels([(120, 214, 112), accent], tile_size)
    elif pattern == "path":
        accent = style.get("accent_color", (186, 164, 111))
        scatter_pixels([accent, (220, 204, 160)], tile_size * 2)
        pygame.draw.line(surface, accent, (0, tile_size // 4), (tile_size, tile_size // 4), 1)
        for _ in range(tile_size // 4):
            pygame.draw.circle(
                surface,
                (170, 150, 110),
                (rng.randrange(tile_size), rng.randrange(tile_size)),
                rng.randint(1, 2),
            )
    elif pattern == "tree":
        canopy = style.get("accent_color", (27, 92, 46))
        pygame.draw.rect(
            surface,
            (77, 56, 38),
            pygame.Rect(tile_size * 13 // 32, tile_size * 18 // 32, tile_size * 6 // 32, tile_size * 12 // 32),
        )
        pygame.draw.ellipse(
            surface,
            canopy,
            pygame.Rect(tile_size // 8, tile_size // 16, tile_size * 3 // 4, tile_size * 3 // 4),
        )
        scatter_pixels([(52, 140, 76)], tile_size // 2)
    elif pattern == "water":
        accent = style.get("accent_color", (120, 180, 245))
        for y in range(tile_size):
            blend = y / max(1, tile_size - 1)
            color = (
                int(base_color[0] * (1 - blend) + accent[0] * blend),
                int(base_color[1] * (1 - blend) + accent[1] * blend),
                int(base_color[2] * (1 - blend) + accent[2] * blend),
            )
            pygame.draw.line(surface, color, (0, y), (tile_size, y))
        for offset_x, offset_y in ((4, 9), (10, 18)):
            pygame.draw.arc(
                surface,
                accent,
                pygame.Rect(offset_x, offset_y, tile_size * 5 // 8, tile_size * 3 // 8),
                0,
                math.pi,
                1,
            )
    elif pattern == "house":
        wall = style.get("accent_color", (120, 62, 52))
        pygame.draw.rect(
            surface,
            wall,
            pygame.Rect(tile_size // 8, tile_size * 3 // 8, tile_size * 3 // 4, tile_size * 5 // 8),
        )
        pygame.draw.rect(
            surface,
            (220, 180, 145),
            pygame.Rect(tile_size * 3 // 8, tile_size * 9 // 16, tile_size // 4, tile_size * 7 // 16),
        )
    else:
        scatter_pixels([tuple(int(c * 0.9) for c in base_color)], tile_size)

    border = pygame.Surface((tile_size, tile_size), pygame.SRCALPHA)
    pygame.draw.rect(border, (0, 0, 0, 30), border.get_rect(), 1)
    surface.blit(border, (0, 0))

    return surface.convert_alpha()


def build_tile_surfaces(tile_size: int = TILE_SIZE) -> Dict[TileKind, pygame.Surface]:
    return {
        tile: create_patterned_tile_surface(tile, style, tile_size)
        for tile, style in TILE_STYLES.items()
    }


# ----------------------------------------------------------------------------
# Character sprites
# ----------------------------------------------------------------------------


def create_player_sprite(tile_size: int = TILE_SIZE) -> pygame.Surface:
    """Trainer in a red cap and blue jacket."""

    sprite = pygame.Surface((tile_size, tile_size), pygame.SRCALPHA)
    unit = tile_size / 32

    def rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(int(x * unit), int(y * unit), max(1, int(w * unit)), max(1, int(h * unit)))

    pygame.draw.ellipse(sprite, (40, 40, 40, 110), rect(8, 26, 16, 5))
    pygame.draw.rect(sprite, (40, 72, 205), rect(9, 8, 14, 16), border_radius=max(1, int(4 * unit)))
    pygame.draw.ellipse(sprite, (235, 220, 195), rect(10, 4, 12, 10))
    pygame.draw.rect(sprite, (220, 30, 30), rect(8, 2, 16, 5))
    pygame.draw.rect(sprite, (0, 0, 0), rect(8, 2, 16, 5), 1)
    return sprite.convert_alpha()


def create_npc_sprite(trainer: bool, tile_size: int = TILE_SIZE) -> pygame.Surface:
    sprite = pygame.Surface((tile_size, tile_size), pygame.SRCALPHA)
    unit = tile_size / 32
    body = (197, 66, 72) if trainer else (120, 82, 188)

    def rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(int(x * unit), int(y * unit), max(1, int(w * unit)), max(1, int(h * unit)))

    pygame.draw.rect(sprite, body, rect(9, 9, 14, 15), border_radius=max(1, int(5 * unit)))
    pygame.draw.ellipse(sprite, (238, 218, 192), rect(10, 4, 12, 10))
    pygame.draw.ellipse(sprite, (0, 0, 0), rect(10, 4, 12, 10), 1)
    return sprite.convert_alpha()


def draw_monster(surface: pygame.Surface, center: tuple[int, int], player_side: bool) -> None:
    x, y = center
    body = (88, 210, 122) if player_side else (255, 168, 94)
    accent = (51, 136, 72) if player_side else (190, 100, 35)
    pygame.draw.ellipse(surface, body, pygame.Rect(x - 35, y - 22, 70, 48))
    pygame.draw.ellipse(surface, accent, pygame.Rect(x - 16, y - 37, 32, 22))
    for eye_x in (x - 11, x + 11):
        pygame.draw.circle(surface, (255, 255, 255), (eye_x, y - 5), 5)
        pygame.draw.circle(surface, (0, 0, 0), (eye_x, y - 5), 2)


# ----------------------------------------------------------------------------
# Screens
# ----------------------------------------------------------------------------


def draw_text(
    surface: pygame.Surface,
    text: str,
    position: tuple[int, int],
    font: pygame.font.Font,
    color=(10, 10, 10),
) -> None:
    rendered = font.render(text, True, color)
    surface.blit(rendered, position)


class Renderer:
    """Draws a FrameSnapshot. Makes no game decisions of its own."""

    def __init__(self, screen: pygame.Surface, tile_size: int = TILE_SIZE):
        self.screen = screen
        self.tile_size = tile_size
        self.font = pygame.font.Font(None, 24)
        self.small_font = pygame.font.Font(None, 20)
        self.tile_surfaces = build_tile_surfaces(tile_size)
        self.player_sprite = create_player_sprite(tile_size)
        self.npc_sprites = {
            True: create_npc_sprite(True, tile_size),
            False: create_npc_sprite(False, tile_size),
        }

    def draw(self, frame: FrameSnapshot) -> None:
        if frame.mode == GameMode.BATTLE and frame.battle is not None:
            self.draw_battle(frame.battle)
        else:
            self.draw_overworld(frame)

    def _screen_position(self, frame: FrameSnapshot, x: int, y: int) -> tuple[int, int]:
        cam_x, cam_y = frame.camera
        return (x - cam_x) * self.tile_size, (y - cam_y) * self.tile_size

    def draw_overworld(self, frame: FrameSnapshot) -> None:
        self.screen.fill((0, 0, 0))
        for row_index, row in enumerate(frame.tiles):
            for col_index, tile in enumerate(row):
                tile_surface = self.tile_surfaces.get(tile) or self.tile_surfaces[TileKind.TREE]
                self.screen.blit(tile_surface, (col_index * self.tile_size, row_index * self.tile_size))

        for npc in frame.npcs:
            sx, sy = self._screen_position(frame, npc.x, npc.y)
            if -self.tile_size < sx < WINDOW_WIDTH and -self.tile_size < sy < WINDOW_HEIGHT:
                self.screen.blit(self.npc_sprites[npc.trainer], (sx, sy))

        px, py = self._screen_position(frame, *frame.player_position)
        self.screen.blit(self.player_sprite, (px, py))
        self.draw_hud(frame)

    def draw_hud(self, frame: FrameSnapshot) -> None:
        panel = pygame.Surface((245, 95), pygame.SRCALPHA)
        pygame.draw.rect(panel, (20, 20, 26, 210), panel.get_rect(), border_radius=14)
        self.screen.blit(panel, (10, 10))
        white = (255, 255, 255)
        draw_text(
            self.screen,
            f"Leaflit Lv.{frame.player_level}  HP {frame.player_hp}/{frame.player_max_hp}",
            (20, 20),
            self.small_font,
            white,
        )
        draw_text(
            self.screen,
            f"XP: {frame.player_exp}    Badges: {frame.player_badges}",
            (20, 42),
            self.small_font,
            white,
        )
        draw_text(self.screen, "Goal: Beat Rival Ken", (20, 64), self.small_font, white)

        if frame.dialogue:
            box = pygame.Surface((WINDOW_WIDTH - 20, 78), pygame.SRCALPHA)
            pygame.draw.rect(box, (18, 16, 31, 220), box.get_rect(), border_radius=12)
            self.screen.blit(box, (10, WINDOW_HEIGHT - 88))
            draw_text(self.screen, frame.dialogue, (22, WINDOW_HEIGHT - 58), self.font, white)

    def draw_hp_box(self, position: tuple[int, int], name: str, level: int, hp: int, max_hp: int) -> None:
        x, y = position
        box = pygame.Surface((280, 80), pygame.SRCALPHA)
        pygame.draw.rect(box, (245, 245, 245, 238), box.get_rect(), border_radius=12)
        self.screen.blit(box, (x, y))
        draw_text(self.screen, f"{name}  Lv.{level}", (x + 14, y + 10), self.font, (22, 22, 22))

        bar_x, bar_y, bar_width = x + 15, y + 38, 220
        pygame.draw.rect(self.screen, (60, 60, 60), (bar_x, bar_y, bar_width, 16))
        ratio = max(0.0, min(1.0, hp / max_hp)) if max_hp else 0.0
        pygame.draw.rect(
            self.screen,
            hp_color(hp, max_hp),
            (bar_x + 2, bar_y + 2, int((bar_width - 4) * ratio), 12),
        )
        draw_text(self.screen, f"{hp} / {max_hp}", (x + 170, y + 58), self.small_font, (30, 30, 30))

    def draw_battle(self, battle: BattleView) -> None:
        top, bottom = (130, 205, 255), (85, 155, 110)
        for y in range(WINDOW_HEIGHT):
            blend = y / max(1, WINDOW_HEIGHT - 1)
            color = tuple(int(top[i] * (1 - blend) + bottom[i] * blend) for i in range(3))
            pygame.draw.line(self.screen, color, (0, y), (WINDOW_WIDTH, y))

        platform = (90, 145, 95)
        pygame.draw.ellipse(self.screen, platform, pygame.Rect(WINDOW_WIDTH - 280, 95, 180, 50))
        draw_monster(self.screen, (WINDOW_WIDTH - 210, 62), player_side=False)
        pygame.draw.ellipse(self.screen, platform, pygame.Rect(90, 250, 210, 60))
        draw_monster(self.screen, (180, 214), player_side=True)

        self.draw_hp_box(
            (WINDOW_WIDTH - 320, 40), battle.enemy_name, battle.enemy_level, battle.enemy_hp, battle.enemy_max_hp
        )
        self.draw_hp_box(
            (30, 170), battle.player_name, battle.player_level, battle.player_hp, battle.player_max_hp
        )

        menu = pygame.Surface((WINDOW_WIDTH - 40, 130), pygame.SRCALPHA)
        pygame.draw.rect(menu, (30, 30, 42, 220), menu.get_rect(), border_radius=16)
        self.screen.blit(menu, (20, WINDOW_HEIGHT - 150))
        white = (255, 255, 255)
        draw_text(self.screen, battle.message, (35, WINDOW_HEIGHT - 125), self.font, white)

        label_color = white if battle.accepts_input else (150, 150, 160)
        for idx, label in enumerate(ACTION_LABELS.values()):
            draw_text(self.screen, label, (40 + idx * 150, WINDOW_HEIGHT - 75), self.small_font, label_color)

