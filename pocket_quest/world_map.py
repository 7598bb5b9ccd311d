from enum import IntEnum
from typing import List, Sequence

from pocket_quest.config import MAP_HEIGHT, MAP_WIDTH


# ----------------------------------------------------------------------------
# Tile kinds and their movement rules
# ----------------------------------------------------------------------------


class TileKind(IntEnum):
    GRASS = 0
    PATH = 1
    TREE = 2
    TALL_GRASS = 3
    WATER = 4
    HOUSE = 5


BLOCKING_TILES = frozenset({TileKind.TREE, TileKind.WATER, TileKind.HOUSE})
ENCOUNTER_TILES = frozenset({TileKind.TALL_GRASS})

TILE_NAMES = {
    TileKind.GRASS: "Grass",
    TileKind.PATH: "Dirt Path",
    TileKind.TREE: "Forest",
    TileKind.TALL_GRASS: "Tall Grass",
    TileKind.WATER: "Water",
    TileKind.HOUSE: "House",
}


class WorldMap:
    """Read-only grid of tiles. Anything outside the grid counts as a tree."""

    def __init__(self, rows: Sequence[Sequence[TileKind]]):
        if len(rows) < 3 or len(rows[0]) < 3:
            raise ValueError("A map needs at least 3x3 tiles.")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Every map row must have the same width.")
        self._rows = tuple(tuple(TileKind(tile) for tile in row) for row in rows)
        self.width = width
        self.height = len(self._rows)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> TileKind:
        if self.in_bounds(x, y):
            return self._rows[y][x]
        return TileKind.TREE

    def is_blocking(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._rows[y][x] in BLOCKING_TILES

    def is_encounter_tile(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self._rows[y][x] in ENCOUNTER_TILES

    def rows(self) -> List[List[TileKind]]:
        return [list(row) for row in self._rows]

    def region(self, left: int, top: int, cols: int, rows: int) -> List[List[TileKind]]:
        """Return a cols x rows window of tiles starting at (left, top)."""
        return [
            [self.tile_at(x, y) for x in range(left, left + cols)]
            for y in range(top, top + rows)
        ]


# ----------------------------------------------------------------------------
# Map construction
# ----------------------------------------------------------------------------


def fill_rect(grid: List[List[TileKind]], x0: int, y0: int, w: int, h: int, tile: TileKind) -> None:
    """Paint a rectangle, skipping cells that fall outside the grid or on its top/left edge."""
    height = len(grid)
    width = len(grid[0])
    for y in range(y0, y0 + h):
        for x in range(x0, x0 + w):
            if 0 < x < width and 0 < y < height:
                grid[y][x] = tile


def build_default_map() -> WorldMap:
    """Lay out the Pocket Quest valley: forest, roads, grass fields, a pond and the town."""

    width, height = MAP_WIDTH, MAP_HEIGHT
    grid = [[TileKind.GRASS for _ in range(width)] for _ in range(height)]

    # Border forest
    for x in range(width):
        grid[0][x] = TileKind.TREE
        grid[height - 1][x] = TileKind.TREE
    for y in range(height):
        grid[y][0] = TileKind.TREE
        grid[y][width - 1] = TileKind.TREE

    # Forest belt
    for x in range(2, width - 2, 2):
        grid[4][x] = TileKind.TREE
        if x % 3 != 0:
            grid[5][x] = TileKind.TREE
        grid[height - 5][x] = TileKind.TREE

    # Roads
    for x in range(2, width - 2):
        grid[10][x] = TileKind.PATH
    for y in range(8, height - 2):
        grid[y][8] = TileKind.PATH
    for y in range(4, height - 6):
        grid[y][22] = TileKind.PATH
    for x in range(8, 23):
        grid[20][x] = TileKind.PATH
    for x in range(22, width - 6):
        grid[14][x] = TileKind.PATH

    # Tall grass fields
    fill_rect(grid, 12, 6, 7, 6, TileKind.TALL_GRASS)
    fill_rect(grid, 26, 9, 10, 6, TileKind.TALL_GRASS)
    fill_rect(grid, 14, 22, 11, 7, TileKind.TALL_GRASS)
    fill_rect(grid, 31, 19, 11, 9, TileKind.TALL_GRASS)

    fill_rect(grid, 35, 4, 8, 5, TileKind.WATER)

    # Houses, then their doorways
    fill_rect(grid, 4, 14, 4, 3, TileKind.HOUSE)
    fill_rect(grid, 18, 15, 4, 3, TileKind.HOUSE)
    fill_rect(grid, 24, 24, 4, 3, TileKind.HOUSE)
    for door_x, door_y in ((5, 16), (5, 17), (19, 17), (25, 26)):
        grid[door_y][door_x] = TileKind.PATH

    return WorldMap(grid)
