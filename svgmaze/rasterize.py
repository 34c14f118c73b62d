# rasterize.py
import math
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Tuple

import numpy as np
from loguru import logger

from svgmaze.scene import Point2D, RectObstacle, Scene

Cell = Tuple[int, int]  # (x, y) where x is the column, y is the row


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    Python's built-in round() uses banker's rounding, which would move a start
    point sitting exactly on a cell boundary to the even neighbor instead.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def point_to_cell(point: Point2D, origin: Point2D) -> Cell:
    """
    Map a continuous scene point to the grid cell nearest to it.
    """
    return (
        round_half_away(point[0] - origin[0]),
        round_half_away(point[1] - origin[1]),
    )


def rect_to_cells(rect: RectObstacle, origin: Point2D) -> Iterator[Cell]:
    """
    Yield every cell touched by a rectangle, rounding outward.

    A rectangle that only partially covers a cell still yields that cell,
    e.g. x=1.5, width=2 covers columns 1, 2 and 3.
    """
    local = rect.translated(-origin[0], -origin[1])
    min_x = math.floor(local.x)
    min_y = math.floor(local.y)
    max_x = math.ceil(local.x + local.width)
    max_y = math.ceil(local.y + local.height)

    for y in range(min_y, max_y):
        for x in range(min_x, max_x):
            yield (x, y)


@dataclass(frozen=True)
class Grid:
    """
    Discretized scene: unit cells, the blocked subset and the two endpoints.

    Cell coordinates are not bounds-checked; an endpoint outside
    [0, width) x [0, height) is legal here and simply has no neighbors.
    """

    width: int
    height: int
    blocked: FrozenSet[Cell]
    start_cell: Cell
    end_cell: Cell

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self.width and 0 <= cell[1] < self.height

    def is_free(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and cell not in self.blocked

    def neighbors(self, cell: Cell) -> List[Cell]:
        """
        4-connected free neighbors: left, right, up, down.
        """
        x, y = cell
        candidates = [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]
        return [c for c in candidates if self.is_free(c)]

    def to_occupancy(self) -> np.ndarray:
        """
        Return a binary occupancy grid of shape (height, width).

        Convention:
          - occ[y, x] = 1 if cell (x, y) is blocked, else 0
          - blocked cells outside the grid bounds are dropped
        """
        occ = np.zeros((self.height, self.width), dtype=np.uint8)
        for x, y in self.blocked:
            if self.in_bounds((x, y)):
                occ[y, x] = 1
        return occ


def rasterize(scene: Scene) -> Grid:
    """
    Convert a continuous scene into an integer grid.

    1. width/height are the background size rounded up, so no partial cell
       is dropped.
    2. Every obstacle is translated by -origin and rasterized outward into
       the blocked set; overlapping obstacles share cells.
    3. start/end are rounded to the nearest cell.
    """
    width = math.ceil(scene.size[0])
    height = math.ceil(scene.size[1])

    blocked = set()
    for rect in scene.obstacles:
        blocked.update(rect_to_cells(rect, scene.origin))

    grid = Grid(
        width=width,
        height=height,
        blocked=frozenset(blocked),
        start_cell=point_to_cell(scene.start, scene.origin),
        end_cell=point_to_cell(scene.end, scene.origin),
    )
    logger.debug(
        f"Rasterized scene: size=({width}, {height}), "
        f"obstacles={len(scene.obstacles)}, blocked={len(grid.blocked)}, "
        f"start={grid.start_cell}, end={grid.end_cell}"
    )
    return grid
