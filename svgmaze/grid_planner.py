# grid_planner.py
import heapq
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

from loguru import logger

from svgmaze.rasterize import Cell, Grid, rasterize
from svgmaze.scene import Point2D, Scene

Heuristic = Callable[[Cell, Cell], int]


def manhattan(a: Cell, b: Cell) -> int:
    """
    4-connected grid distance between two cells.
    Admissible for unit step cost, so A* returns shortest paths.
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def signed_distance(a: Cell, b: Cell) -> int:
    """
    (a.x - b.x) + (a.y - b.y) without absolute values.

    It can be negative and is not admissible in general. The search still
    returns a valid path with it, but not necessarily a shortest one.
    """
    return (a[0] - b[0]) + (a[1] - b[1])


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "signed": signed_distance,
}


def heuristic_fn(name: str) -> Heuristic:
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic {name!r}, expected one of {sorted(HEURISTICS)}."
        ) from None


@dataclass(order=True)
class SearchNode:
    """
    Open-set entry.

    Ordering: lower f_score first; on equal f_score the node with more
    progress (higher g_score) wins; the coordinate breaks remaining ties so
    that the pop order never depends on insertion order.
    """

    sort_key: Tuple[int, int, Cell] = field(init=False, repr=False)
    coord: Cell = field(compare=False)
    g_score: int = field(compare=False)
    f_score: int = field(compare=False)
    predecessor: Optional[Cell] = field(compare=False, default=None)

    def __post_init__(self) -> None:
        self.sort_key = (self.f_score, -self.g_score, self.coord)


def reconstruct_path(nodes: Dict[Cell, SearchNode], goal: Cell) -> List[Cell]:
    """
    Walk predecessor links from goal back to start, then reverse.
    """
    path: List[Cell] = [goal]
    current = nodes[goal].predecessor
    while current is not None:
        path.append(current)
        current = nodes[current].predecessor
    path.reverse()
    return path


def find_path(grid: Grid, heuristic: str = "manhattan") -> List[Cell]:
    """
    Run A* from grid.start_cell to grid.end_cell.

    Parameters
    ----------
    grid : Grid
        Rasterized scene. Moves are 4-connected with unit cost; a cell is
        passable iff it is in bounds and not blocked.
    heuristic : str
        "manhattan" (default) or "signed".

    Returns
    -------
    path : list of (x, y) from start to end (inclusive), or an empty list if
        the end cell is unreachable.
    """
    h = heuristic_fn(heuristic)
    start, goal = grid.start_cell, grid.end_cell

    logger.debug(
        f"[A*] search: grid=({grid.width}, {grid.height}), "
        f"start={start}, goal={goal}, heuristic={heuristic}"
    )

    # nodes[c] holds the best known record for c; heap entries may be stale.
    start_node = SearchNode(coord=start, g_score=0, f_score=h(start, goal))
    nodes: Dict[Cell, SearchNode] = {start: start_node}
    open_heap: List[SearchNode] = [start_node]
    closed: Set[Cell] = set()
    nodes_explored = 0

    while open_heap:
        current = heapq.heappop(open_heap)
        if current.coord in closed or current.g_score > nodes[current.coord].g_score:
            continue
        closed.add(current.coord)

        if current.coord == goal:
            path = reconstruct_path(nodes, goal)
            logger.info(
                f"[A*] path found: length={len(path) - 1}, explored={nodes_explored}"
            )
            return path

        # An out-of-bounds start generates no moves, even next to the border.
        if not grid.in_bounds(current.coord):
            continue

        nodes_explored += 1
        for nb in grid.neighbors(current.coord):
            if nb in closed:
                continue
            # Cost between adjacent cells (4-connected) is 1.
            tentative_g = current.g_score + 1
            known = nodes.get(nb)
            if known is None or tentative_g < known.g_score:
                node = SearchNode(
                    coord=nb,
                    g_score=tentative_g,
                    f_score=tentative_g + h(nb, goal),
                    predecessor=current.coord,
                )
                nodes[nb] = node
                heapq.heappush(open_heap, node)

    logger.warning(
        f"[A*] no path from {start} to {goal}, explored={nodes_explored}"
    )
    return []


def path_length(path: List[Cell]) -> int:
    """
    Number of unit steps along a path (0 for an empty or single-cell path).
    """
    return max(len(path) - 1, 0)


def cell_to_point(cell: Cell, origin: Point2D) -> Point2D:
    """
    Map a grid cell back to the scene coordinate of its top-left corner.
    """
    return (cell[0] + origin[0], cell[1] + origin[1])


def save_waypoints(path: List[Cell], origin: Point2D, filename: str) -> None:
    """
    Write the path as scene-coordinate waypoints, one "x,y" line per cell.
    """
    with open(filename, "w") as f:
        for cell in path:
            x, y = cell_to_point(cell, origin)
            f.write(f"{x:.2f},{y:.2f}\n")
    logger.info(f"Saved {len(path)} waypoints to {filename}")


def plan_scene(scene: Scene, heuristic: str = "manhattan") -> Tuple[Grid, List[Cell]]:
    """
    High-level helper:
    1. Rasterize the scene into a grid.
    2. Run A* on the grid.

    Returns
    -------
    (grid, path) : the grid is returned alongside the path because renderers
        need both; path is empty when no route exists.
    """
    grid = rasterize(scene)
    return grid, find_path(grid, heuristic=heuristic)
