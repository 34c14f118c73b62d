from pathlib import Path
from typing import List, Optional, Tuple, Union

import matplotlib.pyplot as plt
from loguru import logger
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from svgmaze.config import RenderConfig
from svgmaze.rasterize import Cell, Grid
from svgmaze.scene import Scene


def show_occupancy_grid(grid: Grid, ax=None) -> None:
    """
    Visualize the occupancy grid (H, W) with blocked cells in black.
    """
    if ax is None:
        _, ax = plt.subplots()
    ax.imshow(grid.to_occupancy(), cmap="gray_r", origin="upper")
    ax.set_title("Occupancy Grid")
    ax.set_xlabel("x")
    ax.set_ylabel("y")


def _unit_cell(cell: Cell, **kwargs) -> Rectangle:
    return Rectangle((cell[0], cell[1]), 1, 1, **kwargs)


def draw_solution(
    scene: Scene,
    grid: Grid,
    path: List[Cell],
    ax=None,
    style: Optional[RenderConfig] = None,
) -> None:
    """
    Draw the background, blocked cells, path, obstacles and endpoints.

    Everything is drawn in scene coordinates relative to scene.origin, with
    the y-axis pointing down as in the source SVG. Layers from bottom to top:
      - background rectangle
      - outline of every blocked cell
      - filled path cells
      - translucent obstacle rectangles
      - start and end circles
    """
    style = style or RenderConfig()
    if ax is None:
        _, ax = plt.subplots()

    width, height = scene.size
    ox, oy = scene.origin

    ax.add_patch(
        Rectangle((0, 0), width, height, facecolor=style.background, edgecolor="none")
    )

    for cell in sorted(grid.blocked):
        ax.add_patch(
            _unit_cell(
                cell,
                facecolor="none",
                edgecolor=style.cell_edge,
                linewidth=style.cell_line_width,
            )
        )

    for cell in path:
        ax.add_patch(
            _unit_cell(
                cell,
                facecolor=style.path,
                edgecolor=style.path,
                linewidth=style.cell_line_width,
            )
        )

    for rect in scene.obstacles:
        ax.add_patch(
            Rectangle(
                (rect.x - ox, rect.y - oy),
                rect.width,
                rect.height,
                facecolor=style.obstacle,
                edgecolor="none",
            )
        )

    for point in (scene.start, scene.end):
        ax.add_patch(
            Circle(
                (point[0] - ox, point[1] - oy),
                style.marker_radius,
                facecolor="none",
                edgecolor=style.marker,
                linewidth=style.marker_line_width,
            )
        )

    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.set_axis_off()


def show_solution(
    scene: Scene,
    grid: Grid,
    path: List[Cell],
    style: Optional[RenderConfig] = None,
) -> None:
    """
    Plot the occupancy grid and the rendered solution side-by-side.
    """
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    show_occupancy_grid(grid, ax=axes[0])
    draw_solution(scene, grid, path, ax=axes[1], style=style)
    axes[1].set_title("A* Path" if path else "No path")

    plt.tight_layout()
    plt.show()


def _figure_size(scene: Scene, style: RenderConfig) -> Tuple[float, float]:
    width, height = scene.size
    if width <= 0 or height <= 0:
        return (style.figure_width, style.figure_width)
    return (style.figure_width, style.figure_width * height / width)


def save_solution(
    scene: Scene,
    grid: Grid,
    path: List[Cell],
    out_path: Union[str, Path],
    style: Optional[RenderConfig] = None,
) -> Path:
    """
    Render the solution and write it to out_path.

    The image format follows the file extension (.svg, .png, .pdf, ...).
    """
    style = style or RenderConfig()
    out_path = Path(out_path)

    # A bare Figure needs no GUI backend, so this also works headless.
    fig = Figure(figsize=_figure_size(scene, style))
    ax = fig.add_axes((0, 0, 1, 1))
    draw_solution(scene, grid, path, ax=ax, style=style)
    fig.savefig(out_path, dpi=style.dpi)

    logger.info(f"Wrote {out_path} (path cells={len(path)})")
    return out_path
