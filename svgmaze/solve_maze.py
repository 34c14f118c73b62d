"""
Solve an SVG maze and write the annotated grid.

Reads the background, obstacles and start/end markers from INPUT, runs A* on
the rasterized grid and renders the grid, obstacles and path to OUTPUT.

Exit status: 0 path found, 1 no path (the image is still written),
2 the input or config could not be loaded, or an output could not be written.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from svgmaze.config import SolverConfig, load_config
from svgmaze.grid_planner import HEURISTICS, path_length, plan_scene, save_waypoints
from svgmaze.scene import Scene
from svgmaze.svg_io import SceneLoadError, load_scene
from svgmaze.visualize_world import save_solution, show_solution

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find a shortest 4-connected path through an SVG maze."
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="maze.svg",
        help="SVG document with a bg rect, obstacle rects and start/end circles.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="grid.svg",
        help="Where to write the rendered grid; format follows the extension.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional YAML file with planner and render settings.",
    )
    parser.add_argument(
        "--heuristic",
        choices=sorted(HEURISTICS),
        default=None,
        help="Override the A* heuristic from the config.",
    )
    parser.add_argument(
        "--random",
        type=int,
        default=None,
        metavar="SEED",
        help="Ignore INPUT and solve a random scene generated from SEED.",
    )
    parser.add_argument(
        "--waypoints",
        type=str,
        default=None,
        help="Also write the path as x,y waypoints in scene coordinates.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a window with the occupancy grid and the solution.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Log level for stderr output.",
    )
    return parser.parse_args(argv)


def warn_blocked_endpoints(scene: Scene) -> None:
    for name, point in (("start", scene.start), ("end", scene.end)):
        if scene.is_point_in_collision(*point):
            logger.warning(
                f"The {name} point {point} lies inside an obstacle or outside the background"
            )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        config = load_config(args.config) if args.config else SolverConfig()
        if args.random is not None:
            scene = Scene.random_scene(seed=args.random)
            logger.info(f"Generated random scene with seed {args.random}")
        else:
            scene = load_scene(args.input)
    except (FileNotFoundError, SceneLoadError, ValidationError, yaml.YAMLError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 2

    warn_blocked_endpoints(scene)

    heuristic = args.heuristic or config.planner.heuristic
    grid, path = plan_scene(scene, heuristic=heuristic)

    if path:
        logger.info(f"Finished path: {path_length(path)} steps, {len(path)} cells")
    else:
        logger.warning("No solution found")

    try:
        save_solution(scene, grid, path, args.output, style=config.render)
        if args.waypoints:
            save_waypoints(path, scene.origin, args.waypoints)
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 2

    if args.show:
        show_solution(scene, grid, path, style=config.render)
    return 0 if path else 1


if __name__ == "__main__":
    sys.exit(main())
