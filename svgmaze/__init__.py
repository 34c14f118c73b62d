from svgmaze.grid_planner import find_path, plan_scene
from svgmaze.rasterize import Grid, rasterize
from svgmaze.scene import RectObstacle, Scene

__all__ = ["Grid", "RectObstacle", "Scene", "find_path", "plan_scene", "rasterize"]
