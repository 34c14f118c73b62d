# svg_io.py
"""
Read a maze Scene from an SVG document.

Document convention:
  - <rect id="bg">       background; defines origin (x, y) and size
  - any other <rect>     obstacle
  - <circle id="start">  start point (cx, cy)
  - <circle id="end">    end point (cx, cy)
  - other circles        ignored
Elements are matched anywhere in the tree, with or without the SVG namespace.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from svgmaze.scene import Point2D, RectObstacle, Scene

BACKGROUND_ID = "bg"
START_ID = "start"
END_ID = "end"


class SceneLoadError(ValueError):
    """The document does not describe a usable scene."""


def _local_name(tag: str) -> str:
    # "{http://www.w3.org/2000/svg}rect" -> "rect"
    return tag.rsplit("}", 1)[-1]


def _number(attrs: Dict[str, str], name: str, tag: str) -> float:
    value = attrs.get(name)
    if value is None:
        raise SceneLoadError(
            f"<{tag} id={attrs.get('id')!r}> is missing attribute {name!r}"
        )
    try:
        return float(value)
    except ValueError:
        raise SceneLoadError(
            f"<{tag} id={attrs.get('id')!r}> has non-numeric {name}={value!r}"
        ) from None


def parse_scene(text: str) -> Scene:
    """
    Build a Scene from the text of an SVG document.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise SceneLoadError(f"Malformed SVG document: {e}") from e

    origin: Optional[Point2D] = None
    size: Optional[Point2D] = None
    start: Optional[Point2D] = None
    end: Optional[Point2D] = None
    obstacles: List[RectObstacle] = []

    for element in root.iter():
        if not isinstance(element.tag, str):
            continue  # comments and processing instructions
        tag = _local_name(element.tag)
        attrs = element.attrib

        if tag == "rect":
            x = _number(attrs, "x", tag)
            y = _number(attrs, "y", tag)
            width = _number(attrs, "width", tag)
            height = _number(attrs, "height", tag)
            if attrs.get("id") == BACKGROUND_ID:
                origin, size = (x, y), (width, height)
            else:
                obstacles.append(RectObstacle(x, y, width, height))
        elif tag == "circle":
            shape_id = attrs.get("id")
            if shape_id not in (START_ID, END_ID):
                continue
            point = (_number(attrs, "cx", tag), _number(attrs, "cy", tag))
            if shape_id == START_ID:
                start = point
            else:
                end = point

    missing = [
        name
        for name, value in (
            (f'rect id="{BACKGROUND_ID}"', origin),
            (f'circle id="{START_ID}"', start),
            (f'circle id="{END_ID}"', end),
        )
        if value is None
    ]
    if missing:
        raise SceneLoadError(f"SVG document has no {', '.join(missing)}")

    try:
        return Scene(origin=origin, size=size, start=start, end=end, obstacles=obstacles)
    except ValueError as e:
        raise SceneLoadError(str(e)) from e


def load_scene(path: Union[str, Path]) -> Scene:
    """
    Read and parse an SVG file.

    Raises FileNotFoundError if the file does not exist and SceneLoadError if
    it does not describe a scene.
    """
    path = Path(path)
    if not path.exists():
        error_msg = f"Scene file not found: {path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        scene = parse_scene(path.read_text(encoding="utf-8"))
    except SceneLoadError as e:
        logger.error(f"Failed to load scene from {path}: {e}")
        raise

    logger.info(
        f"Loaded scene {path}: size={scene.size}, obstacles={len(scene.obstacles)}"
    )
    return scene
