# scene.py
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class RectObstacle:
    """
    Axis-aligned rectangular obstacle in absolute scene coordinates.

    Attributes
    ----------
    x, y : float
        Top-left corner of the rectangle.
    width, height : float
        Extent of the rectangle along each axis.
    """

    x: float
    y: float
    width: float
    height: float

    def translated(self, dx: float, dy: float) -> "RectObstacle":
        return RectObstacle(self.x + dx, self.y + dy, self.width, self.height)

    def contains_point(self, x: float, y: float) -> bool:
        """
        Return True if (x, y) lies inside or on the boundary of this rectangle.
        """
        return (self.x <= x <= self.x + self.width) and (
            self.y <= y <= self.y + self.height
        )


@dataclass(frozen=True)
class Scene:
    """
    Continuous description of a maze: a background region, the obstacles
    drawn on it and the two endpoints of the route.

    All coordinates share one coordinate system. ``origin`` is the top-left
    corner of the background and is subtracted from every other coordinate
    when the scene is rasterized.
    """

    origin: Point2D
    size: Point2D
    start: Point2D
    end: Point2D
    obstacles: Tuple[RectObstacle, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.size[0] < 0 or self.size[1] < 0:
            raise ValueError(f"Scene size must be non-negative, got {self.size}.")
        # Accept any iterable of obstacles but store an immutable tuple.
        object.__setattr__(self, "obstacles", tuple(self.obstacles))

    @classmethod
    def random_scene(
        cls,
        num_obstacles: int = 5,
        size: Point2D = (32.0, 32.0),
        min_size: float = 2.0,
        max_size: float = 8.0,
        seed: Optional[int] = None,
    ) -> "Scene":
        """
        Create a scene with a few random axis-aligned rectangles.

        Each rectangle:
          - width and height are sampled in [min_size, max_size]
          - position is chosen so the rectangle lies inside the background
        Start and end are sampled uniformly over the background and are not
        guaranteed to be collision-free.
        """
        rng = random.Random(seed)
        width, height = size

        obstacles = []
        for _ in range(num_obstacles):
            w = min(rng.uniform(min_size, max_size), width)
            h = min(rng.uniform(min_size, max_size), height)
            x = rng.uniform(0, width - w)
            y = rng.uniform(0, height - h)
            obstacles.append(RectObstacle(x, y, w, h))

        start = (rng.uniform(0, width), rng.uniform(0, height))
        end = (rng.uniform(0, width), rng.uniform(0, height))
        return cls(
            origin=(0.0, 0.0),
            size=(float(width), float(height)),
            start=start,
            end=end,
            obstacles=tuple(obstacles),
        )

    def is_point_in_collision(self, x: float, y: float) -> bool:
        """
        Check if a single point in scene coordinates is in collision.

        Rules:
          - If the point is outside the background, treat it as collision.
          - Otherwise, collision iff it lies inside any obstacle.
        """
        ox, oy = self.origin
        if not (ox <= x <= ox + self.size[0] and oy <= y <= oy + self.size[1]):
            return True
        return any(obstacle.contains_point(x, y) for obstacle in self.obstacles)
