"""
Polygonal boundary regions used to pin nodes.
"""

from typing import Iterable, Sequence, Tuple
import math
import numpy as np

from .errors import ConfigurationError
from .types import Point2D


class BoundaryRegion:
    """
    Simple polygon plus a reverse flag.

    A node violates a normal region when it lies outside the polygon, and a
    reversed region when it lies inside. Regions are never mutated by the
    growth algorithm and may be attached to several Paths at once.

    Containment uses the crossing-number test with half-open edges: for an
    axis-aligned polygon, points on a left or bottom edge count as inside
    and points on a right or top edge as outside.
    """

    def __init__(self, polygon: Iterable[Sequence[float]], reverse: bool = False):
        """
        Initialize region.

        Parameters
        ----------
        polygon : iterable of (x, y)
            Polygon vertices in order; the closing edge is implicit
        reverse : bool
            Invert containment (pin nodes that enter the polygon)
        """
        vertices = np.asarray(list(polygon), dtype=np.float64)
        if vertices.ndim != 2 or vertices.shape[1] != 2:
            raise ConfigurationError(
                f"Polygon must be a sequence of (x, y) pairs, got shape {vertices.shape}"
            )
        if len(vertices) < 3:
            raise ConfigurationError(f"Polygon needs at least 3 vertices, got {len(vertices)}")
        if not np.all(np.isfinite(vertices)):
            raise ConfigurationError("Polygon vertices must be finite")

        vertices.setflags(write=False)
        self._vertices = vertices
        self._reverse = bool(reverse)

    @property
    def vertices(self) -> np.ndarray:
        """Read-only (N, 2) vertex array."""
        return self._vertices

    @property
    def reverse(self) -> bool:
        return self._reverse

    @classmethod
    def rectangle(
        cls,
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float,
        reverse: bool = False,
    ) -> "BoundaryRegion":
        """Axis-aligned rectangle."""
        return cls(
            [(min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y)],
            reverse=reverse,
        )

    @classmethod
    def circle(
        cls,
        center: Tuple[float, float],
        radius: float,
        segments: int = 64,
        reverse: bool = False,
    ) -> "BoundaryRegion":
        """Regular polygon approximating a circle."""
        if radius <= 0:
            raise ConfigurationError(f"Circle radius must be > 0, got {radius}")
        if segments < 3:
            raise ConfigurationError(f"Circle needs at least 3 segments, got {segments}")
        angles = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
        points = np.column_stack([
            center[0] + radius * np.cos(angles),
            center[1] + radius * np.sin(angles),
        ])
        return cls(points, reverse=reverse)

    def _inside(self, x: float, y: float) -> bool:
        xi = self._vertices[:, 0]
        yi = self._vertices[:, 1]
        xj = np.roll(xi, 1)
        yj = np.roll(yi, 1)

        straddles = (yi > y) != (yj > y)
        # Horizontal edges never straddle, so their division result is masked out.
        with np.errstate(divide="ignore", invalid="ignore"):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
        crossings = np.count_nonzero(straddles & (x < x_cross))
        return bool(crossings % 2)

    def contains(self, point) -> bool:
        """
        Check whether a point satisfies the region.

        Accepts a Point2D or any (x, y) sequence. With ``reverse`` the plain
        polygon test is negated.
        """
        if isinstance(point, Point2D):
            x, y = point.x, point.y
        else:
            x, y = float(point[0]), float(point[1])
        return self._inside(x, y) != self._reverse

    def violates(self, point) -> bool:
        """True when the point must be pinned by this region."""
        return not self.contains(point)

    def contains_points(self, points) -> np.ndarray:
        """
        Vectorized ``contains`` over an (N, 2) array.

        Returns
        -------
        np.ndarray
            Boolean array of length N
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        px = pts[:, 0][:, None]
        py = pts[:, 1][:, None]

        xi = self._vertices[:, 0][None, :]
        yi = self._vertices[:, 1][None, :]
        xj = np.roll(self._vertices[:, 0], 1)[None, :]
        yj = np.roll(self._vertices[:, 1], 1)[None, :]

        straddles = (yi > py) != (yj > py)
        with np.errstate(divide="ignore", invalid="ignore"):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
        crossings = np.count_nonzero(straddles & (px < x_cross), axis=1)
        inside = (crossings % 2).astype(bool)
        return inside != self._reverse

    def get_bounds(self) -> tuple:
        """Get bounding box (min_x, max_x, min_y, max_y)."""
        mins = self._vertices.min(axis=0)
        maxs = self._vertices.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]))

    def __repr__(self) -> str:
        return f"BoundaryRegion({len(self._vertices)} vertices, reverse={self._reverse})"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "polygon": self._vertices.tolist(),
            "reverse": self._reverse,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "BoundaryRegion":
        """Create from dictionary."""
        return cls(d["polygon"], reverse=d.get("reverse", False))


def violates_any(point: Point2D, bounds: Sequence[BoundaryRegion]) -> bool:
    """True if the point violates at least one region; False for no regions."""
    return any(region.violates(point) for region in bounds)

