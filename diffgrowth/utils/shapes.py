"""
Seed shapes for new paths.

Every helper returns an (N, 2) float array suitable for Path.from_points().
"""

from typing import Optional, Sequence, Tuple
import math
import numpy as np


def circle_points(
    center: Tuple[float, float],
    radius: float,
    n: int,
    jitter: float = 0.0,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Points evenly spaced in angle around a circle.

    Parameters
    ----------
    center : (x, y)
        Circle center
    radius : float
        Nominal radius
    n : int
        Number of points (>= 3)
    jitter : float
        Radial noise as a fraction of the radius; each point's radius is
        drawn uniformly from [radius * (1 - jitter), radius * (1 + jitter)]
    rng : np.random.Generator, optional
        Random source for the jitter

    Returns
    -------
    np.ndarray
        (n, 2) positions, counter-clockwise from angle 0
    """
    if n < 3:
        raise ValueError(f"A circle needs at least 3 points, got {n}")
    if radius <= 0:
        raise ValueError(f"radius must be > 0, got {radius}")
    if jitter < 0:
        raise ValueError(f"jitter must be >= 0, got {jitter}")

    angles = np.arange(n) * (2.0 * math.pi / n)
    radii = np.full(n, float(radius))
    if jitter > 0:
        if rng is None:
            rng = np.random.default_rng()
        radii += rng.uniform(-radius * jitter, radius * jitter, size=n)

    return np.column_stack([
        center[0] + radii * np.cos(angles),
        center[1] + radii * np.sin(angles),
    ])


def polygon_points(vertices: Sequence[Sequence[float]], spacing: float) -> np.ndarray:
    """
    Resample a closed polygon outline at roughly ``spacing`` intervals.

    Every input vertex is kept; each edge is divided into
    ceil(length / spacing) equal parts.
    """
    if spacing <= 0:
        raise ValueError(f"spacing must be > 0, got {spacing}")
    verts = np.asarray(vertices, dtype=np.float64).reshape(-1, 2)
    if len(verts) < 3:
        raise ValueError(f"A polygon needs at least 3 vertices, got {len(verts)}")

    points = []
    for start, end in zip(verts, np.roll(verts, -1, axis=0)):
        length = float(np.linalg.norm(end - start))
        parts = max(1, math.ceil(length / spacing))
        for t in np.arange(parts) / parts:
            points.append(start + t * (end - start))

    return np.array(points)


def line_points(
    start: Tuple[float, float],
    end: Tuple[float, float],
    n: int,
) -> np.ndarray:
    """``n`` evenly spaced points from ``start`` to ``end`` inclusive, for open paths."""
    if n < 2:
        raise ValueError(f"A line needs at least 2 points, got {n}")
    t = np.linspace(0.0, 1.0, n)[:, None]
    a = np.asarray(start, dtype=np.float64)
    b = np.asarray(end, dtype=np.float64)
    return a + t * (b - a)
