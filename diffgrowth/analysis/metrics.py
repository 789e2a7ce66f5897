"""
Shape metrics for grown paths.
"""

from typing import Dict, Any, Optional, TYPE_CHECKING
import numpy as np
from scipy.spatial import cKDTree

if TYPE_CHECKING:
    from ..core.path import Path


def edge_lengths(path: "Path") -> np.ndarray:
    """
    Lengths of every link in traversal order.

    For a closed path the last entry is the closing edge (last -> first).
    """
    points = path.to_array()
    if len(points) < 2:
        return np.zeros(0)
    if path.closed:
        deltas = np.roll(points, -1, axis=0) - points
    else:
        deltas = np.diff(points, axis=0)
    return np.linalg.norm(deltas, axis=1)


def enclosed_area(points: np.ndarray) -> float:
    """Unsigned shoelace area of a closed polygon."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def min_nonadjacent_clearance(path: "Path") -> Optional[float]:
    """
    Smallest distance between two nodes that are not neighbors along the path.

    Uses a KD-tree over node positions. Returns None when every pair of
    nodes is adjacent (or the path has fewer than three nodes).
    """
    points = path.to_array()
    n = len(points)
    if n < 3:
        return None

    tree = cKDTree(points)
    # Self plus both neighbors occupy at most three slots, so the nearest
    # non-adjacent node is always among the four nearest.
    k = min(n, 4)
    dists, idxs = tree.query(points, k=k)

    best = np.inf
    for i in range(n):
        for dist, j in zip(dists[i], idxs[i]):
            if j == i:
                continue
            gap = abs(int(j) - i)
            if gap == 1 or (path.closed and gap == n - 1):
                continue
            best = min(best, float(dist))
            break

    return None if not np.isfinite(best) else best


def compute_path_metrics(path: "Path") -> Dict[str, Any]:
    """
    Summarize a path's geometry.

    Returns
    -------
    dict
        node_count, fixed_count, closed, perimeter, enclosed_area (closed
        paths only, else None), edge_length_min/mean/max (None without
        edges) and min_clearance (None when undefined)
    """
    points = path.to_array()
    lengths = edge_lengths(path)

    metrics: Dict[str, Any] = {
        "node_count": len(path),
        "fixed_count": sum(1 for node in path if node.is_fixed),
        "closed": path.closed,
        "perimeter": float(lengths.sum()),
        "enclosed_area": enclosed_area(points) if path.closed else None,
        "edge_length_min": None,
        "edge_length_mean": None,
        "edge_length_max": None,
        "min_clearance": min_nonadjacent_clearance(path),
    }

    if lengths.size:
        metrics["edge_length_min"] = float(lengths.min())
        metrics["edge_length_mean"] = float(lengths.mean())
        metrics["edge_length_max"] = float(lengths.max())

    return metrics
