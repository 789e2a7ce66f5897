"""
Differential Growth - growth engine for organic, self-subdividing curves.

This package grows open or closed paths of point nodes under blended
attraction, repulsion and alignment forces, splitting long edges and
pruning short ones every tick so the curve keeps a steady node spacing.

Main Entry Points:
    - Path: a growing chain of nodes and the per-tick growth algorithm
    - World: owns paths, rebuilds the spatial index and drives ticks
    - BoundaryRegion: polygon that pins nodes leaving (or entering) it
    - SpatialIndex: bulk-loaded R-tree with best-first radius queries

Example:
    >>> from diffgrowth import Path, World
    >>> from diffgrowth.utils import circle_points
    >>> from growth_policies import get_preset
    >>>
    >>> policy = get_preset("organic")
    >>> path = Path.from_points(circle_points((256, 256), 20, 12), policy=policy)
    >>> world = World([path], seed=42)
    >>> report = world.run(200)
    >>> points = path.to_array()
"""

from .core import (
    Point2D,
    ConfigurationError,
    Node,
    BoundaryRegion,
    Path,
    World,
    OperationReport,
)
from .spatial import SpatialIndex
from .utils import circle_points, polygon_points, line_points
from .api import save_world_json, load_world_json
from growth_policies import GrowthPolicy, get_preset

__all__ = [
    # Core types
    "Point2D",
    "Node",
    "BoundaryRegion",
    "Path",
    "World",
    "SpatialIndex",
    # Errors and reports
    "ConfigurationError",
    "OperationReport",
    # Seeding
    "circle_points",
    "polygon_points",
    "line_points",
    # Snapshots
    "save_world_json",
    "load_world_json",
    # Policies
    "GrowthPolicy",
    "get_preset",
]
