"""Core data structures for differential growth."""

from .types import Point2D
from .errors import ConfigurationError
from .node import Node
from .bounds import BoundaryRegion
from .path import Path
from .world import World
from .report import OperationReport

__all__ = [
    "Point2D",
    "ConfigurationError",
    "Node",
    "BoundaryRegion",
    "Path",
    "World",
    "OperationReport",
]
