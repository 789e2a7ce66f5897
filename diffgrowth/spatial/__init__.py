"""Spatial indexing for node neighborhood queries."""

from .rtree_index import SpatialIndex, node_bbox

__all__ = ["SpatialIndex", "node_bbox"]
