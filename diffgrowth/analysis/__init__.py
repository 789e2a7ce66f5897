"""Analysis of grown paths: shape metrics and topology checks."""

from .metrics import (
    compute_path_metrics,
    edge_lengths,
    enclosed_area,
    min_nonadjacent_clearance,
)
from .topology import check_path_topology

__all__ = [
    "compute_path_metrics",
    "edge_lengths",
    "enclosed_area",
    "min_nonadjacent_clearance",
    "check_path_topology",
]
