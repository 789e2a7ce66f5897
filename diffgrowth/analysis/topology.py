"""
Topology checks for grown paths.
"""

from typing import Dict, Any, TYPE_CHECKING
import networkx as nx

from ..adapters.networkx_adapter import to_networkx_graph

if TYPE_CHECKING:
    from ..core.path import Path


def check_path_topology(path: "Path") -> Dict[str, Any]:
    """
    Check that a path's connectivity is a single cycle or a single chain.

    Parameters
    ----------
    path : Path
        Path to check

    Returns
    -------
    dict
        Check result with keys:
        - passed: bool
        - message: str
        - details: dict with node_count, edge_count, components, degrees
    """
    G = to_networkx_graph(path)
    n = G.number_of_nodes()
    details: Dict[str, Any] = {
        "node_count": n,
        "edge_count": G.number_of_edges(),
        "components": nx.number_connected_components(G) if n else 0,
    }
    degrees = sorted({d for _, d in G.degree()})
    details["degrees"] = degrees

    issues = []
    if n == 0:
        return {"passed": True, "message": "Empty path", "details": details}

    if details["components"] != 1:
        issues.append(f"{details['components']} connected components")

    if path.closed and n >= 3:
        if degrees != [2]:
            issues.append(f"closed path has node degrees {degrees}, expected all 2")
        if G.number_of_edges() != n:
            issues.append(f"closed path has {G.number_of_edges()} edges for {n} nodes")
    elif n >= 2:
        if not nx.is_tree(G) or max(degrees) > 2:
            issues.append("open path is not a simple chain")

    if issues:
        return {"passed": False, "message": "; ".join(issues), "details": details}
    return {"passed": True, "message": "Topology OK", "details": details}
