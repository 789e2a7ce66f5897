"""
Convert paths to networkx graphs.
"""

from typing import TYPE_CHECKING
import networkx as nx

if TYPE_CHECKING:
    from ..core.path import Path


def to_networkx_graph(path: "Path") -> nx.Graph:
    """
    Build an undirected graph with one vertex per node and one edge per link.

    Vertices are the node indices in traversal order and carry ``pos``
    (an (x, y) tuple) and ``fixed`` attributes. Edges carry ``length``.
    A closed path of n >= 3 nodes gives a cycle graph, an open path a path
    graph.
    """
    G = nx.Graph()
    nodes = path.nodes
    n = len(nodes)

    for i, node in enumerate(nodes):
        G.add_node(i, pos=node.position.to_tuple(), fixed=node.is_fixed)

    for i in range(1, n):
        G.add_edge(i - 1, i, length=nodes[i].distance_to(nodes[i - 1]))

    if path.closed and n >= 3:
        G.add_edge(n - 1, 0, length=nodes[0].distance_to(nodes[n - 1]))

    return G
