"""
Adapters for handing growth results to other libraries.
"""

from .networkx_adapter import to_networkx_graph

__all__ = ["to_networkx_graph"]
